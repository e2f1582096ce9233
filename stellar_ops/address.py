"""StrKey address codec.

Maps the ledger's textual identifiers onto identity values and their XDR form:

  G...  plain ed25519 account      -> PlainAccount
  M...  multiplexed ed25519 account -> MultiplexedAccount (key + 64-bit id)
  C...  contract                   -> Contract

Checksum and version-byte handling is delegated to ``stellar_sdk.StrKey``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from stellar_sdk import MuxedAccount as SdkMuxedAccount
from stellar_sdk import StrKey
from stellar_sdk import xdr

from .validation import Field, InvalidField, ValidationError


KEY_LENGTH = 32
MAX_UINT64 = 2**64 - 1
PLAIN_ADDRESS_LENGTH = 56
MUXED_ADDRESS_LENGTH = 69


class MalformedAddress(ValidationError):
    """Raised when text is not a valid account or contract address."""


@dataclass(frozen=True)
class PlainAccount:
    key: bytes

    def __post_init__(self) -> None:
        _check_key(self.key, "key")


@dataclass(frozen=True)
class MultiplexedAccount:
    key: bytes
    sub_id: int

    def __post_init__(self) -> None:
        _check_key(self.key, "key")
        if isinstance(self.sub_id, bool) or not isinstance(self.sub_id, int):
            raise ValueError(f"sub_id must be an integer: {self.sub_id!r}")
        if not 0 <= self.sub_id <= MAX_UINT64:
            raise ValueError(f"sub_id out of uint64 range: {self.sub_id}")

    @property
    def base(self) -> PlainAccount:
        """The underlying account shared by every sub-account of this key."""
        return PlainAccount(self.key)


@dataclass(frozen=True)
class Contract:
    contract_id: bytes

    def __post_init__(self) -> None:
        _check_key(self.contract_id, "contract_id")


AccountIdentity = Union[PlainAccount, MultiplexedAccount]
Identity = Union[PlainAccount, MultiplexedAccount, Contract]


def _check_key(value: bytes, name: str) -> None:
    if not isinstance(value, (bytes, bytearray)) or len(value) != KEY_LENGTH:
        raise ValueError(f"{name} must be {KEY_LENGTH} bytes")


def decode_address(text: str) -> Identity:
    """Decode a G, M or C address into its identity value."""
    if not isinstance(text, str) or not text:
        raise MalformedAddress("address must be a non-empty string")
    prefix = text[0]
    try:
        if prefix == "G" and len(text) == PLAIN_ADDRESS_LENGTH:
            return PlainAccount(StrKey.decode_ed25519_public_key(text))
        if prefix == "M" and len(text) == MUXED_ADDRESS_LENGTH:
            muxed = SdkMuxedAccount.from_account(text)
            if muxed.account_muxed_id is None:
                raise MalformedAddress(f"invalid multiplexed address: {text}")
            return MultiplexedAccount(
                StrKey.decode_ed25519_public_key(muxed.account_id),
                muxed.account_muxed_id,
            )
        if prefix == "C" and len(text) == PLAIN_ADDRESS_LENGTH:
            return Contract(StrKey.decode_contract(text))
    except MalformedAddress:
        raise
    except (ValueError, TypeError) as exc:
        raise MalformedAddress(f"invalid address: {text}") from exc
    raise MalformedAddress(f"unrecognized address format: {text}")


def encode_address(identity: Identity) -> str:
    """Encode an identity value back to its textual address."""
    if isinstance(identity, PlainAccount):
        return StrKey.encode_ed25519_public_key(bytes(identity.key))
    if isinstance(identity, MultiplexedAccount):
        account_id = StrKey.encode_ed25519_public_key(bytes(identity.key))
        return SdkMuxedAccount(account_id, identity.sub_id).account_muxed
    if isinstance(identity, Contract):
        return StrKey.encode_contract(bytes(identity.contract_id))
    raise TypeError(f"not an address identity: {identity!r}")


def to_muxed_account(identity: AccountIdentity) -> xdr.MuxedAccount:
    """Build the XDR MuxedAccount for a plain or multiplexed account."""
    if isinstance(identity, PlainAccount):
        return xdr.MuxedAccount(
            type=xdr.CryptoKeyType.KEY_TYPE_ED25519,
            ed25519=xdr.Uint256(bytes(identity.key)),
        )
    if isinstance(identity, MultiplexedAccount):
        return xdr.MuxedAccount(
            type=xdr.CryptoKeyType.KEY_TYPE_MUXED_ED25519,
            med25519=xdr.MuxedAccountMed25519(
                id=xdr.Uint64(identity.sub_id),
                ed25519=xdr.Uint256(bytes(identity.key)),
            ),
        )
    raise ValueError(f"a muxed account needs an account identity, got {identity!r}")


def from_muxed_account(muxed: xdr.MuxedAccount) -> AccountIdentity:
    if muxed.type == xdr.CryptoKeyType.KEY_TYPE_ED25519:
        return PlainAccount(muxed.ed25519.uint256)
    if muxed.type == xdr.CryptoKeyType.KEY_TYPE_MUXED_ED25519:
        return MultiplexedAccount(muxed.med25519.ed25519.uint256, muxed.med25519.id.uint64)
    raise ValueError(f"unsupported muxed account type: {muxed.type}")


def to_account_id(identity: PlainAccount) -> xdr.AccountID:
    if not isinstance(identity, PlainAccount):
        raise ValueError(f"an account id needs a plain account, got {identity!r}")
    return xdr.AccountID(
        account_id=xdr.PublicKey(
            type=xdr.PublicKeyType.PUBLIC_KEY_TYPE_ED25519,
            ed25519=xdr.Uint256(bytes(identity.key)),
        )
    )


def resolve_muxed_account(text: str, field: Field) -> xdr.MuxedAccount:
    """Resolve a G or M address for an account slot, tagging failures with ``field``.

    Contracts decode fine but are not accounts, so they are rejected here.
    """
    try:
        identity = decode_address(text)
    except MalformedAddress as exc:
        raise InvalidField(field, str(exc)) from exc
    if isinstance(identity, Contract):
        raise InvalidField(field, "contract address where an account is required")
    return to_muxed_account(identity)


def resolve_account_id(text: str, field: Field) -> xdr.AccountID:
    """Resolve a plain G address, rejecting multiplexed and contract addresses."""
    try:
        identity = decode_address(text)
    except MalformedAddress as exc:
        raise InvalidField(field, str(exc)) from exc
    if not isinstance(identity, PlainAccount):
        raise InvalidField(field, "a plain account address is required")
    return to_account_id(identity)
