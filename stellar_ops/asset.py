"""Native and issued assets, and their XDR form."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

from stellar_sdk import xdr

from .address import (
    MalformedAddress,
    PlainAccount,
    decode_address,
    encode_address,
    to_account_id,
)
from .validation import Field, InvalidField


NATIVE_CODE = "XLM"
MAX_CODE_LENGTH = 12
ALPHANUM4_LENGTH = 4
_CODE_PATTERN = re.compile(r"[A-Za-z0-9]{1,12}")


@dataclass(frozen=True)
class Asset:
    """The native currency (issuer ``None``) or a code issued by an account.

    Codes are validated here, once, so every constructed ``Asset`` translates
    to XDR without failing.
    """

    code: str
    issuer: Optional[str] = None

    def __post_init__(self) -> None:
        if not isinstance(self.code, str) or not _CODE_PATTERN.fullmatch(self.code):
            raise InvalidField(Field.CODE, f"asset code must be 1-12 alphanumerics: {self.code!r}")
        if self.issuer is None:
            if self.code != NATIVE_CODE:
                raise InvalidField(Field.ISSUER, f"issuer is required for {self.code}")
            return
        try:
            identity = decode_address(self.issuer)
        except MalformedAddress as exc:
            raise InvalidField(Field.ISSUER, str(exc)) from exc
        if not isinstance(identity, PlainAccount):
            raise InvalidField(Field.ISSUER, "issuer must be a plain account address")

    @classmethod
    def native(cls) -> "Asset":
        return cls(NATIVE_CODE)

    def is_native(self) -> bool:
        return self.issuer is None

    @property
    def type(self) -> str:
        if self.is_native():
            return "native"
        if len(self.code) <= ALPHANUM4_LENGTH:
            return "credit_alphanum4"
        return "credit_alphanum12"

    def to_xdr_object(self) -> xdr.Asset:
        if self.is_native():
            return xdr.Asset(type=xdr.AssetType.ASSET_TYPE_NATIVE)
        issuer = to_account_id(decode_address(self.issuer))
        raw_code = self.code.encode("ascii")
        if len(self.code) <= ALPHANUM4_LENGTH:
            return xdr.Asset(
                type=xdr.AssetType.ASSET_TYPE_CREDIT_ALPHANUM4,
                alpha_num4=xdr.AlphaNum4(
                    asset_code=xdr.AssetCode4(raw_code.ljust(ALPHANUM4_LENGTH, b"\x00")),
                    issuer=issuer,
                ),
            )
        return xdr.Asset(
            type=xdr.AssetType.ASSET_TYPE_CREDIT_ALPHANUM12,
            alpha_num12=xdr.AlphaNum12(
                asset_code=xdr.AssetCode12(raw_code.ljust(MAX_CODE_LENGTH, b"\x00")),
                issuer=issuer,
            ),
        )

    @classmethod
    def from_xdr_object(cls, xdr_object: xdr.Asset) -> "Asset":
        if xdr_object.type == xdr.AssetType.ASSET_TYPE_NATIVE:
            return cls.native()
        if xdr_object.type == xdr.AssetType.ASSET_TYPE_CREDIT_ALPHANUM4:
            alpha_num = xdr_object.alpha_num4
            raw_code = alpha_num.asset_code.asset_code4
        elif xdr_object.type == xdr.AssetType.ASSET_TYPE_CREDIT_ALPHANUM12:
            alpha_num = xdr_object.alpha_num12
            raw_code = alpha_num.asset_code.asset_code12
        else:
            raise ValueError(f"unsupported asset type: {xdr_object.type}")
        issuer = encode_address(PlainAccount(alpha_num.issuer.account_id.ed25519.uint256))
        try:
            code = raw_code.rstrip(b"\x00").decode("ascii")
        except UnicodeDecodeError as exc:
            raise InvalidField(Field.CODE, f"asset code is not ASCII: {raw_code!r}") from exc
        asset = cls(code, issuer)
        # A 1-4 character code carried as AlphaNum12 would not re-encode to the same XDR.
        if asset.to_xdr_object().type != xdr_object.type:
            raise InvalidField(Field.CODE, f"{code!r} is not valid for {xdr_object.type}")
        return asset

    def __str__(self) -> str:
        if self.is_native():
            return "native"
        return f"{self.code}:{self.issuer}"
