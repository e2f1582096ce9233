"""Operation envelope: an optional source account plus one operation body."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from stellar_sdk import xdr

from .address import encode_address, from_muxed_account, resolve_muxed_account
from .validation import Field


@dataclass(frozen=True)
class Operation:
    """A validated operation ready for XDR serialization.

    ``source`` is ``None`` when the transaction's source account should apply.
    Instances come from the builders; the envelope itself checks nothing.
    Equality is structural and the hash is taken over the XDR bytes, since the
    XDR field objects are not reliably hashable themselves.
    """

    body: xdr.OperationBody
    source: Optional[xdr.MuxedAccount] = None

    def __hash__(self) -> int:
        return hash(self.to_xdr_bytes())

    @property
    def type(self) -> xdr.OperationType:
        return self.body.type

    @property
    def source_address(self) -> Optional[str]:
        if self.source is None:
            return None
        return encode_address(from_muxed_account(self.source))

    def to_xdr_object(self) -> xdr.Operation:
        return xdr.Operation(source_account=self.source, body=self.body)

    def to_xdr_bytes(self) -> bytes:
        return self.to_xdr_object().to_xdr_bytes()

    def to_xdr(self) -> str:
        """Base64 XDR of the operation."""
        return self.to_xdr_object().to_xdr()

    @classmethod
    def from_xdr_object(cls, xdr_object: xdr.Operation) -> "Operation":
        return cls(body=xdr_object.body, source=xdr_object.source_account)

    @classmethod
    def from_xdr(cls, xdr_string: str) -> "Operation":
        return cls.from_xdr_object(xdr.Operation.from_xdr(xdr_string))


def resolve_source(source: Optional[str]) -> Optional[xdr.MuxedAccount]:
    """Resolve an optional source override; ``None`` keeps the transaction default."""
    if source is None:
        return None
    return resolve_muxed_account(source, Field.SOURCE)
