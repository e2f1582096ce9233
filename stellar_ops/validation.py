"""Validation helpers and errors for operation construction."""

from __future__ import annotations

from enum import Enum


MAX_INT32 = 2**31 - 1
MAX_INT64 = 2**63 - 1


class Field(str, Enum):
    """Names of the non-amount fields an operation can reject."""

    SOURCE = "source"
    DESTINATION = "destination"
    CODE = "code"
    ISSUER = "issuer"
    ASSET = "asset"
    SEND_ASSET = "send_asset"
    DEST_ASSET = "dest_asset"
    PATH = "path"
    SELLING = "selling"
    BUYING = "buying"
    PRICE = "price"
    OFFER_ID = "offer_id"
    HOST_FUNCTION = "host_function"
    AUTH = "auth"
    CONTRACT_ID = "contract_id"
    FUNCTION_NAME = "function_name"
    PARAMETERS = "parameters"

    def __str__(self) -> str:
        return self.value


class ValidationError(ValueError):
    """Raised when inputs fail validation."""


class InvalidAmount(ValidationError):
    """An amount or quantity is outside its permitted range."""

    def __init__(self, value: object, name: str = "amount"):
        super().__init__(f"invalid {name}: {value!r}")
        self.value = value
        self.name = name

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, InvalidAmount):
            return NotImplemented
        return self.value == other.value

    def __hash__(self) -> int:
        return hash(("InvalidAmount", repr(self.value)))


class InvalidField(ValidationError):
    """A non-amount field is malformed or not allowed here."""

    def __init__(self, field: Field | str, detail: str = ""):
        field = Field(field)
        message = f"invalid field: {field}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)
        self.field = field
        self.detail = detail

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, InvalidField):
            return NotImplemented
        return self.field == other.field

    def __hash__(self) -> int:
        return hash(("InvalidField", self.field.value))


def validate_amount(value: int, name: str = "amount") -> int:
    """Check a signed 64-bit amount is non-negative and return it."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidAmount(value, name)
    if value < 0 or value > MAX_INT64:
        raise InvalidAmount(value, name)
    return value


def validate_positive_amount(value: int, name: str = "amount") -> int:
    validate_amount(value, name)
    if value == 0:
        raise InvalidAmount(value, name)
    return value


def validate_int32_term(value: int, name: str) -> int:
    """Check one term of a price ratio: strictly positive and fits int32."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidAmount(value, name)
    if value <= 0 or value > MAX_INT32:
        raise InvalidAmount(value, name)
    return value


def validate_offer_id(value: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidField(Field.OFFER_ID, f"not an integer: {value!r}")
    if value < 0 or value > MAX_INT64:
        raise InvalidField(Field.OFFER_ID, f"out of range: {value}")
    return value
