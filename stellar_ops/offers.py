"""Offer management operation builders and offer prices."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from fractions import Fraction
from typing import Optional, Tuple, Union

from stellar_sdk import Price as SdkPrice
from stellar_sdk import xdr

from .asset import Asset
from .operation import Operation, resolve_source
from .validation import (
    MAX_INT32,
    Field,
    InvalidAmount,
    InvalidField,
    validate_amount,
    validate_int32_term,
    validate_offer_id,
)


log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Price:
    """Price of one unit of the selling asset in terms of the buying asset, as n/d."""

    n: int
    d: int

    @classmethod
    def from_value(cls, value: "PriceLike") -> "Price":
        """Normalize a ``Price``, ``(n, d)`` pair or decimal value.

        Decimal values whose exact fraction fits in 32-bit terms are kept
        exact; others get the best rational approximation from
        ``stellar_sdk.Price.from_raw_price``. Zero or negative values raise
        ``InvalidAmount``; anything unparsable or unrepresentable raises
        ``InvalidField("price")``.
        """
        if isinstance(value, Price):
            n, d = value.n, value.d
        elif isinstance(value, tuple):
            if len(value) != 2:
                raise InvalidField(Field.PRICE, f"expected (n, d), got {value!r}")
            n, d = value
        elif isinstance(value, (str, Decimal, Fraction)):
            n, d = _approximate(value)
        else:
            raise InvalidField(Field.PRICE, f"unsupported price type: {type(value).__name__}")
        return cls(validate_int32_term(n, "price.n"), validate_int32_term(d, "price.d"))

    def to_xdr_object(self) -> xdr.Price:
        return xdr.Price(n=xdr.Int32(self.n), d=xdr.Int32(self.d))

    def __str__(self) -> str:
        return f"{self.n}/{self.d}"


PriceLike = Union[Price, Tuple[int, int], str, Decimal, Fraction]


def _approximate(value: Union[str, Decimal, Fraction]) -> Tuple[int, int]:
    try:
        exact = Fraction(value)
    except (ValueError, ArithmeticError) as exc:
        raise InvalidField(Field.PRICE, f"not a number: {value!r}") from exc
    if exact <= 0:
        raise InvalidAmount(value, "price")
    if exact.numerator <= MAX_INT32 and exact.denominator <= MAX_INT32:
        return exact.numerator, exact.denominator
    raw = Decimal(exact.numerator) / Decimal(exact.denominator)
    try:
        approx = SdkPrice.from_raw_price(str(raw))
    except (ValueError, ArithmeticError) as exc:
        raise InvalidField(Field.PRICE, f"cannot represent: {value!r}") from exc
    if not 0 < approx.n <= MAX_INT32 or not 0 < approx.d <= MAX_INT32:
        raise InvalidField(Field.PRICE, f"cannot represent: {value!r}")
    return approx.n, approx.d


def _price_and_source(price: PriceLike, source: Optional[str]):
    """Resolve price and source so that amount errors come first, then address errors."""
    try:
        offer_price = Price.from_value(price)
    except InvalidField:
        resolve_source(source)
        raise
    return offer_price, resolve_source(source)


def manage_sell_offer(
    selling: Asset,
    buying: Asset,
    amount: int,
    price: PriceLike,
    offer_id: int = 0,
    source: Optional[str] = None,
) -> Operation:
    """Create, update or delete (``amount == 0``) a sell offer.

    ``offer_id`` 0 creates a new offer.
    """
    validate_amount(amount)
    offer_price, source_account = _price_and_source(price, source)
    _check_pair(selling, buying)
    validate_offer_id(offer_id)

    body = xdr.OperationBody(
        type=xdr.OperationType.MANAGE_SELL_OFFER,
        manage_sell_offer_op=xdr.ManageSellOfferOp(
            selling=selling.to_xdr_object(),
            buying=buying.to_xdr_object(),
            amount=xdr.Int64(amount),
            price=offer_price.to_xdr_object(),
            offer_id=xdr.Int64(offer_id),
        ),
    )
    log.debug("Built manage_sell_offer %d %s for %s at %s", amount, selling, buying, offer_price)
    return Operation(body=body, source=source_account)


def manage_buy_offer(
    selling: Asset,
    buying: Asset,
    buy_amount: int,
    price: PriceLike,
    offer_id: int = 0,
    source: Optional[str] = None,
) -> Operation:
    """Create, update or delete a buy offer; ``price`` is per unit of ``buying``."""
    validate_amount(buy_amount, "buy_amount")
    offer_price, source_account = _price_and_source(price, source)
    _check_pair(selling, buying)
    validate_offer_id(offer_id)

    body = xdr.OperationBody(
        type=xdr.OperationType.MANAGE_BUY_OFFER,
        manage_buy_offer_op=xdr.ManageBuyOfferOp(
            selling=selling.to_xdr_object(),
            buying=buying.to_xdr_object(),
            buy_amount=xdr.Int64(buy_amount),
            price=offer_price.to_xdr_object(),
            offer_id=xdr.Int64(offer_id),
        ),
    )
    log.debug("Built manage_buy_offer %d %s for %s at %s", buy_amount, buying, selling, offer_price)
    return Operation(body=body, source=source_account)


def create_passive_sell_offer(
    selling: Asset,
    buying: Asset,
    amount: int,
    price: PriceLike,
    source: Optional[str] = None,
) -> Operation:
    validate_amount(amount)
    offer_price, source_account = _price_and_source(price, source)
    _check_pair(selling, buying)

    body = xdr.OperationBody(
        type=xdr.OperationType.CREATE_PASSIVE_SELL_OFFER,
        create_passive_sell_offer_op=xdr.CreatePassiveSellOfferOp(
            selling=selling.to_xdr_object(),
            buying=buying.to_xdr_object(),
            amount=xdr.Int64(amount),
            price=offer_price.to_xdr_object(),
        ),
    )
    log.debug("Built create_passive_sell_offer %d %s for %s at %s", amount, selling, buying, offer_price)
    return Operation(body=body, source=source_account)


def _check_pair(selling: Asset, buying: Asset) -> None:
    if not isinstance(selling, Asset):
        raise InvalidField(Field.SELLING, f"expected an Asset, got {type(selling).__name__}")
    if not isinstance(buying, Asset):
        raise InvalidField(Field.BUYING, f"expected an Asset, got {type(buying).__name__}")
    if selling == buying:
        raise InvalidField(Field.BUYING, "buying and selling assets must differ")
