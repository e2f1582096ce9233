"""Payment and path payment operation builders."""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from stellar_sdk import xdr

from .address import resolve_muxed_account
from .asset import Asset
from .operation import Operation, resolve_source
from .validation import Field, InvalidField, validate_amount


MAX_PATH_LENGTH = 5

log = logging.getLogger(__name__)


def payment(
    destination: str,
    asset: Asset,
    amount: int,
    source: Optional[str] = None,
) -> Operation:
    """Build a Payment of ``amount`` stroops of ``asset`` to ``destination``.

    ``destination`` may be a plain (G...) or multiplexed (M...) account;
    a multiplexed destination keeps its sub-account id in the body.
    """
    validate_amount(amount)
    destination_account = resolve_muxed_account(destination, Field.DESTINATION)
    source_account = resolve_source(source)
    _check_asset(asset, Field.ASSET)

    body = xdr.OperationBody(
        type=xdr.OperationType.PAYMENT,
        payment_op=xdr.PaymentOp(
            destination=destination_account,
            asset=asset.to_xdr_object(),
            amount=xdr.Int64(amount),
        ),
    )
    log.debug("Built payment of %d %s to %s", amount, asset, destination)
    return Operation(body=body, source=source_account)


def path_payment_strict_send(
    send_asset: Asset,
    send_amount: int,
    destination: str,
    dest_asset: Asset,
    dest_min: int,
    path: Sequence[Asset],
    source: Optional[str] = None,
) -> Operation:
    """Send exactly ``send_amount``; the destination receives at least ``dest_min``."""
    validate_amount(send_amount, "send_amount")
    validate_amount(dest_min, "dest_min")
    destination_account = resolve_muxed_account(destination, Field.DESTINATION)
    source_account = resolve_source(source)
    _check_asset(send_asset, Field.SEND_ASSET)
    _check_asset(dest_asset, Field.DEST_ASSET)
    xdr_path = _path_to_xdr(path)

    body = xdr.OperationBody(
        type=xdr.OperationType.PATH_PAYMENT_STRICT_SEND,
        path_payment_strict_send_op=xdr.PathPaymentStrictSendOp(
            send_asset=send_asset.to_xdr_object(),
            send_amount=xdr.Int64(send_amount),
            destination=destination_account,
            dest_asset=dest_asset.to_xdr_object(),
            dest_min=xdr.Int64(dest_min),
            path=xdr_path,
        ),
    )
    log.debug(
        "Built strict-send path payment %s -> %s via %d hop(s)",
        send_asset,
        dest_asset,
        len(xdr_path),
    )
    return Operation(body=body, source=source_account)


def path_payment_strict_receive(
    send_asset: Asset,
    send_max: int,
    destination: str,
    dest_asset: Asset,
    dest_amount: int,
    path: Sequence[Asset],
    source: Optional[str] = None,
) -> Operation:
    """Deliver exactly ``dest_amount``, spending at most ``send_max``."""
    validate_amount(send_max, "send_max")
    validate_amount(dest_amount, "dest_amount")
    destination_account = resolve_muxed_account(destination, Field.DESTINATION)
    source_account = resolve_source(source)
    _check_asset(send_asset, Field.SEND_ASSET)
    _check_asset(dest_asset, Field.DEST_ASSET)
    xdr_path = _path_to_xdr(path)

    body = xdr.OperationBody(
        type=xdr.OperationType.PATH_PAYMENT_STRICT_RECEIVE,
        path_payment_strict_receive_op=xdr.PathPaymentStrictReceiveOp(
            send_asset=send_asset.to_xdr_object(),
            send_max=xdr.Int64(send_max),
            destination=destination_account,
            dest_asset=dest_asset.to_xdr_object(),
            dest_amount=xdr.Int64(dest_amount),
            path=xdr_path,
        ),
    )
    log.debug(
        "Built strict-receive path payment %s -> %s via %d hop(s)",
        send_asset,
        dest_asset,
        len(xdr_path),
    )
    return Operation(body=body, source=source_account)


def _check_asset(asset: Asset, field: Field) -> None:
    if not isinstance(asset, Asset):
        raise InvalidField(field, f"expected an Asset, got {type(asset).__name__}")


def _path_to_xdr(path: Sequence[Asset]) -> list:
    # A bare string is a Sequence too, but never a path.
    if isinstance(path, (str, bytes)) or not isinstance(path, Sequence):
        raise InvalidField(Field.PATH, "path must be a sequence of assets")
    if not path:
        raise InvalidField(Field.PATH, "path must not be empty")
    if len(path) > MAX_PATH_LENGTH:
        raise InvalidField(Field.PATH, f"path has {len(path)} assets (max {MAX_PATH_LENGTH})")
    for hop in path:
        _check_asset(hop, Field.PATH)
    return [hop.to_xdr_object() for hop in path]
