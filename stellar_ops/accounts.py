"""Account lifecycle operation builders."""

from __future__ import annotations

import logging
from typing import Optional

from stellar_sdk import xdr

from .address import resolve_account_id, resolve_muxed_account
from .operation import Operation, resolve_source
from .validation import Field, validate_amount, validate_positive_amount


log = logging.getLogger(__name__)


def create_account(
    destination: str,
    starting_balance: int,
    source: Optional[str] = None,
) -> Operation:
    """Create and fund a new account.

    The new account must be a plain G... address and the starting balance
    must be strictly positive.
    """
    validate_positive_amount(starting_balance, "starting_balance")
    destination_id = resolve_account_id(destination, Field.DESTINATION)
    source_account = resolve_source(source)

    body = xdr.OperationBody(
        type=xdr.OperationType.CREATE_ACCOUNT,
        create_account_op=xdr.CreateAccountOp(
            destination=destination_id,
            starting_balance=xdr.Int64(starting_balance),
        ),
    )
    log.debug("Built create_account for %s with %d", destination, starting_balance)
    return Operation(body=body, source=source_account)


def account_merge(destination: str, source: Optional[str] = None) -> Operation:
    """Merge the source account into ``destination``."""
    destination_account = resolve_muxed_account(destination, Field.DESTINATION)
    source_account = resolve_source(source)

    body = xdr.OperationBody(
        type=xdr.OperationType.ACCOUNT_MERGE,
        destination=destination_account,
    )
    log.debug("Built account_merge into %s", destination)
    return Operation(body=body, source=source_account)


def bump_sequence(bump_to: int, source: Optional[str] = None) -> Operation:
    validate_amount(bump_to, "bump_to")
    source_account = resolve_source(source)

    body = xdr.OperationBody(
        type=xdr.OperationType.BUMP_SEQUENCE,
        bump_sequence_op=xdr.BumpSequenceOp(
            bump_to=xdr.SequenceNumber(xdr.Int64(bump_to)),
        ),
    )
    log.debug("Built bump_sequence to %d", bump_to)
    return Operation(body=body, source=source_account)
