"""Smart contract (host function) invocation builders."""

from __future__ import annotations

import logging
import re
from typing import Optional, Sequence

from stellar_sdk import Address
from stellar_sdk import xdr

from .address import Contract, MalformedAddress, decode_address, encode_address
from .operation import Operation, resolve_source
from .validation import Field, InvalidField


MAX_SYMBOL_LENGTH = 32
_SYMBOL_PATTERN = re.compile(r"[A-Za-z0-9_]{1,%d}" % MAX_SYMBOL_LENGTH)

log = logging.getLogger(__name__)


def invoke_host_function(
    host_function: xdr.HostFunction,
    auth: Sequence[xdr.SorobanAuthorizationEntry] = (),
    source: Optional[str] = None,
) -> Operation:
    """Wrap a prepared host function and its authorization entries."""
    source_account = resolve_source(source)
    if not isinstance(host_function, xdr.HostFunction):
        raise InvalidField(Field.HOST_FUNCTION, f"expected xdr.HostFunction, got {type(host_function).__name__}")
    auth_entries = _auth_entries(auth)

    body = xdr.OperationBody(
        type=xdr.OperationType.INVOKE_HOST_FUNCTION,
        invoke_host_function_op=xdr.InvokeHostFunctionOp(
            host_function=host_function,
            auth=auth_entries,
        ),
    )
    log.debug("Built invoke_host_function %s with %d auth entries", host_function.type, len(auth_entries))
    return Operation(body=body, source=source_account)


def invoke_contract_function(
    contract_id: str,
    function_name: str,
    parameters: Sequence[xdr.SCVal] = (),
    auth: Sequence[xdr.SorobanAuthorizationEntry] = (),
    source: Optional[str] = None,
) -> Operation:
    """Call ``function_name`` on the contract ``contract_id`` (a C... address)."""
    try:
        contract = decode_address(contract_id)
    except MalformedAddress as exc:
        raise InvalidField(Field.CONTRACT_ID, str(exc)) from exc
    if not isinstance(contract, Contract):
        raise InvalidField(Field.CONTRACT_ID, "a contract address is required")
    resolve_source(source)
    if not isinstance(function_name, str) or not _SYMBOL_PATTERN.fullmatch(function_name):
        raise InvalidField(Field.FUNCTION_NAME, f"not a valid symbol: {function_name!r}")
    args = _materialize(parameters, Field.PARAMETERS)
    for arg in args:
        if not isinstance(arg, xdr.SCVal):
            raise InvalidField(Field.PARAMETERS, f"expected xdr.SCVal, got {type(arg).__name__}")

    host_function = xdr.HostFunction(
        type=xdr.HostFunctionType.HOST_FUNCTION_TYPE_INVOKE_CONTRACT,
        invoke_contract=xdr.InvokeContractArgs(
            contract_address=Address(encode_address(contract)).to_xdr_sc_address(),
            function_name=xdr.SCSymbol(function_name.encode("ascii")),
            args=args,
        ),
    )
    return invoke_host_function(host_function, auth, source=source)


def _auth_entries(auth: Sequence[xdr.SorobanAuthorizationEntry]) -> list:
    if auth is None:
        return []
    entries = _materialize(auth, Field.AUTH)
    for entry in entries:
        if not isinstance(entry, xdr.SorobanAuthorizationEntry):
            raise InvalidField(Field.AUTH, f"expected xdr.SorobanAuthorizationEntry, got {type(entry).__name__}")
    return entries


def _materialize(values, field: Field) -> list:
    # Generators are consumed exactly once, here.
    if values is None or isinstance(values, (str, bytes)):
        raise InvalidField(field, f"expected a sequence, got {type(values).__name__}")
    try:
        return list(values)
    except TypeError as exc:
        raise InvalidField(field, f"expected a sequence, got {type(values).__name__}") from exc
