import pytest
from stellar_sdk import Address, xdr

from stellar_ops.soroban import invoke_contract_function, invoke_host_function
from stellar_ops.validation import InvalidField


def _upload_wasm():
    return xdr.HostFunction(
        type=xdr.HostFunctionType.HOST_FUNCTION_TYPE_UPLOAD_CONTRACT_WASM,
        wasm=b"\x00asm\x01\x00\x00\x00",
    )


def _source_account_auth(invocation):
    return xdr.SorobanAuthorizationEntry(
        credentials=xdr.SorobanCredentials(
            type=xdr.SorobanCredentialsType.SOROBAN_CREDENTIALS_SOURCE_ACCOUNT,
        ),
        root_invocation=xdr.SorobanAuthorizedInvocation(
            function=xdr.SorobanAuthorizedFunction(
                type=xdr.SorobanAuthorizedFunctionType.SOROBAN_AUTHORIZED_FUNCTION_TYPE_CONTRACT_FN,
                contract_fn=invocation,
            ),
            sub_invocations=[],
        ),
    )


def test_invoke_host_function():
    host_function = _upload_wasm()
    op = invoke_host_function(host_function)
    assert op.type == xdr.OperationType.INVOKE_HOST_FUNCTION
    assert op.body.invoke_host_function_op.host_function == host_function
    assert op.body.invoke_host_function_op.auth == []


def test_invoke_host_function_rejects_payload():
    with pytest.raises(InvalidField) as exc_info:
        invoke_host_function(b"\x00asm")
    assert exc_info.value.field == "host_function"
    with pytest.raises(InvalidField) as exc_info:
        invoke_host_function(_upload_wasm(), auth=["entry"])
    assert exc_info.value.field == "auth"


def test_invoke_contract_function(contract_address, account):
    amount = xdr.SCVal(type=xdr.SCValType.SCV_U32, u32=xdr.Uint32(5))
    op = invoke_contract_function(contract_address, "transfer", [amount], source=account)
    host_function = op.body.invoke_host_function_op.host_function
    assert host_function.type == xdr.HostFunctionType.HOST_FUNCTION_TYPE_INVOKE_CONTRACT
    args = host_function.invoke_contract
    assert Address.from_xdr_sc_address(args.contract_address).address == contract_address
    assert args.function_name.sc_symbol == b"transfer"
    assert args.args == [amount]
    assert op.source_address == account


def test_invoke_contract_function_with_auth(contract_address):
    first = invoke_contract_function(contract_address, "hello")
    invocation = first.body.invoke_host_function_op.host_function.invoke_contract
    entry = _source_account_auth(invocation)
    op = invoke_contract_function(contract_address, "hello", auth=[entry])
    assert op.body.invoke_host_function_op.auth == [entry]


def test_invoke_contract_function_requires_contract(account):
    for contract_id in (account, "C123"):
        with pytest.raises(InvalidField) as exc_info:
            invoke_contract_function(contract_id, "hello")
        assert exc_info.value.field == "contract_id"


@pytest.mark.parametrize("name", ["", "has space", "x" * 33, None])
def test_invoke_contract_function_name(contract_address, name):
    with pytest.raises(InvalidField) as exc_info:
        invoke_contract_function(contract_address, name)
    assert exc_info.value.field == "function_name"


def test_invoke_contract_function_parameters(contract_address):
    with pytest.raises(InvalidField) as exc_info:
        invoke_contract_function(contract_address, "hello", [5])
    assert exc_info.value.field == "parameters"


def test_invoke_contract_function_source_checked_before_symbol(contract_address):
    with pytest.raises(InvalidField) as exc_info:
        invoke_contract_function(contract_address, "bad name", source="junk")
    assert exc_info.value.field == "source"


def test_invoke_contract_function_accepts_generators(contract_address):
    value = xdr.SCVal(type=xdr.SCValType.SCV_U32, u32=xdr.Uint32(1))
    op = invoke_contract_function(contract_address, "f", (v for v in [value]))
    assert op.body.invoke_host_function_op.host_function.invoke_contract.args == [value]


@pytest.mark.parametrize("parameters", [None, 5, "abc"])
def test_invoke_contract_function_rejects_non_sequences(contract_address, parameters):
    with pytest.raises(InvalidField) as exc_info:
        invoke_contract_function(contract_address, "f", parameters)
    assert exc_info.value.field == "parameters"


def test_invoke_host_function_rejects_non_iterable_auth():
    with pytest.raises(InvalidField) as exc_info:
        invoke_host_function(_upload_wasm(), auth=7)
    assert exc_info.value.field == "auth"
