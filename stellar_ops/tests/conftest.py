import pytest
from stellar_sdk import Keypair, MuxedAccount, StrKey

from stellar_ops.asset import Asset


@pytest.fixture
def keypair():
    return Keypair.random()


@pytest.fixture
def account(keypair):
    return keypair.public_key


@pytest.fixture
def muxed_address(keypair):
    return MuxedAccount(keypair.public_key, 8).account_muxed


@pytest.fixture
def contract_address():
    return StrKey.encode_contract(bytes(32))


@pytest.fixture
def issuer():
    return Keypair.random().public_key


@pytest.fixture
def usd(issuer):
    return Asset("USD", issuer)


@pytest.fixture
def eurt(issuer):
    return Asset("EURTOKEN", issuer)
