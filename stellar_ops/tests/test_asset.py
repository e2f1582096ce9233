import pytest
from stellar_sdk import StrKey, xdr

from stellar_ops.asset import Asset
from stellar_ops.validation import Field, InvalidField


def test_native():
    native = Asset.native()
    assert native.is_native()
    assert native.type == "native"
    assert native.to_xdr_object() == xdr.Asset(type=xdr.AssetType.ASSET_TYPE_NATIVE)
    assert native == Asset("XLM")


def test_alphanum4(usd, issuer):
    asset = usd.to_xdr_object()
    assert usd.type == "credit_alphanum4"
    assert asset.type == xdr.AssetType.ASSET_TYPE_CREDIT_ALPHANUM4
    assert asset.alpha_num4.asset_code.asset_code4 == b"USD\x00"
    assert asset.alpha_num4.issuer.account_id.ed25519.uint256 == StrKey.decode_ed25519_public_key(issuer)


def test_alphanum12(eurt):
    asset = eurt.to_xdr_object()
    assert eurt.type == "credit_alphanum12"
    assert asset.type == xdr.AssetType.ASSET_TYPE_CREDIT_ALPHANUM12
    assert asset.alpha_num12.asset_code.asset_code12 == b"EURTOKEN\x00\x00\x00\x00"


def test_xdr_round_trip(usd, eurt):
    for asset in (Asset.native(), usd, eurt):
        assert Asset.from_xdr_object(asset.to_xdr_object()) == asset


@pytest.mark.parametrize("code", ["", "TOOLONGCODE13", "US-D", "€UR", 42])
def test_bad_code(code, issuer):
    with pytest.raises(InvalidField) as exc_info:
        Asset(code, issuer)
    assert exc_info.value.field == Field.CODE


def test_issuer_required():
    with pytest.raises(InvalidField) as exc_info:
        Asset("USD")
    assert exc_info.value.field == Field.ISSUER


def test_issuer_must_be_plain_account(muxed_address, contract_address):
    for issuer in ("not_an_address", muxed_address, contract_address):
        with pytest.raises(InvalidField) as exc_info:
            Asset("USD", issuer)
        assert exc_info.value.field == Field.ISSUER


def test_str(usd, issuer):
    assert str(Asset.native()) == "native"
    assert str(usd) == f"USD:{issuer}"


def test_from_xdr_rejects_short_code_as_alphanum12(usd):
    short = xdr.Asset(
        type=xdr.AssetType.ASSET_TYPE_CREDIT_ALPHANUM12,
        alpha_num12=xdr.AlphaNum12(
            asset_code=xdr.AssetCode12(b"USD".ljust(12, b"\x00")),
            issuer=usd.to_xdr_object().alpha_num4.issuer,
        ),
    )
    with pytest.raises(InvalidField) as exc_info:
        Asset.from_xdr_object(short)
    assert exc_info.value.field == Field.CODE
