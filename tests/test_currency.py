import pytest

from ledgerkit.currency import Currency


def test_parse_known_returns_predefined():
    assert Currency.parse("USD") == Currency.USD
    assert Currency.parse("USDT") == Currency.USDT


def test_str_is_code():
    assert str(Currency.parse("EUR")) == "EUR"
    assert str(Currency.parse("USDC")) == "USDC"


def test_parse_other_code_round_trip():
    code = "XYZ"
    currency = Currency.parse(code)
    assert str(currency) == code
    assert currency.is_known is False
    assert Currency.USD.is_known is True


@pytest.mark.parametrize("bad", ["usd", "AB", "ABCD", "A1C", ""])
def test_parse_rejects_malformed(bad):
    with pytest.raises(ValueError):
        Currency.parse(bad)


def test_minor_units():
    assert Currency.JPY.minor_units() == 0
    assert Currency.HUF.minor_units() == 0
    assert Currency.BTC.minor_units() == 8
    assert Currency.ETH.minor_units() == 18
    assert Currency.USD.minor_units() == 2


def test_other_currency_uses_default_minor_units():
    assert Currency.parse("XYZ").minor_units() == Currency.EUR.minor_units()


def test_hashable_and_equal():
    assert {Currency.parse("GBP"), Currency.GBP} == {Currency.GBP}