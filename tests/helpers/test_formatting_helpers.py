import pytest

from helpers.formatting import (
    create_explorer_url,
    format_address,
    format_balance,
    format_number,
    get_explorer_name,
    get_network_name,
    get_network_names_by_chain_id,
    is_valid_address,
)
from helpers.numbers import is_blank, parse_finite_number, parse_non_negative_int


@pytest.mark.parametrize(
    "value,expected",
    [("1", 1.0), (" 2.5 ", 2.5), ("-3", -3.0), (".5", 0.5), ("1e3", 1000.0)],
)
def test_parse_finite_number(value, expected):
    assert parse_finite_number(value) == expected


@pytest.mark.parametrize("value", [None, "", "  ", "abc", "NaN", "inf", "1e999", "1_000", "0x10", "1.2.3"])
def test_parse_finite_number_rejects(value):
    assert parse_finite_number(value) is None


def test_parse_non_negative_int():
    assert parse_non_negative_int("42") == 42
    assert parse_non_negative_int("0x1f") == 31
    assert parse_non_negative_int("-1") is None
    assert parse_non_negative_int("1.5") is None
    assert is_blank("  ") and is_blank(None) and not is_blank("0")


def test_network_lookups():
    assert get_network_name("flare") == "Flare"
    assert get_network_name("unknown") == "unknown"
    assert get_network_names_by_chain_id(8453) == "Base"
    assert get_network_names_by_chain_id(999) == 999
    assert get_explorer_name(1) == "Etherscan"
    assert get_explorer_name(999) == "Explorer"


def test_address_helpers():
    address = "0x1D80c49BbBCd1C0911346656B529DF9E5c2F783d"

    assert is_valid_address(address)
    assert not is_valid_address("0x" + "f" * 40)
    assert not is_valid_address(address[:-1])
    assert format_address(address) == "0x1D80...783d"


def test_format_number():
    assert format_number(1.23456) == "1.23"
    assert format_number(2, decimals=4) == "2.0000"


def test_format_balance():
    assert format_balance("0.00001") == "1.00e-05"
    assert format_balance("0.5") == "0.5000"
    assert format_balance("1234.5") == "1,234.5"
    assert format_balance("12.3400") == "12.34"


def test_format_balance_passes_through_non_numeric():
    assert format_balance("abc") == "abc"
    assert format_balance("") == ""


def test_create_explorer_url():
    url = create_explorer_url("flare", "0xabc", "https://v2.raindex.finance/orders/")

    assert url == "https://v2.raindex.finance/orders/flare-0xabc"
