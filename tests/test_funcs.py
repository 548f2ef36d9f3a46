import sys

import pytest

from cooperutil.funcs import hton64, ntoh64, split_string


@pytest.mark.parametrize("value", [0, 1, 0x0102030405060708, (1 << 64) - 1, 12345678901234])
def test_hton64_produces_network_order_bytes(value):
    converted = hton64(value)
    assert converted.to_bytes(8, sys.byteorder) == value.to_bytes(8, "big")


@pytest.mark.parametrize("value", [0, 7, 0x0102030405060708, (1 << 64) - 1])
def test_ntoh64_round_trip(value):
    assert ntoh64(hton64(value)) == value


def test_hton64_rejects_out_of_range():
    with pytest.raises(ValueError):
        hton64(1 << 64)
    with pytest.raises(ValueError):
        hton64(-1)


def test_split_string_drops_empty_pieces():
    assert split_string("a,b,,c,", ",") == ["a", "b", "c"]


def test_split_string_accepts_empty_pieces():
    assert split_string("a,b,,c,", ",", True) == ["a", "b", "", "c", ""]


def test_split_string_multichar_delimiter():
    assert split_string("1970-01-03 00:00:00", " ") == ["1970-01-03", "00:00:00"]
    assert split_string("x::y::::z", "::") == ["x", "y", "z"]


def test_split_string_empty_delimiter():
    assert split_string("abc", "") == []


def test_split_string_without_delimiter_present():
    assert split_string("abc", ",") == ["abc"]
    assert split_string("", ",") == []
    assert split_string("", ",", True) == [""]