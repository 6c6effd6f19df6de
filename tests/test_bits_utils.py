import pytest

from huffstep.bits_utils import bits_entropy_stats, parse_bits, symbol_entropy
from huffstep.errors import InvalidInputError


def test_parse_bits():
    assert parse_bits("0110") == [0, 1, 1, 0]
    assert parse_bits([1, 0, "1"]) == [1, 0, 1]
    with pytest.raises(InvalidInputError):
        parse_bits("01x")


def test_bits_entropy_stats():
    p0, p1, H, var = bits_entropy_stats([0, 1, 0, 1])
    assert p0 == pytest.approx(0.5) and p1 == pytest.approx(0.5)
    assert H == pytest.approx(1.0)
    assert var == pytest.approx(0.25)
    assert bits_entropy_stats([]) == (0.0, 0.0, 0.0, 0.0)


def test_symbol_entropy():
    assert symbol_entropy([1, 1]) == pytest.approx(1.0)
    assert symbol_entropy([5]) == pytest.approx(0.0)
    assert symbol_entropy([]) == 0.0
