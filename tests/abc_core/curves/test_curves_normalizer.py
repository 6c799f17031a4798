import pytest

from decimal import Decimal

from abc_core.common.errors import ConfigError, CurveDomainError
from abc_core.common.model import DecimalPlaces
from abc_core.curves.normalizer import DecimalNormalizer


@pytest.fixture
def normalizer():
    """Supply with 2 decimals, reserve with 8 (satoshi-like)."""
    return DecimalNormalizer.from_decimals(2, 8)


def test_units(normalizer):
    assert normalizer.supply_unit == 100
    assert normalizer.reserve_unit == 100_000_000
    assert normalizer.places == DecimalPlaces(supply=2, reserve=8)


def test_from_raw(normalizer):
    assert normalizer.from_supply(1234) == Decimal("12.34")
    assert normalizer.from_reserve(150_000_000) == Decimal("1.5")
    assert normalizer.from_supply(0) == Decimal("0")


def test_from_raw_keeps_full_uint128_precision(normalizer):
    raw = 2 ** 128 - 1
    assert normalizer.from_supply(raw) == Decimal(f"{raw // 100}.{raw % 100:02d}")
    assert normalizer.from_reserve(raw) == Decimal(f"{raw // 10 ** 8}.{raw % 10 ** 8:08d}")


def test_rejects_out_of_range_places():
    with pytest.raises(ConfigError):
        DecimalNormalizer.from_decimals(19, 0)
    with pytest.raises(ConfigError):
        DecimalNormalizer("2,8")


def test_rejects_out_of_range_amounts(normalizer):
    with pytest.raises(CurveDomainError):
        normalizer.from_supply(-1)
    with pytest.raises(CurveDomainError):
        normalizer.from_reserve(2 ** 128)


def test_equality():
    assert DecimalNormalizer.from_decimals(2, 8) == DecimalNormalizer.from_decimals(2, 8)
    assert DecimalNormalizer.from_decimals(2, 8) != DecimalNormalizer.from_decimals(8, 2)
