import pytest

from hypothesis import given
from hypothesis import strategies as st

from abc_core.common.enums import CurveType
from abc_core.common.model import CurveParams, DecimalPlaces
from abc_core.curves.curve import Curve


# Every configuration here prices one raw supply unit at no less than one raw
# reserve unit, which is what keeps supply(reserve(s)) within one unit of s.
CURVES = {
    "constant": Curve.from_params(CurveParams(CurveType.CONSTANT, value=15, scale=1), DecimalPlaces(2, 8)),
    "linear": Curve.from_params(CurveParams(CurveType.LINEAR, value=1, scale=1), DecimalPlaces(2, 8)),
    "square_root": Curve.from_params(CurveParams(CurveType.SQUARE_ROOT, value=1, scale=0), DecimalPlaces(2, 8)),
    "square_root_tenth": Curve.from_params(CurveParams(CurveType.SQUARE_ROOT, value=1, scale=1), DecimalPlaces(2, 8)),
}

supplies = st.integers(min_value=0, max_value=10 ** 12)


@pytest.mark.parametrize("name", sorted(CURVES))
@given(s1=supplies, s2=supplies)
def test_monotonic_in_supply(name, s1, s2):
    curve = CURVES[name]
    low, high = min(s1, s2), max(s1, s2)
    assert curve.spot_price(low) <= curve.spot_price(high)
    assert curve.reserve(low) <= curve.reserve(high)


@pytest.mark.parametrize("name", sorted(CURVES))
@given(r1=st.integers(min_value=0, max_value=10 ** 20), r2=st.integers(min_value=0, max_value=10 ** 20))
def test_supply_monotonic_in_reserve(name, r1, r2):
    curve = CURVES[name]
    assert curve.supply(min(r1, r2)) <= curve.supply(max(r1, r2))


@pytest.mark.parametrize("name", sorted(CURVES))
@given(s=supplies)
def test_supply_inverts_reserve(name, s):
    curve = CURVES[name]
    recovered = curve.supply(curve.reserve(s))
    assert s - 1 <= recovered <= s


# reserve(s) is an exact integer here: 1_500_000 * s and 500 * s**2 raw units
EXACT_RESERVE = ("constant", "linear")


@pytest.mark.parametrize("name", EXACT_RESERVE)
@given(s=supplies)
def test_supply_inverts_exact_reserve_exactly(name, s):
    curve = CURVES[name]
    assert curve.supply(curve.reserve(s)) == s


@pytest.mark.parametrize("name", sorted(CURVES))
@given(r=st.integers(min_value=0, max_value=10 ** 20))
def test_reserve_of_supply_never_exceeds_reserve(name, r):
    """Buying with r and immediately burning everything never releases more than r."""
    curve = CURVES[name]
    assert curve.reserve(curve.supply(r)) <= r


@pytest.mark.parametrize("name", sorted(CURVES))
def test_spot_price_zero_only_at_zero_supply(name):
    curve = CURVES[name]
    if name == "constant":
        assert curve.spot_price(0) > 0
    else:
        assert curve.spot_price(0) == 0
        assert curve.spot_price(1) > 0
