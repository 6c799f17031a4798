from decimal import Decimal

from abc_core.common.enums import CurveType
from abc_core.common.errors import ConfigError
from abc_core.common.math import assert_uint128, checked_result, price_from_atomics
from abc_core.common.model import CurveParams, DecimalPlaces
from abc_core.curves.helpers.constant import ConstantCurveHelper
from abc_core.curves.helpers.linear import LinearCurveHelper
from abc_core.curves.helpers.square_root import SquareRootCurveHelper
from abc_core.curves.normalizer import DecimalNormalizer


def _helper_for(curve_type: CurveType):
    if curve_type == CurveType.CONSTANT:
        return ConstantCurveHelper
    elif curve_type == CurveType.LINEAR:
        return LinearCurveHelper
    elif curve_type == CurveType.SQUARE_ROOT:
        return SquareRootCurveHelper
    else:
        raise ConfigError(f"Unsupported curve type {curve_type}.")


class Curve:
    """
    Pure mapping between supply, reserve and spot price for one curve variant.

    The variant set is closed: every CurveType has exactly one helper, and an
    unknown type is rejected at construction. All three functions are
    monotonically non-decreasing, and reserve/supply are inverses up to one raw
    supply unit of flooring.
    """

    def __init__(self, params: CurveParams, normalizer: DecimalNormalizer):
        self._params = params
        self._normalizer = normalizer
        self._helper = _helper_for(params.curve_type)

    @classmethod
    def from_params(cls, params: CurveParams, places: DecimalPlaces) -> "Curve":
        return cls(params, DecimalNormalizer(places))

    @property
    def params(self) -> CurveParams:
        return self._params

    @property
    def normalizer(self) -> DecimalNormalizer:
        return self._normalizer

    def _args(self):
        return (
            self._params.value,
            10 ** self._params.scale,
            self._normalizer.supply_unit,
            self._normalizer.reserve_unit,
        )

    def spot_price(self, supply: int) -> Decimal:
        """
        Price of the next whole supply token, in whole reserve tokens, at 'supply'.

        :param supply: int - raw supply.
        :return: Decimal with 18 fractional digits, floored.
        """
        assert_uint128(supply, "supply")
        return price_from_atomics(self._helper.spot_price(supply, *self._args()))

    def reserve(self, supply: int) -> int:
        """
        Raw reserve required to back a raw 'supply'.

        :raises CurveDomainError: if supply is outside the Uint128 range.
        :raises MathOverflowError: if the reserve is not representable.
        """
        assert_uint128(supply, "supply")
        return checked_result(self._helper.reserve(supply, *self._args()), "compute reserve")

    def supply(self, reserve: int) -> int:
        """
        Raw supply obtainable for a raw 'reserve'.

        :raises CurveDomainError: if reserve is outside the Uint128 range.
        :raises MathOverflowError: if the supply is not representable.
        """
        assert_uint128(reserve, "reserve")
        return checked_result(self._helper.supply(reserve, *self._args()), "compute supply")

    def __repr__(self):
        return f"Curve({self._params.curve_type}, value={self._params.value}, scale={self._params.scale}, {self._normalizer!r})"
