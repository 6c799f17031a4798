from decimal import Decimal

from abc_core.common.errors import ConfigError
from abc_core.common.math import assert_uint128, atomics_to_decimal
from abc_core.common.model import DecimalPlaces


class DecimalNormalizer:
    """
    Reconciles the supply and reserve token precisions.

    Raw amounts are integers in each token's smallest unit. The curve works on
    whole-token values, so a raw supply S stands for S / 10**supply_decimals and
    a raw reserve R for R / 10**reserve_decimals. The integer unit factors are
    exposed for the exact curve helpers, and the Decimal conversions for logs
    and validation summaries.
    """

    def __init__(self, places: DecimalPlaces):
        if not isinstance(places, DecimalPlaces):
            raise ConfigError("DecimalNormalizer requires DecimalPlaces.")
        self._places = places

    @classmethod
    def from_decimals(cls, supply_decimals: int, reserve_decimals: int) -> "DecimalNormalizer":
        return cls(DecimalPlaces(supply=supply_decimals, reserve=reserve_decimals))

    @property
    def places(self) -> DecimalPlaces:
        return self._places

    @property
    def supply_unit(self) -> int:
        """Raw supply units per whole supply token."""
        return 10 ** self._places.supply

    @property
    def reserve_unit(self) -> int:
        """Raw reserve units per whole reserve token."""
        return 10 ** self._places.reserve

    def from_supply(self, raw: int) -> Decimal:
        """Whole supply tokens represented by a raw supply, for display."""
        return atomics_to_decimal(assert_uint128(raw, "supply"), self._places.supply)

    def from_reserve(self, raw: int) -> Decimal:
        return atomics_to_decimal(assert_uint128(raw, "reserve"), self._places.reserve)

    def __eq__(self, other):
        return isinstance(other, DecimalNormalizer) and other._places == self._places

    def __repr__(self):
        return f"DecimalNormalizer(supply={self._places.supply}, reserve={self._places.reserve})"
