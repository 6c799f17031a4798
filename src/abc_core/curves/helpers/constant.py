from abc_core.common.math import PRICE_ONE


class ConstantCurveHelper:
    """
    Integer math for a fixed price curve, price(s) = c.

    All helpers take the curve parameter as (m, K) with c = m / K, and the token
    units as P = 10**supply_decimals, Q = 10**reserve_decimals. Every result is floored.
    """

    @staticmethod
    def spot_price(supply: int, m: int, k: int, p: int, q: int) -> int:
        """Spot price in 10**-18 units; independent of supply."""
        return m * PRICE_ONE // k

    @staticmethod
    def reserve(supply: int, m: int, k: int, p: int, q: int) -> int:
        """
        reserve = c * s, in raw units:
            R = m*S*Q / (K*P)
        """
        return m * supply * q // (k * p)

    @staticmethod
    def supply(reserve: int, m: int, k: int, p: int, q: int) -> int:
        """
        supply = r / c, in raw units:
            S = R*K*P / (m*Q)
        """
        return reserve * k * p // (m * q)
