from abc_core.common.math import PRICE_ONE, integer_sqrt


class LinearCurveHelper:
    """
    Integer math for a linear curve, price(s) = slope * s, with slope = m / K.

    The reserve is the integral of the price:
        reserve(s) = slope * s^2 / 2
    and the supply its inverse:
        supply(r) = sqrt(2 * r / slope)
    """

    @staticmethod
    def spot_price(supply: int, m: int, k: int, p: int, q: int) -> int:
        """Spot price in 10**-18 units: m*S*10**18 / (K*P)."""
        return m * supply * PRICE_ONE // (k * p)

    @staticmethod
    def reserve(supply: int, m: int, k: int, p: int, q: int) -> int:
        """R = m*S^2*Q / (2*K*P^2)."""
        return m * supply * supply * q // (2 * k * p * p)

    @staticmethod
    def supply(reserve: int, m: int, k: int, p: int, q: int) -> int:
        """
        S = sqrt(2*R*K*P^2 / (m*Q)).
        Flooring the radicand first does not change floor(sqrt(.)).
        """
        return integer_sqrt(2 * reserve * k * p * p // (m * q))
