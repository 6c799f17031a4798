from abc_core.common.math import PRICE_ONE, integer_cbrt, integer_sqrt


class SquareRootCurveHelper:
    """
    Integer math for a square root curve, price(s) = slope * s^(1/2), with slope = m / K.

    Integrating the price gives
        reserve(s) = (2/3) * slope * s^(3/2)
    and inverting it
        supply(r) = (3 * r / (2 * slope))^(2/3)

    Fractional powers are rewritten as an integer square or cube root of an
    exact integer radicand, so the only rounding is the final floor.
    """

    @staticmethod
    def spot_price(supply: int, m: int, k: int, p: int, q: int) -> int:
        """Spot price in 10**-18 units: sqrt(m^2*S*10**36 / (K^2*P))."""
        return integer_sqrt(m * m * supply * PRICE_ONE * PRICE_ONE // (k * k * p))

    @staticmethod
    def reserve(supply: int, m: int, k: int, p: int, q: int) -> int:
        """R = sqrt(4*m^2*S^3*Q^2 / (9*K^2*P^3))."""
        return integer_sqrt(4 * m * m * supply ** 3 * q * q // (9 * k * k * p ** 3))

    @staticmethod
    def supply(reserve: int, m: int, k: int, p: int, q: int) -> int:
        """S = cbrt(9*R^2*K^2*P^3 / (4*m^2*Q^2))."""
        return integer_cbrt(9 * reserve * reserve * k * k * p ** 3 // (4 * m * m * q * q))
