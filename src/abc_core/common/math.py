from decimal import Context, Decimal, ROUND_FLOOR
from math import isqrt

from abc_core.common.errors import CurveDomainError, MathOverflowError


UINT128_MAX = 2 ** 128 - 1

# Fractional digits of a spot price, matching an 18-place fixed-point decimal.
PRICE_DECIMALS = 18
PRICE_ONE = 10 ** PRICE_DECIMALS

# Wide enough for any Uint128 scaled by 10**36 without rounding.
FIXED_POINT_CONTEXT = Context(prec=96, rounding=ROUND_FLOOR)


def assert_uint128(value: int, name: str = "value") -> int:
    """
    Ensures 'value' is an int inside [0, UINT128_MAX].

    :raises CurveDomainError: if it is not.
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise CurveDomainError(f"{name} must be an integer, got {type(value).__name__}")
    if value < 0 or value > UINT128_MAX:
        raise CurveDomainError(f"{name} {value} is outside the Uint128 range")
    return value


def checked_result(value: int, operation: str) -> int:
    """Raises MathOverflowError if an arithmetic result left the Uint128 range."""
    if value < 0:
        raise MathOverflowError(f"Cannot {operation}: result {value} underflows")
    if value > UINT128_MAX:
        raise MathOverflowError(f"Cannot {operation}: result {value} overflows Uint128")
    return value


def checked_add(a: int, b: int) -> int:
    return checked_result(a + b, f"add {a} + {b}")


def checked_sub(a: int, b: int) -> int:
    return checked_result(a - b, f"sub {a} - {b}")


def integer_sqrt(n: int) -> int:
    """floor(sqrt(n)) for a non-negative integer."""
    if n < 0:
        raise CurveDomainError(f"Cannot take the square root of {n}")
    return isqrt(n)


def integer_cbrt(n: int) -> int:
    """
    floor(cbrt(n)) for a non-negative integer, by integer Newton iteration.

    The starting guess 2**ceil(bits/3) is never below the root, so the iterates
    decrease until they stop, and the last one is the floor of the root.
    """
    if n < 0:
        raise CurveDomainError(f"Cannot take the cube root of {n}")
    if n < 2:
        return n
    x = 1 << ((n.bit_length() + 2) // 3)
    while True:
        y = (2 * x + n // (x * x)) // 3
        if y >= x:
            return x
        x = y


def atomics_to_decimal(atomics: int, decimals: int) -> Decimal:
    """Exact conversion of an integer count of 10**-decimals units to a Decimal."""
    return Decimal(atomics).scaleb(-decimals, context=FIXED_POINT_CONTEXT)


def price_from_atomics(atomics: int) -> Decimal:
    """
    Converts a spot price expressed in 10**-18 units into a Decimal.

    :raises MathOverflowError: if the price does not fit the fixed-point range.
    """
    checked_result(atomics, "represent spot price")
    return atomics_to_decimal(atomics, PRICE_DECIMALS)
