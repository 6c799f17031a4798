from typing import Sequence

from abc_core.common.errors import (
    MissingDenomError,
    MultipleDenomsError,
    NoFundsError,
    NonPayableError,
)
from abc_core.common.math import assert_uint128
from abc_core.common.model import Coin


def nonpayable(funds: Sequence[Coin]) -> None:
    """Fails if any funds are attached."""
    if funds:
        raise NonPayableError()


def one_coin(funds: Sequence[Coin]) -> Coin:
    """
    Returns the single attached coin.

    :raises NoFundsError: nothing attached, or a zero amount.
    :raises MultipleDenomsError: more than one coin attached.
    """
    if not funds:
        raise NoFundsError()
    if len(funds) > 1:
        raise MultipleDenomsError()
    coin = funds[0]
    if coin.amount == 0:
        raise NoFundsError()
    assert_uint128(coin.amount, "payment")
    return coin


def must_pay(funds: Sequence[Coin], denom: str) -> int:
    """
    Requires exactly one nonzero coin of 'denom' and returns its amount.

    :raises MissingDenomError: the single coin has another denom.
    """
    coin = one_coin(funds)
    if coin.denom != denom:
        raise MissingDenomError(denom)
    return coin.amount
