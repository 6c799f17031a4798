import logging
from dataclasses import replace
from typing import Sequence

from abc_core.common.errors import BurnAmountMismatchError, MathOverflowError
from abc_core.common.math import assert_uint128, checked_sub
from abc_core.common.model import BankSend, BurnTokens, Coin, CurveState, Response, SellOutcome
from abc_core.curves.curve import Curve
from abc_core.engine.payment import must_pay


logger = logging.getLogger(__name__)


class SellEngine:
    """Retires supply tokens and releases the reserve that backed them."""

    def __init__(self, curve: Curve, supply_denom: str):
        self._curve = curve
        self._supply_denom = supply_denom

    def burn(self, curve_state: CurveState, seller: str, amount: int, funds: Sequence[Coin]) -> SellOutcome:
        """
        Burns 'amount' supply tokens attached as payment by 'seller'.

        The attached payment must equal 'amount'; anything else is rejected with
        BurnAmountMismatchError rather than burning one and accounting the other.

        :raises MathOverflowError: amount exceeds the outstanding supply.
        """
        assert_uint128(amount, "burn amount")
        paid = must_pay(funds, self._supply_denom)
        if paid != amount:
            logger.warning("Rejected burn by %s: amount %s but paid %s", seller, amount, paid)
            raise BurnAmountMismatchError(amount, paid)

        try:
            new_supply = checked_sub(curve_state.supply, amount)
        except MathOverflowError as e:
            raise MathOverflowError(
                f"Cannot burn {amount}: only {curve_state.supply} supply outstanding"
            ) from e
        new_reserve = self._curve.reserve(new_supply)
        try:
            released = checked_sub(curve_state.reserve, new_reserve)
        except MathOverflowError as e:
            raise MathOverflowError(
                f"Curve inconsistency: reserve {new_reserve} for supply {new_supply} "
                f"exceeds held reserve {curve_state.reserve}"
            ) from e

        normalizer = self._curve.normalizer
        logger.debug(
            "Burn by %s: amount=%s supply=%s->%s reserve=%s->%s released=%s",
            seller,
            normalizer.from_supply(amount),
            normalizer.from_supply(curve_state.supply),
            normalizer.from_supply(new_supply),
            normalizer.from_reserve(curve_state.reserve),
            normalizer.from_reserve(new_reserve),
            normalizer.from_reserve(released),
        )

        response = Response()
        response.add_message(BurnTokens(denom=self._supply_denom, amount=amount, burn_from_address=seller))
        response.add_message(
            BankSend(to_address=seller, amount=[Coin(denom=curve_state.reserve_denom, amount=released)])
        )
        response.add_attribute("action", "burn")
        response.add_attribute("from", seller)
        response.add_attribute("supply", amount)
        response.add_attribute("reserve", released)

        return SellOutcome(
            curve_state=replace(curve_state, reserve=new_reserve, supply=new_supply),
            released=released,
            response=response,
        )
