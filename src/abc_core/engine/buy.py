import logging
from dataclasses import replace
from typing import Sequence

from abc_core.common.errors import MathOverflowError
from abc_core.common.math import checked_add, checked_sub
from abc_core.common.model import (
    BuyOutcome,
    Coin,
    CommonsPhase,
    CommonsPhaseConfig,
    CurveState,
    MintTokens,
    Response,
)
from abc_core.curves.curve import Curve
from abc_core.engine.payment import must_pay
from abc_core.phases.state_machine import PhaseStateMachine


logger = logging.getLogger(__name__)


class BuyEngine:
    """
    Turns a reserve payment into newly minted supply.

    Pure over its inputs: the snapshot is never mutated, and the returned
    BuyOutcome is only produced if every step succeeded.
    """

    def __init__(self, curve: Curve, supply_denom: str):
        self._curve = curve
        self._supply_denom = supply_denom

    def buy(
        self,
        curve_state: CurveState,
        phase: CommonsPhase,
        phase_config: CommonsPhaseConfig,
        buyer: str,
        funds: Sequence[Coin],
    ) -> BuyOutcome:
        """
        Runs a purchase:
          1) payment must be a single nonzero coin of the reserve denom
          2) phase rules: allowlist during HATCH, rejection when CLOSED; record the hatcher
          3) reserve += payment (checked)
          4) supply = curve.supply(reserve); minted = new supply - old supply (checked)
          5) HATCH -> OPEN once the reserve reaches the raise ceiling
          6) emit a mint intent for the buyer
        """
        payment = must_pay(funds, curve_state.reserve_denom)

        PhaseStateMachine.assert_buy_allowed(phase, phase_config, buyer)
        new_phase = PhaseStateMachine.record_hatcher(phase, buyer)

        reserve_after = checked_add(curve_state.reserve, payment)
        new_supply = self._curve.supply(reserve_after)
        try:
            minted = checked_sub(new_supply, curve_state.supply)
        except MathOverflowError as e:
            raise MathOverflowError(
                f"Curve inconsistency: supply {new_supply} for reserve {reserve_after} "
                f"is below current supply {curve_state.supply}"
            ) from e

        new_phase = PhaseStateMachine.maybe_transition(new_phase, phase_config, reserve_after)
        phase_changed = new_phase.phase != phase.phase

        normalizer = self._curve.normalizer
        logger.debug(
            "Buy by %s: payment=%s reserve=%s->%s supply=%s->%s minted=%s",
            buyer,
            normalizer.from_reserve(payment),
            normalizer.from_reserve(curve_state.reserve),
            normalizer.from_reserve(reserve_after),
            normalizer.from_supply(curve_state.supply),
            normalizer.from_supply(new_supply),
            normalizer.from_supply(minted),
        )

        response = Response().add_message(
            MintTokens(denom=self._supply_denom, amount=minted, mint_to_address=buyer)
        )
        response.add_attribute("action", "buy")
        response.add_attribute("from", buyer)
        response.add_attribute("reserve", payment)
        response.add_attribute("supply", minted)
        if phase_changed:
            response.add_attribute("phase", new_phase.phase)

        return BuyOutcome(
            curve_state=replace(curve_state, reserve=reserve_after, supply=new_supply),
            phase=new_phase,
            minted=minted,
            phase_changed=phase_changed,
            response=response,
        )
