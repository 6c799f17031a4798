import logging

from abc_core.common.enums import PhaseType
from abc_core.common.errors import AllowlistError, PhaseError
from abc_core.common.model import CommonsPhase, CommonsPhaseConfig


logger = logging.getLogger(__name__)


class PhaseStateMachine:
    """
    Phase rules of the commons sale:

        HATCH --(reserve reaches initial_raise max)--> OPEN
        OPEN / CLOSED: no transitions driven by buys; nothing returns to HATCH.

    Every function takes and returns immutable CommonsPhase values.
    """

    @staticmethod
    def assert_buy_allowed(phase: CommonsPhase, config: CommonsPhaseConfig, buyer: str) -> None:
        """
        During HATCH, a configured allowlist must contain the buyer.
        OPEN always allows buys. CLOSED rejects them, since no more supply is minted once closed.

        :raises AllowlistError: buyer is not on the hatch allowlist.
        :raises PhaseError: the sale is closed.
        """
        if phase.phase == PhaseType.HATCH:
            allowlist = config.hatch.allowlist
            if allowlist is not None and buyer not in allowlist:
                logger.warning("Rejected hatch buy from %s: not allowlisted", buyer)
                raise AllowlistError(buyer)
        elif phase.phase == PhaseType.OPEN:
            return
        elif phase.phase == PhaseType.CLOSED:
            logger.warning("Rejected buy from %s: sale is closed", buyer)
            raise PhaseError("The sale is closed; no further purchases are accepted.")
        else:
            raise PhaseError(f"Unknown phase {phase.phase}.")

    @staticmethod
    def record_hatcher(phase: CommonsPhase, buyer: str) -> CommonsPhase:
        """Adds 'buyer' to the hatcher set during HATCH. Idempotent; other phases are returned as is."""
        if phase.phase != PhaseType.HATCH or buyer in phase.hatchers:
            return phase
        return CommonsPhase.hatch(phase.hatchers | {buyer})

    @staticmethod
    def maybe_transition(phase: CommonsPhase, config: CommonsPhaseConfig, new_reserve_total: int) -> CommonsPhase:
        """
        Moves HATCH to OPEN once the reserve total reaches the initial raise ceiling.
        Evaluated once per buy, after the reserve has been updated.
        """
        if phase.phase == PhaseType.HATCH and new_reserve_total >= config.hatch.initial_raise_max:
            logger.info(
                "Hatch raise ceiling %s reached with reserve %s; opening the sale",
                config.hatch.initial_raise_max,
                new_reserve_total,
            )
            return CommonsPhase.open()
        return phase
