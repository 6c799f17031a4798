import logging
from typing import Optional, Sequence

from abc_core.common.errors import ConfigError
from abc_core.common.model import (
    Coin,
    CommonsPhase,
    CommonsPhaseConfig,
    CreateDenom,
    CurveInfo,
    CurveParams,
    CurveState,
    DecimalPlaces,
    InstantiateRequest,
    Response,
)
from abc_core.curves.curve import Curve
from abc_core.engine.buy import BuyEngine
from abc_core.engine.payment import nonpayable
from abc_core.engine.sell import SellEngine
from abc_core.storage.memory import (
    CURVE_STATE,
    CURVE_TYPE,
    MemoryStorage,
    PHASE,
    PHASE_CONFIG,
    SUPPLY_DENOM,
)
from abc_core.validation.common_validator import CommonValidator


logger = logging.getLogger(__name__)

# By default, the prefix for token factory tokens is "factory"
DENOM_PREFIX = "factory"


def supply_denom_for(contract_address: str, subdenom: str) -> str:
    return f"{DENOM_PREFIX}/{contract_address}/{subdenom}"


class AbcContract:
    """
    Entry points of the commons bonding curve.

    Every call loads its slots from storage at entry, hands plain values to the
    pure engines, and saves the results once at the end. A call that raises
    saves nothing, so failed calls leave no trace.
    """

    def __init__(self, storage: MemoryStorage, address: str):
        self._storage = storage
        self._address = address

    @property
    def address(self) -> str:
        return self._address

    def instantiate(self, sender: str, request: InstantiateRequest, funds: Sequence[Coin] = ()) -> Response:
        """
        Validates 'request', stores the initial curve state (reserve=0, supply=0) and
        the HATCH phase, and emits the intent to create the supply denom.
        """
        nonpayable(funds)
        if CURVE_STATE in self._storage:
            raise ConfigError("Contract is already instantiated.")

        results = CommonValidator.assert_valid(request)
        for warning in results["warnings"]:
            logger.warning("Instantiate: %s", warning)

        places = DecimalPlaces(supply=request.supply.decimals, reserve=request.reserve.decimals)
        # Fail early if the curve cannot be built for these decimals.
        Curve.from_params(request.curve_params, places)

        denom = supply_denom_for(self._address, request.supply.subdenom)
        self._storage.save_all({
            SUPPLY_DENOM: denom,
            CURVE_STATE: CurveState(reserve_denom=request.reserve.denom, decimals=places),
            CURVE_TYPE: request.curve_params,
            PHASE_CONFIG: request.phase_config,
            PHASE: CommonsPhase.hatch(),
        })
        logger.info("Instantiated %s by %s with %s curve", denom, sender, request.curve_params.curve_type)

        response = Response().add_message(
            CreateDenom(subdenom=request.supply.subdenom, metadata=request.supply.metadata)
        )
        response.add_attribute("action", "instantiate")
        response.add_attribute("denom", denom)
        return response

    def _curve(self, curve_state: CurveState) -> Curve:
        curve_params: CurveParams = self._storage.load(CURVE_TYPE)
        return Curve.from_params(curve_params, curve_state.decimals)

    def buy(self, sender: str, funds: Sequence[Coin]) -> Response:
        curve_state: CurveState = self._storage.load(CURVE_STATE)
        phase: CommonsPhase = self._storage.load(PHASE)
        phase_config: CommonsPhaseConfig = self._storage.load(PHASE_CONFIG)
        denom: str = self._storage.load(SUPPLY_DENOM)

        engine = BuyEngine(self._curve(curve_state), denom)
        outcome = engine.buy(curve_state, phase, phase_config, sender, funds)

        updates = {CURVE_STATE: outcome.curve_state}
        if outcome.phase != phase:
            updates[PHASE] = outcome.phase
        self._storage.save_all(updates)
        return outcome.response

    def burn(self, sender: str, amount: int, funds: Sequence[Coin]) -> Response:
        curve_state: CurveState = self._storage.load(CURVE_STATE)
        denom: str = self._storage.load(SUPPLY_DENOM)

        engine = SellEngine(self._curve(curve_state), denom)
        outcome = engine.burn(curve_state, sender, amount, funds)

        self._storage.save(CURVE_STATE, outcome.curve_state)
        return outcome.response

    def query_curve_info(self) -> CurveInfo:
        curve_state: CurveState = self._storage.load(CURVE_STATE)
        curve = self._curve(curve_state)
        return CurveInfo(
            reserve=curve_state.reserve,
            supply=curve_state.supply,
            spot_price=curve.spot_price(curve_state.supply),
            reserve_denom=curve_state.reserve_denom,
        )

    def query_phase(self) -> CommonsPhase:
        return self._storage.load(PHASE)

    def query_phase_config(self) -> CommonsPhaseConfig:
        return self._storage.load(PHASE_CONFIG)

    def query_denom(self) -> Optional[str]:
        return self._storage.may_load(SUPPLY_DENOM)
