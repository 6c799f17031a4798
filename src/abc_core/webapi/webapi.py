import dataclasses
import logging
import threading
from decimal import Decimal
from enum import Enum
from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, Field

from flask import jsonify
from flask_openapi3 import Info, Tag
from flask_openapi3 import OpenAPI

from abc_core.common.enums import CurveType
from abc_core.common.errors import AbcError
from abc_core.common.math import FIXED_POINT_CONTEXT
from abc_core.common.model import (
    Coin,
    CommonsPhaseConfig,
    CurveParams,
    HatchConfig,
    InstantiateRequest,
    ReserveToken,
    SupplyToken,
    TokenMetadata,
)
from abc_core.contract import AbcContract
from abc_core.storage.memory import MemoryStorage


logger = logging.getLogger(__name__)

info = Info(title="Commons Bonding Curve API", version="1.0.0")

DEFAULT_CONTRACT_ADDRESS = "abc_contract"


class CurveKind(Enum):
    constant = "constant"
    linear = "linear"
    square_root = "square_root"


class CoinBody(BaseModel):
    denom: str = Field(description="Token denomination")
    amount: int = Field(ge=0, description="Raw amount in the token's smallest unit")


class MetadataBody(BaseModel):
    name: Optional[str] = None
    symbol: Optional[str] = None
    description: Optional[str] = None
    denom_units: List[Dict] = Field(default_factory=list)
    base: Optional[str] = None
    display: Optional[str] = None


class SupplyTokenBody(BaseModel):
    subdenom: str = Field(description="Subdenom of the supply token to create")
    decimals: int = Field(description="Decimal places of the supply token")
    metadata: MetadataBody = Field(default_factory=MetadataBody)


class ReserveTokenBody(BaseModel):
    denom: str = Field(description="Denom buyers pay with")
    decimals: int = Field(description="Decimal places of the reserve token")


class CurveTypeBody(BaseModel):
    curve_type: CurveKind = Field(description="The bonding curve type to use")
    value: int = Field(description="Price (constant) or slope, as an integer mantissa")
    scale: int = Field(0, description="Decimal places of 'value'")


class HatchConfigBody(BaseModel):
    initial_raise: Tuple[int, int] = Field(description="(min, max) reserve raised during hatch")
    initial_price: int
    initial_allocation: int
    reserve_percentage: int
    allowlist: Optional[List[str]] = Field(None, description="Addresses allowed to buy during hatch")


class InstantiateBody(BaseModel):
    sender: str
    supply: SupplyTokenBody
    reserve: ReserveTokenBody
    curve_type: CurveTypeBody
    phase_config: HatchConfigBody
    funds: List[CoinBody] = Field(default_factory=list)


class BuyBody(BaseModel):
    sender: str
    funds: List[CoinBody] = Field(default_factory=list, description="Attached reserve payment")


class BurnBody(BaseModel):
    sender: str
    amount: int = Field(description="Supply tokens to burn")
    funds: List[CoinBody] = Field(default_factory=list, description="Attached supply tokens")


execute_tag = Tag(
    name="Commons Execute",
    description="Instantiate the curve, buy supply with reserve, or burn supply for reserve",
)

query_tag = Tag(
    name="Commons Query",
    description="Read the curve state and sale phase",
)


def to_jsonable(value):
    """Converts models, effects and responses into JSON-ready structures."""
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {f.name: to_jsonable(getattr(value, f.name)) for f in dataclasses.fields(value)}
    if isinstance(value, Enum):
        return str(value)
    if isinstance(value, Decimal):
        return format(value.normalize(FIXED_POINT_CONTEXT), "f")
    if isinstance(value, (set, frozenset)):
        return sorted(to_jsonable(v) for v in value)
    if isinstance(value, (list, tuple)):
        return [to_jsonable(v) for v in value]
    if isinstance(value, dict):
        return {k: to_jsonable(v) for k, v in value.items()}
    return value


def response_to_json(response):
    return {
        "messages": [{"type": type(m).__name__, **to_jsonable(m)} for m in response.messages],
        "attributes": [{"key": k, "value": v} for k, v in response.attributes],
    }


def _coins(bodies: List[CoinBody]) -> List[Coin]:
    return [Coin(denom=c.denom, amount=c.amount) for c in bodies]


def instantiate_request_from_body(body: InstantiateBody) -> InstantiateRequest:
    metadata = TokenMetadata(**body.supply.metadata.model_dump())
    hatch = body.phase_config
    return InstantiateRequest(
        supply=SupplyToken(subdenom=body.supply.subdenom, decimals=body.supply.decimals, metadata=metadata),
        reserve=ReserveToken(denom=body.reserve.denom, decimals=body.reserve.decimals),
        curve_params=CurveParams(
            curve_type=CurveType.from_str(body.curve_type.curve_type.value),
            value=body.curve_type.value,
            scale=body.curve_type.scale,
        ),
        phase_config=CommonsPhaseConfig(
            hatch=HatchConfig(
                initial_raise=hatch.initial_raise,
                initial_price=hatch.initial_price,
                initial_allocation=hatch.initial_allocation,
                reserve_percentage=hatch.reserve_percentage,
                allowlist=frozenset(hatch.allowlist) if hatch.allowlist is not None else None,
            )
        ),
    )


def create_app(contract: Optional[AbcContract] = None, contract_address: str = DEFAULT_CONTRACT_ADDRESS) -> OpenAPI:
    """
    Builds the HTTP dispatch boundary around a single contract instance.
    Without a contract, a fresh one backed by MemoryStorage is created.

    The server may handle requests on several threads; every contract call
    holds one lock so each call commits before the next one loads state.
    """
    app = OpenAPI(__name__, info=info)
    contract = contract or AbcContract(MemoryStorage(), contract_address)
    lock = threading.Lock()

    @app.errorhandler(AbcError)
    def handle_abc_error(e: AbcError):
        logger.warning("Request failed with %s: %s", e.kind, e.reason)
        return jsonify({"error": e.kind, "reason": e.reason}), 400

    @app.post("/contract/instantiate", summary="Instantiate", tags=[execute_tag])
    def instantiate(body: InstantiateBody):
        """
        Creates the supply token and the curve, starting in the hatch phase
        """
        request = instantiate_request_from_body(body)
        with lock:
            response = contract.instantiate(body.sender, request, _coins(body.funds))
        return jsonify(response_to_json(response))

    @app.post("/contract/buy", summary="Buy", tags=[execute_tag])
    def buy(body: BuyBody):
        """
        Buys as much supply as the attached reserve payment allows
        """
        with lock:
            response = contract.buy(body.sender, _coins(body.funds))
        return jsonify(response_to_json(response))

    @app.post("/contract/burn", summary="Burn", tags=[execute_tag])
    def burn(body: BurnBody):
        """
        Burns the attached supply tokens and releases the reserve backing them
        """
        with lock:
            response = contract.burn(body.sender, body.amount, _coins(body.funds))
        return jsonify(response_to_json(response))

    @app.get("/contract/curve_info", summary="Curve Info", tags=[query_tag])
    def curve_info():
        """
        Returns the reserve and supply quantities, as well as the spot price to buy 1 token
        """
        with lock:
            curve_info = contract.query_curve_info()
        return jsonify(to_jsonable(curve_info))

    @app.get("/contract/phase", summary="Phase", tags=[query_tag])
    def phase():
        with lock:
            current = contract.query_phase()
        return jsonify(to_jsonable(current))

    @app.get("/contract/phase_config", summary="Phase Config", tags=[query_tag])
    def phase_config():
        with lock:
            config = contract.query_phase_config()
        return jsonify(to_jsonable(config))

    return app
