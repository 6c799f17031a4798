from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict, FrozenSet, List, Optional, Tuple, Union

from abc_core.common.enums import CurveType, PhaseType
from abc_core.common.errors import ConfigError
from abc_core.common.math import UINT128_MAX, atomics_to_decimal


MAX_DECIMAL_PLACES = 18
MAX_CURVE_SCALE = 18


@dataclass(frozen=True)
class DecimalPlaces:
    """Decimal precision of the supply and reserve tokens. Immutable once set."""
    supply: int
    reserve: int

    def __post_init__(self):
        for name, places in (("supply", self.supply), ("reserve", self.reserve)):
            if isinstance(places, bool) or not isinstance(places, int):
                raise ConfigError(f"{name} decimals must be an integer.")
            if places < 0 or places > MAX_DECIMAL_PLACES:
                raise ConfigError(
                    f"{name} decimals must be between 0 and {MAX_DECIMAL_PLACES}, got {places}."
                )


@dataclass(frozen=True)
class CurveParams:
    """
    One CurveType variant with its parameter, the decimal `value * 10**-scale`.
    For CONSTANT the parameter is the price, for LINEAR and SQUARE_ROOT the slope.
    """
    curve_type: CurveType
    value: int
    scale: int = 0

    def __post_init__(self):
        if not isinstance(self.curve_type, CurveType):
            raise ConfigError("Invalid curve type.")
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise ConfigError("Curve value must be an integer.")
        if self.value <= 0:
            raise ConfigError(f"{self.curve_type} curve value must be > 0.")
        if self.value > UINT128_MAX:
            raise ConfigError(f"{self.curve_type} curve value exceeds the Uint128 range.")
        if isinstance(self.scale, bool) or not isinstance(self.scale, int):
            raise ConfigError("Curve scale must be an integer.")
        if self.scale < 0 or self.scale > MAX_CURVE_SCALE:
            raise ConfigError(f"Curve scale must be between 0 and {MAX_CURVE_SCALE}.")

    @property
    def decimal_value(self) -> Decimal:
        return atomics_to_decimal(self.value, self.scale)


@dataclass(frozen=True)
class TokenMetadata:
    """Display metadata registered with the token factory for the supply token."""
    name: Optional[str] = None
    symbol: Optional[str] = None
    description: Optional[str] = None
    denom_units: List[Dict] = field(default_factory=list)
    base: Optional[str] = None
    display: Optional[str] = None


@dataclass(frozen=True)
class SupplyToken:
    subdenom: str
    decimals: int
    metadata: TokenMetadata = field(default_factory=TokenMetadata)


@dataclass(frozen=True)
class ReserveToken:
    denom: str
    decimals: int


@dataclass(frozen=True)
class Coin:
    denom: str
    amount: int


@dataclass(frozen=True)
class HatchConfig:
    """Configuration of the allowlist-gated hatch phase."""
    initial_raise: Tuple[int, int]
    initial_price: int
    initial_allocation: int
    reserve_percentage: int
    allowlist: Optional[FrozenSet[str]] = None

    def __post_init__(self):
        if len(self.initial_raise) != 2:
            raise ConfigError("Initial raise must be a (min, max) pair.")
        raise_min, raise_max = self.initial_raise
        if raise_min < 0 or raise_max < 0:
            raise ConfigError("Initial raise bounds must be non-negative.")
        if raise_min > raise_max:
            raise ConfigError("Initial raise minimum value must be less than maximum value.")
        if self.initial_price < 0:
            raise ConfigError("Initial price must be non-negative.")
        if self.initial_allocation < 0:
            raise ConfigError("Initial allocation must be non-negative.")
        if self.reserve_percentage < 0 or self.reserve_percentage > 100:
            raise ConfigError("Reserve percentage must be between 0 and 100.")
        if self.allowlist is not None and not isinstance(self.allowlist, frozenset):
            object.__setattr__(self, "allowlist", frozenset(self.allowlist))
        object.__setattr__(self, "initial_raise", (raise_min, raise_max))

    @property
    def initial_raise_min(self) -> int:
        return self.initial_raise[0]

    @property
    def initial_raise_max(self) -> int:
        return self.initial_raise[1]


@dataclass(frozen=True)
class CommonsPhaseConfig:
    """Immutable per-phase configuration."""
    hatch: HatchConfig


@dataclass(frozen=True)
class CommonsPhase:
    """The sale phase. Only HATCH carries a payload: the addresses that bought during it."""
    phase: PhaseType = PhaseType.HATCH
    hatchers: FrozenSet[str] = frozenset()

    def __post_init__(self):
        if self.phase != PhaseType.HATCH and self.hatchers:
            raise ConfigError(f"Phase {self.phase} does not track hatchers.")
        if not isinstance(self.hatchers, frozenset):
            object.__setattr__(self, "hatchers", frozenset(self.hatchers))

    @classmethod
    def hatch(cls, hatchers=frozenset()) -> "CommonsPhase":
        return cls(PhaseType.HATCH, frozenset(hatchers))

    @classmethod
    def open(cls) -> "CommonsPhase":
        return cls(PhaseType.OPEN)

    @classmethod
    def closed(cls) -> "CommonsPhase":
        return cls(PhaseType.CLOSED)


@dataclass(frozen=True)
class CurveState:
    """Ledger of the curve: reserve held and supply issued, both in raw units."""
    reserve_denom: str
    decimals: DecimalPlaces
    reserve: int = 0
    supply: int = 0


@dataclass(frozen=True)
class InstantiateRequest:
    supply: SupplyToken
    reserve: ReserveToken
    curve_params: CurveParams
    phase_config: CommonsPhaseConfig


@dataclass(frozen=True)
class CurveInfo:
    """Answer to the CurveInfo query."""
    reserve: int
    supply: int
    spot_price: Decimal
    reserve_denom: str


@dataclass(frozen=True)
class CreateDenom:
    subdenom: str
    metadata: TokenMetadata


@dataclass(frozen=True)
class MintTokens:
    denom: str
    amount: int
    mint_to_address: str


@dataclass(frozen=True)
class BurnTokens:
    denom: str
    amount: int
    burn_from_address: str


@dataclass(frozen=True)
class BankSend:
    to_address: str
    amount: List[Coin]


Effect = Union[CreateDenom, MintTokens, BurnTokens, BankSend]


@dataclass
class Response:
    """Ordered side-effect intents plus descriptive attributes, handed back to the dispatcher."""
    messages: List[Effect] = field(default_factory=list)
    attributes: List[Tuple[str, str]] = field(default_factory=list)

    def add_message(self, message: Effect) -> "Response":
        self.messages.append(message)
        return self

    def add_attribute(self, key: str, value) -> "Response":
        self.attributes.append((key, str(value)))
        return self


@dataclass(frozen=True)
class BuyOutcome:
    """Result of a buy: the state to commit and the response to emit."""
    curve_state: CurveState
    phase: CommonsPhase
    minted: int
    phase_changed: bool
    response: Response


@dataclass(frozen=True)
class SellOutcome:
    """Result of a burn: the state to commit, the reserve released and the response to emit."""
    curve_state: CurveState
    released: int
    response: Response
