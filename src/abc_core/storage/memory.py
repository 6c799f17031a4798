import copy
from typing import Any, Dict

from abc_core.common.errors import StorageError


CURVE_STATE = "curve_state"
CURVE_TYPE = "curve_type"
PHASE_CONFIG = "phase_config"
PHASE = "phase"
SUPPLY_DENOM = "denom"


class MemoryStorage:
    """
    In-memory stand-in for the host key/value store.

    Values are copied on the way in and out, so callers never share a
    reference with what is stored.
    """

    def __init__(self):
        self._slots: Dict[str, Any] = {}

    def load(self, key: str) -> Any:
        if key not in self._slots:
            raise StorageError(f"Slot '{key}' is not set; is the contract instantiated?")
        return copy.deepcopy(self._slots[key])

    def may_load(self, key: str, default: Any = None) -> Any:
        if key not in self._slots:
            return default
        return copy.deepcopy(self._slots[key])

    def save(self, key: str, value: Any) -> None:
        self._slots[key] = copy.deepcopy(value)

    def save_all(self, values: Dict[str, Any]) -> None:
        """Saves several slots at once; either all are stored or none are."""
        staged = {key: copy.deepcopy(value) for key, value in values.items()}
        self._slots.update(staged)

    def __contains__(self, key: str) -> bool:
        return key in self._slots
