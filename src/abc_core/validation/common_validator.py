from typing import Any, Dict, List

from abc_core.common.errors import ConfigError
from abc_core.common.model import DecimalPlaces, InstantiateRequest
from abc_core.curves.normalizer import DecimalNormalizer


class CommonValidator:
    """
    Instantiation validator for the commons bonding curve.
    1) Token checks (subdenom, reserve denom, decimals)
    2) Curve and hatch checks that only make sense together (raise ceiling vs curve, allowlist)

    Each step returns a dict with:
      {
        "errors": [str...],
        "warnings": [str...],
        "info": {...}
      }
    """

    @staticmethod
    def validate_tokens(request: "InstantiateRequest") -> Dict[str, Any]:
        errors: List[str] = []
        warnings: List[str] = []
        info: Dict[str, Any] = {}

        subdenom = request.supply.subdenom
        if not subdenom:
            errors.append("Token subdenom must not be empty.")
        elif "/" in subdenom:
            errors.append(f"Token subdenom '{subdenom}' must not contain '/'.")

        if not request.reserve.denom:
            errors.append("Reserve denom must not be empty.")

        try:
            DecimalPlaces(supply=request.supply.decimals, reserve=request.reserve.decimals)
        except ConfigError as e:
            errors.append(str(e))

        if request.supply.metadata.symbol is None:
            warnings.append("Supply token metadata has no symbol.")

        info["token_summary"] = {
            "subdenom": subdenom,
            "supply_decimals": str(request.supply.decimals),
            "reserve_denom": request.reserve.denom,
            "reserve_decimals": str(request.reserve.decimals),
        }

        return {
            "errors": errors,
            "warnings": warnings,
            "info": info
        }

    @staticmethod
    def validate_phase_config(request: "InstantiateRequest") -> Dict[str, Any]:
        """
        The HatchConfig invariants (raise bounds, reserve percentage) are enforced
        when the config is built; here we flag settings that are legal but suspicious.
        """
        errors: List[str] = []
        warnings: List[str] = []
        info: Dict[str, Any] = {}

        hatch = request.phase_config.hatch
        if hatch.allowlist is not None and len(hatch.allowlist) == 0:
            warnings.append("Hatch allowlist is empty; nobody can buy during the hatch phase.")
        if hatch.initial_raise_max == 0:
            warnings.append("Initial raise maximum is 0; the first buy opens the sale.")

        info["param_summary"] = {
            "curve_type": str(request.curve_params.curve_type),
            "curve_value": str(request.curve_params.decimal_value),
            "initial_raise": [str(v) for v in hatch.initial_raise],
            "initial_price": str(hatch.initial_price),
            "initial_allocation": str(hatch.initial_allocation),
            "reserve_percentage": str(hatch.reserve_percentage),
            "allowlist_size": len(hatch.allowlist) if hatch.allowlist is not None else None,
        }

        # whole reserve tokens, only when the decimals themselves are valid
        try:
            normalizer = DecimalNormalizer.from_decimals(request.supply.decimals, request.reserve.decimals)
        except ConfigError:
            pass
        else:
            info["param_summary"]["initial_raise_tokens"] = [
                format(normalizer.from_reserve(v), "f") for v in hatch.initial_raise
            ]

        return {
            "errors": errors,
            "warnings": warnings,
            "info": info
        }

    @staticmethod
    def run_all_validations(request: "InstantiateRequest") -> Dict[str, Any]:
        """
        Aggregates:
          - token checks
          - phase config checks
        Returns a dict with keys: errors, warnings, info
        """
        results = {
            "errors": [],
            "warnings": [],
            "info": {}
        }

        for check in (CommonValidator.validate_tokens, CommonValidator.validate_phase_config):
            outcome = check(request)
            results["errors"].extend(outcome["errors"])
            results["warnings"].extend(outcome["warnings"])
            results["info"].update(outcome["info"])

        return results

    @staticmethod
    def assert_valid(request: "InstantiateRequest") -> Dict[str, Any]:
        """Runs every validation and raises ConfigError listing all errors, if any."""
        results = CommonValidator.run_all_validations(request)
        if results["errors"]:
            raise ConfigError(" ".join(results["errors"]))
        return results
