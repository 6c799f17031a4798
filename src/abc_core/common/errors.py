class AbcError(Exception):
    """Base class for every error raised by the bonding curve core."""

    kind = "AbcError"

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


class ConfigError(AbcError, ValueError):
    """Invalid instantiation parameters."""

    kind = "ConfigError"


class PaymentError(AbcError):
    """Attached funds do not satisfy the operation."""

    kind = "PaymentError"


class NoFundsError(PaymentError):
    def __init__(self):
        super().__init__("No funds sent")


class MissingDenomError(PaymentError):
    def __init__(self, denom: str):
        super().__init__(f"Must send reserve token '{denom}'")
        self.denom = denom


class MultipleDenomsError(PaymentError):
    def __init__(self):
        super().__init__("Sent more than one denomination")


class NonPayableError(PaymentError):
    def __init__(self):
        super().__init__("This message does not accept funds")


class BurnAmountMismatchError(PaymentError):
    def __init__(self, amount: int, paid: int):
        super().__init__(f"Burn amount {amount} does not match attached payment {paid}")
        self.amount = amount
        self.paid = paid


class AllowlistError(AbcError):
    """Buyer is not permitted to buy during the hatch phase."""

    kind = "AllowlistError"

    def __init__(self, sender: str):
        super().__init__(f"Sender '{sender}' is not in the hatch allowlist")
        self.sender = sender


class PhaseError(AbcError):
    """Operation is not available in the current phase."""

    kind = "PhaseError"


class MathOverflowError(AbcError, ArithmeticError):
    """Checked arithmetic left the Uint128 range, or the curve became inconsistent."""

    kind = "OverflowError"


class CurveDomainError(MathOverflowError):
    """Curve input outside the representable range."""

    kind = "CurveDomainError"


class StorageError(AbcError):
    """A persisted slot is missing."""

    kind = "StorageError"
