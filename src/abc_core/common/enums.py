from enum import Enum


class CurveType(Enum):
    CONSTANT = "CONSTANT"
    LINEAR = "LINEAR"
    SQUARE_ROOT = "SQUARE_ROOT"

    @classmethod
    def from_str(cls, curve_str: str) -> "CurveType":
        """
        Convert a string to a CurveType enum.
        Accepts the enum name in any case, plus the "squareroot" spelling.
        :param curve_str: str
        :return: CurveType or NotImplementedError
        """
        normalized = curve_str.upper()
        if normalized == CurveType.CONSTANT.name:
            return CurveType.CONSTANT
        elif normalized == CurveType.LINEAR.name:
            return CurveType.LINEAR
        elif normalized in (CurveType.SQUARE_ROOT.name, "SQUAREROOT"):
            return CurveType.SQUARE_ROOT
        else:
            raise NotImplementedError(f"No curve type enum for {curve_str}")

    def __hash__(self):
        return hash(self.value)

    def __str__(self):
        return self.name

    def __repr__(self):
        return self.__str__()


class PhaseType(Enum):
    HATCH = "HATCH"
    OPEN = "OPEN"
    CLOSED = "CLOSED"

    @classmethod
    def from_str(cls, phase_str: str) -> "PhaseType":
        if phase_str.upper() == PhaseType.HATCH.name:
            return PhaseType.HATCH
        elif phase_str.upper() == PhaseType.OPEN.name:
            return PhaseType.OPEN
        elif phase_str.upper() == PhaseType.CLOSED.name:
            return PhaseType.CLOSED
        else:
            raise NotImplementedError(f"No phase enum for {phase_str}")

    def __str__(self):
        return self.name

    def __repr__(self):
        return self.__str__()
