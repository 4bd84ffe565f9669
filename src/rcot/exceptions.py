"""Exception hierarchy for the rcot toolkit."""

from __future__ import annotations


class RCOTError(Exception):
    """Base class for all rcot errors."""

    pass


class UnknownFieldError(RCOTError, KeyError):
    """Raised when a field name is not declared on a record."""

    def __init__(self, name: str, declared: list[str] | tuple[str, ...] = ()) -> None:
        self.name = name
        self.declared = tuple(declared)
        msg = f"Unknown field '{name}'"
        if self.declared:
            msg += f" (declared fields: {', '.join(self.declared)})"
        super().__init__(msg)

    def __str__(self) -> str:
        # KeyError quotes its argument otherwise
        return str(self.args[0])


class InvalidQueryError(RCOTError, ValueError):
    """Raised when a compatibility query is structurally invalid."""

    pass


class InvalidConstructError(RCOTError, ValueError):
    """Raised when a source record cannot be turned into a model dataset."""

    pass


class ModelNotSolvedError(RCOTError, RuntimeError):
    """Raised when a report is requested on a model without a solution."""

    pass


class UnsupportedKindError(RCOTError, ValueError):
    """Raised when a sensitivity table kind is not recognised."""

    pass


class IndexOutOfRangeError(RCOTError, IndexError):
    """Raised when a split index exceeds the available constraints."""

    pass
