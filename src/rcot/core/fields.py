"""Field references for matrix records.

A field is referenced by its name, optionally followed by the transpose
marker (``"V'"`` reads the transpose of ``V``). References are resolved to
effective shapes without touching the stored arrays.
"""

from __future__ import annotations

from typing import Any

import numpy as np
from pydantic import BaseModel, Field, ValidationError

from rcot.exceptions import InvalidQueryError

TRANSPOSE_MARKER = "'"

# Shape reported for a declared field that holds no value
ABSENT_SHAPE: tuple[int, ...] = (0,)


class FieldRef(BaseModel):
    """Reference to a record field, in plain or transposed form.

    Attributes:
        name: Field name without the transpose marker
        transposed: Whether the reference reads the field's transpose

    Example:
        >>> FieldRef.parse("V'")
        FieldRef(V')
    """

    name: str = Field(..., min_length=1, description="Field name")
    transposed: bool = Field(default=False, description="Transposed reference")

    model_config = {"frozen": True}

    @classmethod
    def parse(cls, ref: str | FieldRef | tuple[str, bool]) -> FieldRef:
        """Build a reference from a marker string, a tuple or a FieldRef.

        All transpose markers are stripped from a string reference; any
        marker makes the reference transposed.

        Raises:
            TypeError: If the reference is not a string, tuple or FieldRef
            InvalidQueryError: If the reference has no field name or the
                tuple form is not ``(name, transposed)``
        """
        if isinstance(ref, FieldRef):
            return ref
        if isinstance(ref, tuple):
            if len(ref) != 2:
                msg = f"Tuple field reference {ref!r} must be (name, transposed)"
                raise InvalidQueryError(msg)
            name, transposed = ref
        elif isinstance(ref, str):
            name = ref.replace(TRANSPOSE_MARKER, "")
            transposed = TRANSPOSE_MARKER in ref
        else:
            msg = f"Field reference must be a string, got {type(ref).__name__}"
            raise TypeError(msg)
        try:
            return cls(name=name, transposed=bool(transposed))
        except ValidationError as e:
            msg = f"Invalid field reference {ref!r}"
            raise InvalidQueryError(msg) from e

    @property
    def label(self) -> str:
        """Reference in marker notation."""
        return self.name + (TRANSPOSE_MARKER if self.transposed else "")

    def __repr__(self) -> str:
        return f"FieldRef({self.label})"


def shape_of(value: Any, transposed: bool = False) -> tuple[int, ...]:
    """Effective shape of a stored field value.

    Args:
        value: Stored value (ndarray, scalar or None)
        transposed: Return the shape of the transpose

    Returns:
        ``ABSENT_SHAPE`` for ``None``, transposed or not, so an absent field
        matches its own transpose and any other absent field; the array
        shape otherwise. A transposed 1-D vector of length n is a ``(1, n)``
        row vector, a transposed matrix has its shape reversed.
    """
    if value is None:
        return ABSENT_SHAPE
    shape = tuple(int(n) for n in np.shape(value))
    if not transposed:
        return shape
    if len(shape) == 1:
        return (1, shape[0])
    return tuple(reversed(shape))
