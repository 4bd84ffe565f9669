"""Matrix records for SUT/IOT based models.

A record is a named bag of matrices, vectors and flags with a fixed schema
per flavor. Fields are independent of each other: assigning one field never
recalculates another, even when one was originally derived from the other.
"""

from __future__ import annotations

from typing import Any, ClassVar

import numpy as np
from pydantic import BaseModel, Field, field_validator

from rcot.core.fields import shape_of
from rcot.exceptions import UnknownFieldError

Matrix = np.ndarray | None


class MatrixBag(BaseModel):
    """Base class for named matrix records.

    Subclasses declare their schema as pydantic fields. Array-like values
    are stored as float numpy arrays; ``None`` marks a declared field that
    currently holds no value.
    """

    is_active: bool | None = Field(default=None, description="Activity flag")

    FLAVOR: ClassVar[str] = ""
    REQUIRED_FIELDS: ClassVar[tuple[str, ...]] = ()

    model_config = {
        "arbitrary_types_allowed": True,
        "validate_assignment": True,
        "extra": "forbid",
    }

    @field_validator("*", mode="before")
    @classmethod
    def ensure_numpy_array(cls, v: Any) -> Any:  # noqa: N805
        """Convert array-like input to a float numpy array."""
        if isinstance(v, (list, tuple)):
            return np.array(v, dtype=float)
        if isinstance(v, np.ndarray):
            return v.astype(float)
        return v

    @classmethod
    def field_names(cls) -> tuple[str, ...]:
        """Return the declared field names in declaration order."""
        return tuple(cls.model_fields)

    @classmethod
    def required_fields(cls) -> tuple[str, ...]:
        """Return the fields a dataset of this flavor must hold."""
        return cls.REQUIRED_FIELDS

    def has_field(self, name: str) -> bool:
        """Check whether a name is part of the schema."""
        return name in type(self).model_fields

    def get_field(self, name: str) -> Any:
        """Get a field value by name.

        Raises:
            UnknownFieldError: If the name is not declared on this record
        """
        if not self.has_field(name):
            raise UnknownFieldError(name, self.field_names())
        return getattr(self, name)

    def present_fields(self) -> list[str]:
        """Return the declared fields that currently hold a value."""
        return [name for name in self.field_names() if getattr(self, name) is not None]

    def shapes(self) -> dict[str, tuple[int, ...]]:
        """Return the shapes of all present array fields."""
        return {
            name: shape_of(getattr(self, name))
            for name in self.present_fields()
            if isinstance(getattr(self, name), np.ndarray)
        }

    def summary(self) -> dict[str, Any]:
        """Return a summary of the record contents."""
        present = self.present_fields()
        return {
            "flavor": self.FLAVOR,
            "type": type(self).__name__,
            "present": present,
            "absent": [n for n in self.field_names() if n not in present],
            "shapes": self.shapes(),
            "is_active": self.is_active,
        }

    def __repr__(self) -> str:
        shapes = ", ".join(f"{k}{v}" for k, v in self.shapes().items())
        return f"{type(self).__name__}({shapes})"


class SUTRecord(MatrixBag):
    """Supply-and-use table data.

    Attributes:
        V: Make (supply) matrix, industries x commodities
        U: Use matrix, commodities x industries
        Y: Final demand, commodities x categories
        F: Factor inputs, factors x industries
        S: Factor endowments / satellite totals
        q: Commodity output
        g: Industry output
        e: Exogenous final demand vector
        E: Environmental extensions, stressors x industries
    """

    V: Matrix = Field(default=None, description="Make matrix")
    U: Matrix = Field(default=None, description="Use matrix")
    Y: Matrix = Field(default=None, description="Final demand")
    F: Matrix = Field(default=None, description="Factor inputs")
    S: Matrix = Field(default=None, description="Factor endowments")
    q: Matrix = Field(default=None, description="Commodity output")
    g: Matrix = Field(default=None, description="Industry output")
    e: Matrix = Field(default=None, description="Final demand vector")
    E: Matrix = Field(default=None, description="Environmental extensions")

    FLAVOR: ClassVar[str] = "su"


class ConstructRecord(MatrixBag):
    """Input-output table data derived from a SUT by a construct.

    Attributes:
        A: Technology (direct requirements) matrix
        Z: Intermediate transactions
        x: Total output vector
        y: Final demand vector
        F: Factor inputs
        S: Factor intensities
        L: Leontief inverse
        B: Factor endowments
        E: Environmental extensions
    """

    A: Matrix = Field(default=None, description="Technology matrix")
    Z: Matrix = Field(default=None, description="Intermediate transactions")
    x: Matrix = Field(default=None, description="Total output")
    y: Matrix = Field(default=None, description="Final demand")
    F: Matrix = Field(default=None, description="Factor inputs")
    S: Matrix = Field(default=None, description="Factor intensities")
    L: Matrix = Field(default=None, description="Leontief inverse")
    B: Matrix = Field(default=None, description="Factor endowments")
    E: Matrix = Field(default=None, description="Environmental extensions")

    FLAVOR: ClassVar[str] = "io"


class SUDataset(SUTRecord):
    """SU-flavored model dataset, copied from a SUT record.

    Augmentation with alternative technologies (extra rows in ``V`` and
    matching columns elsewhere) is done by the caller after construction.
    """


class IODataset(ConstructRecord):
    """IO-flavored model dataset with optimisation scaffold fields.

    Attributes:
        I_mod: Identity matrix sized like ``A``
        xhat: Diagonal matrix of the output vector ``x``
    """

    I_mod: Matrix = Field(default=None, description="Identity sized like A")
    xhat: Matrix = Field(default=None, description="Diagonalised output")

    REQUIRED_FIELDS: ClassVar[tuple[str, ...]] = ("A", "x")
