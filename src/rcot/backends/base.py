"""Backend base classes for rcot solved-model reports.

This module defines the read interface a solved LP model must offer to the
report extractor, the records it returns, and the container for externally
computed sensitivity ranges.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

import pandas as pd
from pydantic import BaseModel, Field

Range = tuple[float, float]

SENSITIVITY_COLUMNS = ("kind", "name", "allowed_decrease", "allowed_increase")


class ConstraintKind(str, Enum):
    """Algebraic role of a constraint in a solved model."""

    NONNEGATIVE = "nonnegative"
    EQUAL_TO = "equal_to"
    LESS_THAN = "less_than"
    GREATER_THAN = "greater_than"

    @property
    def is_structural(self) -> bool:
        """Affine constraints, as opposed to bounds on single variables."""
        return self is not ConstraintKind.NONNEGATIVE

    @property
    def is_inequality(self) -> bool:
        return self in (ConstraintKind.LESS_THAN, ConstraintKind.GREATER_THAN)


@dataclass(frozen=True)
class ConstraintRecord:
    """Solved state of one constraint."""

    name: str
    kind: ConstraintKind
    value: float
    rhs: float
    shadow_price: float

    @property
    def slack(self) -> float:
        return self.rhs - self.value


@dataclass(frozen=True)
class VariableRecord:
    """Solved state of one decision variable. Missing bounds are None."""

    name: str
    value: float
    lower_bound: float | None
    upper_bound: float | None
    reduced_cost: float
    obj_coefficient: float


class SensitivityReport(BaseModel):
    """Allowed decrease/increase ranges per constraint and per variable.

    The ranges are computed outside rcot (by the solver or a dedicated
    sensitivity routine) and keyed by constraint or variable name.

    Attributes:
        constraints: Constraint name to (allowed_decrease, allowed_increase)
        variables: Variable name to (allowed_decrease, allowed_increase)
    """

    constraints: dict[str, Range] = Field(
        default_factory=dict, description="Right-hand side ranges"
    )
    variables: dict[str, Range] = Field(
        default_factory=dict, description="Objective coefficient ranges"
    )

    def constraint_range(self, name: str) -> Range:
        """Get the range of a constraint's right-hand side."""
        if name not in self.constraints:
            msg = f"No sensitivity range for constraint '{name}'"
            raise KeyError(msg)
        return self.constraints[name]

    def variable_range(self, name: str) -> Range:
        """Get the range of a variable's objective coefficient."""
        if name not in self.variables:
            msg = f"No sensitivity range for variable '{name}'"
            raise KeyError(msg)
        return self.variables[name]

    @classmethod
    def from_dataframe(cls, df: pd.DataFrame) -> SensitivityReport:
        """Build a report from a frame with one row per constraint/variable.

        Expected columns: ``kind`` ("constraint" or "variable"), ``name``,
        ``allowed_decrease`` and ``allowed_increase``.
        """
        missing = [col for col in SENSITIVITY_COLUMNS if col not in df.columns]
        if missing:
            msg = f"Sensitivity data is missing column(s): {', '.join(missing)}"
            raise ValueError(msg)

        constraints: dict[str, Range] = {}
        variables: dict[str, Range] = {}
        for row in df.itertuples(index=False):
            kind = str(row.kind).strip().lower()
            entry = (float(row.allowed_decrease), float(row.allowed_increase))
            if kind == "constraint":
                constraints[str(row.name)] = entry
            elif kind == "variable":
                variables[str(row.name)] = entry
            else:
                msg = f"Unsupported sensitivity kind '{row.kind}' for '{row.name}'"
                raise ValueError(msg)
        return cls(constraints=constraints, variables=variables)

    @classmethod
    def from_file(cls, filepath: str | Path, sheet_name: str | int = 0) -> SensitivityReport:
        """Load a report from a CSV or Excel file.

        Args:
            filepath: Path to a ``.csv``, ``.xlsx`` or ``.xls`` file
            sheet_name: Sheet to read for Excel input

        Returns:
            SensitivityReport
        """
        filepath = Path(filepath)
        if not filepath.exists():
            msg = f"File not found: {filepath}"
            raise FileNotFoundError(msg)

        suffix = filepath.suffix.lower()
        if suffix == ".csv":
            df = pd.read_csv(filepath)
        elif suffix in {".xlsx", ".xls"}:
            df = pd.read_excel(filepath, sheet_name=sheet_name)
        else:
            msg = f"Unsupported sensitivity file format: {filepath.suffix}"
            raise ValueError(msg)
        return cls.from_dataframe(df)

    def to_dataframe(self) -> pd.DataFrame:
        """Convert the report to its tabular file layout."""
        rows = [
            {"kind": "constraint", "name": name, "allowed_decrease": dec, "allowed_increase": inc}
            for name, (dec, inc) in self.constraints.items()
        ]
        rows += [
            {"kind": "variable", "name": name, "allowed_decrease": dec, "allowed_increase": inc}
            for name, (dec, inc) in self.variables.items()
        ]
        return pd.DataFrame(rows, columns=list(SENSITIVITY_COLUMNS))


class SolvedModelView(ABC):
    """Read-only view over a solved optimisation model.

    Backends adapt a solver's result object to this interface so that the
    report extractor never touches solver-specific APIs.
    """

    @abstractmethod
    def termination_status(self) -> str:
        """Why the solver stopped (e.g. 'optimal', 'infeasible')."""
        ...

    @abstractmethod
    def primal_status(self) -> str:
        """Status of the primal solution."""
        ...

    @abstractmethod
    def dual_status(self) -> str:
        """Status of the dual solution."""
        ...

    @abstractmethod
    def objective_value(self) -> float:
        """Objective value of the recorded solution."""
        ...

    @abstractmethod
    def has_solution(self) -> bool:
        """Whether the model holds a recorded solution."""
        ...

    @abstractmethod
    def constraints(self, kind: ConstraintKind) -> list[ConstraintRecord]:
        """Constraints of one algebraic kind, in model order."""
        ...

    @abstractmethod
    def variables(self) -> list[VariableRecord]:
        """All decision variables, in model order."""
        ...

    @abstractmethod
    def constraint_range(self, name: str) -> Range:
        """(allowed_decrease, allowed_increase) of a constraint's rhs."""
        ...

    @abstractmethod
    def variable_range(self, name: str) -> Range:
        """(allowed_decrease, allowed_increase) of a variable's cost."""
        ...

    def __repr__(self) -> str:
        """String representation."""
        return f"{self.__class__.__name__}(status={self.termination_status()})"
