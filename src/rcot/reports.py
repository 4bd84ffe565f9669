"""Reports over solved primal and dual RCOT models.

All functions read from a :class:`~rcot.backends.base.SolvedModelView` and
never modify it. Sensitivity tables are returned as pandas DataFrames.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any

import pandas as pd
from pydantic import BaseModel, Field

from rcot.backends.base import ConstraintKind, SensitivityReport, SolvedModelView
from rcot.exceptions import (
    IndexOutOfRangeError,
    ModelNotSolvedError,
    UnsupportedKindError,
)

logger = logging.getLogger(__name__)

CONSTRAINT_COLUMNS = [
    "name",
    "value",
    "rhs",
    "slack",
    "shadow_price",
    "allowed_decrease",
    "allowed_increase",
]

VARIABLE_COLUMNS = [
    "name",
    "lower_bound",
    "value",
    "upper_bound",
    "reduced_cost",
    "obj_coefficient",
    "allowed_decrease",
    "allowed_increase",
]


class SolutionSummary(BaseModel):
    """Solver-reported status of a model.

    Attributes:
        status: Termination status
        primal_status: Primal solution status
        dual_status: Dual solution status
        objective_value: Objective value
    """

    status: str = Field(..., description="Termination status")
    primal_status: str = Field(..., description="Primal solution status")
    dual_status: str = Field(..., description="Dual solution status")
    objective_value: float = Field(..., description="Objective value")

    model_config = {"frozen": True}


@dataclass
class DualLHSValues:
    """Left-hand side values of a solved dual model."""

    prices: list[float]
    rents: list[float]
    profit_lhs: list[float]

    def to_dict(self) -> dict[str, Any]:
        return {
            "prices": list(self.prices),
            "rents": list(self.rents),
            "profit_lhs": list(self.profit_lhs),
        }


@dataclass
class PrimalLHSValues:
    """Left-hand side values of a solved primal model.

    Exactly one of ``demand_ineq`` (market balance with disposal) and
    ``demand_eq`` (market balance without surplus) is normally set; the
    other is None.
    """

    variables: list[float]
    factor: list[float]
    demand_ineq: list[float] | None = None
    demand_eq: list[float] | None = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"variables": list(self.variables)}
        if self.demand_ineq is not None:
            result["demand_ineq"] = list(self.demand_ineq)
        if self.demand_eq is not None:
            result["demand_eq"] = list(self.demand_eq)
        result["factor"] = list(self.factor)
        return result


def _require_solution(model: SolvedModelView) -> None:
    if not model.has_solution():
        msg = (
            f"Model has no recorded solution "
            f"(termination status: {model.termination_status()})"
        )
        raise ModelNotSolvedError(msg)


def _values(model: SolvedModelView, kind: ConstraintKind) -> list[float]:
    return [con.value for con in model.constraints(kind)]


def summary(model: SolvedModelView) -> SolutionSummary:
    """Return the four solver-reported status fields of a model.

    Raises:
        ModelNotSolvedError: If the model has no recorded solution
    """
    _require_solution(model)
    return SolutionSummary(
        status=model.termination_status(),
        primal_status=model.primal_status(),
        dual_status=model.dual_status(),
        objective_value=model.objective_value(),
    )


def dual_lhs_values(dual_model: SolvedModelView, n_prices: int) -> DualLHSValues:
    """Return prices, scarcity rents and no-profit LHS values of a dual.

    The variable lower-bound constraints of the dual are ordered prices
    first, then rents.

    Args:
        dual_model: Solved dual model
        n_prices: Number of price variables (length of the price vector)

    Returns:
        DualLHSValues

    Raises:
        ModelNotSolvedError: If the model has no recorded solution
        IndexOutOfRangeError: If ``n_prices`` exceeds the number of
            lower-bound constraints
    """
    _require_solution(dual_model)
    bounds = _values(dual_model, ConstraintKind.NONNEGATIVE)
    if not 0 <= n_prices <= len(bounds):
        msg = (
            f"Price count {n_prices} is outside the {len(bounds)} "
            f"non-negativity constraints of the dual model"
        )
        raise IndexOutOfRangeError(msg)

    return DualLHSValues(
        prices=bounds[:n_prices],
        rents=bounds[n_prices:],
        profit_lhs=_values(dual_model, ConstraintKind.LESS_THAN),
    )


def primal_lhs_values(primal_model: SolvedModelView) -> PrimalLHSValues:
    """Return variable, market balance and factor use LHS values of a primal.

    Raises:
        ModelNotSolvedError: If the model has no recorded solution
    """
    _require_solution(primal_model)
    demand_ineq = _values(primal_model, ConstraintKind.GREATER_THAN)
    demand_eq = _values(primal_model, ConstraintKind.EQUAL_TO)
    return PrimalLHSValues(
        variables=_values(primal_model, ConstraintKind.NONNEGATIVE),
        factor=_values(primal_model, ConstraintKind.LESS_THAN),
        demand_ineq=demand_ineq or None,
        demand_eq=demand_eq or None,
    )


def sensitivity_table(
    model: SolvedModelView,
    kind: str,
    *,
    report: SensitivityReport | None = None,
) -> pd.DataFrame:
    """Build the sensitivity table of a solved model.

    Args:
        model: Solved model
        kind: "constraint" for the inequality constraints, "variable" for
            all decision variables
        report: Sensitivity ranges; read from the model when None

    Returns:
        DataFrame with one row per constraint or variable

    Raises:
        ModelNotSolvedError: If the model has no recorded solution
        UnsupportedKindError: If ``kind`` is not recognised

    Example:
        >>> sensitivity_table(primal, "constraint")
    """
    if kind not in ("constraint", "variable"):
        msg = f"Unsupported sensitivity kind '{kind}'. Allowed: ['constraint', 'variable']"
        raise UnsupportedKindError(msg)
    _require_solution(model)

    if kind == "constraint":
        ranges = report.constraint_range if report is not None else model.constraint_range
        rows = []
        for con_kind in (ConstraintKind.LESS_THAN, ConstraintKind.GREATER_THAN):
            for con in model.constraints(con_kind):
                decrease, increase = ranges(con.name)
                rows.append(
                    {
                        "name": con.name,
                        "value": con.value,
                        "rhs": con.rhs,
                        "slack": con.slack,
                        "shadow_price": con.shadow_price,
                        "allowed_decrease": decrease,
                        "allowed_increase": increase,
                    }
                )
        return pd.DataFrame(rows, columns=CONSTRAINT_COLUMNS)

    ranges = report.variable_range if report is not None else model.variable_range
    rows = []
    for var in model.variables():
        decrease, increase = ranges(var.name)
        rows.append(
            {
                "name": var.name,
                "lower_bound": -math.inf if var.lower_bound is None else var.lower_bound,
                "value": var.value,
                "upper_bound": math.inf if var.upper_bound is None else var.upper_bound,
                "reduced_cost": var.reduced_cost,
                "obj_coefficient": var.obj_coefficient,
                "allowed_decrease": decrease,
                "allowed_increase": increase,
            }
        )
    return pd.DataFrame(rows, columns=VARIABLE_COLUMNS)


def format_summary(result: SolutionSummary) -> str:
    """Compact human-readable summary line."""
    return (
        f"status={result.status} primal={result.primal_status} "
        f"dual={result.dual_status} objective={result.objective_value:.6g}"
    )


def show_solution(model: SolvedModelView, log: logging.Logger | None = None) -> SolutionSummary:
    """Log the solution summary of a model and return it."""
    result = summary(model)
    (log or logger).info(format_summary(result))
    return result


def show_dual_lhs(
    dual_model: SolvedModelView, n_prices: int, log: logging.Logger | None = None
) -> DualLHSValues:
    """Log the LHS values of a solved dual and return them."""
    result = dual_lhs_values(dual_model, n_prices)
    for key, values in result.to_dict().items():
        (log or logger).info("%s = %s", key, values)
    return result


def show_primal_lhs(
    primal_model: SolvedModelView, log: logging.Logger | None = None
) -> PrimalLHSValues:
    """Log the LHS values of a solved primal and return them."""
    result = primal_lhs_values(primal_model)
    for key, values in result.to_dict().items():
        (log or logger).info("%s = %s", key, values)
    return result
