"""Pyomo backend for rcot solved-model reports.

This module adapts a solved Pyomo ``ConcreteModel`` to the
:class:`~rcot.backends.base.SolvedModelView` interface. Shadow prices and
reduced costs are read from the ``dual`` and ``rc`` import suffixes, which
:meth:`PyomoSolvedModel.solve` attaches before calling the solver.
"""

from __future__ import annotations

import logging
import math
import time
from typing import Any

from pyomo.common.collections import ComponentMap
from pyomo.environ import (
    ConcreteModel,
    Constraint,
    Objective,
    SolverFactory,
    Suffix,
    Var,
    value,
)
from pyomo.opt import SolverResults, TerminationCondition
from pyomo.repn.standard_repn import generate_standard_repn

from rcot.backends.base import (
    ConstraintKind,
    ConstraintRecord,
    Range,
    SensitivityReport,
    SolvedModelView,
    VariableRecord,
)

logger = logging.getLogger(__name__)

SOLVED_CONDITIONS = frozenset(
    {
        TerminationCondition.optimal,
        TerminationCondition.feasible,
        TerminationCondition.locallyOptimal,
        TerminationCondition.globallyOptimal,
    }
)


def _status_text(status: Any) -> str:
    return str(getattr(status, "value", status))


def _as_float(expr: Any) -> float:
    number = value(expr, exception=False)
    return math.nan if number is None else float(number)


class PyomoSolvedModel(SolvedModelView):
    """Solved-model view over a Pyomo model and its solver results.

    Attributes:
        model: The solved Pyomo ConcreteModel
        results: Results returned by the solver (None if never solved)
        sensitivity: Externally computed sensitivity ranges

    Example:
        >>> view = PyomoSolvedModel.solve(primal, solver="glpk")
        >>> summary(view).status
        'optimal'
    """

    def __init__(
        self,
        model: ConcreteModel,
        results: SolverResults | None = None,
        sensitivity: SensitivityReport | None = None,
    ) -> None:
        """Initialize the view.

        Args:
            model: Solved Pyomo model
            results: Solver results for the model
            sensitivity: Optional sensitivity ranges keyed by component name
        """
        self.model = model
        self.results = results
        self.sensitivity = sensitivity

    @classmethod
    def solve(
        cls,
        model: ConcreteModel,
        solver: str = "glpk",
        options: dict[str, Any] | None = None,
        sensitivity: SensitivityReport | None = None,
        tee: bool = False,
    ) -> PyomoSolvedModel:
        """Solve a Pyomo model and wrap the result.

        Args:
            model: Pyomo model holding the LP formulation
            solver: Solver name for SolverFactory (default: 'glpk')
            options: Solver options dictionary
            sensitivity: Sensitivity ranges to attach to the view
            tee: Stream solver output

        Returns:
            PyomoSolvedModel over the solved model

        Raises:
            RuntimeError: If the solver is not available
        """
        for suffix_name in ("dual", "rc"):
            if model.component(suffix_name) is None:
                model.add_component(suffix_name, Suffix(direction=Suffix.IMPORT))

        opt = SolverFactory(solver)
        if not opt.available(exception_flag=False):
            msg = f"Solver '{solver}' is not available"
            raise RuntimeError(msg)

        if options:
            for key, val in options.items():
                opt.options[key] = val

        start_time = time.time()
        results = opt.solve(model, tee=tee)
        solve_time = time.time() - start_time

        logger.info(
            "Solver [%s] termination: %s (%.2fs)",
            solver,
            _status_text(results.solver.termination_condition),
            solve_time,
        )
        return cls(model, results=results, sensitivity=sensitivity)

    # ------------------------------------------------------------------
    # Status
    # ------------------------------------------------------------------

    def termination_status(self) -> str:
        if self.results is None:
            return "not_solved"
        return _status_text(self.results.solver.termination_condition)

    def has_solution(self) -> bool:
        if self.results is None:
            return False
        return self.results.solver.termination_condition in SOLVED_CONDITIONS

    def primal_status(self) -> str:
        return "feasible_point" if self.has_solution() else "no_solution"

    def dual_status(self) -> str:
        duals = self._suffix("dual")
        if self.has_solution() and duals is not None and len(duals) > 0:
            return "feasible_point"
        return "no_solution"

    def objective_value(self) -> float:
        return _as_float(self._objective())

    # ------------------------------------------------------------------
    # Constraints and variables
    # ------------------------------------------------------------------

    def constraints(self, kind: ConstraintKind) -> list[ConstraintRecord]:
        kind = ConstraintKind(kind)
        if kind is ConstraintKind.NONNEGATIVE:
            return self._bound_records()

        duals = self._suffix("dual")
        records = []
        for con in self.model.component_data_objects(Constraint, active=True):
            con_kind = self._classify(con)
            if con_kind is not kind:
                continue
            bound = con.lower if con_kind is ConstraintKind.GREATER_THAN else con.upper
            constant = self._body_constant(con)
            records.append(
                ConstraintRecord(
                    name=con.name,
                    kind=con_kind,
                    value=_as_float(con.body) - constant,
                    rhs=_as_float(bound) - constant,
                    shadow_price=self._suffix_value(duals, con),
                )
            )
        return records

    def variables(self) -> list[VariableRecord]:
        reduced_costs = self._suffix("rc")
        coefficients = self._objective_coefficients()
        records = []
        for var in self.model.component_data_objects(Var, active=True):
            records.append(
                VariableRecord(
                    name=var.name,
                    value=_as_float(var),
                    lower_bound=float(value(var.lb)) if var.has_lb() else None,
                    upper_bound=float(value(var.ub)) if var.has_ub() else None,
                    reduced_cost=self._suffix_value(reduced_costs, var),
                    obj_coefficient=float(coefficients.get(var, 0.0)),
                )
            )
        return records

    def variable_length(self, name: str) -> int:
        """Number of scalar variables in an (indexed) Pyomo Var.

        Used to derive the price/rent split of a dual model, e.g.
        ``view.variable_length("p")``.
        """
        component = self.model.component(name)
        if component is None or not isinstance(component, Var):
            msg = f"Variable '{name}' not found in model"
            raise KeyError(msg)
        return len(component)

    # ------------------------------------------------------------------
    # Sensitivity ranges
    # ------------------------------------------------------------------

    def constraint_range(self, name: str) -> Range:
        return self._require_sensitivity().constraint_range(name)

    def variable_range(self, name: str) -> Range:
        return self._require_sensitivity().variable_range(name)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _require_sensitivity(self) -> SensitivityReport:
        if self.sensitivity is None:
            msg = "No sensitivity report attached to this model"
            raise KeyError(msg)
        return self.sensitivity

    def _suffix(self, name: str) -> Suffix | None:
        component = self.model.component(name)
        return component if isinstance(component, Suffix) else None

    @staticmethod
    def _suffix_value(suffix: Suffix | None, component: Any) -> float:
        if suffix is None:
            return math.nan
        number = suffix.get(component)
        return math.nan if number is None else float(number)

    def _objective(self) -> Objective:
        objectives = list(self.model.component_data_objects(Objective, active=True))
        if len(objectives) != 1:
            msg = f"Expected one active objective, found {len(objectives)}"
            raise ValueError(msg)
        return objectives[0]

    def _objective_coefficients(self) -> ComponentMap:
        repn = generate_standard_repn(self._objective().expr, compute_values=True)
        return ComponentMap(zip(repn.linear_vars, repn.linear_coefs))

    def _bound_records(self) -> list[ConstraintRecord]:
        reduced_costs = self._suffix("rc")
        return [
            ConstraintRecord(
                name=var.name,
                kind=ConstraintKind.NONNEGATIVE,
                value=_as_float(var),
                rhs=float(value(var.lb)),
                shadow_price=self._suffix_value(reduced_costs, var),
            )
            for var in self.model.component_data_objects(Var, active=True)
            if var.has_lb()
        ]

    @staticmethod
    def _body_constant(con: Any) -> float:
        """Constant term of a constraint body.

        Pyomo keeps constants in the body, and moves every term into the
        body when both sides hold variables. Reported values exclude the
        constant and right-hand sides include it.
        """
        repn = generate_standard_repn(con.body, compute_values=True, quadratic=False)
        return _as_float(repn.constant)

    @staticmethod
    def _classify(con: Any) -> ConstraintKind:
        if con.equality:
            return ConstraintKind.EQUAL_TO
        if con.has_lb() and con.has_ub():
            msg = f"Ranged constraint '{con.name}' is not supported"
            raise NotImplementedError(msg)
        if con.has_ub():
            return ConstraintKind.LESS_THAN
        return ConstraintKind.GREATER_THAN

    def __repr__(self) -> str:
        """String representation."""
        return f"PyomoSolvedModel({self.model.name}, status={self.termination_status()})"
