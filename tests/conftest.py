"""Shared fixtures for rcot tests."""

from __future__ import annotations

import numpy as np
import pytest

from rcot.backends.base import (
    ConstraintKind,
    ConstraintRecord,
    SensitivityReport,
    SolvedModelView,
    VariableRecord,
)
from rcot.core import ConstructRecord, SUTRecord


class InMemorySolvedModel(SolvedModelView):
    """Solved-model view backed by plain lists."""

    def __init__(
        self,
        constraints: list[ConstraintRecord] | None = None,
        variables: list[VariableRecord] | None = None,
        sensitivity: SensitivityReport | None = None,
        status: str = "optimal",
        solved: bool = True,
        objective: float = 0.0,
    ) -> None:
        self._constraints = constraints or []
        self._variables = variables or []
        self._sensitivity = sensitivity or SensitivityReport()
        self._status = status
        self._solved = solved
        self._objective = objective

    def termination_status(self) -> str:
        return self._status

    def primal_status(self) -> str:
        return "feasible_point" if self._solved else "no_solution"

    def dual_status(self) -> str:
        return "feasible_point" if self._solved else "no_solution"

    def objective_value(self) -> float:
        return self._objective

    def has_solution(self) -> bool:
        return self._solved

    def constraints(self, kind: ConstraintKind) -> list[ConstraintRecord]:
        return [con for con in self._constraints if con.kind is kind]

    def variables(self) -> list[VariableRecord]:
        return list(self._variables)

    def constraint_range(self, name: str) -> tuple[float, float]:
        return self._sensitivity.constraint_range(name)

    def variable_range(self, name: str) -> tuple[float, float]:
        return self._sensitivity.variable_range(name)


def _con(name: str, kind: ConstraintKind, value: float, rhs: float, price: float = 0.0):
    return ConstraintRecord(name=name, kind=kind, value=value, rhs=rhs, shadow_price=price)


@pytest.fixture
def sut() -> SUTRecord:
    """Small SUT with 3 industries and 5 commodities."""
    V = np.array(
        [
            [100.0, 0.0, 0.0, 0.0, 0.0],
            [0.0, 90.0, 0.0, 0.0, 0.0],
            [0.0, 0.0, 80.0, 20.0, 10.0],
        ]
    )
    U = np.full((5, 3), 5.0)
    return SUTRecord(
        V=V,
        U=U,
        Y=np.ones((5, 2)),
        F=np.array([[10.0, 20.0, 30.0], [5.0, 5.0, 5.0]]),
        S=np.array([[1.0, 2.0, 3.0], [4.0, 5.0, 6.0]]),
        g=V.sum(axis=1),
        q=V.sum(axis=0),
        is_active=True,
    )


@pytest.fixture
def construct() -> ConstructRecord:
    """Construct with a 4x4 technology matrix and output [1, 2, 3, 4]."""
    A = np.array(
        [
            [0.1, 0.2, 0.0, 0.0],
            [0.0, 0.1, 0.3, 0.0],
            [0.2, 0.0, 0.1, 0.1],
            [0.0, 0.0, 0.2, 0.1],
        ]
    )
    return ConstructRecord(
        A=A,
        x=[1.0, 2.0, 3.0, 4.0],
        y=[0.5, 0.5, 1.0, 2.0],
        F=np.array([[0.3, 0.2, 0.4, 0.1]]),
    )


@pytest.fixture
def dual_model() -> InMemorySolvedModel:
    """Solved dual with 3 prices, 1 rent and 2 no-profit constraints."""
    NN = ConstraintKind.NONNEGATIVE
    LT = ConstraintKind.LESS_THAN
    constraints = [
        _con("p[1]", NN, 1.0, 0.0),
        _con("p[2]", NN, 1.5, 0.0),
        _con("p[3]", NN, 2.0, 0.0),
        _con("r[1]", NN, 0.25, 0.0),
        _con("profit[1]", LT, 0.5, 0.5, 10.0),
        _con("profit[2]", LT, 0.2, 0.7, 0.0),
    ]
    variables = [
        VariableRecord("p[1]", 1.0, 0.0, None, 0.0, 10.0),
        VariableRecord("p[2]", 1.5, 0.0, None, 0.0, 20.0),
        VariableRecord("p[3]", 2.0, 0.0, None, 0.0, 30.0),
        VariableRecord("r[1]", 0.25, 0.0, None, 0.0, -5.0),
    ]
    sensitivity = SensitivityReport(
        constraints={"profit[1]": (0.1, 0.4), "profit[2]": (0.5, float("inf"))},
        variables={
            "p[1]": (1.0, 2.0),
            "p[2]": (0.5, 0.5),
            "p[3]": (3.0, float("inf")),
            "r[1]": (float("inf"), 1.0),
        },
    )
    return InMemorySolvedModel(constraints, variables, sensitivity, objective=72.5)


@pytest.fixture
def primal_model() -> InMemorySolvedModel:
    """Solved primal without disposal: equality market balance only."""
    NN = ConstraintKind.NONNEGATIVE
    EQ = ConstraintKind.EQUAL_TO
    LT = ConstraintKind.LESS_THAN
    constraints = [
        _con("x[1]", NN, 10.0, 0.0),
        _con("x[2]", NN, 0.0, 0.0),
        _con("balance[1]", EQ, 5.0, 5.0, 1.0),
        _con("balance[2]", EQ, 7.0, 7.0, 1.5),
        _con("factor[1]", LT, 80.0, 100.0, 0.0),
    ]
    variables = [
        VariableRecord("x[1]", 10.0, 0.0, None, 0.0, 1.0),
        VariableRecord("x[2]", 0.0, 0.0, 50.0, 0.5, 2.0),
    ]
    sensitivity = SensitivityReport(
        constraints={"factor[1]": (20.0, float("inf"))},
        variables={"x[1]": (1.0, 0.5), "x[2]": (float("inf"), 0.5)},
    )
    return InMemorySolvedModel(constraints, variables, sensitivity, objective=10.0)


@pytest.fixture
def model_factory():
    """Factory for in-memory solved models."""
    return InMemorySolvedModel
