"""Backends module for rcot.

Provides the solved-model read interface and a Pyomo adapter for it.
"""

from rcot.backends.base import (
    ConstraintKind,
    ConstraintRecord,
    SensitivityReport,
    SolvedModelView,
    VariableRecord,
)
from rcot.backends.pyomo_backend import PyomoSolvedModel

__all__ = [
    "ConstraintKind",
    "ConstraintRecord",
    "VariableRecord",
    "SensitivityReport",
    "SolvedModelView",
    "PyomoSolvedModel",
]
