"""rcot - Data structures and reports for Rectangular Choice-of-Technology models."""

from rcot.backends import (
    ConstraintKind,
    PyomoSolvedModel,
    SensitivityReport,
    SolvedModelView,
)
from rcot.core import ConstructRecord, FieldRef, IODataset, SUDataset, SUTRecord
from rcot.exceptions import (
    IndexOutOfRangeError,
    InvalidConstructError,
    InvalidQueryError,
    ModelNotSolvedError,
    RCOTError,
    UnknownFieldError,
    UnsupportedKindError,
)
from rcot.model_data import add_alternative_technologies, build_io, build_su
from rcot.qa import allequal_multi, check_compatibility, compatibility_report
from rcot.reports import (
    dual_lhs_values,
    primal_lhs_values,
    sensitivity_table,
    summary,
)
from rcot.version import __version__

__all__ = [
    "__version__",
    # Records
    "FieldRef",
    "SUTRecord",
    "ConstructRecord",
    "SUDataset",
    "IODataset",
    # Builders
    "build_io",
    "build_su",
    "add_alternative_technologies",
    # Compatibility
    "check_compatibility",
    "allequal_multi",
    "compatibility_report",
    # Reports
    "summary",
    "dual_lhs_values",
    "primal_lhs_values",
    "sensitivity_table",
    # Backends
    "ConstraintKind",
    "SensitivityReport",
    "SolvedModelView",
    "PyomoSolvedModel",
    # Errors
    "RCOTError",
    "UnknownFieldError",
    "InvalidQueryError",
    "InvalidConstructError",
    "ModelNotSolvedError",
    "UnsupportedKindError",
    "IndexOutOfRangeError",
]
