"""Core data structures for rcot.

This module provides the record types used throughout the toolkit:
- Field references: plain or transposed access to named matrices
- Records: SUT and construct inputs, SU and IO model datasets
"""

from rcot.core.fields import ABSENT_SHAPE, TRANSPOSE_MARKER, FieldRef, shape_of
from rcot.core.records import (
    ConstructRecord,
    IODataset,
    MatrixBag,
    SUDataset,
    SUTRecord,
)

__all__ = [
    # Field references
    "FieldRef",
    "TRANSPOSE_MARKER",
    "ABSENT_SHAPE",
    "shape_of",
    # Records
    "MatrixBag",
    "SUTRecord",
    "ConstructRecord",
    "SUDataset",
    "IODataset",
]
