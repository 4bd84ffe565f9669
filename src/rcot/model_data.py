"""Model datasets for inversion-based and S-/J-RCOT modelling.

The builders copy a SUT or construct record into a dataset that may then be
modified and, for RCOT, augmented with data for alternative technologies.
Elements of a dataset are treated independently: intensities are not
recalculated when absolute values change, even when the former were derived
from the latter.

Example:
    >>> io_leontief = build_io(ctc)   # IO-based Leontief model
    >>> su_rcot = build_su(sut)       # J-RCOT
    >>> add_alternative_technologies(su_rcot, "V", [[0, 95, 0, 0, 0]], after=1)
"""

from __future__ import annotations

import copy
import logging
from typing import Any

import numpy as np

from rcot.core.records import ConstructRecord, IODataset, SUDataset, SUTRecord
from rcot.exceptions import InvalidConstructError

_logger = logging.getLogger(__name__)

INDEPENDENCE_NOTICE = (
    "You are setting up an {flavor} model dataset. Elements of this dataset "
    "are now treated independently, meaning that no recalculation whatsoever "
    "takes place when individual elements are changed."
)


def _copy_fields(record: Any, names: tuple[str, ...]) -> dict[str, Any]:
    return {name: copy.deepcopy(getattr(record, name)) for name in names}


def build_io(
    construct: ConstructRecord, *, logger: logging.Logger | None = None
) -> IODataset:
    """Create an IO model dataset from a construct.

    The construct is deep-copied and two scaffold fields are added:
    ``I_mod``, an identity matrix with the dimensions of ``A``, and
    ``xhat``, the diagonal matrix of the flattened output vector ``x``.

    Args:
        construct: The IOT data to be used
        logger: Logger receiving the independence notice

    Returns:
        IODataset owning its own copy of every field

    Raises:
        InvalidConstructError: If the construct lacks ``A`` or ``x``
    """
    if not isinstance(construct, ConstructRecord):
        msg = f"Expected a ConstructRecord, got {type(construct).__name__}"
        raise InvalidConstructError(msg)

    missing = [name for name in IODataset.required_fields() if getattr(construct, name) is None]
    if missing:
        msg = f"Construct is missing required field(s): {', '.join(missing)}"
        raise InvalidConstructError(msg)
    if construct.A.ndim != 2:
        msg = f"Technology matrix 'A' must be 2-D, got shape {construct.A.shape}"
        raise InvalidConstructError(msg)

    values = _copy_fields(construct, ConstructRecord.field_names())
    dataset = IODataset(**values)
    dataset.I_mod = np.eye(*dataset.A.shape)
    dataset.xhat = np.diag(dataset.x.ravel())

    (logger or _logger).info(INDEPENDENCE_NOTICE.format(flavor="IO"))
    return dataset


def build_su(sut: SUTRecord, *, logger: logging.Logger | None = None) -> SUDataset:
    """Create an SU model dataset copied from a SUT record.

    Args:
        sut: The SUT data to be used
        logger: Logger receiving the independence notice

    Returns:
        SUDataset owning its own copy of every field

    Raises:
        InvalidConstructError: If ``sut`` is not a SUT record
    """
    if not isinstance(sut, SUTRecord):
        msg = f"Expected a SUTRecord, got {type(sut).__name__}"
        raise InvalidConstructError(msg)

    dataset = SUDataset(**_copy_fields(sut, SUTRecord.field_names()))

    (logger or _logger).info(INDEPENDENCE_NOTICE.format(flavor="SU"))
    return dataset


def add_alternative_technologies(
    dataset: SUDataset | IODataset,
    field: str,
    rows: Any,
    *,
    after: int | None = None,
) -> np.ndarray:
    """Insert rows for alternative technologies into a matrix field.

    Only the named field is replaced; related fields are left as they are.

    Args:
        dataset: Dataset to augment in place
        field: Matrix field to extend, e.g. ``"V"``
        rows: 2-D block of rows to insert
        after: Row index the block follows; appended when None

    Returns:
        The new matrix stored on the dataset

    Raises:
        UnknownFieldError: If the field is not declared on the dataset
        InvalidConstructError: If the field holds no matrix
        ValueError: If the column counts differ
    """
    current = dataset.get_field(field)
    if current is None:
        raise InvalidConstructError(f"Field '{field}' holds no matrix to augment")
    if current.ndim != 2:
        raise InvalidConstructError(f"Field '{field}' is not a matrix: shape {current.shape}")

    block = np.atleast_2d(np.asarray(rows, dtype=float))
    if block.shape[1] != current.shape[1]:
        msg = (
            f"Cannot add rows with {block.shape[1]} columns to '{field}' "
            f"with {current.shape[1]} columns"
        )
        raise ValueError(msg)

    position = current.shape[0] if after is None else after + 1
    if not 0 <= position <= current.shape[0]:
        msg = f"Row index {after} is outside '{field}' with {current.shape[0]} rows"
        raise IndexError(msg)

    setattr(dataset, field, np.vstack([current[:position], block, current[position:]]))
    return getattr(dataset, field)
