"""Dimension compatibility checks over matrix records.

A query is a sequence of groups of field references. Each group passes
when all of its references resolve to the same shape. The query as a whole
passes only if every group passes.

Example:
    >>> check_compatibility(sut, [("V", "U"), ("F", "S")])
    False
    >>> check_compatibility(sut, [("V'", "U"), ("F", "S")])
    True
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from rcot.core.fields import FieldRef, shape_of
from rcot.core.records import MatrixBag
from rcot.exceptions import InvalidQueryError, UnknownFieldError
from rcot.qa.reporting import CompatibilityReport, GroupCheckResult

logger = logging.getLogger(__name__)

FieldReference = str | FieldRef | tuple[str, bool]


def _parse_groups(
    bag: MatrixBag, groups: Iterable[Sequence[FieldReference]]
) -> list[list[FieldRef]]:
    parsed: list[list[FieldRef]] = []
    for index, group in enumerate(groups):
        if isinstance(group, (str, FieldRef)):
            msg = f"Group {index} must be a sequence of references, got {group!r}"
            raise InvalidQueryError(msg)
        refs = [FieldRef.parse(ref) for ref in group]
        if not refs:
            raise InvalidQueryError(f"Group {index} is empty")
        parsed.append(refs)

    if not parsed:
        raise InvalidQueryError("A compatibility query needs at least one group")

    # Validate every name before any shape is resolved
    for refs in parsed:
        for ref in refs:
            if not bag.has_field(ref.name):
                raise UnknownFieldError(ref.name, bag.field_names())
    return parsed


def _evaluate_group(bag: MatrixBag, refs: list[FieldRef]) -> GroupCheckResult:
    shapes = [shape_of(getattr(bag, ref.name), ref.transposed) for ref in refs]
    passed = all(shape == shapes[0] for shape in shapes)
    return GroupCheckResult(
        references=[ref.label for ref in refs],
        shapes=shapes,
        passed=passed,
    )


def compatibility_report(
    bag: MatrixBag, groups: Iterable[Sequence[FieldReference]]
) -> CompatibilityReport:
    """Evaluate a compatibility query and keep the per-group outcome.

    Args:
        bag: Record holding the fields
        groups: Groups of field references, e.g. ``[("V'", "U"), ("F", "S")]``

    Returns:
        CompatibilityReport with one entry per group

    Raises:
        InvalidQueryError: If there are no groups or a group is empty
        UnknownFieldError: If a reference names an undeclared field
    """
    parsed = _parse_groups(bag, groups)
    results = [_evaluate_group(bag, refs) for refs in parsed]

    for result in results:
        logger.debug(
            "Group %s -> shapes %s (%s)",
            result.references,
            result.shapes,
            "pass" if result.passed else "fail",
        )

    outcomes = {result.passed for result in results}
    if outcomes == {True}:
        passed = True  # each group works
    elif outcomes == {False}:
        passed = False  # no group matches
    else:
        passed = False  # at least one group fails

    return CompatibilityReport(
        record_type=type(bag).__name__,
        passed=passed,
        groups=results,
    )


def check_compatibility(
    bag: MatrixBag, groups: Iterable[Sequence[FieldReference]]
) -> bool:
    """Check that each group of field references has equal shapes.

    Args:
        bag: Record holding the fields
        groups: Groups of field references; a trailing ``'`` reads the
            field's transpose

    Returns:
        True if every group passes, False if any group fails
    """
    return compatibility_report(bag, groups).passed


def allequal_multi(bag: MatrixBag, *groups: Sequence[FieldReference]) -> bool:
    """Variadic form of :func:`check_compatibility`.

    Example:
        >>> allequal_multi(sut, ("V'", "U"), ("F", "S"))
        True
    """
    return check_compatibility(bag, groups)
