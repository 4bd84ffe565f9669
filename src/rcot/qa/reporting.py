"""Reporting models for dimension compatibility checks."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any


@dataclass
class GroupCheckResult:
    """Result for one group of field references."""

    references: list[str]
    shapes: list[tuple[int, ...]]
    passed: bool

    def to_dict(self) -> dict[str, Any]:
        return {
            "references": list(self.references),
            "shapes": [list(shape) for shape in self.shapes],
            "passed": self.passed,
        }


@dataclass
class CompatibilityReport:
    """Per-group outcome of a compatibility query.

    ``passed`` is true only when every group passed; a query with some
    failing groups is reported exactly like one where all groups fail.
    """

    record_type: str
    passed: bool
    groups: list[GroupCheckResult]
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def failed_groups(self) -> int:
        return sum(1 for group in self.groups if not group.passed)

    def to_dict(self) -> dict[str, Any]:
        return {
            "record_type": self.record_type,
            "passed": self.passed,
            "evaluated_groups": len(self.groups),
            "failed_groups": self.failed_groups,
            "groups": [group.to_dict() for group in self.groups],
            "metadata": self.metadata,
        }

    def save_json(self, path: Path | str) -> None:
        output_path = Path(path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(json.dumps(self.to_dict(), indent=2))


def format_report_summary(report: CompatibilityReport) -> str:
    """Compact human-readable summary line."""
    status = "PASS" if report.passed else "FAIL"
    failing = [
        "(" + ", ".join(group.references) + ")"
        for group in report.groups
        if not group.passed
    ]
    line = (
        f"Dimension check {status} | record={report.record_type} "
        f"groups={len(report.groups)} failed={report.failed_groups}"
    )
    if failing:
        line += " | " + " ".join(failing)
    return line
