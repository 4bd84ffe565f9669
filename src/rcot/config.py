"""Load and run YAML-defined dimension compatibility suites.

A suite groups named compatibility queries that should hold for a record
flavor, for example::

    metadata:
      name: sut_checks
      record: su
    checks:
      make_use:
        description: Make matrix has the transposed shape of the use matrix
        groups: [["V'", "U"], ["F", "S"]]
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator

from rcot.core.records import MatrixBag
from rcot.qa.compatibility import check_compatibility

logger = logging.getLogger(__name__)


class CompatibilityCheckConfig(BaseModel):
    """One named compatibility query."""

    name: str = Field(..., min_length=1, description="Check identifier")
    description: str = Field(default="", description="Human-readable description")
    groups: list[list[str]] = Field(..., min_length=1, description="Reference groups")

    @field_validator("groups")
    @classmethod
    def groups_not_empty(cls, v: list[list[str]]) -> list[list[str]]:  # noqa: N805
        for index, group in enumerate(v):
            if not group:
                raise ValueError(f"group {index} is empty")
        return v


class CompatibilitySuite(BaseModel):
    """Resolved compatibility suite from YAML."""

    name: str
    record: str | None = None
    checks: list[CompatibilityCheckConfig] = Field(default_factory=list)

    def get(self, name: str) -> CompatibilityCheckConfig:
        for check in self.checks:
            if check.name == name:
                return check
        raise KeyError(f"Check '{name}' not found in suite '{self.name}'")


def _parse_checks(payload: Any) -> list[CompatibilityCheckConfig]:
    if not isinstance(payload, dict):
        raise ValueError("checks must be a mapping of check name to definition")

    checks: list[CompatibilityCheckConfig] = []
    for name, definition in payload.items():
        if isinstance(definition, list):
            definition = {"groups": definition}
        if not isinstance(definition, dict):
            raise ValueError(f"check '{name}' must be a mapping or a list of groups")
        checks.append(
            CompatibilityCheckConfig(
                name=str(name),
                description=str(definition.get("description") or ""),
                groups=definition.get("groups") or [],
            )
        )
    return checks


def load_compatibility_suite(config_path: Path | str) -> CompatibilitySuite:
    """Read a compatibility suite from a YAML file.

    Raises:
        ValueError: If the YAML layout is invalid
    """
    config_path = Path(config_path)
    payload = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    if not isinstance(payload, dict):
        raise ValueError("Compatibility YAML must define a top-level mapping")

    metadata = payload.get("metadata") or {}
    if not isinstance(metadata, dict):
        raise ValueError("metadata must be a mapping")

    return CompatibilitySuite(
        name=str(metadata.get("name") or config_path.stem),
        record=metadata.get("record"),
        checks=_parse_checks(payload.get("checks") or {}),
    )


def run_compatibility_suite(bag: MatrixBag, suite: CompatibilitySuite) -> dict[str, bool]:
    """Run every check of a suite against a record.

    Returns:
        Mapping of check name to its pass/fail outcome
    """
    if suite.record is not None and suite.record != bag.FLAVOR:
        logger.warning(
            "Suite '%s' targets '%s' records, running it on a '%s' record",
            suite.name,
            suite.record,
            bag.FLAVOR,
        )

    outcomes = {check.name: check_compatibility(bag, check.groups) for check in suite.checks}
    failed = [name for name, passed in outcomes.items() if not passed]
    logger.info(
        "Compatibility suite '%s': %d checks, %d failed%s",
        suite.name,
        len(outcomes),
        len(failed),
        f" ({', '.join(failed)})" if failed else "",
    )
    return outcomes
