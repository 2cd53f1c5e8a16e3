"""
Schema Validator - check every tutorial against the file format contract.

Checks:
- front matter parses, with all required keys and correct types
- dates are DD-MM-YYYY and consistent with each other
- understanding_score lies within the configured range
- prerequisites resolve to existing tutorials and form no cycle
- the Q&A and Quiz History sections are present
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Literal

from loguru import logger

from rails_tutor.adaptive.path_sequencer import PathSequencer
from rails_tutor.content.parser import QA_SECTION, QUIZ_SECTION, ParsedTutorial
from rails_tutor.core.exceptions import SchemaValidationError
from rails_tutor.learning.tutorial_store import TutorialStore

IDENTIFIER_PATTERN = re.compile(r"^(\d{2}-\d{2}-\d{4})-[a-z0-9]+(?:-[a-z0-9]+)*$")

Severity = Literal["error", "warning"]


@dataclass
class ValidationIssue:
    """A single problem found in one tutorial."""

    identifier: str
    severity: Severity
    message: str


@dataclass
class ValidationReport:
    """All issues found in a store."""

    checked: int = 0
    issues: list[ValidationIssue] = field(default_factory=list)

    @property
    def errors(self) -> list[ValidationIssue]:
        return [issue for issue in self.issues if issue.severity == "error"]

    @property
    def warnings(self) -> list[ValidationIssue]:
        return [issue for issue in self.issues if issue.severity == "warning"]

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    def add(self, identifier: str, severity: Severity, message: str) -> None:
        self.issues.append(ValidationIssue(identifier, severity, message))


class StoreValidator:
    """Validates a tutorial store."""

    def __init__(self, store: TutorialStore):
        self.store = store

    def validate(self) -> ValidationReport:
        scan = self.store.scan()
        report = ValidationReport(checked=len(scan.tutorials) + len(scan.failures))

        for identifier, reason in scan.failures.items():
            report.add(identifier, "error", reason)

        for tutorial in scan.tutorials.values():
            self._check_tutorial(tutorial, report)

        self._check_graph(scan.tutorials, report)

        logger.info(
            f"Validated {report.checked} tutorials: "
            f"{len(report.errors)} errors, {len(report.warnings)} warnings"
        )
        return report

    def validate_or_raise(self) -> ValidationReport:
        """
        Validate and raise on errors.

        Raises:
            SchemaValidationError: If any error-level issue is found
        """
        report = self.validate()
        if report.has_errors:
            details = "\n".join(
                f"  - {issue.identifier}: {issue.message}" for issue in report.errors
            )
            raise SchemaValidationError(
                f"{len(report.errors)} validation error(s):\n{details}"
            )
        return report

    def _check_tutorial(self, tutorial: ParsedTutorial, report: ValidationReport) -> None:
        identifier = tutorial.identifier
        meta = tutorial.meta

        score = meta.understanding_score
        if score is not None and not self.store.score_in_range(score):
            report.add(
                identifier,
                "error",
                f"understanding_score {score} outside "
                f"{self.store.score_min}-{self.store.score_max}",
            )
        if score is not None and meta.last_quizzed is None:
            report.add(identifier, "warning", "understanding_score set but never quizzed")

        if meta.last_updated_on < meta.created_on:
            report.add(identifier, "warning", "last_updated is before created")
        quizzed = meta.last_quizzed_on
        if quizzed is not None and quizzed < meta.created_on:
            report.add(identifier, "warning", "last_quizzed is before created")

        match = IDENTIFIER_PATTERN.match(identifier)
        if match is None:
            report.add(identifier, "warning", "file name is not DD-MM-YYYY-<slug>")
        elif match.group(1) != meta.created:
            report.add(
                identifier,
                "warning",
                f"file date {match.group(1)} differs from created {meta.created}",
            )

        if identifier in meta.prerequisites:
            report.add(identifier, "error", "tutorial lists itself as a prerequisite")

        for section in (QA_SECTION, QUIZ_SECTION):
            if not tutorial.has_section(section):
                report.add(identifier, "warning", f"missing '## {section}' section")

    def _check_graph(self, tutorials: dict[str, ParsedTutorial], report: ValidationReport) -> None:
        graph = {
            identifier: [p for p in tutorial.meta.prerequisites if p != identifier]
            for identifier, tutorial in tutorials.items()
        }
        sequencer = PathSequencer(graph)

        for identifier, unknown in sequencer.missing_references().items():
            for prerequisite in unknown:
                report.add(identifier, "error", f"unknown prerequisite '{prerequisite}'")

        for cycle in sequencer.find_cycles():
            report.add(cycle[0], "error", f"circular prerequisites: {' -> '.join(cycle)}")
