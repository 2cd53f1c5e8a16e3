"""
Tutorial Store - flat directory of tutorial markdown files.

Every tutorial lives in ``<tutorials_dir>/<DD-MM-YYYY>-<slug>.md``.
Files are only ever appended to:
- create() writes a new file once
- append_qa() adds to the ``## Q&A`` log
- record_quiz() adds to the ``## Quiz History`` log and updates the score

Appends are idempotent: re-applying an entry that is already logged
leaves the file untouched.
"""

from __future__ import annotations

import re
from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path

from loguru import logger

from rails_tutor.content.frontmatter import TutorialMeta
from rails_tutor.content.parser import (
    QA_SECTION,
    QUIZ_SECTION,
    ParsedTutorial,
    QAEntry,
    QuizEntry,
    QuizItem,
    TutorialParser,
)
from rails_tutor.core.dates import format_date
from rails_tutor.core.exceptions import (
    ScoreRangeError,
    TutorError,
    TutorialExistsError,
    TutorialNotFoundError,
)


def slugify(topic: str) -> str:
    """Lowercase a topic and join its alphanumeric runs with dashes."""
    return "-".join(re.findall(r"[a-z0-9]+", topic.lower()))


def make_identifier(topic: str, created: date) -> str:
    slug = slugify(topic)
    if not slug:
        raise TutorError(f"Topic {topic!r} must contain at least one letter or digit")
    return f"{format_date(created)}-{slug}"


@dataclass
class ScanResult:
    """Every tutorial that parsed, plus the files that did not."""

    tutorials: dict[str, ParsedTutorial] = field(default_factory=dict)
    failures: dict[str, str] = field(default_factory=dict)


class TutorialStore:
    """Load, create and append to tutorials in a directory."""

    def __init__(
        self,
        tutorials_dir: Path | str,
        score_min: int = 0,
        score_max: int = 10,
    ):
        self.tutorials_dir = Path(tutorials_dir)
        self.score_min = score_min
        self.score_max = score_max
        self.parser = TutorialParser()

    # =========================================================================
    # Lookup
    # =========================================================================

    def path_for(self, identifier: str) -> Path:
        name = identifier[:-3] if identifier.endswith(".md") else identifier
        return self.tutorials_dir / f"{name}.md"

    def exists(self, identifier: str) -> bool:
        return self.path_for(identifier).is_file()

    def get(self, identifier: str) -> ParsedTutorial:
        """Load one tutorial by identifier (with or without ``.md``)."""
        path = self.path_for(identifier)
        if not path.is_file():
            raise TutorialNotFoundError(f"Tutorial not found: {path.stem}")
        return self.parser.parse_file(path)

    def score_in_range(self, score: int) -> bool:
        """Check whether a score lies in the configured range."""
        return self.score_min <= score <= self.score_max

    def iter_paths(self) -> list[Path]:
        if not self.tutorials_dir.is_dir():
            return []
        return sorted(self.tutorials_dir.glob("*.md"))

    def scan(self) -> ScanResult:
        """Parse every tutorial file, collecting failures instead of raising."""
        result = ScanResult()
        for path in self.iter_paths():
            try:
                result.tutorials[path.stem] = self.parser.parse_file(path)
            except TutorError as e:
                result.failures[path.stem] = str(e)
        return result

    def iter_tutorials(self) -> Iterator[ParsedTutorial]:
        """Yield tutorials that parse; broken files are logged and skipped."""
        if not self.tutorials_dir.is_dir():
            logger.warning(f"Tutorials directory not found: {self.tutorials_dir}")
            return

        for path in self.iter_paths():
            try:
                yield self.parser.parse_file(path)
            except TutorError as e:
                logger.warning(f"Skipping {path.name}: {e}")

    def load_all(self) -> dict[str, ParsedTutorial]:
        return {tutorial.identifier: tutorial for tutorial in self.iter_tutorials()}

    # =========================================================================
    # Mutations
    # =========================================================================

    def save(self, tutorial: ParsedTutorial) -> Path:
        path = self.path_for(tutorial.identifier)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(tutorial.render(), encoding="utf-8")
        tutorial.source_path = str(path)
        return path

    def create(
        self,
        topic: str,
        concepts: Sequence[str],
        source_repo: str,
        description: str,
        prerequisites: Sequence[str] = (),
        on: date | None = None,
    ) -> ParsedTutorial:
        """
        Create a new tutorial file for a topic.

        Args:
            topic: Human title; its slug forms the identifier
            concepts: Concepts covered by the tutorial
            source_repo: Repository the examples are taken from
            description: One-line summary
            prerequisites: Identifiers of tutorials to read first
            on: Creation date (defaults to today)

        Returns:
            The ParsedTutorial that was written

        Raises:
            TutorialExistsError: If a tutorial with the same identifier exists
        """
        created = on or date.today()
        identifier = make_identifier(topic, created)
        if self.exists(identifier):
            raise TutorialExistsError(f"Tutorial already exists: {identifier}")

        prerequisites = [p[:-3] if p.endswith(".md") else p for p in prerequisites]
        for prerequisite in prerequisites:
            if not self.exists(prerequisite):
                logger.warning(f"{identifier}: prerequisite '{prerequisite}' does not exist yet")

        stamp = format_date(created)
        meta = TutorialMeta(
            concepts=[str(c).strip() for c in concepts if str(c).strip()],
            source_repo=source_repo,
            description=description,
            understanding_score=None,
            prerequisites=prerequisites,
            created=stamp,
            last_updated=stamp,
            last_quizzed=None,
        )
        body = f"\n# {topic.strip()}\n\n{description.strip()}\n\n## {QA_SECTION}\n\n## {QUIZ_SECTION}\n"
        tutorial = ParsedTutorial(identifier=identifier, meta=meta, body=body)
        self.save(tutorial)
        logger.info(f"Created tutorial {identifier}")
        return tutorial

    def append_qa(
        self,
        identifier: str,
        question: str,
        answer: str,
        on: date | None = None,
    ) -> bool:
        """
        Append a question/answer pair to a tutorial's Q&A log.

        Returns:
            True if the entry was written, False if it was already logged
        """
        if not question.strip():
            raise TutorError("Question must not be empty")

        tutorial = self.get(identifier)
        stamp = format_date(on or date.today())
        entry = QAEntry(question=question, answer=answer, asked=stamp)

        if not tutorial.add_qa(entry):
            logger.debug(f"{tutorial.identifier}: Q&A entry already logged, skipping")
            return False

        tutorial.meta.last_updated = stamp
        self.save(tutorial)
        logger.info(f"{tutorial.identifier}: appended Q&A entry")
        return True

    def record_quiz(
        self,
        identifier: str,
        questions: Sequence[str],
        answers: Sequence[str],
        score: int,
        on: date | None = None,
    ) -> bool:
        """
        Append a quiz attempt and update the understanding score.

        Questions and answers are paired by position.

        Returns:
            True if the attempt was written, False if it was already logged

        Raises:
            ScoreRangeError: If score lies outside [score_min, score_max]
        """
        if not self.score_in_range(score):
            raise ScoreRangeError(
                f"Score {score} outside allowed range {self.score_min}-{self.score_max}"
            )
        if len(questions) != len(answers):
            raise TutorError(
                f"Got {len(questions)} questions but {len(answers)} answers"
            )
        if not questions:
            raise TutorError("A quiz needs at least one question")

        tutorial = self.get(identifier)
        stamp = format_date(on or date.today())
        entry = QuizEntry(
            taken=stamp,
            score=score,
            max_score=self.score_max,
            items=[QuizItem(q, a) for q, a in zip(questions, answers)],
        )

        if not tutorial.add_quiz(entry):
            logger.debug(f"{tutorial.identifier}: quiz already logged, skipping")
            return False

        tutorial.meta.understanding_score = score
        tutorial.meta.last_quizzed = stamp
        tutorial.meta.last_updated = stamp
        self.save(tutorial)
        logger.info(f"{tutorial.identifier}: recorded quiz with score {score}/{self.score_max}")
        return True
