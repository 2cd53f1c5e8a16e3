"""
Learner profile - interview transcripts used to personalize tutorials.

The profile is a single markdown document:

    # Learner Profile

    ## Interview 15-03-2025

    **Q:** What are you building?

    **A:** A Rails app for ...

    > Teaching note: lean on analogies to Django.

Interviews are appended over time; older ones are never rewritten.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path

from loguru import logger

from rails_tutor.content.parser import (
    append_to_section,
    entry_text,
    find_sections,
    normalize_text,
    same_text,
)
from rails_tutor.core.dates import format_date
from rails_tutor.core.exceptions import DocumentReadError, TutorError

PROFILE_TITLE = "Learner Profile"
INTERVIEW_PATTERN = re.compile(r"^Interview\s+(\d{2}-\d{2}-\d{4})$")
QUESTION_PATTERN = re.compile(r"^\*\*Q:\*\*\s?(.*)$")
ANSWER_PATTERN = re.compile(r"^\*\*A:\*\*\s?(.*)$")
NOTE_PATTERN = re.compile(r"^>\s*Teaching note:\s?(.*)$", re.IGNORECASE)


@dataclass
class InterviewEntry:
    question: str
    answer: str
    note: str | None = None

    def matches(self, question: str, answer: str) -> bool:
        return (
            normalize_text(self.question) == normalize_text(question)
            and same_text(self.answer, answer)
        )

    def render(self) -> str:
        lines = [f"**Q:** {normalize_text(self.question)}", "", f"**A:** {entry_text(self.answer)}"]
        if self.note and self.note.strip():
            lines.extend(["", f"> Teaching note: {normalize_text(self.note)}"])
        return "\n".join(lines)


@dataclass
class InterviewSession:
    held_on: str
    entries: list[InterviewEntry] = field(default_factory=list)


@dataclass
class LearnerProfile:
    """Parsed learner profile document."""

    path: Path
    text: str
    sessions: list[InterviewSession] = field(default_factory=list)

    @property
    def entries(self) -> list[InterviewEntry]:
        return [entry for session in self.sessions for entry in session.entries]

    def session_for(self, held_on: str) -> InterviewSession | None:
        for session in self.sessions:
            if session.held_on == held_on:
                return session
        return None


def _parse_entries(lines: list[str]) -> list[InterviewEntry]:
    entries: list[InterviewEntry] = []
    question: list[str] = []
    answer: list[str] = []
    note: list[str] = []
    current: list[str] | None = None

    def flush() -> None:
        if question:
            entries.append(
                InterviewEntry(
                    question="\n".join(question).strip(),
                    answer="\n".join(answer).strip(),
                    note="\n".join(note).strip() or None,
                )
            )

    for line in lines:
        question_match = QUESTION_PATTERN.match(line)
        answer_match = ANSWER_PATTERN.match(line)
        note_match = NOTE_PATTERN.match(line)
        if question_match:
            flush()
            question, answer, note = [question_match.group(1)], [], []
            current = question
        elif answer_match and question:
            answer = [answer_match.group(1)]
            current = answer
        elif note_match and question:
            note = [note_match.group(1)]
            current = note
        elif current is note and line.startswith(">"):
            note.append(line.lstrip(">").strip())
        elif current is note:
            current = None if line.strip() else note
        elif current is not None:
            current.append(line)

    flush()
    return entries


def parse_profile(text: str, path: Path) -> LearnerProfile:
    lines = text.split("\n")
    sessions = []
    for section in find_sections(lines, level=2):
        match = INTERVIEW_PATTERN.match(section.title)
        if match is None:
            continue
        sessions.append(
            InterviewSession(held_on=match.group(1), entries=_parse_entries(section.content_lines(lines)))
        )
    return LearnerProfile(path=path, text=text, sessions=sessions)


class LearnerProfileStore:
    """Read and append to the learner profile document."""

    def __init__(self, path: Path | str):
        self.path = Path(path)

    def load(self) -> LearnerProfile:
        if not self.path.is_file():
            logger.debug(f"No learner profile at {self.path}, starting empty")
            return LearnerProfile(path=self.path, text=f"# {PROFILE_TITLE}\n")
        try:
            text = self.path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise DocumentReadError(
                f"{self.path.name} is not valid UTF-8: {e.reason} at byte {e.start}"
            ) from e
        return parse_profile(text, self.path)

    def append(
        self,
        question: str,
        answer: str,
        note: str | None = None,
        on: date | None = None,
    ) -> bool:
        """
        Add an interview Q&A pair to the session held on ``on``.

        Returns:
            True if written, False if that pair is already in the session
        """
        if not question.strip():
            raise TutorError("Question must not be empty")

        profile = self.load()
        held_on = format_date(on or date.today())
        session = profile.session_for(held_on)
        if session and any(entry.matches(question, answer) for entry in session.entries):
            logger.debug(f"Interview entry for {held_on} already recorded, skipping")
            return False

        entry = InterviewEntry(question=question, answer=answer, note=note)
        text = append_to_section(profile.text, f"Interview {held_on}", entry.render())
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(text, encoding="utf-8")
        logger.info(f"Appended interview entry to {self.path}")
        return True
