"""
Tutorial parser for local markdown files.

Parses a tutorial file into its front matter, its free-form body and the
two appended logs (``## Q&A`` and ``## Quiz History``). Headings inside
fenced code blocks never count as section boundaries, since tutorials
quote Ruby and shell snippets that often contain ``#`` lines.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path

from rails_tutor.core.exceptions import DocumentReadError

from .frontmatter import TutorialMeta, load_front_matter, render_front_matter, split_front_matter

QA_SECTION = "Q&A"
QUIZ_SECTION = "Quiz History"

HEADING_PATTERN = re.compile(r"^(#{1,6})\s+(.+?)(?:\s+#+)?\s*$")
FENCE_PATTERN = re.compile(r"^\s*(```|~~~)")
ASKED_PATTERN = re.compile(r"^_Asked (\d{2}-\d{2}-\d{4})_$")
QUIZ_HEADING_PATTERN = re.compile(
    r"^Quiz\s+(\d{2}-\d{2}-\d{4})(?:\s*\(score\s+(\d+)\s*/\s*(\d+)\))?",
    re.IGNORECASE,
)
QUIZ_QUESTION_PATTERN = re.compile(r"^\*\*Q(\d+):\*\*\s?(.*)$")
QUIZ_ANSWER_PATTERN = re.compile(r"^\*\*A(\d+):\*\*\s?(.*)$")

# Headings inside logged answers are pushed below the entry headings
ENTRY_HEADING_LEVEL = 4


def normalize_text(text: str) -> str:
    """Collapse whitespace so that re-wrapped text compares equal."""
    return " ".join(text.split())


# =============================================================================
# Markdown Sections
# =============================================================================


@dataclass
class MarkdownSection:
    """A heading and the half-open line range [start, end) it owns."""

    title: str
    level: int
    start: int
    end: int

    def content_lines(self, lines: list[str]) -> list[str]:
        return lines[self.start + 1 : self.end]


def iter_headings(lines: list[str]) -> list[tuple[int, int, str]]:
    """Return (line_index, level, title) for every heading outside code fences."""
    headings = []
    fence: str | None = None

    for index, line in enumerate(lines):
        fence_match = FENCE_PATTERN.match(line)
        if fence_match:
            marker = fence_match.group(1)
            if fence is None:
                fence = marker
            elif fence == marker:
                fence = None
            continue
        if fence is not None:
            continue

        heading_match = HEADING_PATTERN.match(line)
        if heading_match:
            headings.append((index, len(heading_match.group(1)), heading_match.group(2).strip()))

    return headings


def demote_headings(text: str, min_level: int = ENTRY_HEADING_LEVEL) -> str:
    """
    Push headings in free text down to at least ``min_level``.

    Log entries are delimited by level 2 and 3 headings, so a ``## Summary``
    inside an answer would otherwise end the entry early. Headings inside
    fenced code blocks are left alone, and a fence left open is closed so
    it cannot swallow the entries that follow.
    """
    lines = text.split("\n")
    fence: str | None = None

    for index, line in enumerate(lines):
        fence_match = FENCE_PATTERN.match(line)
        if fence_match:
            marker = fence_match.group(1)
            if fence is None:
                fence = marker
            elif fence == marker:
                fence = None
            continue
        if fence is not None:
            continue

        heading_match = HEADING_PATTERN.match(line)
        if heading_match and len(heading_match.group(1)) < min_level:
            lines[index] = "#" * (min_level - len(heading_match.group(1))) + line

    if fence is not None:
        lines.append(fence)
    return "\n".join(lines)


def entry_text(text: str) -> str:
    """Text of a log entry as it is stored and compared."""
    return demote_headings(text.strip())


def same_text(stored: str, given: str) -> bool:
    return normalize_text(entry_text(stored)) == normalize_text(entry_text(given))


def find_sections(lines: list[str], level: int) -> list[MarkdownSection]:
    """Find sections of exactly ``level``; each ends at the next heading of level <= ``level``."""
    headings = iter_headings(lines)
    sections = []

    for position, (index, heading_level, title) in enumerate(headings):
        if heading_level != level:
            continue
        end = len(lines)
        for next_index, next_level, _ in headings[position + 1 :]:
            if next_level <= level:
                end = next_index
                break
        sections.append(MarkdownSection(title=title, level=level, start=index, end=end))

    return sections


def find_section(lines: list[str], title: str, level: int = 2) -> MarkdownSection | None:
    wanted = title.strip().lower()
    for section in find_sections(lines, level):
        if section.title.lower() == wanted:
            return section
    return None


def append_to_section(body: str, title: str, block: str, before: str | None = None) -> str:
    """
    Append a markdown block to the end of a level-2 section.

    If the section does not exist it is created, placed ahead of the
    ``before`` section when that one exists, otherwise at the end of the body.
    """
    lines = body.split("\n")
    block_lines = block.strip("\n").split("\n")
    target = find_section(lines, title)

    if target is None:
        anchor = find_section(lines, before) if before else None
        insert_at = anchor.start if anchor else len(lines)
        head = lines[:insert_at]
        while head and not head[-1].strip():
            head.pop()
        new_lines = [*head, "", f"## {title}", "", *block_lines, "", *lines[insert_at:]]
    else:
        head = lines[: target.end]
        while len(head) > target.start + 1 and not head[-1].strip():
            head.pop()
        new_lines = [*head, "", *block_lines, "", *lines[target.end :]]

    return "\n".join(new_lines).rstrip("\n") + "\n"


# =============================================================================
# Log Entries
# =============================================================================


@dataclass
class QAEntry:
    """One question/answer pair from the Q&A log."""

    question: str
    answer: str
    asked: str | None = None

    def matches(self, question: str, answer: str) -> bool:
        return (
            normalize_text(self.question) == normalize_text(question)
            and same_text(self.answer, answer)
        )

    def render(self) -> str:
        lines = [f"### Q: {normalize_text(self.question)}"]
        if self.asked:
            lines.append(f"_Asked {self.asked}_")
        lines.extend(["", entry_text(self.answer)])
        return "\n".join(lines)


@dataclass
class QuizItem:
    question: str
    answer: str


@dataclass
class QuizEntry:
    """One quiz attempt from the Quiz History log."""

    taken: str | None
    score: int | None
    max_score: int | None
    items: list[QuizItem] = field(default_factory=list)

    def matches(self, other: QuizEntry) -> bool:
        if (self.taken, self.score) != (other.taken, other.score):
            return False
        if len(self.items) != len(other.items):
            return False
        return all(
            normalize_text(mine.question) == normalize_text(theirs.question)
            and same_text(mine.answer, theirs.answer)
            for mine, theirs in zip(self.items, other.items)
        )

    def render(self) -> str:
        lines = [f"### Quiz {self.taken} (score {self.score}/{self.max_score})"]
        for number, item in enumerate(self.items, start=1):
            lines.extend(
                [
                    "",
                    f"**Q{number}:** {normalize_text(item.question)}",
                    "",
                    f"**A{number}:** {entry_text(item.answer)}",
                ]
            )
        return "\n".join(lines)


def _subsections(lines: list[str], section: MarkdownSection) -> list[tuple[str, list[str]]]:
    """Split a level-2 section into its level-3 entries."""
    inner = section.content_lines(lines)
    return [
        (sub.title, sub.content_lines(inner))
        for sub in find_sections(inner, level=3)
    ]


def parse_qa_entries(lines: list[str], section: MarkdownSection) -> list[QAEntry]:
    entries = []
    for title, content in _subsections(lines, section):
        question = re.sub(r"^Q:\s*", "", title)
        asked = None
        remaining = list(content)
        while remaining and not remaining[0].strip():
            remaining.pop(0)
        if remaining:
            asked_match = ASKED_PATTERN.match(remaining[0].strip())
            if asked_match:
                asked = asked_match.group(1)
                remaining.pop(0)
        entries.append(QAEntry(question=question, answer="\n".join(remaining).strip(), asked=asked))
    return entries


def parse_quiz_entries(lines: list[str], section: MarkdownSection) -> list[QuizEntry]:
    entries = []
    for title, content in _subsections(lines, section):
        heading_match = QUIZ_HEADING_PATTERN.match(title)
        taken = score = max_score = None
        if heading_match:
            taken = heading_match.group(1)
            if heading_match.group(2) is not None:
                score = int(heading_match.group(2))
                max_score = int(heading_match.group(3))

        items: list[QuizItem] = []
        questions: list[str] = []
        answers: list[str] = []
        current: list[str] | None = None

        for line in content:
            question_match = QUIZ_QUESTION_PATTERN.match(line)
            answer_match = QUIZ_ANSWER_PATTERN.match(line)
            if question_match:
                if questions:
                    items.append(QuizItem("\n".join(questions).strip(), "\n".join(answers).strip()))
                questions, answers = [question_match.group(2)], []
                current = questions
            elif answer_match and questions:
                answers = [answer_match.group(2)]
                current = answers
            elif current is not None:
                current.append(line)

        if questions:
            items.append(QuizItem("\n".join(questions).strip(), "\n".join(answers).strip()))

        entries.append(QuizEntry(taken=taken, score=score, max_score=max_score, items=items))
    return entries


# =============================================================================
# Parsed Tutorial
# =============================================================================


@dataclass
class ParsedTutorial:
    """Result of parsing a tutorial file."""

    identifier: str
    meta: TutorialMeta
    body: str
    source_path: str = ""

    @property
    def lines(self) -> list[str]:
        return self.body.split("\n")

    @property
    def title(self) -> str:
        for _, level, heading in iter_headings(self.lines):
            if level == 1:
                return heading
        return self.identifier

    @property
    def qa_entries(self) -> list[QAEntry]:
        lines = self.lines
        section = find_section(lines, QA_SECTION)
        return parse_qa_entries(lines, section) if section else []

    @property
    def quiz_entries(self) -> list[QuizEntry]:
        lines = self.lines
        section = find_section(lines, QUIZ_SECTION)
        return parse_quiz_entries(lines, section) if section else []

    def has_section(self, title: str) -> bool:
        return find_section(self.lines, title) is not None

    def add_qa(self, entry: QAEntry) -> bool:
        """Append a Q&A entry unless an identical pair is already logged."""
        if any(existing.matches(entry.question, entry.answer) for existing in self.qa_entries):
            return False
        self.body = append_to_section(self.body, QA_SECTION, entry.render(), before=QUIZ_SECTION)
        return True

    def add_quiz(self, entry: QuizEntry) -> bool:
        """Append a quiz entry unless the same attempt is already logged."""
        if any(existing.matches(entry) for existing in self.quiz_entries):
            return False
        self.body = append_to_section(self.body, QUIZ_SECTION, entry.render())
        return True

    def render(self) -> str:
        return render_front_matter(self.meta) + self.body


class TutorialParser:
    """Parser for tutorial markdown files."""

    def parse_file(self, path: Path | str) -> ParsedTutorial:
        """Parse a single tutorial file."""
        path = Path(path)

        if not path.exists():
            raise FileNotFoundError(f"Tutorial file not found: {path}")

        try:
            text = path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise DocumentReadError(
                f"{path.name} is not valid UTF-8: {e.reason} at byte {e.start}"
            ) from e
        return self.parse_text(text, identifier=path.stem, source=str(path))

    def parse_text(self, text: str, identifier: str, source: str = "") -> ParsedTutorial:
        yaml_text, body = split_front_matter(text)
        meta = load_front_matter(yaml_text)
        return ParsedTutorial(identifier=identifier, meta=meta, body=body, source_path=source)

