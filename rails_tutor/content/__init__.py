"""
Content: tutorial file parsing and front matter handling.

Core modules:
- frontmatter: YAML front matter model, load and dump
- parser: Markdown body sections, Q&A and quiz log entries
"""

from .frontmatter import REQUIRED_KEYS, TutorialMeta, dump_front_matter, load_front_matter
from .parser import (
    QA_SECTION,
    QUIZ_SECTION,
    ParsedTutorial,
    QAEntry,
    QuizEntry,
    QuizItem,
    TutorialParser,
)

__all__ = [
    "REQUIRED_KEYS",
    "TutorialMeta",
    "dump_front_matter",
    "load_front_matter",
    "QA_SECTION",
    "QUIZ_SECTION",
    "ParsedTutorial",
    "QAEntry",
    "QuizEntry",
    "QuizItem",
    "TutorialParser",
]
