"""
Core: exceptions, date helpers and store validation.
"""

from .dates import DATE_FORMAT, format_date, parse_date
from .exceptions import (
    DocumentReadError,
    FrontMatterError,
    PrerequisiteError,
    SchemaValidationError,
    ScoreRangeError,
    TutorError,
    TutorialExistsError,
    TutorialNotFoundError,
)

__all__ = [
    "DATE_FORMAT",
    "format_date",
    "parse_date",
    "TutorError",
    "FrontMatterError",
    "TutorialNotFoundError",
    "TutorialExistsError",
    "PrerequisiteError",
    "ScoreRangeError",
    "SchemaValidationError",
    "DocumentReadError",
]
