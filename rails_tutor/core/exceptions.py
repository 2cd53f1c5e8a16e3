"""
Custom exceptions for the tutorial record store.
"""


class TutorError(Exception):
    """Base exception for rails-tutor errors."""
    pass


class FrontMatterError(TutorError):
    """Raised when a tutorial's front matter is missing or malformed."""
    pass


class TutorialNotFoundError(TutorError):
    """Raised when a tutorial identifier does not resolve to a file."""
    pass


class TutorialExistsError(TutorError):
    """Raised when creating a tutorial whose identifier is already taken."""
    pass


class PrerequisiteError(TutorError):
    """Raised for unknown prerequisite references or dependency cycles."""
    pass


class ScoreRangeError(TutorError, ValueError):
    """Raised when an understanding score falls outside the allowed range."""
    pass


class SchemaValidationError(TutorError):
    """Raised when the store fails validation."""
    pass


class DocumentReadError(TutorError):
    """Raised when a tutorial or profile document is not valid UTF-8."""
    pass
