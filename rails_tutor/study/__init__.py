"""Study: spaced repetition scheduling of quizzes."""

from .scheduler import ReviewScheduler, ReviewState

__all__ = ["ReviewScheduler", "ReviewState"]
