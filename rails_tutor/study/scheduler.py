"""
Spaced repetition review scheduler.

Decides which tutorials are due for another quiz. The review interval
doubles every two points of understanding score:

    interval = base_days * 2 ** (score // 2)

With the default base of one day a score of 0-1 comes back the next day,
4-5 after four days and 10 after a month. Tutorials that were never
quizzed are always due.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, timedelta

from loguru import logger

from rails_tutor.content.parser import ParsedTutorial


@dataclass
class ReviewState:
    """Review state derived from one tutorial's front matter."""

    identifier: str
    title: str
    score: int | None
    last_quizzed: date | None
    next_review: date | None
    today: date

    @property
    def is_due(self) -> bool:
        """Check if this tutorial is due for a quiz."""
        if self.next_review is None:
            return True  # Never quizzed = due
        return self.today >= self.next_review

    @property
    def days_overdue(self) -> int:
        """Days past the scheduled review date."""
        if self.next_review is None:
            return 0
        return max(0, (self.today - self.next_review).days)


class ReviewScheduler:
    """Compute review dates from understanding scores."""

    def __init__(self, base_days: int = 1, score_max: int = 10):
        self.base_days = base_days
        self.score_max = score_max

    def interval_days(self, score: int | None) -> int:
        clamped = min(max(score or 0, 0), self.score_max)
        return self.base_days * 2 ** (clamped // 2)

    def state_for(self, tutorial: ParsedTutorial, today: date | None = None) -> ReviewState:
        today = today or date.today()
        meta = tutorial.meta
        last_quizzed = meta.last_quizzed_on
        next_review = None
        if last_quizzed is not None:
            next_review = last_quizzed + timedelta(days=self.interval_days(meta.understanding_score))

        return ReviewState(
            identifier=tutorial.identifier,
            title=tutorial.title,
            score=meta.understanding_score,
            last_quizzed=last_quizzed,
            next_review=next_review,
            today=today,
        )

    def due(self, tutorials: Iterable[ParsedTutorial], today: date | None = None) -> list[ReviewState]:
        """
        Tutorials due for review, most urgent first.

        Never-quizzed tutorials lead, then the rest by days overdue and
        lowest score.
        """
        today = today or date.today()
        states = [self.state_for(tutorial, today) for tutorial in tutorials]
        due = [state for state in states if state.is_due]
        due.sort(
            key=lambda s: (
                s.last_quizzed is not None,
                -s.days_overdue,
                s.score if s.score is not None else -1,
                s.identifier,
            )
        )
        logger.debug(f"{len(due)} of {len(states)} tutorials due for review on {today}")
        return due
