"""
Shared CLI plumbing: console, dependency container and error reporting.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

import typer
from loguru import logger
from rich.console import Console
from rich.markup import escape

from rails_tutor.config import Settings, get_settings
from rails_tutor.core.exceptions import TutorError
from rails_tutor.learning.learner_profile import LearnerProfileStore
from rails_tutor.learning.tutorial_store import TutorialStore
from rails_tutor.study.scheduler import ReviewScheduler

console = Console()


class CLIContext:
    """
    Dependency injection container for CLI commands.

    Lazily builds stores from settings so that --help never touches disk.
    """

    def __init__(self, settings: Settings):
        self.settings = settings
        self._store: TutorialStore | None = None
        self._profile: LearnerProfileStore | None = None

    @property
    def store(self) -> TutorialStore:
        if self._store is None:
            self._store = TutorialStore(
                self.settings.tutorials_dir,
                score_min=self.settings.score_min,
                score_max=self.settings.score_max,
            )
        return self._store

    @property
    def profile(self) -> LearnerProfileStore:
        if self._profile is None:
            self._profile = LearnerProfileStore(self.settings.profile_path)
        return self._profile

    @property
    def scheduler(self) -> ReviewScheduler:
        return ReviewScheduler(
            base_days=self.settings.review_base_days,
            score_max=self.settings.score_max,
        )


def get_context(ctx: typer.Context) -> CLIContext:
    root = ctx.find_root()
    if not isinstance(root.obj, CLIContext):
        root.obj = CLIContext(get_settings())
    return root.obj


@contextmanager
def handle_errors() -> Iterator[None]:
    """Report TutorError as a red message and exit code 1."""
    try:
        yield
    except TutorError as e:
        logger.debug(f"Command failed: {e!r}")
        console.print(f"[red]✗ {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e
