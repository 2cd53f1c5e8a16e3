"""
Typer CLI for rails-tutor.

Commands:
    rails-tutor new TOPIC        - Create a tutorial
    rails-tutor ask ID           - Append a Q&A entry
    rails-tutor quiz ID          - Record a quiz and update the score
    rails-tutor path ID          - Show the prerequisite chain of a tutorial
    rails-tutor order            - Show every tutorial in study order
    rails-tutor list             - List tutorials
    rails-tutor show ID          - Show one tutorial
    rails-tutor validate         - Validate every tutorial file
    rails-tutor due              - Show tutorials due for a quiz
    rails-tutor index            - Regenerate the index README
    rails-tutor profile show     - Show the learner profile
    rails-tutor profile add      - Append an interview entry

Usage:
    rails-tutor --help
    rails-tutor --dir notes/tutorials list
    rails-tutor new "ActiveRecord associations" -c has_many -c belongs_to -r basecamp/fizzy
    rails-tutor quiz 15-03-2025-activerecord-associations -s 7 -q "..." -a "..."
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Annotated

import typer
from loguru import logger
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from rails_tutor.adaptive.path_sequencer import PathSequencer
from rails_tutor.cli.context import CLIContext, console, get_context, handle_errors
from rails_tutor.cli.profile import profile_app
from rails_tutor.config import Settings, get_settings
from rails_tutor.core.dates import format_date
from rails_tutor.core.schema_validator import StoreValidator
from rails_tutor.learning.index_writer import write_index

app = typer.Typer(
    name="rails-tutor",
    help="rails-tutor: tutorial notes, Q&A logs and quiz history",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

app.add_typer(profile_app, name="profile")


@app.callback()
def main_callback(
    ctx: typer.Context,
    tutorials_dir: Annotated[
        Path | None, typer.Option("--dir", "-d", help="Tutorials directory")
    ] = None,
    profile_path: Annotated[
        Path | None, typer.Option("--profile", help="Learner profile document")
    ] = None,
) -> None:
    """
    Manage rails-tutor tutorial notes.

    Tutorials are markdown files with YAML front matter. Q&A and quiz
    entries are appended; nothing is ever deleted.
    """
    settings = get_settings()
    overrides = {}
    if tutorials_dir is not None:
        overrides["tutorials_dir"] = tutorials_dir
    if profile_path is not None:
        overrides["profile_path"] = profile_path
    if overrides:
        settings = settings.model_copy(update=overrides)
    ctx.obj = CLIContext(settings)


# ========================================
# Tutorial Commands
# ========================================


@app.command()
def new(
    ctx: typer.Context,
    topic: Annotated[str, typer.Argument(help="Topic taught, e.g. 'ActiveRecord callbacks'")],
    concepts: Annotated[
        list[str] | None, typer.Option("--concept", "-c", help="Concept covered (repeatable)")
    ] = None,
    source_repo: Annotated[
        str, typer.Option("--repo", "-r", help="Repository the examples come from")
    ] = "",
    description: Annotated[
        str, typer.Option("--description", "-m", help="One-line summary")
    ] = "",
    prerequisites: Annotated[
        list[str] | None,
        typer.Option("--prereq", "-p", help="Prerequisite tutorial id (repeatable)"),
    ] = None,
) -> None:
    """Create a new tutorial file."""
    context = get_context(ctx)
    with handle_errors():
        tutorial = context.store.create(
            topic,
            concepts=list(concepts or []),
            source_repo=source_repo,
            description=description,
            prerequisites=list(prerequisites or []),
        )
    console.print(f"[green]✓ Created {escape(tutorial.identifier)}[/green]")
    console.print(f"[dim]{escape(tutorial.source_path)}[/dim]")


@app.command()
def ask(
    ctx: typer.Context,
    identifier: Annotated[str, typer.Argument(help="Tutorial id")],
    question: Annotated[str, typer.Option("--question", "-q", help="Question asked")],
    answer: Annotated[str, typer.Option("--answer", "-a", help="Answer given")],
) -> None:
    """Append a question and its answer to a tutorial's Q&A log."""
    context = get_context(ctx)
    with handle_errors():
        written = context.store.append_qa(identifier, question, answer)
    if written:
        console.print(f"[green]✓ Logged Q&A on {escape(identifier)}[/green]")
    else:
        console.print("[yellow]Already logged, nothing to do[/yellow]")


@app.command()
def quiz(
    ctx: typer.Context,
    identifier: Annotated[str, typer.Argument(help="Tutorial id")],
    score: Annotated[int, typer.Option("--score", "-s", help="Understanding score")],
    questions: Annotated[
        list[str] | None, typer.Option("--question", "-q", help="Quiz question (repeatable)")
    ] = None,
    answers: Annotated[
        list[str] | None,
        typer.Option("--answer", "-a", help="Answer, paired with questions in order"),
    ] = None,
) -> None:
    """Record a quiz attempt and update the understanding score."""
    context = get_context(ctx)
    with handle_errors():
        written = context.store.record_quiz(
            identifier,
            questions=list(questions or []),
            answers=list(answers or []),
            score=score,
        )
    if written:
        console.print(
            f"[green]✓ Recorded quiz on {escape(identifier)}: "
            f"{score}/{context.settings.score_max}[/green]"
        )
    else:
        console.print("[yellow]Already logged, nothing to do[/yellow]")


@app.command()
def path(
    ctx: typer.Context,
    identifier: Annotated[str, typer.Argument(help="Tutorial id")],
    strict: Annotated[
        bool, typer.Option("--strict", help="Fail on unknown prerequisites")
    ] = False,
) -> None:
    """Show a tutorial's prerequisite chain, dependencies first."""
    context = get_context(ctx)
    with handle_errors():
        tutorials = context.store.load_all()
        chain = PathSequencer.from_tutorials(tutorials).prerequisite_chain(
            identifier.removesuffix(".md"), strict=strict
        )

    for step, node in enumerate(chain, start=1):
        tutorial = tutorials[node]
        console.print(f"{step}. {escape(node)}  [dim]{escape(tutorial.title)}[/dim]")


@app.command()
def order(ctx: typer.Context) -> None:
    """Show every tutorial in study order."""
    context = get_context(ctx)
    with handle_errors():
        tutorials = context.store.load_all()
        ordered = PathSequencer.from_tutorials(tutorials).study_order()

    if not ordered:
        console.print("[yellow]No tutorials found[/yellow]")
        return
    for step, node in enumerate(ordered, start=1):
        console.print(f"{step}. {escape(node)}")


@app.command("list")
def list_tutorials(ctx: typer.Context) -> None:
    """List tutorials with their scores."""
    context = get_context(ctx)
    tutorials = context.store.load_all()

    if not tutorials:
        console.print("[yellow]No tutorials found[/yellow]")
        return

    table = Table(title=f"Tutorials ({len(tutorials)})")
    table.add_column("Id", style="cyan")
    table.add_column("Concepts")
    table.add_column("Score", justify="right")
    table.add_column("Last quizzed")

    for identifier, tutorial in sorted(tutorials.items()):
        meta = tutorial.meta
        score = "-" if meta.understanding_score is None else str(meta.understanding_score)
        table.add_row(escape(identifier), escape(", ".join(meta.concepts)), score, meta.last_quizzed or "never")

    console.print(table)


@app.command()
def show(
    ctx: typer.Context,
    identifier: Annotated[str, typer.Argument(help="Tutorial id")],
) -> None:
    """Show a tutorial's metadata and log sizes."""
    context = get_context(ctx)
    with handle_errors():
        tutorial = context.store.get(identifier)

    meta = tutorial.meta
    score = "-"
    if meta.understanding_score is not None:
        score = f"{meta.understanding_score}/{context.settings.score_max}"
    console.print(
        Panel(
            f"[bold]{escape(tutorial.title)}[/bold]\n"
            f"{escape(meta.description)}\n\n"
            f"Concepts: {escape(', '.join(meta.concepts)) or '-'}\n"
            f"Source repo: {escape(meta.source_repo) or '-'}\n"
            f"Prerequisites: {escape(', '.join(meta.prerequisites)) or '-'}\n"
            f"Score: {score}\n"
            f"Created: {meta.created}  Updated: {meta.last_updated}  "
            f"Quizzed: {meta.last_quizzed or 'never'}\n"
            f"Q&A entries: {len(tutorial.qa_entries)}  Quizzes: {len(tutorial.quiz_entries)}",
            title=escape(tutorial.identifier),
            border_style="cyan",
        )
    )


@app.command()
def validate(ctx: typer.Context) -> None:
    """Validate every tutorial file; exits 1 when errors are found."""
    context = get_context(ctx)
    report = StoreValidator(context.store).validate()

    if report.issues:
        table = Table(title="Validation Issues")
        table.add_column("Tutorial", style="cyan")
        table.add_column("Severity")
        table.add_column("Issue")
        for issue in report.issues:
            colour = "red" if issue.severity == "error" else "yellow"
            table.add_row(escape(issue.identifier), f"[{colour}]{issue.severity}[/{colour}]", escape(issue.message))
        console.print(table)

    console.print(
        f"Checked {report.checked} tutorials: "
        f"{len(report.errors)} errors, {len(report.warnings)} warnings"
    )
    if report.has_errors:
        raise typer.Exit(code=1)


@app.command()
def due(ctx: typer.Context) -> None:
    """Show tutorials due for another quiz."""
    context = get_context(ctx)
    states = context.scheduler.due(context.store.iter_tutorials())

    if not states:
        console.print("[green]Nothing due. Great job![/green]")
        return

    table = Table(title=f"Due for review ({len(states)})")
    table.add_column("Id", style="cyan")
    table.add_column("Score", justify="right")
    table.add_column("Last quizzed")
    table.add_column("Overdue", justify="right")
    for state in states:
        table.add_row(
            escape(state.identifier),
            "-" if state.score is None else str(state.score),
            format_date(state.last_quizzed) if state.last_quizzed else "never",
            f"{state.days_overdue}d",
        )
    console.print(table)


@app.command()
def index(
    ctx: typer.Context,
    output: Annotated[
        Path | None, typer.Option("--output", "-o", help="Index file to write")
    ] = None,
) -> None:
    """Regenerate the index README."""
    context = get_context(ctx)
    settings = context.settings
    written = write_index(
        context.store.load_all(),
        tutorials_dir=settings.tutorials_dir,
        profile_path=settings.profile_path,
        index_path=output or settings.index_path,
        score_max=settings.score_max,
    )
    console.print(f"[green]✓ Wrote {escape(str(written))}[/green]")


# ========================================
# Entry Point
# ========================================


def configure_logging(settings: Settings) -> None:
    logger.remove()
    logger.add(
        sys.stderr,
        level=settings.log_level,
        format="<level>{message}</level>",
    )
    if settings.log_file:
        logger.add(
            settings.log_file,
            level="DEBUG",
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function} - {message}",
        )


def main() -> None:
    """CLI entry point."""
    configure_logging(get_settings())
    app()


if __name__ == "__main__":
    main()
