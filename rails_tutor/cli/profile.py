"""Learner profile commands (`rails-tutor profile ...`)."""

from __future__ import annotations

from typing import Annotated

import typer
from rich.markup import escape
from rich.panel import Panel

from rails_tutor.cli.context import console, get_context, handle_errors

profile_app = typer.Typer(help="Learner profile interviews", no_args_is_help=True)


@profile_app.command("show")
def show_profile(ctx: typer.Context) -> None:
    """Show every interview session in the learner profile."""
    context = get_context(ctx)
    with handle_errors():
        profile = context.profile.load()

    if not profile.sessions:
        console.print(f"[yellow]No interviews recorded in {profile.path}[/yellow]")
        return

    for session in profile.sessions:
        lines = []
        for entry in session.entries:
            lines.append(f"[bold]Q:[/bold] {escape(entry.question)}")
            lines.append(f"[bold]A:[/bold] {escape(entry.answer)}")
            if entry.note:
                lines.append(f"[dim]Teaching note: {escape(entry.note)}[/dim]")
            lines.append("")
        console.print(
            Panel("\n".join(lines).rstrip(), title=f"Interview {session.held_on}", border_style="cyan")
        )


@profile_app.command("add")
def add_entry(
    ctx: typer.Context,
    question: Annotated[str, typer.Option("--question", "-q", help="Interview question")],
    answer: Annotated[str, typer.Option("--answer", "-a", help="Learner's answer")],
    note: Annotated[
        str | None, typer.Option("--note", "-n", help="Teaching note for future tutorials")
    ] = None,
) -> None:
    """Append an interview Q&A pair to today's session."""
    context = get_context(ctx)
    with handle_errors():
        written = context.profile.append(question, answer, note=note)
    if written:
        console.print(f"[green]✓ Added to {context.profile.path}[/green]")
    else:
        console.print("[yellow]Already recorded, nothing to do[/yellow]")
