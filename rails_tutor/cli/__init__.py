"""CLI: Typer application and subcommands."""
