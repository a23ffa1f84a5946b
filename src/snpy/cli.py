"""CLI commands."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Annotated

import typer
from rich.console import Console
from rich.markup import escape

if TYPE_CHECKING:
    from snpy.session import Snpy

app = typer.Typer(
    name="snpy",
    help="Interactive terminal prompts for generating template files.",
    no_args_is_help=True,
)
console = Console()

FRAMEWORKS = [
    "React",
    "Vue",
    "Angular",
    "Svelte",
    "MySQL",
    "PostgreSQL",
    "MongoDB",
    "Redis",
    "Authentication",
    "API Integration",
    "File Upload",
    "Real-time Updates",
]
DATABASES = ["MySQL", "PostgreSQL", "MongoDB", "Redis"]
FEATURES = ["Authentication", "API Integration", "File Upload", "Real-time Updates"]


def _get_session() -> Snpy:
    """Lazy import and create a session on the real terminal."""
    from snpy.session import Snpy

    return Snpy()


def component_template(component_name: str) -> str:
    return f"<template>\n    {component_name}\n</template>\n"


def run_demo(snpy: Snpy) -> str | None:
    """Ask the generator questions and write the component file.

    Returns:
        Path of the written file, or None if nothing was written
    """
    from snpy.models import (
        CheckboxPrompt,
        ConfirmPrompt,
        DirectoryPrompt,
        InputPrompt,
        ListPrompt,
    )

    snpy.add_option(InputPrompt("component_name", "Enter component name", "Component"))
    snpy.add_option(DirectoryPrompt("target_dir", "Choose target directory", "."))
    snpy.add_option(ListPrompt("framework", "Choose a framework:", FRAMEWORKS))
    snpy.add_option(ListPrompt("database", "Choose a database:", DATABASES, numbered=True))
    snpy.add_option(CheckboxPrompt("features", "Select features to include:", FEATURES))
    snpy.add_option(InputPrompt("project_name", "Enter your project name", "my-awesome-project"))
    snpy.add_option(ConfirmPrompt("typescript", "Would you like to use TypeScript?", True))
    snpy.add_option(ConfirmPrompt("confirmation", "Do you want to proceed with these settings?"))
    answers = snpy.process()

    for key, value in answers.items():
        snpy.log_value(key, value)

    if not answers["confirmation"]:
        snpy.log_hint("Nothing written.")
        return None

    component_name = answers["component_name"]
    extension = "ts" if answers["typescript"] else "js"
    written = snpy.make_template(
        dir=answers["target_dir"],
        file_name=f"{component_name}.{extension}",
        code=component_template(component_name),
    )
    if written:
        snpy.log_success(f"Created {written}")
    return written


@app.callback()
def main(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log debug output")] = False,
):
    """Interactive terminal prompts for generating template files."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")


def _run_in_session(callback):
    """Run ``callback`` in a session, mapping Ctrl+C and usage errors to exit codes."""
    from snpy.errors import SnpyError

    try:
        with _get_session() as snpy:
            return callback(snpy)
    except KeyboardInterrupt:
        raise typer.Exit(130)
    except SnpyError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)


@app.command()
def demo():
    """Walk through every prompt type and generate a component file."""
    _run_in_session(run_demo)


@app.command()
def browse(
    base: Annotated[str, typer.Option("--base", "-b", help="Directory to start in")] = ".",
    message: Annotated[
        str, typer.Option("--message", "-m", help="Question to show")
    ] = "Choose a directory",
):
    """Pick a directory interactively and print it."""
    from snpy.models import DirectoryPrompt

    path = _run_in_session(lambda snpy: snpy.run(DirectoryPrompt("directory", message, base)))
    console.print(path, markup=False, highlight=False, soft_wrap=True)


@app.command(name="config")
def config_command(
    key: Annotated[str | None, typer.Argument(help="Setting to change")] = None,
    value: Annotated[str | None, typer.Argument(help="New value")] = None,
):
    """Show effective settings, or change one with KEY VALUE."""
    from snpy.config import Config
    from snpy.errors import ConfigError

    if key is not None and value is None:
        console.print("[red]Error:[/red] Missing value for " + escape(key))
        raise typer.Exit(1)

    try:
        cfg = Config.load()
        if key is not None:
            stored = cfg.set(key, value)
            console.print(f"[green]{escape(key)}[/green] = {escape(repr(stored))}")
            return
    except ConfigError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    console.print(f"[dim]{cfg.config_file}[/dim]")
    for name, desc, current in cfg.get_settings():
        console.print(f"  [yellow]{name}[/yellow] = [green]{current}[/green]  [dim]{desc}[/dim]")
