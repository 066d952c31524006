"""
Click-backed prompter and progress reporter for the init command.

Cancelling a prompt (Ctrl-C or end of input) ends the process with
status 1 on the spot. No partial configuration survives and nothing
has been written yet at that point.
"""

from __future__ import annotations

import sys
from collections.abc import Sequence
from typing import TypeVar

import click

T = TypeVar("T")


class ClickPrompter:
    """Ask questions on the terminal."""

    def confirm(self, message: str, default: bool) -> bool:
        try:
            return click.confirm(message, default=default)
        except click.Abort:
            sys.exit(1)

    def select(self, message: str, choices: Sequence[tuple[str, T]], default: int = 0) -> T:
        titles = [title for title, _ in choices]
        by_title = {title.lower(): value for title, value in choices}
        try:
            answer = click.prompt(
                message,
                type=click.Choice(titles, case_sensitive=False),
                default=titles[default],
                show_choices=True,
            )
        except click.Abort:
            sys.exit(1)
        return by_title[str(answer).lower()]


class ClickReporter:
    """Print each step label, then its duration on the same line."""

    def step_started(self, label: str) -> None:
        click.echo(label, nl=False)

    def step_finished(self, label: str, elapsed_ms: int) -> None:
        click.secho(f" ({elapsed_ms} ms)", fg="bright_black")

    def step_failed(self, label: str, elapsed_ms: int) -> None:
        click.secho(" failed", fg="red")
