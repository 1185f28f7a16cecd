"""Shared command options and coloured console output."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TextIO

import click


class CommandError(Exception):
    """Raised when a command cannot complete; the message is shown to the user."""


@dataclass
class Options:
    """Flags shared by every command."""

    config_path: str = ""
    dry_run: bool = False
    verbose: bool = False
    force: bool = False


@dataclass
class Console:
    """Writes progress messages; informational lines appear only when verbose."""

    verbose: bool = False
    stream: TextIO | None = None

    def _emit(self, message: str, colour: str | None = None) -> None:
        click.secho(message, fg=colour, file=self.stream)

    def info(self, message: str) -> None:
        """Print an informational line in verbose mode."""
        if self.verbose:
            self._emit(message, "blue")

    def success(self, message: str) -> None:
        """Print a line marking something that worked."""
        self._emit("✓ " + message, "green")

    def warning(self, message: str) -> None:
        """Print a line warning about something that went wrong but is not fatal."""
        self._emit("⚠ " + message, "yellow")

    def step(self, step: int, total: int, description: str) -> None:
        """Print a numbered progress step."""
        self._emit(f"[{step}/{total}] {description}")