"""How Aegis commands fail: a red panel on stderr and exit status 1.

stdout stays reserved for reports and JSON, so nothing here writes to it.
"""

from __future__ import annotations

import logging
from collections.abc import Generator
from contextlib import contextmanager
from typing import override

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

logger = logging.getLogger(__name__)
console = Console(stderr=True)


class CLIError(Exception):
    """Raised by a command for a user-facing failure such as a missing target.

    ``str()`` reads ``aegis <command>: <message>`` when a command is set.
    """

    def __init__(
        self,
        message: str,
        command: str | None = None,
        original_error: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.command = command
        self.original_error = original_error

    @override
    def __str__(self) -> str:
        message = super().__str__()
        if self.command:
            return f"aegis {self.command}: {message}"
        return message


def _report(title: str, error: CLIError) -> None:
    logger.error("%s: %s", title, error)
    console.print(
        Panel(f"[red]{escape(str(error))}[/red]", title=title, border_style="red")
    )


@contextmanager
def cli_error_handler(command: str, title: str) -> Generator[None]:
    """Report whatever escapes a command body under ``title`` and exit 1.

    Unexpected exceptions, e.g. a pydantic ``ValidationError`` from a bad
    credential file, are first wrapped in a CLIError tagged with ``command``.
    An explicit ``typer.Exit`` from the body keeps its own status.
    """
    try:
        yield
    except typer.Exit:
        raise
    except CLIError as e:
        _report(title, e)
        raise typer.Exit(1) from e
    except Exception as e:
        wrapped = CLIError(str(e), command=command, original_error=e)
        _report(title, wrapped)
        raise typer.Exit(1) from wrapped
