"""CLI command implementations for agent tool hooks.

Hooks read one JSON tool invocation from stdin. A JSON decision, when there
is one, goes to stdout and human-readable notes go to stderr. The exit
status is 0 to allow the call and 1 to block it.
"""

from __future__ import annotations

import json
import logging
import sys

import typer
from rich.console import Console

from aegis.config import EngineConfiguration
from aegis.hooks.compliance_gate import run_compliance_gate
from aegis.hooks.pii_scanner import run_pii_scan
from aegis.hooks.protocol import HookOutcome
from aegis.logging import setup_logging

logger = logging.getLogger(__name__)
notes_console = Console(stderr=True)


def emit_outcome(outcome: HookOutcome) -> None:
    """Write a hook outcome and exit with its status."""
    for note in outcome.notes:
        notes_console.print(note, markup=False, highlight=False)
    if outcome.payload is not None:
        typer.echo(json.dumps(outcome.payload))
    raise typer.Exit(outcome.exit_code)


def pii_scan_hook_command(log_level: str = "WARNING") -> None:
    """CLI command implementation for the edit-time PII scanner hook.

    Args:
        log_level: Logging level

    """
    setup_logging(level=log_level)
    outcome = run_pii_scan(sys.stdin.read())
    logger.debug("PII scan hook exit code %d", outcome.exit_code)
    emit_outcome(outcome)


def compliance_gate_hook_command(log_level: str = "WARNING") -> None:
    """CLI command implementation for the pre-commit compliance gate hook.

    Args:
        log_level: Logging level

    """
    setup_logging(level=log_level)
    outcome = run_compliance_gate(
        sys.stdin.read(), config=EngineConfiguration.from_environment()
    )
    logger.debug("Compliance gate hook exit code %d", outcome.exit_code)
    emit_outcome(outcome)
