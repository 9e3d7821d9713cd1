"""Framing shared by the process-boundary hooks.

A hook reads one JSON object from stdin and answers with one JSON object on
stdout plus an exit code: ``0`` allows the tool invocation, ``1`` blocks it.
Human-readable notes go to stderr.
"""

from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError

from aegis.errors import HookError

ALLOW = 0
BLOCK = 1


class ToolInvocation(BaseModel):
    """The tool call a hook is asked to judge."""

    model_config = ConfigDict(frozen=True, extra="allow")

    tool: str | None = None
    arguments: dict[str, Any] = {}


@dataclass(frozen=True, slots=True)
class HookOutcome:
    """Decision of a hook.

    Attributes:
        exit_code: ALLOW or BLOCK
        payload: JSON object for stdout, or None to print nothing
        notes: Lines for stderr

    """

    exit_code: int
    payload: dict[str, Any] | None = None
    notes: tuple[str, ...] = field(default=())

    @property
    def blocked(self) -> bool:
        """Whether the invocation is blocked."""
        return self.exit_code == BLOCK


def parse_invocation(raw: str) -> ToolInvocation:
    """Parse hook input.

    Raises:
        HookError: If the input is not a JSON object of the expected shape

    """
    try:
        return ToolInvocation.model_validate_json(raw)
    except ValidationError as e:
        raise HookError(f"Invalid hook input: {e}") from e


def fail_open(hook_name: str, error: Exception) -> HookOutcome:
    """Allow the invocation after an internal hook failure."""
    return HookOutcome(ALLOW, notes=(f"{hook_name} error: {error}",))
