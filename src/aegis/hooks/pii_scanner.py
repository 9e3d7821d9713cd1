"""Edit-time PII scanner hook.

Scans the text an ``Edit`` or ``Write`` tool call is about to write and
blocks the call when PII is found.
"""

import logging
from typing import Any

from aegis.errors import AegisError
from aegis.hooks.protocol import (
    ALLOW,
    BLOCK,
    HookOutcome,
    ToolInvocation,
    fail_open,
    parse_invocation,
)
from aegis.pii.detector import PIIDetector
from aegis.pii.types import DetectOptions, PIIMatch

logger = logging.getLogger(__name__)

HOOK_PATTERN_TYPES = (
    "ssn",
    "credit_card",
    "email",
    "phone",
    "api_key",
    "password",
    "iban",
)
RECOMMENDATION = (
    "Remove or redact PII before proceeding. Use tokenization or environment "
    "variables for sensitive data."
)


def content_to_scan(invocation: ToolInvocation) -> str:
    """Text the tool call would write, or an empty string."""
    if invocation.tool == "Edit":
        value = invocation.arguments.get("new_string")
    elif invocation.tool == "Write":
        value = invocation.arguments.get("content")
    else:
        value = None
    return value if isinstance(value, str) else ""


def _finding(match: PIIMatch) -> dict[str, Any]:
    return {
        "type": match.type,
        "description": match.description,
        "severity": match.severity,
        "line": match.location.line,
        "detected": match.redacted_value,
        "suggestion": f"Replace with: {match.redacted_value}",
    }


def _notes(matches: tuple[PIIMatch, ...]) -> tuple[str, ...]:
    notes = ["PII SCANNER: Content blocked", f"Found {len(matches)} PII item(s):"]
    for match in matches:
        notes.append(f"[{match.severity.upper()}] {match.type}")
        notes.append(f"   Detected: {match.redacted_value}")
        notes.append(f"   {match.description}")
    notes.append("Recommendation: Remove or redact PII before writing to files.")
    notes.append("Use environment variables or secret managers for sensitive data.")
    return tuple(notes)


def run_pii_scan(raw_input: str, detector: PIIDetector | None = None) -> HookOutcome:
    """Judge a tool invocation given as raw JSON.

    Fails open: malformed input or an oversized payload allows the call and
    logs a warning.
    """
    try:
        invocation = parse_invocation(raw_input)
        content = content_to_scan(invocation)
        if not content:
            return HookOutcome(ALLOW)

        detector = detector or PIIDetector()
        result = detector.detect(
            content, DetectOptions(pattern_types=HOOK_PATTERN_TYPES)
        )
    except AegisError as e:
        logger.warning("PII scanner allowed the call after an error: %s", e)
        return fail_open("PII Scanner", e)

    if not result.has_pii:
        return HookOutcome(ALLOW, {"status": "pass", "message": "No PII detected"})

    counts = result.matches_by_severity
    logger.info(
        "PII scanner blocked %s: %d item(s)", invocation.tool, result.total_matches
    )
    report = {
        "status": "blocked",
        "message": f"PII detected: {result.total_matches} item(s) found",
        "summary": {
            "total": result.total_matches,
            "critical": counts.critical,
            "high": counts.high,
            "medium": counts.medium + counts.low,
        },
        "findings": [_finding(match) for match in result.matches],
        "recommendation": RECOMMENDATION,
    }
    return HookOutcome(BLOCK, report, _notes(result.matches))
