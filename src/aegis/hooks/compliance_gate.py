"""Pre-commit compliance gate hook.

Runs when a shell tool call is about to execute ``git commit``. Staged
files are scanned for secrets and regulated identifiers; critical findings
block the commit. Sensitive file names and a stale audit trail only warn.
"""

import logging
import re
import subprocess
from collections.abc import Sequence
from datetime import UTC, datetime, timedelta
from pathlib import Path
from typing import Protocol

from pydantic import BaseModel, ConfigDict

from aegis.config import EngineConfiguration
from aegis.errors import AegisError
from aegis.hooks.protocol import ALLOW, BLOCK, HookOutcome, fail_open, parse_invocation
from aegis.pii.detector import line_and_column
from aegis.reference.base import Severity
from aegis.reference.pii_patterns import SecretPatternLibrary, default_secret_library

logger = logging.getLogger(__name__)

BINARY_FILE = re.compile(r"\.(png|jpg|gif|ico|woff|ttf|pdf)$", re.IGNORECASE)
SENSITIVE_FILE_PATTERNS = tuple(
    re.compile(pattern)
    for pattern in (
        r"\.env",
        r"config\.(json|yaml|yml|toml)",
        r"credentials",
        r"secrets",
        r"\.pem$",
        r"\.key$",
    )
)
SNIPPET_LENGTH = 20


class StagingArea(Protocol):
    """Source of staged file names and contents."""

    def staged_files(self) -> list[str]:
        """Paths of files staged for commit."""
        ...

    def staged_content(self, path: str) -> str | None:
        """Staged content of a file, or None when unavailable."""
        ...


class GitStagingArea:
    """Reads the git index through the ``git`` executable."""

    def __init__(self, repository: Path | None = None) -> None:
        """Initialise with the repository directory (the cwd when None)."""
        self._repository = repository

    def _git(self, *args: str) -> str | None:
        try:
            completed = subprocess.run(
                ["git", *args],
                cwd=self._repository,
                capture_output=True,
                text=True,
                errors="replace",
                check=True,
            )
        except (OSError, subprocess.CalledProcessError) as e:
            logger.warning("git %s failed: %s", " ".join(args), e)
            return None
        return completed.stdout

    def staged_files(self) -> list[str]:
        """Paths of files staged for commit."""
        output = self._git("diff", "--cached", "--name-only")
        if not output:
            return []
        return [line for line in output.strip().splitlines() if line]

    def staged_content(self, path: str) -> str | None:
        """Staged content of a file, or None when unavailable."""
        return self._git("show", f":{path}")


class SecretFinding(BaseModel):
    """A secret or regulated identifier in a staged file."""

    model_config = ConfigDict(frozen=True)

    file: str
    line: int
    type: str
    description: str
    severity: Severity
    snippet: str


def scan_staged_content(
    path: str, content: str, library: SecretPatternLibrary
) -> list[SecretFinding]:
    """Scan one staged file, reporting truncated snippets of each match."""
    findings: list[SecretFinding] = []
    for pattern in library.patterns:
        for match in pattern.compiled.finditer(content):
            line, _ = line_and_column(content, match.start())
            findings.append(
                SecretFinding(
                    file=path,
                    line=line,
                    type=pattern.type,
                    description=pattern.description,
                    severity=pattern.severity,
                    snippet=match.group(0)[:SNIPPET_LENGTH] + "...",
                )
            )
    return findings


def is_sensitive_file(path: str) -> bool:
    """Whether a file name suggests secrets or configuration."""
    return any(pattern.search(path) for pattern in SENSITIVE_FILE_PATTERNS)


def audit_trail_warning(
    path: Path | None, max_age_minutes: int, now: datetime | None = None
) -> str | None:
    """Warning when the audit trail is missing or stale; None when fresh.

    No check is made when no audit trail path is configured.
    """
    if path is None:
        return None
    if not path.is_file():
        return "Audit trail file not found - ensure audit logging is configured"
    now = now or datetime.now(UTC)
    modified = datetime.fromtimestamp(path.stat().st_mtime, UTC)
    if modified < now - timedelta(minutes=max_age_minutes):
        return f"Audit trail has not been updated in over {max_age_minutes} minutes"
    return None


def _blocked_notes(critical: Sequence[SecretFinding]) -> tuple[str, ...]:
    notes = ["COMMIT BLOCKED: Sensitive data detected"]
    for finding in critical:
        notes.append(f"[CRITICAL] {finding.description}")
        notes.append(f"   File: {finding.file}:{finding.line}")
        notes.append(f"   Found: {finding.snippet}")
    notes.extend(
        (
            "Action Required:",
            "1. Remove sensitive data from staged files",
            "2. Use environment variables or secret managers",
            "3. Add sensitive files to .gitignore",
        )
    )
    return tuple(notes)


def _warning_notes(
    warnings: Sequence[str], findings: Sequence[SecretFinding]
) -> tuple[str, ...]:
    notes: list[str] = []
    if warnings or findings:
        notes.append("COMPLIANCE WARNINGS:")
        notes.extend(warnings)
        notes.extend(
            f"[{f.severity.upper()}] {f.description} in {f.file}:{f.line}"
            for f in findings
        )
    notes.append("Compliance checks passed")
    return tuple(notes)


def run_compliance_gate(
    raw_input: str,
    staging: StagingArea | None = None,
    library: SecretPatternLibrary | None = None,
    config: EngineConfiguration | None = None,
    now: datetime | None = None,
) -> HookOutcome:
    """Judge a shell command given as raw hook JSON.

    Commands other than ``git commit`` are allowed without output. Fails
    open on malformed input.
    """
    try:
        invocation = parse_invocation(raw_input)
    except AegisError as e:
        logger.warning("Compliance gate allowed the call after an error: %s", e)
        return fail_open("Compliance Gate", e)

    command = invocation.arguments.get("command")
    if not isinstance(command, str) or "git commit" not in command:
        return HookOutcome(ALLOW)

    staging = staging or GitStagingArea()
    library = library or default_secret_library()
    config = config or EngineConfiguration()

    findings: list[SecretFinding] = []
    warnings: list[str] = []
    for path in staging.staged_files():
        if BINARY_FILE.search(path):
            continue
        content = staging.staged_content(path)
        if not content:
            continue
        findings.extend(scan_staged_content(path, content, library))
        if is_sensitive_file(path):
            warnings.append(f"Committing potentially sensitive file: {path}")

    audit_warning = audit_trail_warning(
        config.audit_trail_path, config.audit_trail_max_age_minutes, now
    )
    if audit_warning:
        warnings.append(audit_warning)

    critical = [f for f in findings if f.severity == "critical"]
    if critical:
        logger.info(
            "Compliance gate blocked commit: %d critical finding(s)", len(critical)
        )
        return HookOutcome(
            BLOCK,
            {
                "status": "blocked",
                "reason": "Sensitive data detected in staged files",
                "findings": len(critical),
            },
            _blocked_notes(critical),
        )

    return HookOutcome(
        ALLOW,
        {
            "status": "pass",
            "warnings": len(warnings) + len(findings),
            "message": "Commit allowed",
        },
        _warning_notes(warnings, findings),
    )
