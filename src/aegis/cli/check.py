"""CLI command implementations for compliance checks and PII scans."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, get_args

import typer

from aegis.cli.errors import CLIError, cli_error_handler
from aegis.cli.formatting import OutputFormatter
from aegis.compliance.engine import ComplianceRuleEngine, overall_status
from aegis.compliance.types import ComplianceContentType, Finding
from aegis.config import EngineConfiguration
from aegis.errors import ContentTooLargeError
from aegis.logging import setup_logging
from aegis.pii.detector import PIIDetector
from aegis.pii.types import ContentType, DetectOptions

logger = logging.getLogger(__name__)

SCANNABLE_EXTENSIONS = frozenset(
    {".py", ".ts", ".js", ".json", ".yaml", ".yml", ".md", ".txt"}
)
_CODE_EXTENSIONS = frozenset({".py", ".ts", ".js"})
_CONFIG_EXTENSIONS = frozenset({".json", ".yaml", ".yml"})
OUTPUT_FORMATS = ("table", "json")


def pii_content_type(path: Path) -> ContentType:
    """PII content type implied by a file extension."""
    suffix = path.suffix.lower()
    if suffix in _CODE_EXTENSIONS:
        return "code"
    if suffix in _CONFIG_EXTENSIONS:
        return "config"
    if suffix == ".log":
        return "log"
    return "text"


def compliance_content_type(path: Path) -> ComplianceContentType:
    """Rule engine content type implied by a file extension."""
    suffix = path.suffix.lower()
    if suffix in _CODE_EXTENSIONS:
        return "code"
    if suffix in _CONFIG_EXTENSIONS:
        return "config"
    return "document"


def collect_files(target: Path) -> list[Path]:
    """Files to check: the target itself, or the scannable files directly in it.

    Raises:
        CLIError: If the target does not exist

    """
    if target.is_file():
        return [target]
    if target.is_dir():
        return sorted(
            path
            for path in target.iterdir()
            if path.is_file() and path.suffix.lower() in SCANNABLE_EXTENSIONS
        )
    raise CLIError(f"Target not found: {target}", command="check")


def parse_frameworks(frameworks: str | None) -> list[str] | None:
    """Split a comma-separated framework list; None selects every framework."""
    if frameworks is None:
        return None
    selected = [item.strip() for item in frameworks.split(",") if item.strip()]
    return selected or None


def validate_output(output: str, command: str) -> str:
    output = output.lower()
    if output not in OUTPUT_FORMATS:
        raise CLIError(
            f"Unknown output format '{output}'. Use one of: {', '.join(OUTPUT_FORMATS)}",
            command=command,
        )
    return output


def _check_files(
    files: list[Path], frameworks: list[str] | None, output: str
) -> tuple[list[dict[str, Any]], list[Finding], int]:
    config = EngineConfiguration.from_environment()
    detector = PIIDetector(config=config)
    engine = ComplianceRuleEngine()
    formatter = OutputFormatter()

    reports: list[dict[str, Any]] = []
    findings: list[Finding] = []
    critical_pii = 0
    for path in files:
        content = path.read_text(encoding="utf-8", errors="replace")
        try:
            pii = detector.detect(
                content, DetectOptions(content_type=pii_content_type(path))
            )
        except ContentTooLargeError as e:
            logger.warning("Skipping %s: %s", path, e)
            continue

        evaluation = engine.evaluate(
            content, frameworks, content_type=compliance_content_type(path)
        )
        findings.extend(evaluation.findings)
        critical_pii += pii.matches_by_severity.critical
        logger.info(
            "Checked %s: %d PII item(s), status %s",
            path,
            pii.total_matches,
            evaluation.overall_status,
        )

        if output == "table":
            formatter.format_pii_matches(pii.matches, title=f"PII Detection: {path}")
            formatter.format_findings(evaluation.findings, title=f"Compliance: {path}")
        reports.append(
            {
                "file": str(path),
                "pii": pii.model_dump(mode="json"),
                "compliance": evaluation.model_dump(mode="json"),
            }
        )
    return reports, findings, critical_pii


def check_command(
    target: Path,
    frameworks: str | None = None,
    output: str = "table",
    strict: bool = False,
    log_level: str = "INFO",
) -> None:
    """CLI command implementation for checking files against frameworks.

    Args:
        target: File or directory to check
        frameworks: Comma-separated framework ids; every framework when None
        output: Output format, ``table`` or ``json``
        strict: Exit with status 1 on non-compliance or critical PII
        log_level: Logging level

    """
    setup_logging(level=log_level)
    with cli_error_handler("check", "Compliance check failed"):
        output = validate_output(output, "check")
        files = collect_files(target)
        if not files:
            raise CLIError(f"No scannable files found in {target}", command="check")

        selected = parse_frameworks(frameworks)
        reports, findings, critical_pii = _check_files(files, selected, output)
        status = overall_status(findings)
        pii_total = sum(report["pii"]["total_matches"] for report in reports)

        if output == "json":
            typer.echo(
                json.dumps(
                    {
                        "target": str(target),
                        "overall_status": status,
                        "files": reports,
                    },
                    indent=2,
                )
            )
        else:
            OutputFormatter().format_check_summary(
                len(reports), pii_total, findings, status
            )

        if strict and (status == "non_compliant" or critical_pii):
            logger.info(
                "Strict mode: failing on %s with %d critical PII", status, critical_pii
            )
            raise typer.Exit(1)


def scan_command(
    file: Path,
    content_type: str | None = None,
    redact: bool = False,
    log_level: str = "INFO",
) -> None:
    """CLI command implementation for scanning one file for PII.

    Args:
        file: File to scan
        content_type: Content type; inferred from the extension when None
        redact: Print the redacted content
        log_level: Logging level

    """
    setup_logging(level=log_level)
    with cli_error_handler("scan", "PII scan failed"):
        if content_type is None:
            resolved = pii_content_type(file)
        elif content_type in get_args(ContentType):
            resolved = content_type
        else:
            raise CLIError(
                f"Unknown content type '{content_type}'. "
                f"Use one of: {', '.join(get_args(ContentType))}",
                command="scan",
            )

        detector = PIIDetector(config=EngineConfiguration.from_environment())
        content = file.read_text(encoding="utf-8", errors="replace")
        result = detector.detect(
            content, DetectOptions(content_type=resolved, redact_matches=redact)
        )
        logger.info("Scanned %s: %d PII item(s)", file, result.total_matches)
        OutputFormatter().format_pii_result(str(file), result)
