"""Output formatting for Aegis CLI commands."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from aegis.compliance.types import Finding, FindingStatus
from aegis.credentials.types import ValidationResult
from aegis.pii.types import PIIDetectResult, PIIMatch
from aegis.reference.regulations import CatalogSummary
from aegis.risk.types import RiskAssessmentResult

logger = logging.getLogger(__name__)
console = Console()

SEVERITY_STYLES = {
    "critical": "bold red",
    "high": "red",
    "medium": "yellow",
    "low": "green",
}
STATUS_TEXT: dict[FindingStatus, str] = {
    "compliant": "[green]Compliant[/green]",
    "non_compliant": "[red]Non-compliant[/red]",
    "needs_review": "[yellow]Needs review[/yellow]",
}
MAX_PII_ROWS = 10


def severity_text(severity: str) -> str:
    """Severity wrapped in its colour markup."""
    style = SEVERITY_STYLES.get(severity, "white")
    return f"[{style}]{severity.upper()}[/{style}]"


class OutputFormatter:
    """Handles formatting CLI output for different commands."""

    def format_pii_matches(
        self, matches: Sequence[PIIMatch], title: str = "PII Detection"
    ) -> None:
        """Print a table of PII matches, truncated to the first ten rows.

        Args:
            matches: Matches to show, in scan order.
            title: Table title.

        """
        if not matches:
            console.print(f"[green]{title}: no PII detected[/green]")
            return

        table = Table(title=title, show_header=True, header_style="bold magenta")
        table.add_column("Type", style="cyan", no_wrap=True)
        table.add_column("Severity")
        table.add_column("Location", style="blue")
        table.add_column("Value")
        for match in matches[:MAX_PII_ROWS]:
            location = match.location
            where = (
                f"{location.line}:{location.column}"
                if location.line is not None
                else str(location.start)
            )
            table.add_row(
                match.type,
                severity_text(match.severity),
                where,
                escape(match.redacted_value),
            )
        console.print(table)
        if len(matches) > MAX_PII_ROWS:
            console.print(f"[dim]... and {len(matches) - MAX_PII_ROWS} more[/dim]")

    def format_pii_result(self, source: str, result: PIIDetectResult) -> None:
        """Print a PII scan of one file with its recommendations."""
        self.format_pii_matches(result.matches, title=f"PII Detection: {source}")
        counts = result.matches_by_severity
        console.print(
            f"Critical: {counts.critical}  High: {counts.high}  "
            f"Medium: {counts.medium}  Low: {counts.low}"
        )
        self._print_list("Recommendations", result.recommendations)
        if result.redacted_content is not None:
            console.print(
                Panel(
                    escape(result.redacted_content),
                    title="Redacted content",
                    border_style="blue",
                )
            )

    def format_findings(self, findings: Sequence[Finding], title: str) -> None:
        """Print compliance findings that are not compliant."""
        open_findings = [f for f in findings if f.status != "compliant"]
        if not open_findings:
            console.print(f"[green]{title}: no compliance issues found[/green]")
            return

        table = Table(title=title, show_header=True, header_style="bold magenta")
        table.add_column("ID", style="cyan", no_wrap=True)
        table.add_column("Framework")
        table.add_column("Severity")
        table.add_column("Status")
        table.add_column("Details")
        for finding in open_findings:
            table.add_row(
                finding.id,
                finding.framework,
                severity_text(finding.severity),
                STATUS_TEXT[finding.status],
                escape(finding.details),
            )
        console.print(table)

        remediations = [
            f"{f.id}: {f.remediation}" for f in open_findings if f.remediation
        ]
        self._print_list("Remediation", remediations)

    def format_check_summary(
        self,
        files: int,
        pii_matches: int,
        findings: Sequence[Finding],
        status: FindingStatus,
    ) -> None:
        """Print the closing summary of a check run."""
        counts = {
            s: sum(1 for f in findings if f.status == s)
            for s in ("compliant", "non_compliant", "needs_review")
        }
        body = "\n".join(
            (
                f"Files analysed:  {files}",
                f"PII items:       {pii_matches}",
                f"Compliant:       {counts['compliant']}",
                f"Non-compliant:   {counts['non_compliant']}",
                f"Needs review:    {counts['needs_review']}",
                f"Overall status:  {STATUS_TEXT[status]}",
            )
        )
        console.print(Panel(body, title="Compliance Check Summary"))

    def format_risk_result(self, result: RiskAssessmentResult) -> None:
        """Print factors, category rollups and guidance of an assessment."""
        table = Table(
            title=f"Risk Factors: {result.entity_id}",
            show_header=True,
            header_style="bold magenta",
        )
        table.add_column("Factor", style="cyan")
        table.add_column("Category")
        table.add_column("L", justify="right")
        table.add_column("I", justify="right")
        table.add_column("Score", justify="right")
        table.add_column("Level")
        for factor in sorted(result.factors, key=lambda f: f.score, reverse=True):
            table.add_row(
                factor.name,
                factor.category,
                str(factor.likelihood),
                str(factor.impact),
                str(factor.score),
                severity_text(factor.level),
            )
        console.print(table)

        categories = Table(title="By Category", show_header=True)
        categories.add_column("Category", style="cyan")
        categories.add_column("Average", justify="right")
        categories.add_column("Level")
        categories.add_column("Factors")
        for name, aggregate in result.aggregated_by_category.items():
            categories.add_row(
                name,
                f"{aggregate.avg_score:.1f}",
                severity_text(aggregate.level),
                ", ".join(aggregate.factor_names),
            )
        console.print(categories)

        console.print(
            Panel(
                f"Entity:         {result.entity_id}\n"
                f"Type:           {result.entity_type}\n"
                f"Factors:        {len(result.factors)}\n"
                f"Overall Score:  {result.overall_score}/25\n"
                f"Risk Level:     {severity_text(result.risk_level)}",
                title="Risk Assessment",
            )
        )
        self._print_list("Recommendations", [escape(r) for r in result.recommendations])
        self._print_list("Regulatory Implications", result.regulatory_implications)

    def format_validation_result(self, result: ValidationResult) -> None:
        """Print the checks, warnings and errors of a credential validation."""
        table = Table(
            title=f"Credential from {result.issuer}",
            show_header=True,
            header_style="bold magenta",
        )
        table.add_column("Check", style="cyan", no_wrap=True)
        table.add_column("Result")
        table.add_column("Details")
        for check in result.checks:
            table.add_row(
                check.name,
                "[green]PASS[/green]" if check.passed else "[red]FAIL[/red]",
                escape(check.details),
            )
        console.print(table)
        self._print_list("Warnings", result.warnings, style="yellow")
        self._print_list("Errors", result.errors, style="red")
        verdict = "[green]VALID[/green]" if result.is_valid else "[red]INVALID[/red]"
        console.print(f"Credential is {verdict}")

    def format_catalog(self, summary: CatalogSummary) -> None:
        """Print the regulation catalog overview."""
        table = Table(
            title="Regulatory Frameworks", show_header=True, header_style="bold magenta"
        )
        table.add_column("ID", style="cyan", no_wrap=True)
        table.add_column("Name", style="white")
        table.add_column("Jurisdiction")
        table.add_column("Effective", style="blue")
        table.add_column("Requirements", justify="right")
        table.add_column("Severities")
        for framework in summary.frameworks:
            severities = ", ".join(
                f"{count} {severity}"
                for severity, count in framework.severity_counts.items()
            )
            table.add_row(
                framework.id,
                framework.full_name,
                framework.jurisdiction,
                framework.effective_date,
                str(framework.requirement_count),
                severities,
            )
        console.print(table)
        console.print(
            f"\n[bold]Total:[/bold] {summary.total_frameworks} frameworks, "
            f"{summary.total_requirements} requirements "
            f"({', '.join(summary.jurisdictions)})"
        )
        if summary.pii_pattern_count is not None:
            console.print(f"[bold]PII patterns:[/bold] {summary.pii_pattern_count}")

    def _print_list(
        self, title: str, items: Sequence[str], style: str = "bold"
    ) -> None:
        if not items:
            return
        console.print(f"\n[{style}]{title}:[/{style}]")
        for item in items:
            console.print(f"  - {item}", markup=False)
