"""Compliance rule engine."""

import logging
from collections.abc import Iterable, Mapping, Sequence

from aegis.compliance.evaluators import (
    EVALUATORS,
    EvaluationInput,
    Evaluator,
    default_evaluator,
)
from aegis.compliance.types import (
    ComplianceContentType,
    ComplianceEvaluation,
    ComplianceSummary,
    Finding,
    FindingStatus,
)
from aegis.reference.regulations import (
    RegulationCatalog,
    RegulationFramework,
    default_regulation_catalog,
)

logger = logging.getLogger(__name__)


def summarise(findings: Sequence[Finding]) -> ComplianceSummary:
    """Count findings per status."""
    return ComplianceSummary(
        total=len(findings),
        compliant=sum(1 for f in findings if f.status == "compliant"),
        non_compliant=sum(1 for f in findings if f.status == "non_compliant"),
        needs_review=sum(1 for f in findings if f.status == "needs_review"),
    )


def overall_status(findings: Iterable[Finding]) -> FindingStatus:
    """Combine finding statuses.

    Any ``non_compliant`` finding wins, then any ``needs_review``; only an
    all-compliant (or empty) set is ``compliant``.
    """
    statuses = {finding.status for finding in findings}
    if "non_compliant" in statuses:
        return "non_compliant"
    if "needs_review" in statuses:
        return "needs_review"
    return "compliant"


class ComplianceRuleEngine:
    """Evaluates content against the frameworks of a regulation catalog.

    Every requirement of every selected framework produces exactly one
    Finding: from its specific evaluator when one is registered, from the
    default ``needs_review`` evaluator otherwise.
    """

    def __init__(
        self,
        catalog: RegulationCatalog | None = None,
        evaluators: Mapping[str, Evaluator] = EVALUATORS,
    ) -> None:
        """Initialise the engine.

        Args:
            catalog: Regulation catalog; the bundled catalog when None
            evaluators: Read-only map from requirement id to evaluator

        """
        self._catalog = catalog or default_regulation_catalog()
        self._evaluators = evaluators

    @property
    def catalog(self) -> RegulationCatalog:
        """The regulation catalog in use."""
        return self._catalog

    def resolve_frameworks(
        self, framework_ids: Iterable[str] | None
    ) -> tuple[RegulationFramework, ...]:
        """Resolve requested ids and aliases to catalog frameworks.

        Unknown ids are skipped with a warning. Duplicates (including an id
        and its alias) are evaluated once.
        """
        if framework_ids is None:
            return self._catalog.frameworks

        selected: list[RegulationFramework] = []
        seen: set[str] = set()
        for framework_id in framework_ids:
            canonical = self._catalog.resolve(framework_id)
            if canonical is None:
                logger.warning("Skipping unknown framework '%s'", framework_id)
                continue
            if canonical in seen:
                continue
            seen.add(canonical)
            selected.append(self._catalog.get(canonical))
        return tuple(selected)

    def evaluate(
        self,
        content: str,
        framework_ids: Iterable[str] | None = None,
        content_type: ComplianceContentType = "code",
    ) -> ComplianceEvaluation:
        """Evaluate content against the selected frameworks.

        Args:
            content: Code, configuration or document text
            framework_ids: Frameworks to check; every catalog framework when None
            content_type: Kind of content, used by some evaluators

        Returns:
            Findings in catalog requirement order, per-status summary and the
            overall status

        """
        frameworks = self.resolve_frameworks(framework_ids)
        evaluation_input = EvaluationInput(
            text=content.lower(), content_type=content_type
        )

        findings: list[Finding] = []
        for framework in frameworks:
            for requirement in framework.requirements:
                evaluator = self._evaluators.get(requirement.id, default_evaluator)
                verdict = evaluator(evaluation_input)
                findings.append(
                    Finding(
                        id=requirement.id,
                        framework_id=framework.id,
                        framework=framework.name,
                        requirement=requirement.requirement,
                        severity=requirement.severity,
                        status=verdict.status,
                        details=verdict.details,
                        remediation=verdict.remediation,
                    )
                )

        summary = summarise(findings)
        logger.debug(
            "Evaluated %d requirements across %s: %d non-compliant, %d for review",
            summary.total,
            [framework.id for framework in frameworks],
            summary.non_compliant,
            summary.needs_review,
        )

        return ComplianceEvaluation(
            content_type=content_type,
            frameworks_checked=tuple(framework.id for framework in frameworks),
            overall_status=overall_status(findings),
            findings=tuple(findings),
            summary=summary,
        )
