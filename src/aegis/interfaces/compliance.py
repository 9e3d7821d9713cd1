"""Compliance check request/response shapes and percentage scoring.

The rule engine reports statuses only. The 0-100 score shown to callers is
derived here from the findings:

    score = max(0, 100 - sum(weight of each non_compliant finding)
                       - sum(weight / 5 of each needs_review finding))

with severity weights critical 25, high 15, medium 10 and low 5. The
overall score is the mean of the framework scores, rounded half-up.
"""

from collections.abc import Sequence
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from aegis.compliance.engine import ComplianceRuleEngine, overall_status
from aegis.compliance.types import ComplianceContentType, Finding, FindingStatus
from aegis.errors import AnalysisInputError
from aegis.reference.base import Severity
from aegis.risk.scorer import round_half_up

TargetType = Literal["file", "customer", "config", "process"]

SEVERITY_WEIGHTS: dict[Severity, int] = {
    "critical": 25,
    "high": 15,
    "medium": 10,
    "low": 5,
}
NEEDS_REVIEW_FACTOR = 0.2

_CONTENT_TYPES: dict[TargetType, ComplianceContentType] = {
    "file": "code",
    "config": "config",
    "customer": "document",
    "process": "document",
}


class ComplianceCheckRequest(BaseModel):
    """A target to check against one or more frameworks."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    target: str = Field(min_length=1)
    target_type: TargetType
    frameworks: tuple[str, ...] = Field(min_length=1)
    content: str | None = None


class FrameworkResult(BaseModel):
    """Score, status and findings for one framework."""

    model_config = ConfigDict(frozen=True)

    score: int = Field(ge=0, le=100)
    status: FindingStatus
    findings: tuple[Finding, ...]


class ComplianceCheckResponse(BaseModel):
    """Result of a compliance check."""

    model_config = ConfigDict(frozen=True)

    target: str
    target_type: TargetType
    frameworks: tuple[str, ...]
    overall_status: FindingStatus
    score: int = Field(ge=0, le=100)
    risk_level: Literal["low", "medium", "high"]
    results: dict[str, FrameworkResult]


def framework_score(findings: Sequence[Finding]) -> int:
    """Percentage score of one framework's findings."""
    penalty = 0.0
    for finding in findings:
        weight = SEVERITY_WEIGHTS[finding.severity]
        if finding.status == "non_compliant":
            penalty += weight
        elif finding.status == "needs_review":
            penalty += weight * NEEDS_REVIEW_FACTOR
    return max(0, int(round_half_up(100 - penalty)))


def score_risk_level(score: int) -> Literal["low", "medium", "high"]:
    """Risk attached to a compliance score: below 80 high, below 90 medium."""
    if score < 80:
        return "high"
    if score < 90:
        return "medium"
    return "low"


def check_compliance(
    request: ComplianceCheckRequest, engine: ComplianceRuleEngine | None = None
) -> ComplianceCheckResponse:
    """Evaluate a target and score each framework.

    Raises:
        AnalysisInputError: If none of the requested frameworks are known

    """
    engine = engine or ComplianceRuleEngine()
    evaluation = engine.evaluate(
        request.content or "",
        request.frameworks,
        content_type=_CONTENT_TYPES[request.target_type],
    )
    if not evaluation.frameworks_checked:
        raise AnalysisInputError(
            f"None of the requested frameworks are known: {list(request.frameworks)}"
        )

    results: dict[str, FrameworkResult] = {}
    for framework_id in evaluation.frameworks_checked:
        findings = tuple(
            f for f in evaluation.findings if f.framework_id == framework_id
        )
        results[framework_id] = FrameworkResult(
            score=framework_score(findings),
            status=overall_status(findings),
            findings=findings,
        )

    score = int(
        round_half_up(sum(r.score for r in results.values()) / len(results))
    )
    return ComplianceCheckResponse(
        target=request.target,
        target_type=request.target_type,
        frameworks=evaluation.frameworks_checked,
        overall_status=evaluation.overall_status,
        score=score,
        risk_level=score_risk_level(score),
        results=results,
    )
