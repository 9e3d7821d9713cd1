"""Types for compliance evaluation."""

from typing import Literal

from pydantic import BaseModel, ConfigDict

from aegis.reference.base import Severity

FindingStatus = Literal["compliant", "non_compliant", "needs_review"]
ComplianceContentType = Literal["code", "config", "document"]


class Finding(BaseModel):
    """Verdict for one requirement evaluated against one piece of content."""

    model_config = ConfigDict(frozen=True)

    id: str
    framework_id: str
    framework: str
    requirement: str
    severity: Severity
    status: FindingStatus
    details: str
    remediation: str | None = None


class ComplianceSummary(BaseModel):
    """Finding counts per status."""

    model_config = ConfigDict(frozen=True)

    total: int
    compliant: int
    non_compliant: int
    needs_review: int


class ComplianceEvaluation(BaseModel):
    """Result of evaluating content against one or more frameworks."""

    model_config = ConfigDict(frozen=True)

    content_type: ComplianceContentType
    frameworks_checked: tuple[str, ...]
    overall_status: FindingStatus
    findings: tuple[Finding, ...]
    summary: ComplianceSummary
