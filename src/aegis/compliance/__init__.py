"""Rule-based regulatory compliance evaluation."""

from aegis.compliance.engine import ComplianceRuleEngine, overall_status, summarise
from aegis.compliance.evaluators import (
    DEFAULT_DETAILS,
    EVALUATORS,
    EvaluationInput,
    Evaluator,
    Verdict,
    default_evaluator,
    evaluator_for,
)
from aegis.compliance.types import (
    ComplianceContentType,
    ComplianceEvaluation,
    ComplianceSummary,
    Finding,
    FindingStatus,
)

__all__ = [
    "DEFAULT_DETAILS",
    "EVALUATORS",
    "ComplianceContentType",
    "ComplianceEvaluation",
    "ComplianceRuleEngine",
    "ComplianceSummary",
    "EvaluationInput",
    "Evaluator",
    "Finding",
    "FindingStatus",
    "Verdict",
    "default_evaluator",
    "evaluator_for",
    "overall_status",
    "summarise",
]
