"""Process-boundary hooks: one JSON object in, one JSON object and an exit code out."""

from aegis.hooks.compliance_gate import (
    GitStagingArea,
    SecretFinding,
    StagingArea,
    audit_trail_warning,
    is_sensitive_file,
    run_compliance_gate,
    scan_staged_content,
)
from aegis.hooks.pii_scanner import HOOK_PATTERN_TYPES, content_to_scan, run_pii_scan
from aegis.hooks.protocol import (
    ALLOW,
    BLOCK,
    HookOutcome,
    ToolInvocation,
    parse_invocation,
)

__all__ = [
    "ALLOW",
    "BLOCK",
    "HOOK_PATTERN_TYPES",
    "GitStagingArea",
    "HookOutcome",
    "SecretFinding",
    "StagingArea",
    "ToolInvocation",
    "audit_trail_warning",
    "content_to_scan",
    "is_sensitive_file",
    "parse_invocation",
    "run_compliance_gate",
    "run_pii_scan",
    "scan_staged_content",
]
