"""CLI command implementations for Aegis."""

from aegis.cli.check import check_command, scan_command
from aegis.cli.errors import CLIError
from aegis.cli.hooks import compliance_gate_hook_command, pii_scan_hook_command
from aegis.cli.list import list_frameworks_command
from aegis.cli.risk import risk_command
from aegis.cli.verify import verify_command

__all__ = [
    "CLIError",
    "check_command",
    "compliance_gate_hook_command",
    "list_frameworks_command",
    "pii_scan_hook_command",
    "risk_command",
    "scan_command",
    "verify_command",
]
