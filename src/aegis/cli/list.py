"""CLI command implementations for listing reference data."""

from __future__ import annotations

import logging

from aegis.cli.errors import cli_error_handler
from aegis.cli.formatting import OutputFormatter
from aegis.logging import setup_logging
from aegis.reference.pii_patterns import default_pii_library
from aegis.reference.regulations import catalog_summary, default_regulation_catalog

logger = logging.getLogger(__name__)


def list_frameworks_command(log_level: str = "INFO") -> None:
    """CLI command implementation for listing regulatory frameworks.

    Args:
        log_level: Logging level

    """
    setup_logging(level=log_level)
    with cli_error_handler("frameworks", "Failed to list frameworks"):
        summary = catalog_summary(default_regulation_catalog(), default_pii_library())
        logger.info("Found %d available frameworks", summary.total_frameworks)
        OutputFormatter().format_catalog(summary)
