"""CLI command implementation for risk assessment."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, cast, get_args

import typer
from pydantic import TypeAdapter

from aegis.cli.check import validate_output
from aegis.cli.errors import CLIError, cli_error_handler
from aegis.cli.formatting import OutputFormatter
from aegis.interfaces.risk import RiskAssessmentRequest, assess_risk
from aegis.logging import setup_logging
from aegis.risk.profiles import default_risk_profiles
from aegis.risk.types import EntityType, RiskContext, RiskFactor

logger = logging.getLogger(__name__)

_FACTORS = TypeAdapter(tuple[RiskFactor, ...])


def load_factors(factors_file: Path) -> tuple[RiskFactor, ...]:
    """Read risk factors from JSON.

    The file holds either a list of factors or an object with a ``factors``
    list. Keys may be camelCase or snake_case.
    """
    data: Any = json.loads(factors_file.read_text(encoding="utf-8"))
    if isinstance(data, dict):
        data = data.get("factors", [])
    return _FACTORS.validate_python(data)


def risk_command(  # noqa: PLR0913 - mirrors the CLI options
    entity: str,
    entity_type: str = "customer",
    jurisdiction: str | None = None,
    factors_file: Path | None = None,
    previous_incidents: int = 0,
    output: str = "table",
    log_level: str = "INFO",
) -> None:
    """CLI command implementation for assessing an entity's risk.

    Without a factors file the bundled sample profile for the entity type
    is scored.

    Args:
        entity: Entity identifier
        entity_type: One of customer, transaction, process, system, vendor
        jurisdiction: Jurisdiction of the entity
        factors_file: JSON file with risk factors
        previous_incidents: Number of previous incidents
        output: Output format, ``table`` or ``json``
        log_level: Logging level

    """
    setup_logging(level=log_level)
    with cli_error_handler("risk", "Risk assessment failed"):
        if entity_type not in get_args(EntityType):
            raise CLIError(
                f"Unknown entity type '{entity_type}'. "
                f"Use one of: {', '.join(get_args(EntityType))}",
                command="risk",
            )
        output = validate_output(output, "risk")

        if factors_file is not None:
            factors = load_factors(factors_file)
            logger.info("Loaded %d factor(s) from %s", len(factors), factors_file)
        else:
            factors = default_risk_profiles().factors_for(
                cast(EntityType, entity_type), jurisdiction
            )
            logger.info(
                "Using sample %s profile (%d factors)", entity_type, len(factors)
            )

        request = RiskAssessmentRequest.model_validate(
            {
                "entity_type": entity_type,
                "entity_id": entity,
                "factors": factors,
                "context": RiskContext(
                    jurisdiction=jurisdiction, previous_incidents=previous_incidents
                ),
            }
        )
        result = assess_risk(request)

        if output == "json":
            typer.echo(result.model_dump_json(by_alias=True, indent=2))
        else:
            OutputFormatter().format_risk_result(result)
