"""Base class for YAML-backed reference data."""

import logging
import sys
from pathlib import Path
from typing import ClassVar, Literal, Self

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from aegis.errors import ReferenceDataError, ReferenceDataNotFoundError

logger = logging.getLogger(__name__)

Severity = Literal["low", "medium", "high", "critical"]

SEVERITY_ORDER: tuple[Severity, ...] = ("critical", "high", "medium", "low")


class YAMLReferenceData(BaseModel):
    """Base class for immutable reference tables loaded from YAML.

    Subclasses define the table's fields plus two ClassVars:
        reference_name: Canonical name, also the YAML file stem
        reference_version: Semantic version, also the data sub-directory

    The YAML file is expected at:
        {subclass_module_dir}/data/{version}/{name}.yaml

    Loaded instances are frozen. Replacing reference data at runtime means
    loading a new instance and handing it to new engine objects; a loaded
    instance is never modified in place.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    reference_name: ClassVar[str]
    reference_version: ClassVar[str] = "1.0.0"

    name: str = Field(min_length=1, description="Canonical name of the table")
    version: str = Field(
        pattern=r"^\d+\.\d+\.\d+$", description='Semantic version (e.g., "1.0.0")'
    )
    description: str = Field(
        min_length=1, description="Description of what this table contains"
    )

    @classmethod
    def data_file_path(cls, data_dir: Path | None = None) -> Path:
        """Get the path to the YAML data file.

        Uses the concrete subclass's module location to find the data
        directory unless an explicit directory is given.

        Args:
            data_dir: Directory holding ``{version}/{name}.yaml``

        Returns:
            Path of the YAML file for this table

        """
        if data_dir is None:
            module_file = sys.modules[cls.__module__].__file__
            if module_file is None:
                msg = f"Cannot determine file path for module {cls.__module__}"
                raise ReferenceDataError(msg)
            data_dir = Path(module_file).parent / "data"
        return data_dir / cls.reference_version / f"{cls.reference_name}.yaml"

    @classmethod
    def load(cls, data_dir: Path | None = None) -> Self:
        """Load and validate the table from YAML.

        Args:
            data_dir: Optional directory overriding the bundled data

        Returns:
            The parsed and validated table

        Raises:
            ReferenceDataNotFoundError: If the YAML file does not exist
            ReferenceDataError: If the file cannot be parsed or validated

        """
        yaml_file = cls.data_file_path(data_dir)
        if not yaml_file.is_file():
            raise ReferenceDataNotFoundError(
                f"Reference data '{cls.reference_name}' not found at {yaml_file}"
            )

        try:
            with yaml_file.open("r", encoding="utf-8") as f:
                raw_data = yaml.safe_load(f)
            data = cls.model_validate(raw_data)
        except yaml.YAMLError as e:
            raise ReferenceDataError(
                f"Failed to parse reference data {yaml_file}: {e}"
            ) from e
        except ValidationError as e:
            raise ReferenceDataError(
                f"Invalid reference data in {yaml_file}: {e}"
            ) from e

        if data.name != cls.reference_name:
            raise ReferenceDataError(
                f"Reference data in {yaml_file} is named '{data.name}', "
                f"expected '{cls.reference_name}'"
            )

        logger.debug(f"Loaded {cls.reference_name} v{data.version} from {yaml_file}")
        return data
