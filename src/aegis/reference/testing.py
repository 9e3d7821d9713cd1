"""Testing utilities for YAML reference data tables."""

import shutil
from pathlib import Path

import pytest
from pydantic import ValidationError

from aegis.errors import ReferenceDataError, ReferenceDataNotFoundError
from aegis.reference.base import YAMLReferenceData


class ReferenceDataContractTests[DataType: YAMLReferenceData]:
    """Contract tests that all YAMLReferenceData tables must pass.

    Required Fixtures:
        data_class: The YAMLReferenceData subclass (not instance) to test
        expected_name: The expected canonical name of the table

    Contract Requirements:
        1. The bundled YAML file exists at data/{version}/{name}.yaml
        2. load() returns an instance named after the table
        3. The loaded version matches reference_version
        4. Loaded tables are immutable
        5. A missing file raises ReferenceDataNotFoundError
        6. A file naming a different table raises ReferenceDataError

    Usage Pattern:
        class TestMyTableContract(ReferenceDataContractTests[MyTable]):
            @pytest.fixture
            def data_class(self) -> type[MyTable]:
                return MyTable

            @pytest.fixture
            def expected_name(self) -> str:
                return "my_table"

    """

    @pytest.fixture
    def data_class(self) -> type[DataType]:
        """Provide the YAMLReferenceData subclass to test.

        Raises:
            NotImplementedError: If subclass doesn't override this fixture

        """
        raise NotImplementedError(
            "Subclass must provide 'data_class' fixture with a YAMLReferenceData subclass"
        )

    @pytest.fixture
    def expected_name(self) -> str:
        """Provide the expected canonical name of the table.

        Raises:
            NotImplementedError: If subclass doesn't override this fixture

        """
        raise NotImplementedError(
            "Subclass must provide 'expected_name' fixture with string"
        )

    @pytest.fixture
    def loaded(self, data_class: type[DataType]) -> DataType:
        """Load the bundled table."""
        return data_class.load()

    # =========================================================================
    # CONTRACT TEST: Bundled data
    # =========================================================================

    def test_bundled_data_file_exists(self, data_class: type[DataType]) -> None:
        """Verify the bundled YAML file is where load() looks for it."""
        path = data_class.data_file_path()

        assert path.is_file()
        assert path.name == f"{data_class.reference_name}.yaml"
        assert path.parent.name == data_class.reference_version

    def test_loaded_name_matches_expected(
        self, loaded: DataType, expected_name: str
    ) -> None:
        """Verify the loaded table carries its canonical name."""
        assert loaded.name == expected_name

    def test_loaded_version_matches_class_version(
        self, data_class: type[DataType], loaded: DataType
    ) -> None:
        """Verify the loaded version matches reference_version."""
        assert loaded.version == data_class.reference_version

    def test_loaded_table_is_immutable(self, loaded: DataType) -> None:
        """Verify fields of a loaded table cannot be reassigned."""
        with pytest.raises(ValidationError):
            loaded.description = "changed"  # type: ignore[misc]

    # =========================================================================
    # CONTRACT TEST: Error handling
    # =========================================================================

    def test_missing_file_raises_not_found(
        self, data_class: type[DataType], tmp_path: Path
    ) -> None:
        """Verify loading from an empty directory raises the not-found error."""
        with pytest.raises(ReferenceDataNotFoundError):
            data_class.load(tmp_path)

    def test_mismatched_name_raises(
        self, data_class: type[DataType], tmp_path: Path
    ) -> None:
        """Verify a file whose name field disagrees with the table is rejected."""
        source = data_class.data_file_path()
        target = data_class.data_file_path(tmp_path)
        target.parent.mkdir(parents=True)
        shutil.copy(source, target)
        content = target.read_text(encoding="utf-8")
        target.write_text(
            content.replace(
                f"name: {data_class.reference_name}", "name: something_else", 1
            ),
            encoding="utf-8",
        )

        with pytest.raises(ReferenceDataError, match="expected"):
            data_class.load(tmp_path)
