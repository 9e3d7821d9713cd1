"""Workspace-level pytest configuration and fixtures."""

import logging
from collections.abc import Iterator

import pytest


@pytest.fixture(autouse=True, scope="function")
def isolate_logging_configuration() -> Iterator[None]:
    """Preserve and restore logger state around each test.

    CLI commands apply the YAML logging configuration, which stops the
    ``aegis`` logger from propagating to the root logger. Restoring the
    state keeps ``caplog`` working in tests that run after a CLI test.
    """
    root = logging.getLogger()
    package_logger = logging.getLogger("aegis")
    saved_root = (root.level, list(root.handlers))
    saved_package = (
        package_logger.level,
        list(package_logger.handlers),
        package_logger.propagate,
        package_logger.disabled,
    )

    yield

    root.setLevel(saved_root[0])
    root.handlers[:] = saved_root[1]
    package_logger.setLevel(saved_package[0])
    package_logger.handlers[:] = saved_package[1]
    package_logger.propagate = saved_package[2]
    package_logger.disabled = saved_package[3]
