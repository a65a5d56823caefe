import pytest
from loguru import logger


@pytest.fixture(autouse=True)
def package_logging_disabled():
    """Restore the import-time state after tests that run the CLI."""
    yield
    logger.disable("entropy_density")
