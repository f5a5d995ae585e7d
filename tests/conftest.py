"""
pytest configuration and fixtures for the quote fetcher tests
"""

import io
import json
import logging
import pytest
import tempfile
import shutil
from pathlib import Path
import sys

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from utils import QuoteSourceConfig, DEFAULT_QUOTES_ENDPOINT, data_source_metrics
from tests.factories import QuoteFactory, ConfigFactory
from tests.mocks import MockQuoteEndpoint


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files"""
    temp_path = tempfile.mkdtemp()
    yield Path(temp_path)
    shutil.rmtree(temp_path)


@pytest.fixture
def config_dir(temp_dir):
    """Configuration directory with logging to files disabled"""
    with open(temp_dir / "config.json", 'w', encoding='utf-8') as f:
        json.dump(ConfigFactory.create_config(), f)
    return temp_dir


@pytest.fixture
def output():
    """In-memory output stream for printed lines and diagnostics"""
    return io.StringIO()


@pytest.fixture
def source_config():
    """Quote source configuration pointing at the default endpoint"""
    return QuoteSourceConfig(endpoint=DEFAULT_QUOTES_ENDPOINT)


@pytest.fixture
def fixture_payload():
    """The documented 5-element payload"""
    return QuoteFactory.fixture_payload()


@pytest.fixture
def mock_endpoint():
    """Mocked quotes endpoint"""
    with MockQuoteEndpoint() as endpoint:
        yield endpoint


@pytest.fixture
def blocked_log_config_dir(temp_dir):
    """Configuration directory whose log directory cannot be created"""
    blocker = temp_dir / "blocker"
    blocker.write_text("not a directory", encoding='utf-8')
    config = ConfigFactory.create_config()
    config['logging_config']['file_config'] = {
        'enabled': True,
        'directory': str(blocker / "log")
    }
    config_dir = temp_dir / "config"
    config_dir.mkdir()
    with open(config_dir / "config.json", 'w', encoding='utf-8') as f:
        json.dump(config, f)
    return config_dir


@pytest.fixture
def restore_root_logger():
    """Restore root logger handlers and level after a test reconfigures logging"""
    root_logger = logging.getLogger()
    handlers = root_logger.handlers[:]
    level = root_logger.level
    yield root_logger
    for handler in root_logger.handlers[:]:
        if handler not in handlers:
            handler.close()
            root_logger.removeHandler(handler)
    for handler in handlers:
        if handler not in root_logger.handlers:
            root_logger.addHandler(handler)
    root_logger.setLevel(level)


@pytest.fixture(autouse=True)
def reset_metrics():
    """Reset data source metrics between tests"""
    data_source_metrics.reset()
    yield
    data_source_metrics.reset()


# Pytest configuration
def pytest_configure(config):
    """Configure pytest"""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test"
    )
