"""
Basic import tests to verify module structure
"""

import pytest
import sys
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))


def test_basic_imports():
    """Test basic module imports"""
    # Test utils modules
    from utils.config_manager import UnifiedConfigManager
    from utils.logging_manager import LoggingManager
    from utils.exceptions import QuoteSystemError

    # Test data source modules
    from data_sources.base_source import BaseDataSource
    from data_sources.strangerthings_source import StrangerThingsSource
    from data_sources.models import Quote, FetchResult

    # Test manager and main module
    from data_manager import DataManager
    from main import main, print_quotes

    assert issubclass(StrangerThingsSource, BaseDataSource)


def test_exception_hierarchy():
    """Test exception taxonomy"""
    from utils.exceptions import (
        QuoteSystemError, DataSourceError, InvalidEndpointError, NetworkError, DecodeError,
        create_error_response
    )

    for error_class in (InvalidEndpointError, NetworkError, DecodeError):
        assert issubclass(error_class, DataSourceError)
        assert issubclass(error_class, QuoteSystemError)

    error = NetworkError("Connection refused", "NET_002", context={'url': 'http://x.example'})
    assert str(error) == "[NET_002] Connection refused"
    assert create_error_response(error) == {
        "error": True,
        "error_code": "NET_002",
        "message": "Connection refused",
        "context": {'url': 'http://x.example'}
    }


def test_default_error_code():
    from utils.exceptions import DecodeError

    assert DecodeError("bad").error_code == "DecodeError"
