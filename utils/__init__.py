"""
工具模块包
提供项目所需的通用工具和功能
"""

# 导出核心工具
from .config_manager import (
    config_manager,
    UnifiedConfigManager,
    LoggingConfig,
    LoggingModuleConfig,
    QuoteSourceConfig,
    DEFAULT_QUOTES_ENDPOINT
)
from .exceptions import (
    QuoteSystemError,
    ConfigurationError,
    DataSourceError,
    InvalidEndpointError,
    NetworkError,
    DecodeError,
    ErrorCodes,
    create_error_response
)
from .logging_manager import (
    LogContext,
    MetricsLogger,
    logging_manager,
    logger,
    data_source_metrics,
    LogConfig,
    initialize_logging,
    ModuleLoggers,
    dm_logger,
    ds_logger,
    config_logger,
    main_logger
)
from .path_utils import BASE_DIR, CONFIG_DIR, LOG_DIR

# 版本信息
__version__ = "1.0.0"

__all__ = [
    # 配置管理
    "config_manager",
    "UnifiedConfigManager",
    "LoggingConfig",
    "LoggingModuleConfig",
    "QuoteSourceConfig",
    "DEFAULT_QUOTES_ENDPOINT",

    # 异常处理
    "QuoteSystemError",
    "ConfigurationError",
    "DataSourceError",
    "InvalidEndpointError",
    "NetworkError",
    "DecodeError",
    "ErrorCodes",
    "create_error_response",

    # 日志工具
    "LogContext",
    "MetricsLogger",
    "logging_manager",
    "logger",
    "data_source_metrics",
    "LogConfig",
    "initialize_logging",
    "ModuleLoggers",
    "dm_logger",
    "ds_logger",
    "config_logger",
    "main_logger",

    # 路径工具
    "BASE_DIR",
    "CONFIG_DIR",
    "LOG_DIR",
]
