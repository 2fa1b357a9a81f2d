from .config import get_config, config_manager, ConfigurationManager, ConfigError, ConfigFileNotFoundError, InvalidYamlError
from .exceptions import (
    PlaylistScraperError,
    ConfigurationError,
    PipelineError,
    ComponentError,
    FetchError,
    SessionConnectError,
    NavigationError,
    ElementNotFoundError,
    SessionCloseError,
    ParseError,
    MalformedFragmentError,
    MissingTableError,
    MissingBodyError,
    MissingHyperlinkError,
)
from .logger import setup_logging, get_logger

# PlaylistManager lives in core.manager and is not re-exported here:
# it imports the components package, which imports core.

__all__ = [
    # Config
    "get_config",
    "config_manager",
    "ConfigurationManager",
    "ConfigError",
    "ConfigFileNotFoundError",
    "InvalidYamlError",
    # Logger
    "setup_logging",
    "get_logger",
    # Exceptions
    "PlaylistScraperError",
    "ConfigurationError",
    "PipelineError",
    "ComponentError",
    "FetchError",
    "SessionConnectError",
    "NavigationError",
    "ElementNotFoundError",
    "SessionCloseError",
    "ParseError",
    "MalformedFragmentError",
    "MissingTableError",
    "MissingBodyError",
    "MissingHyperlinkError",
]
