"""Core Package.

Provides core interfaces and exceptions.
"""

from .protocols import (
    ILogger,
    IPathGenerator,
    ISchema,
    IScriptLoader,
    IWindowEnumerator,
)
from .exceptions import (
    BinaryNotFoundError,
    ConfigExtendsCycleError,
    ConfigNotFoundError,
    ConfigParseError,
    ConfigValidationError,
    ConfigurationError,
    NativeServiceError,
    ScriptLoaderError,
    UnsupportedConfigFormatError,
    WindowNotAvailableError,
)

__all__ = [
    # Protocols
    "ILogger",
    "IPathGenerator",
    "ISchema",
    "IScriptLoader",
    "IWindowEnumerator",
    # Exceptions
    "BinaryNotFoundError",
    "ConfigExtendsCycleError",
    "ConfigNotFoundError",
    "ConfigParseError",
    "ConfigValidationError",
    "ConfigurationError",
    "NativeServiceError",
    "ScriptLoaderError",
    "UnsupportedConfigFormatError",
    "WindowNotAvailableError",
]
