"""Domain Enums Package.

Re-exports constants and enumerations used in the domain layer.
"""

from config.constants import (
    ConfigFormat,
    LogArea,
    PathGenerationErrorType,
    PathValidationErrorType,
    SupportedPlatform,
)

__all__ = [
    "ConfigFormat",
    "LogArea",
    "PathGenerationErrorType",
    "PathValidationErrorType",
    "SupportedPlatform",
]
