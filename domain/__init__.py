"""Domain Package."""

from .models import (
    BinaryDetectionOptions,
    BinaryDetectionResult,
    ConfigReadResult,
    PathGenerationError,
    PathGenerationResult,
    PathValidationAttempt,
    PathValidationError,
    PathValidationResult,
    WindowHandle,
    WindowInfo,
)
from .enums import PathGenerationErrorType, PathValidationErrorType

__all__ = [
    "BinaryDetectionOptions",
    "BinaryDetectionResult",
    "ConfigReadResult",
    "PathGenerationError",
    "PathGenerationResult",
    "PathValidationAttempt",
    "PathValidationError",
    "PathValidationResult",
    "WindowHandle",
    "WindowInfo",
    "PathGenerationErrorType",
    "PathValidationErrorType",
]
