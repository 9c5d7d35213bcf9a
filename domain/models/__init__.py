"""Domain Models Package."""

from .binary_detection import (
    BinaryDetectionOptions,
    BinaryDetectionResult,
    PathGenerationError,
    PathGenerationResult,
    PathValidationAttempt,
    PathValidationError,
    PathValidationResult,
)
from .config_result import ConfigReadResult
from .window import WindowHandle, WindowInfo

__all__ = [
    "BinaryDetectionOptions",
    "BinaryDetectionResult",
    "PathGenerationError",
    "PathGenerationResult",
    "PathValidationAttempt",
    "PathValidationError",
    "PathValidationResult",
    "ConfigReadResult",
    "WindowHandle",
    "WindowInfo",
]
