"""Custom Exceptions.

Defines hierarchical exception classes.
Each exception includes specific error context.
"""

from typing import TYPE_CHECKING, Any, Optional, Sequence

if TYPE_CHECKING:
    from domain.models.binary_detection import BinaryDetectionResult


class NativeServiceError(Exception):
    """Base native service exception.

    Base class for all exceptions raised by the service utilities.

    Attributes:
        message: Error message.
        details: Additional detail information.
        cause: Cause exception.
    """

    def __init__(
        self,
        message: str,
        details: Optional[dict[str, Any]] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.cause = cause

    def __str__(self) -> str:
        base = self.message
        if self.details:
            base += f" | Details: {self.details}"
        if self.cause:
            base += f" | Caused by: {self.cause}"
        return base

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
            "cause": str(self.cause) if self.cause else None,
        }


# ============================================================
# Configuration Errors
# ============================================================


class ConfigurationError(NativeServiceError):
    """Configuration error."""

    def __init__(
        self,
        message: str = "Configuration error",
        config_file: Optional[str] = None,
        **kwargs: Any,
    ) -> None:
        details = kwargs.pop("details", {})
        if config_file:
            details["config_file"] = config_file
        super().__init__(message, details=details, **kwargs)


class ConfigNotFoundError(ConfigurationError):
    """No configuration file matched any of the candidate names."""

    def __init__(
        self,
        patterns: Sequence[str],
        project_root: str,
        message: Optional[str] = None,
        **kwargs: Any,
    ) -> None:
        self.patterns = list(patterns)
        self.project_root = project_root
        message = message or (
            f"No config file found. Looked for: {', '.join(self.patterns)} "
            f"in {project_root}"
        )
        super().__init__(message, **kwargs)


class ConfigParseError(ConfigurationError):
    """A configuration file could not be parsed."""

    def __init__(
        self,
        message: str = "Failed to parse config file",
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)


class UnsupportedConfigFormatError(ConfigurationError):
    """The configuration file extension has no parser."""

    def __init__(
        self,
        message: str = "Unsupported config file format",
        extension: Optional[str] = None,
        **kwargs: Any,
    ) -> None:
        details = kwargs.pop("details", {})
        if extension is not None:
            details["extension"] = extension
        super().__init__(message, details=details, **kwargs)


class ConfigValidationError(ConfigurationError):
    """The merged configuration was rejected by the schema."""

    def __init__(
        self,
        message: str = "Config validation failed",
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)


class ConfigExtendsCycleError(ConfigurationError):
    """An ``extends`` chain refers back to a file already in the chain."""

    def __init__(
        self,
        chain: Sequence[str],
        message: Optional[str] = None,
        **kwargs: Any,
    ) -> None:
        self.chain = list(chain)
        details = kwargs.pop("details", {})
        details["chain"] = self.chain
        message = message or f"Cyclic extends chain: {' -> '.join(self.chain)}"
        super().__init__(message, details=details, **kwargs)


class ScriptLoaderError(ConfigurationError):
    """A configuration script could not be evaluated."""

    def __init__(
        self,
        message: str = "Failed to load config script",
        stderr: Optional[str] = None,
        **kwargs: Any,
    ) -> None:
        details = kwargs.pop("details", {})
        if stderr:
            details["stderr"] = stderr.strip()
        super().__init__(message, details=details, **kwargs)


# ============================================================
# Binary / Window Errors
# ============================================================


class BinaryNotFoundError(NativeServiceError):
    """No candidate binary passed validation.

    The message carries the complete diagnostic trail of the detection.
    """

    def __init__(
        self,
        result: "BinaryDetectionResult",
        message: str = "Application binary not found",
        **kwargs: Any,
    ) -> None:
        self.result = result
        super().__init__(f"{message}\n{result.describe()}", **kwargs)


class WindowNotAvailableError(NativeServiceError):
    """No application window appeared in time."""

    def __init__(
        self,
        message: str = "Window handle not available after timeout",
        timeout: Optional[float] = None,
        **kwargs: Any,
    ) -> None:
        details = kwargs.pop("details", {})
        if timeout is not None:
            details["timeout"] = timeout
        super().__init__(message, details=details, **kwargs)
