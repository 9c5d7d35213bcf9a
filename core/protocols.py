"""Core Interfaces (Protocols).

Defines the strategy seams supplied per application framework.
All external collaborators are abstracted via Protocol so that tests can
inject fakes.
"""

from abc import abstractmethod
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from domain.models.binary_detection import (
        BinaryDetectionOptions,
        PathGenerationResult,
    )
    from domain.models.window import WindowInfo


# ============================================================
# Binary Detection
# ============================================================


@runtime_checkable
class IPathGenerator(Protocol):
    """Framework-specific candidate path generation.

    Produces candidate binary paths, most likely first. Implementations
    may read build-tool configuration but never probe candidates.
    """

    @abstractmethod
    async def generate(
        self,
        options: "BinaryDetectionOptions",
    ) -> "PathGenerationResult":
        """Generate candidate paths.

        Args:
            options: Detection options.

        Returns:
            Path generation result with paths and diagnostics.
        """
        ...


# ============================================================
# Configuration
# ============================================================


@runtime_checkable
class IScriptLoader(Protocol):
    """Evaluates an executable configuration script.

    The hosting environment decides how (native module loading,
    sandboxed evaluation, ...).
    """

    @abstractmethod
    async def load(self, path: str) -> Any:
        """Evaluate the script at ``path`` and return its plain data value."""
        ...


@runtime_checkable
class ISchema(Protocol):
    """Validation schema with a ``parse`` method that raises on bad input."""

    def parse(self, data: Any) -> Any:
        ...


# ============================================================
# Window Tracking
# ============================================================


@runtime_checkable
class IWindowEnumerator(Protocol):
    """Framework-specific window enumeration.

    E.g. list CDP page targets or WebView instances.
    """

    @abstractmethod
    async def list_windows(self) -> list["WindowInfo"]:
        """Return the windows currently available, in protocol order."""
        ...


# ============================================================
# Logger Protocol
# ============================================================


@runtime_checkable
class ILogger(Protocol):
    """Logger interface.

    Accepts structured keyword fields.
    """

    def debug(self, message: str, **kwargs: Any) -> None:
        """Debug log."""
        ...

    def info(self, message: str, **kwargs: Any) -> None:
        """Info log."""
        ...

    def warning(self, message: str, **kwargs: Any) -> None:
        """Warning log."""
        ...

    def error(self, message: str, **kwargs: Any) -> None:
        """Error log."""
        ...
