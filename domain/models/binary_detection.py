"""Binary Detection Models.

Result types of the two-phase binary detection. Results are immutable
once constructed.
"""

from dataclasses import dataclass, field
from typing import Any, Iterable, Optional

from ..enums import PathGenerationErrorType, PathValidationErrorType


@dataclass
class BinaryDetectionOptions:
    """Options for one detection call.

    Attributes:
        project_root: Project root directory to search in.
        framework_version: Optional framework version (e.g. Electron version).
        extra: Additional framework-specific options.
    """

    project_root: str
    framework_version: Optional[str] = None
    extra: dict[str, Any] = field(default_factory=dict)

    def get(self, key: str, default: Any = None) -> Any:
        """Read a framework-specific option."""
        return self.extra.get(key, default)


@dataclass(frozen=True)
class PathGenerationError:
    """Problem found while deriving candidate paths.

    Attributes:
        type: Error category.
        message: Error message.
        build_tool: Build tool the error relates to (e.g. "electron-forge").
        details: Additional detail text.
    """

    type: PathGenerationErrorType
    message: str
    build_tool: Optional[str] = None
    details: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "type": self.type.value,
            "message": self.message,
            "build_tool": self.build_tool,
            "details": self.details,
        }


@dataclass(frozen=True)
class PathGenerationResult:
    """Result of the path generation phase.

    Attributes:
        success: Whether candidate generation succeeded.
        paths: Candidate paths in priority order (first preferred).
        errors: Diagnostics collected while generating.
    """

    success: bool
    paths: tuple[str, ...] = ()
    errors: tuple[PathGenerationError, ...] = ()

    @classmethod
    def ok(
        cls,
        paths: Iterable[str],
        errors: Iterable[PathGenerationError] = (),
    ) -> "PathGenerationResult":
        """Create a successful result (errors are usually warnings)."""
        return cls(success=True, paths=tuple(paths), errors=tuple(errors))

    @classmethod
    def fail(
        cls,
        errors: Iterable[PathGenerationError],
        paths: Iterable[str] = (),
    ) -> "PathGenerationResult":
        """Create a failed result."""
        return cls(success=False, paths=tuple(paths), errors=tuple(errors))

    @property
    def warnings(self) -> tuple[PathGenerationError, ...]:
        """Warning-level diagnostics."""
        return tuple(
            e for e in self.errors
            if e.type == PathGenerationErrorType.CONFIG_WARNING
        )


@dataclass(frozen=True)
class PathValidationError:
    """Why a candidate path was rejected."""

    type: PathValidationErrorType
    message: str


@dataclass(frozen=True)
class PathValidationAttempt:
    """One probed candidate.

    Attributes:
        path: Candidate path.
        error: Rejection reason, None for the accepted path.
    """

    path: str
    error: Optional[PathValidationError] = None

    @property
    def succeeded(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class PathValidationResult:
    """Result of the path validation phase.

    Attributes:
        success: Whether a valid path was found.
        valid_path: The accepted path.
        attempts: Probed candidates in order. Only the accepted candidate,
            if any, carries no error and it is always the last entry.
    """

    success: bool
    valid_path: Optional[str] = None
    attempts: tuple[PathValidationAttempt, ...] = ()

    @classmethod
    def found(
        cls,
        path: str,
        failed_attempts: Iterable[PathValidationAttempt] = (),
    ) -> "PathValidationResult":
        """Create a successful result ending with the accepted path."""
        attempts = (*failed_attempts, PathValidationAttempt(path=path))
        return cls(success=True, valid_path=path, attempts=attempts)

    @classmethod
    def not_found(
        cls,
        attempts: Iterable[PathValidationAttempt] = (),
    ) -> "PathValidationResult":
        """Create a failed result."""
        return cls(success=False, valid_path=None, attempts=tuple(attempts))

    @property
    def failed_attempts(self) -> tuple[PathValidationAttempt, ...]:
        return tuple(a for a in self.attempts if not a.succeeded)


@dataclass(frozen=True)
class BinaryDetectionResult:
    """Complete outcome of one detection call.

    Attributes:
        success: True iff generation and validation both succeeded.
        binary_path: Accepted binary path, set iff success.
        path_generation: Phase 1 result.
        path_validation: Phase 2 result.
    """

    success: bool
    binary_path: Optional[str]
    path_generation: PathGenerationResult
    path_validation: PathValidationResult

    @classmethod
    def from_phases(
        cls,
        path_generation: PathGenerationResult,
        path_validation: PathValidationResult,
    ) -> "BinaryDetectionResult":
        """Combine the two phase results."""
        success = path_generation.success and path_validation.success
        return cls(
            success=success,
            binary_path=path_validation.valid_path if success else None,
            path_generation=path_generation,
            path_validation=path_validation,
        )

    def describe(self) -> str:
        """Render the diagnostic trail for user-facing error messages.

        Returns:
            Multi-line text listing generation diagnostics and every
            probed candidate with its outcome.
        """
        lines: list[str] = []

        if self.path_generation.errors:
            lines.append("Path generation:")
            for error in self.path_generation.errors:
                entry = f"  - [{error.type}] {error.message}"
                if error.build_tool:
                    entry += f" (build tool: {error.build_tool})"
                if error.details:
                    entry += f": {error.details}"
                lines.append(entry)

        if not self.path_generation.success:
            lines.append("Path generation failed; no candidate paths were checked.")
        elif not self.path_validation.attempts:
            lines.append("No candidate paths were generated.")
        else:
            lines.append("Checked paths:")
            for attempt in self.path_validation.attempts:
                if attempt.error is None:
                    lines.append(f"  - {attempt.path}: OK")
                else:
                    lines.append(
                        f"  - {attempt.path}: [{attempt.error.type}] "
                        f"{attempt.error.message}"
                    )

        return "\n".join(lines)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "success": self.success,
            "binary_path": self.binary_path,
            "path_generation": {
                "success": self.path_generation.success,
                "paths": list(self.path_generation.paths),
                "errors": [e.to_dict() for e in self.path_generation.errors],
            },
            "path_validation": {
                "success": self.path_validation.success,
                "valid_path": self.path_validation.valid_path,
                "attempts": [
                    {
                        "path": a.path,
                        "error": (
                            {"type": a.error.type.value, "message": a.error.message}
                            if a.error else None
                        ),
                    }
                    for a in self.path_validation.attempts
                ],
            },
        }
