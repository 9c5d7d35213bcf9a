"""Binary Detector.

Two-phase application binary detection:
1. Generate candidate paths (framework-specific strategy)
2. Validate candidates in order on the filesystem (generic)

Detection never raises for a missing binary; the result carries the full
diagnostic trail instead.
"""

import asyncio
import errno
import os
import stat
from typing import Iterable, Optional, Union

from config.constants import LogArea
from core.protocols import ILogger, IPathGenerator
from domain.enums import PathValidationErrorType
from domain.models.binary_detection import (
    BinaryDetectionOptions,
    BinaryDetectionResult,
    PathGenerationError,
    PathGenerationResult,
    PathValidationAttempt,
    PathValidationError,
    PathValidationResult,
)
from utils.logging import create_logger

_NOT_FOUND_ERRNOS = {errno.ENOENT, errno.ENOTDIR}
_PERMISSION_ERRNOS = {errno.EACCES, errno.EPERM}


class BinaryDetector:
    """Framework-agnostic binary detector.

    The candidate generation strategy is either injected as an
    IPathGenerator or supplied by overriding generate_possible_paths().

    Example:
        ```python
        detector = BinaryDetector(StaticPathGenerator(["/opt/app/app"]))
        result = await detector.detect_binary_path(
            BinaryDetectionOptions(project_root="/work/app")
        )
        if result.success:
            print(result.binary_path)
        ```
    """

    def __init__(
        self,
        path_generator: Optional[IPathGenerator] = None,
        logger: Optional[ILogger] = None,
    ) -> None:
        """Initialize binary detector.

        Args:
            path_generator: Candidate path generation strategy.
            logger: Logger (default: binary area logger).
        """
        self._path_generator = path_generator
        self._logger = logger or create_logger(area=LogArea.BINARY)

    async def detect_binary_path(
        self,
        options: BinaryDetectionOptions,
    ) -> BinaryDetectionResult:
        """Detect the application binary.

        Args:
            options: Detection options.

        Returns:
            Detection result with diagnostics of both phases.
        """
        path_generation = await self.generate_possible_paths(options)

        if not path_generation.success or not path_generation.paths:
            self._logger.warning(
                "No candidate binary paths to validate",
                project_root=options.project_root,
                generation_success=path_generation.success,
                errors=len(path_generation.errors),
            )
            path_validation = PathValidationResult.not_found()
        else:
            path_validation = await self.validate_binary_paths(path_generation.paths)

        result = BinaryDetectionResult.from_phases(path_generation, path_validation)

        if result.success:
            self._logger.info(
                "Binary detected",
                binary_path=result.binary_path,
                attempts=len(path_validation.attempts),
            )
        else:
            self._logger.warning(
                "Binary not detected",
                project_root=options.project_root,
                attempts=len(path_validation.attempts),
            )
        return result

    async def generate_possible_paths(
        self,
        options: BinaryDetectionOptions,
    ) -> PathGenerationResult:
        """Generate candidate paths (phase 1).

        Subclasses without an injected strategy must override this.

        Args:
            options: Detection options.

        Returns:
            Path generation result.
        """
        if self._path_generator is None:
            raise NotImplementedError(
                f"{type(self).__name__} needs a path generator or an "
                "override of generate_possible_paths()"
            )
        return await self._path_generator.generate(options)

    async def validate_binary_paths(
        self,
        paths: Iterable[str],
    ) -> PathValidationResult:
        """Validate candidates in order and stop at the first valid one (phase 2).

        Args:
            paths: Candidate paths in priority order.

        Returns:
            Path validation result.
        """
        failed: list[PathValidationAttempt] = []

        for path in paths:
            error = await asyncio.to_thread(self._probe_path, path)

            if error is None and not await self.custom_validation(path):
                error = PathValidationError(
                    type=PathValidationErrorType.NOT_EXECUTABLE,
                    message="Path rejected by framework-specific validation",
                )

            if error is None:
                return PathValidationResult.found(path, failed)

            self._logger.debug(
                "Binary candidate rejected",
                path=path,
                reason=str(error.type),
            )
            failed.append(PathValidationAttempt(path=path, error=error))

        return PathValidationResult.not_found(failed)

    async def custom_validation(self, path: str) -> bool:
        """Framework-specific validation hook.

        Runs after the generic checks passed. Override to reject
        candidates (e.g. wrong architecture).

        Args:
            path: Candidate path.

        Returns:
            True if the path is acceptable.
        """
        return True

    def _probe_path(self, path: str) -> Optional[PathValidationError]:
        """Run the generic filesystem checks (blocking).

        Returns:
            Validation error or None if the path is an executable file.
        """
        try:
            st = os.stat(path)
        except (OSError, ValueError) as e:
            # ValueError: 경로에 NUL 문자가 포함된 경우
            return self.categorize_validation_error(e)

        if stat.S_ISDIR(st.st_mode):
            return _validation_error(PathValidationErrorType.IS_DIRECTORY)

        if not os.access(path, os.X_OK):
            return _validation_error(PathValidationErrorType.NOT_EXECUTABLE)

        return None

    @staticmethod
    def categorize_validation_error(
        error: Union[OSError, ValueError],
    ) -> PathValidationError:
        """Map a probe error to a validation error category.

        Args:
            error: Error raised while probing a candidate. Errors that are
                not OS errors (e.g. an invalid path) map to FILE_NOT_FOUND.

        Returns:
            Categorized validation error.
        """
        error_no = getattr(error, "errno", None)
        if isinstance(error, (FileNotFoundError, NotADirectoryError)) or (
            error_no in _NOT_FOUND_ERRNOS
        ):
            return _validation_error(PathValidationErrorType.FILE_NOT_FOUND)

        if isinstance(error, PermissionError) or error_no in _PERMISSION_ERRNOS:
            return _validation_error(PathValidationErrorType.PERMISSION_DENIED)

        if isinstance(error, IsADirectoryError) or error_no == errno.EISDIR:
            return _validation_error(PathValidationErrorType.IS_DIRECTORY)

        # 알 수 없는 에러는 메시지를 그대로 보존
        return PathValidationError(
            type=PathValidationErrorType.FILE_NOT_FOUND,
            message=getattr(error, "strerror", None) or str(error) or "File validation failed",
        )


def _validation_error(error_type: PathValidationErrorType) -> PathValidationError:
    return PathValidationError(type=error_type, message=error_type.default_message)


class StaticPathGenerator(IPathGenerator):
    """Path generator returning a fixed candidate list.

    For adapters that already know their candidates, and for tests.

    Example:
        ```python
        generator = StaticPathGenerator(["/a/app", "/b/app"])
        result = await generator.generate(options)
        assert result.paths == ("/a/app", "/b/app")
        ```
    """

    def __init__(
        self,
        paths: Iterable[str],
        errors: Iterable[PathGenerationError] = (),
        success: bool = True,
    ) -> None:
        """Initialize static generator.

        Args:
            paths: Candidate paths in priority order.
            errors: Diagnostics to report with the candidates.
            success: Whether generation reports success.
        """
        self._paths = tuple(paths)
        self._errors = tuple(errors)
        self._success = success
        self._calls: list[BinaryDetectionOptions] = []

    async def generate(
        self,
        options: BinaryDetectionOptions,
    ) -> PathGenerationResult:
        """Return the configured candidates."""
        self._calls.append(options)
        if not self._success:
            return PathGenerationResult.fail(self._errors, self._paths)
        return PathGenerationResult.ok(self._paths, self._errors)

    @property
    def calls(self) -> list[BinaryDetectionOptions]:
        """Generate call history."""
        return self._calls
