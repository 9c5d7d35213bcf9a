"""Base launcher for native services.

Launchers run once per test suite: validate the configuration, prepare
capabilities (framework-specific) and run optional post-setup.
"""

import os
from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any, Optional, Union

from config.constants import LogArea
from config.settings import ServiceOptions
from core.exceptions import BinaryNotFoundError
from core.protocols import ILogger
from domain.models.binary_detection import BinaryDetectionOptions
from infrastructure.binary_detector import BinaryDetector
from utils.logging import create_logger

Capabilities = Any
RunnerConfig = Mapping[str, Any]


class BaseLauncher(ABC):
    """Abstract base class for native service launchers.

    Hook order of on_prepare():
        validate_config -> prepare_capabilities -> on_prepare_hook

    Attributes:
        global_options: Service options.
        project_root: Root directory used for detection and config lookup.
    """

    def __init__(
        self,
        global_options: Union[ServiceOptions, Mapping[str, Any], None],
        capabilities: Capabilities,
        config: Optional[RunnerConfig] = None,
        logger: Optional[ILogger] = None,
    ) -> None:
        """Initialize launcher.

        Args:
            global_options: Service options (rootDir, mock flags, extras).
            capabilities: Test runner capabilities (unused here).
            config: Test runner configuration.
            logger: Logger (default: launcher area logger).
        """
        self.global_options = ServiceOptions.from_value(global_options)
        config = config or {}
        self.project_root: str = (
            self.global_options.root_dir
            or config.get("rootDir")
            or os.getcwd()
        )
        self._logger = logger or create_logger(area=LogArea.LAUNCHER)

    async def on_prepare(self, config: RunnerConfig, capabilities: Capabilities) -> None:
        """Test runner hook called before the suite starts."""
        await self.validate_config(config)
        await self.prepare_capabilities(config, capabilities)
        await self.on_prepare_hook(config, capabilities)
        self._logger.debug("Launcher prepared", project_root=self.project_root)

    async def validate_config(self, config: RunnerConfig) -> None:
        """Validate runner configuration. Override for framework checks."""

    @abstractmethod
    async def prepare_capabilities(
        self,
        config: RunnerConfig,
        capabilities: Capabilities,
    ) -> None:
        """Prepare session capabilities.

        E.g. detect the binary path, pick a debugging port and set
        driver options.
        """

    async def on_prepare_hook(
        self,
        config: RunnerConfig,
        capabilities: Capabilities,
    ) -> None:
        """Additional setup after capability preparation."""

    async def on_complete(
        self,
        exit_code: int,
        config: RunnerConfig,
        capabilities: Capabilities,
        results: Any,
    ) -> None:
        """Test runner hook called after all workers completed."""

    async def resolve_binary_path(
        self,
        detector: BinaryDetector,
        framework_version: Optional[str] = None,
        **extra: Any,
    ) -> str:
        """Detect the application binary from the project root.

        Args:
            detector: Framework-specific binary detector.
            framework_version: Optional framework version.
            **extra: Framework-specific detection options.

        Returns:
            Validated binary path.

        Raises:
            BinaryNotFoundError: No candidate passed validation.
        """
        options = BinaryDetectionOptions(
            project_root=self.project_root,
            framework_version=framework_version,
            extra=extra,
        )
        result = await detector.detect_binary_path(options)

        if not result.success or result.binary_path is None:
            self._logger.error(
                "Application binary not found",
                project_root=self.project_root,
                attempts=len(result.path_validation.attempts),
            )
            raise BinaryNotFoundError(result)

        return result.binary_path
