"""Base worker service for native services.

Worker services run in each test worker: initialize the framework API
bridge for the session and manage mock state between tests.
"""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any, Optional, Sequence, Union

from config.constants import LogArea
from config.settings import ServiceOptions
from core.protocols import ILogger
from utils.logging import create_logger

Capabilities = Any
Browser = Any


class BaseService(ABC):
    """Abstract base class for native worker services.

    Hook order of before():
        initialize_api -> install_command_overrides -> after_initialization

    before_test() runs the enabled mock hooks in the order clear, reset,
    restore. The three flags are independent.

    Attributes:
        global_options: Service options.
        capabilities: Session capabilities.
        browser: Session object, set by before().
    """

    def __init__(
        self,
        global_options: Union[ServiceOptions, Mapping[str, Any], None] = None,
        capabilities: Optional[Capabilities] = None,
        logger: Optional[ILogger] = None,
    ) -> None:
        self.global_options = ServiceOptions.from_value(global_options)
        self.capabilities = capabilities
        self.browser: Optional[Browser] = None

        self.clear_mocks = self.global_options.clear_mocks
        self.reset_mocks = self.global_options.reset_mocks
        self.restore_mocks = self.global_options.restore_mocks

        self._logger = logger or create_logger(area=LogArea.SERVICE)

    async def before(
        self,
        capabilities: Capabilities,
        specs: Sequence[str],
        browser: Browser,
    ) -> None:
        """Test runner hook called before the session starts.

        Args:
            capabilities: Session capabilities.
            specs: Spec files of this worker.
            browser: Session object.
        """
        self.browser = browser

        await self.initialize_api(browser, capabilities)
        await self.install_command_overrides()
        await self.after_initialization(capabilities, browser)

        self._logger.debug("Worker service initialized", specs=len(specs))

    @abstractmethod
    async def initialize_api(self, browser: Browser, capabilities: Capabilities) -> None:
        """Set up the framework bridge and expose its API on the session."""

    async def install_command_overrides(self) -> None:
        """Install driver command overrides."""

    async def after_initialization(self, capabilities: Capabilities, browser: Browser) -> None:
        """Additional setup after API initialization."""

    async def before_test(self) -> None:
        """Test runner hook called before each test."""
        if self.clear_mocks:
            await self.handle_clear_mocks()
        if self.reset_mocks:
            await self.handle_reset_mocks()
        if self.restore_mocks:
            await self.handle_restore_mocks()

    async def before_command(self, command_name: str, args: Sequence[Any]) -> None:
        """Test runner hook called before each command."""

    async def after_command(
        self,
        command_name: str,
        args: Sequence[Any],
        result: Any,
        error: Optional[BaseException] = None,
    ) -> None:
        """Test runner hook called after each command."""

    async def after(self) -> None:
        """Test runner hook called after the session ends."""

    async def handle_clear_mocks(self) -> None:
        """Clear recorded mock calls."""

    async def handle_reset_mocks(self) -> None:
        """Reset mock implementations."""

    async def handle_restore_mocks(self) -> None:
        """Restore original implementations."""
