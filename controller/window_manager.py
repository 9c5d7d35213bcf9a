"""Window Manager.

Protocol-agnostic active window tracking.
Window enumeration is supplied per framework (CDP targets, WebViews, ...).
Supports per-instance managers for multiremote sessions.
"""

import asyncio
from typing import Optional

from config.constants import LogArea, WindowConfig
from core.exceptions import WindowNotAvailableError
from core.protocols import ILogger, IWindowEnumerator
from domain.models.window import WindowHandle, WindowInfo
from utils.logging import create_logger


class WindowManager:
    """Active window handle tracker for one session.

    The remembered handle is kept as long as it is still enumerated;
    otherwise the first enumerated window is taken. Enumeration order is
    protocol-defined, so the fallback is a heuristic.

    Attributes:
        _enumerator: Window enumeration strategy.
        _current_handle: Remembered active handle.
    """

    def __init__(
        self,
        enumerator: Optional[IWindowEnumerator] = None,
        logger: Optional[ILogger] = None,
    ) -> None:
        """Initialize window manager.

        Args:
            enumerator: Window enumeration strategy. Subclasses may override
                get_available_windows() instead.
            logger: Logger (default: window area logger).
        """
        self._enumerator = enumerator
        self._logger = logger or create_logger(area=LogArea.WINDOW)
        self._current_handle: Optional[WindowHandle] = None

    @property
    def current_handle(self) -> Optional[WindowHandle]:
        """Remembered active window handle."""
        return self._current_handle

    async def get_available_windows(self) -> list[WindowInfo]:
        """Enumerate the windows currently available.

        Raises:
            NotImplementedError: Without enumerator or override.
        """
        if self._enumerator is None:
            raise NotImplementedError(
                f"{type(self).__name__} needs a window enumerator or an "
                "override of get_available_windows()"
            )
        return await self._enumerator.list_windows()

    async def get_active_handle(self) -> Optional[WindowHandle]:
        """Select the active handle without changing state.

        Returns:
            Remembered handle if still present, else the first enumerated
            handle, or None if no window exists.
        """
        windows = await self.get_available_windows()
        if not windows:
            return None

        handles = [w.handle for w in windows]
        if self._current_handle is not None and self._current_handle in handles:
            return self._current_handle

        return handles[0]

    async def update_active_handle(self) -> bool:
        """Refresh the remembered handle.

        Returns:
            True if the remembered handle changed.
        """
        old_handle = self._current_handle
        new_handle = await self.get_active_handle()

        if new_handle is None or new_handle == old_handle:
            return False

        self._current_handle = new_handle
        self._logger.debug(
            "Active window handle updated",
            old_handle=old_handle,
            new_handle=new_handle,
        )
        await self.on_handle_update(old_handle, new_handle)
        return True

    async def is_handle_valid(self, handle: WindowHandle) -> bool:
        """Check whether a handle is currently enumerated."""
        windows = await self.get_available_windows()
        return any(w.handle == handle for w in windows)

    async def get_window_info(self, handle: WindowHandle) -> Optional[WindowInfo]:
        """Return the snapshot of a window, or None if it is gone."""
        windows = await self.get_available_windows()
        for window in windows:
            if window.handle == handle:
                return window
        return None

    async def on_handle_update(
        self,
        old_handle: Optional[WindowHandle],
        new_handle: WindowHandle,
    ) -> None:
        """Hook called after the remembered handle changed.

        Override for framework-specific actions (e.g. switching the
        driver's window).
        """


class MultiRemoteWindowManager:
    """Multiremote window manager.

    Coordinates one WindowManager per named application instance.

    Attributes:
        _instances: Per-instance window managers, in registration order.
    """

    def __init__(self, logger: Optional[ILogger] = None) -> None:
        self._instances: dict[str, WindowManager] = {}
        self._logger = logger or create_logger(area=LogArea.WINDOW)

    def register_instance(self, name: str, manager: WindowManager) -> None:
        """Register (or replace) the manager of an instance."""
        self._instances[name] = manager

    def unregister_instance(self, name: str) -> bool:
        """Remove an instance.

        Returns:
            True if the instance was registered.
        """
        return self._instances.pop(name, None) is not None

    def get_instance_manager(self, name: str) -> Optional[WindowManager]:
        return self._instances.get(name)

    def get_instance_names(self) -> list[str]:
        return list(self._instances)

    def get_current_handle(self, name: str) -> Optional[WindowHandle]:
        """Remembered handle of an instance, None if unknown."""
        manager = self._instances.get(name)
        return manager.current_handle if manager else None

    async def update_all_active_handles(self) -> dict[str, bool]:
        """Update all instances concurrently.

        A transient enumeration failure is logged and reported as
        unchanged; it does not affect the others. A missing enumeration
        strategy is re-raised once every instance has settled.

        Returns:
            Whether each instance's handle changed.

        Raises:
            NotImplementedError: An instance has no window enumerator.
        """
        names = list(self._instances)
        outcomes = await asyncio.gather(
            *(self._instances[name].update_active_handle() for name in names),
            return_exceptions=True,
        )

        results: dict[str, bool] = {}
        fatal: Optional[BaseException] = None
        for name, outcome in zip(names, outcomes):
            if isinstance(outcome, BaseException):
                if isinstance(outcome, NotImplementedError) or not isinstance(
                    outcome, Exception
                ):
                    fatal = fatal or outcome
                    continue
                self._logger.warning(
                    "Failed to update active window handle",
                    instance=name,
                    error=str(outcome),
                )
                results[name] = False
            else:
                results[name] = outcome

        if fatal is not None:
            raise fatal
        return results

    async def ensure_all_active_windows(self) -> int:
        """Update all instances.

        Returns:
            Number of instances whose handle changed.
        """
        results = await self.update_all_active_handles()
        return sum(1 for updated in results.values() if updated)

    def clear(self) -> None:
        """Remove all instances."""
        self._instances.clear()

    @property
    def instance_count(self) -> int:
        return len(self._instances)

    def __contains__(self, name: object) -> bool:
        return name in self._instances

    def __len__(self) -> int:
        return len(self._instances)


async def wait_for_active_window(
    manager: WindowManager,
    timeout: float = WindowConfig.WAIT_TIMEOUT,
    interval: float = WindowConfig.POLL_INTERVAL,
) -> WindowHandle:
    """Wait until a live window exists and the manager tracks it.

    A remembered handle whose window has closed does not count.
    Enumeration errors are treated as transient and retried.

    Args:
        manager: Window manager to poll.
        timeout: Timeout in seconds.
        interval: Polling interval in seconds.

    Returns:
        The active window handle.

    Raises:
        WindowNotAvailableError: No window appeared within timeout.
    """
    loop = asyncio.get_running_loop()
    start_time = loop.time()
    last_error: Optional[Exception] = None

    while True:
        try:
            handle = await manager.get_active_handle()
            if handle is not None:
                await manager.update_active_handle()
                # 두 열거 사이에 창이 닫혔으면 다시 폴링
                if manager.current_handle == handle:
                    return handle
        except NotImplementedError:
            raise
        except Exception as e:
            # 세션이 일시적으로 무효화될 수 있으므로 재시도
            last_error = e

        if loop.time() - start_time >= timeout:
            raise WindowNotAvailableError(timeout=timeout, cause=last_error)

        await asyncio.sleep(interval)
