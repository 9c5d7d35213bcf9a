"""Window Enumerator Implementations.

IWindowEnumerator implementations. Real enumerators are supplied by
framework adapters (CDP targets, WebView instances); this module offers
a callable adapter and a scripted fake.
"""

from typing import Awaitable, Callable, Iterable, Optional, Union

from core.protocols import IWindowEnumerator
from domain.models.window import WindowHandle, WindowInfo

WindowSnapshot = Iterable[Union[WindowInfo, WindowHandle]]


def _to_window_infos(windows: WindowSnapshot) -> list[WindowInfo]:
    return [
        w if isinstance(w, WindowInfo) else WindowInfo(handle=w)
        for w in windows
    ]


class CallableWindowEnumerator(IWindowEnumerator):
    """Adapts an async function returning windows to IWindowEnumerator.

    Example:
        ```python
        async def list_targets():
            targets = await cdp.get_targets()
            return [WindowInfo(t.id, t.type, t.url) for t in targets]

        manager = WindowManager(CallableWindowEnumerator(list_targets))
        ```
    """

    def __init__(self, func: Callable[[], Awaitable[WindowSnapshot]]) -> None:
        self._func = func

    async def list_windows(self) -> list[WindowInfo]:
        return _to_window_infos(await self._func())


class FakeWindowEnumerator(IWindowEnumerator):
    """Fake window enumerator for testing.

    Each list_windows() call consumes the next scripted snapshot; the
    last snapshot keeps being returned once the script runs out.

    Example:
        ```python
        enumerator = FakeWindowEnumerator()
        enumerator.add_snapshots(["w1"], ["w1", "w2"], ["w2"])
        ```
    """

    def __init__(self, windows: Optional[WindowSnapshot] = None) -> None:
        """Initialize.

        Args:
            windows: Initial windows returned by every call.
        """
        self._current: list[WindowInfo] = _to_window_infos(windows or [])
        self._snapshots: list[list[WindowInfo]] = []
        self._error: Optional[Exception] = None
        self._call_count = 0

    def set_windows(self, windows: WindowSnapshot) -> None:
        """Replace the windows returned from now on."""
        self._snapshots.clear()
        self._current = _to_window_infos(windows)

    def add_snapshots(self, *snapshots: WindowSnapshot) -> None:
        """Queue snapshots returned by subsequent calls."""
        self._snapshots.extend(_to_window_infos(s) for s in snapshots)

    def set_error(self, error: Optional[Exception]) -> None:
        """Make list_windows() raise (None to stop raising)."""
        self._error = error

    async def list_windows(self) -> list[WindowInfo]:
        """Return the next snapshot."""
        self._call_count += 1
        if self._error is not None:
            raise self._error
        if self._snapshots:
            self._current = self._snapshots.pop(0)
        return list(self._current)

    @property
    def call_count(self) -> int:
        """Number of list_windows() calls."""
        return self._call_count
