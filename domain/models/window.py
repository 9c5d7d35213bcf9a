"""Window Models."""

from dataclasses import dataclass
from typing import Optional

# Opaque window/target identifier, compared by equality only.
WindowHandle = str


@dataclass(frozen=True)
class WindowInfo:
    """Point-in-time snapshot of an application window.

    Attributes:
        handle: Window handle.
        type: Target type (e.g. "page", "webview").
        url: Current URL.
        title: Window title.
    """

    handle: WindowHandle
    type: str = "page"
    url: Optional[str] = None
    title: Optional[str] = None
