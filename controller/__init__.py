"""Controller Package.

Tracks active application windows per session and per multiremote
instance.
"""

from .window_manager import (
    MultiRemoteWindowManager,
    WindowManager,
    wait_for_active_window,
)

__all__ = [
    "MultiRemoteWindowManager",
    "WindowManager",
    "wait_for_active_window",
]
