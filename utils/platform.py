"""Platform Utilities.

Pure helpers answering which OS, architecture and CI environment the
service runs on, plus path helpers for application binaries.
"""

import os
import platform
import sys
import tempfile
from typing import Optional, Union

from config.constants import (
    ARCHITECTURE_ALIASES,
    CI_ENV_VARS,
    SupportedPlatform,
)


def get_platform() -> str:
    """Return the current platform identifier.

    Returns:
        "darwin", "win32" or "linux"; other platforms are returned as
        reported by ``sys.platform``.
    """
    if sys.platform.startswith("linux"):
        return SupportedPlatform.LINUX.value
    return sys.platform


def is_supported_platform(name: Optional[str] = None) -> bool:
    """Check if a platform identifier (default: current platform) is supported."""
    if name is None:
        name = get_platform()
    return name in {p.value for p in SupportedPlatform}


def get_platform_display_name() -> Optional[str]:
    """Return "macOS", "Windows" or "Linux" for the current platform."""
    current = get_platform()
    if not is_supported_platform(current):
        return None
    return SupportedPlatform(current).display_name


def get_binary_extension() -> str:
    """Return the binary extension for the current platform.

    Returns:
        ".exe" on Windows, ".app" on macOS and "" elsewhere.
    """
    current = get_platform()
    if not is_supported_platform(current):
        return ""
    return SupportedPlatform(current).binary_extension


def get_architecture() -> str:
    """Return the CPU architecture ("x64", "arm64", "ia32", ...)."""
    machine = platform.machine().lower()
    return ARCHITECTURE_ALIASES.get(machine, machine)


def normalize_path(input_path: str) -> str:
    """Normalize separators and redundant segments for this platform."""
    return os.path.normpath(input_path)


def is_ci() -> bool:
    """Check common CI environment variables."""
    return any(os.environ.get(name) for name in CI_ENV_VARS)


def get_python_version() -> str:
    """Return the running interpreter version (e.g. "3.12.1")."""
    return platform.python_version()


def sanitize_app_name_for_path(
    app_name: str,
    target_platform: Optional[Union[SupportedPlatform, str]] = None,
) -> str:
    """Sanitize an application name for use in a binary path.

    Linux packagers lower-case product names and replace spaces with
    hyphens; other platforms keep the name unchanged.

    Args:
        app_name: Application display name.
        target_platform: Platform to sanitize for (default: current).

    Returns:
        Sanitized name, e.g. "my-app-name" on Linux for "My App Name".
    """
    target = str(target_platform) if target_platform else get_platform()
    if target == SupportedPlatform.LINUX.value:
        return app_name.lower().replace(" ", "-")
    return app_name


def get_path_separator() -> str:
    """Return the path separator of this platform."""
    return os.sep


def get_env_var(name: str, default: Optional[str] = None) -> Optional[str]:
    """Read an environment variable; empty values count as unset."""
    return os.environ.get(name) or default


def get_home_directory() -> str:
    """Return the home directory of the current user."""
    return os.path.expanduser("~")


def get_temp_directory() -> str:
    """Return the temporary directory."""
    return tempfile.gettempdir()
