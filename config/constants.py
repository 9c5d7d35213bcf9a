"""Constants and Enums for Native Service Utilities.

Defines detection, configuration, platform and window-tracking constants.
"""

import re
from enum import Enum
from typing import Optional


# Python 3.10 호환성을 위한 StrEnum 대체
class StrEnum(str, Enum):
    """String enumeration compatible with Python 3.10+."""

    def __str__(self) -> str:
        return self.value


# ============================================================
# Binary Detection
# ============================================================


class PathGenerationErrorType(StrEnum):
    """Problems found while deriving candidate binary paths.

    These are reported before any candidate is probed on disk.
    """

    UNSUPPORTED_PLATFORM = "UNSUPPORTED_PLATFORM"
    NO_BUILD_TOOL = "NO_BUILD_TOOL"
    CONFIG_INVALID = "CONFIG_INVALID"
    CONFIG_MISSING = "CONFIG_MISSING"
    CONFIG_WARNING = "CONFIG_WARNING"


class PathValidationErrorType(StrEnum):
    """Per-candidate filesystem outcomes."""

    FILE_NOT_FOUND = "FILE_NOT_FOUND"
    NOT_EXECUTABLE = "NOT_EXECUTABLE"
    PERMISSION_DENIED = "PERMISSION_DENIED"
    IS_DIRECTORY = "IS_DIRECTORY"

    @property
    def default_message(self) -> str:
        """Human readable message used when the OS gives none."""
        return _VALIDATION_MESSAGES[self]


_VALIDATION_MESSAGES = {
    PathValidationErrorType.FILE_NOT_FOUND: "File not found",
    PathValidationErrorType.NOT_EXECUTABLE: "File is not executable",
    PathValidationErrorType.PERMISSION_DENIED: "Permission denied",
    PathValidationErrorType.IS_DIRECTORY: "Path is a directory, not a file",
}


# ============================================================
# Configuration Files
# ============================================================


class ConfigFormat(StrEnum):
    """Configuration file formats, selected by file extension."""

    JSON = "json"
    YAML = "yaml"
    TOML = "toml"
    SCRIPT = "script"

    @classmethod
    def from_path(cls, path: str) -> Optional["ConfigFormat"]:
        """Detect the format of a configuration file.

        Args:
            path: File path or file name.

        Returns:
            ConfigFormat or None for unrecognized extensions.
        """
        for config_format, pattern in _CONFIG_EXTENSION_PATTERNS:
            if pattern.search(path):
                return config_format
        return None


# .js/.cjs/.mjs/.ts/.cts/.mts
_CONFIG_EXTENSION_PATTERNS = (
    (ConfigFormat.SCRIPT, re.compile(r"\.(c|m)?(j|t)s$")),
    (ConfigFormat.JSON, re.compile(r"\.json5?$")),
    (ConfigFormat.TOML, re.compile(r"\.toml$")),
    (ConfigFormat.YAML, re.compile(r"\.ya?ml$")),
)

TYPESCRIPT_EXTENSIONS = (".ts", ".cts", ".mts")

EXTENDS_KEY = "extends"


# ============================================================
# Platform
# ============================================================


class SupportedPlatform(StrEnum):
    """Platforms supported by desktop application adapters."""

    DARWIN = "darwin"
    WIN32 = "win32"
    LINUX = "linux"

    @property
    def display_name(self) -> str:
        """Human readable platform name."""
        return {
            SupportedPlatform.DARWIN: "macOS",
            SupportedPlatform.WIN32: "Windows",
            SupportedPlatform.LINUX: "Linux",
        }[self]

    @property
    def binary_extension(self) -> str:
        """Application binary extension on this platform."""
        return {
            SupportedPlatform.DARWIN: ".app",
            SupportedPlatform.WIN32: ".exe",
            SupportedPlatform.LINUX: "",
        }[self]


# Jenkins는 BUILD_NUMBER로만 식별 가능
CI_ENV_VARS = (
    "CI",
    "CONTINUOUS_INTEGRATION",
    "BUILD_NUMBER",
    "GITHUB_ACTIONS",
    "GITLAB_CI",
    "CIRCLECI",
    "TRAVIS",
)

ARCHITECTURE_ALIASES = {
    "x86_64": "x64",
    "amd64": "x64",
    "x64": "x64",
    "aarch64": "arm64",
    "arm64": "arm64",
    "armv7l": "arm",
    "armv6l": "arm",
    "i386": "ia32",
    "i686": "ia32",
    "x86": "ia32",
}


# ============================================================
# Logging
# ============================================================


class LogArea(StrEnum):
    """Areas within a service scope used to name loggers."""

    SERVICE = "service"
    LAUNCHER = "launcher"
    BRIDGE = "bridge"
    MOCK = "mock"
    CONFIG = "config"
    UTILS = "utils"
    WINDOW = "window"
    BINARY = "binary"


DEFAULT_LOG_SCOPE = "native-service"


# ============================================================
# Window Tracking
# ============================================================


class WindowConfig:
    """Window readiness polling configuration (seconds)."""

    WAIT_TIMEOUT = 30.0
    POLL_INTERVAL = 0.25
