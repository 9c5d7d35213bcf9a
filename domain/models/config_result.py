"""Config Read Result Model."""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class ConfigReadResult(Generic[T]):
    """Result of reading a configuration file.

    Attributes:
        config: Parsed, merged and validated configuration.
        config_file: Path of the file that was read, relative to the
            project root.
    """

    config: T
    config_file: str
