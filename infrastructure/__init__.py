"""Infrastructure Package.

Provides Protocol implementations.
Handles filesystem, config parsing and subprocess integrations.
"""

from .binary_detector import BinaryDetector, StaticPathGenerator
from .config_reader import ConfigReader
from .script_loader import FakeScriptLoader, NodeScriptLoader
from .window_enumerator import CallableWindowEnumerator, FakeWindowEnumerator

__all__ = [
    "BinaryDetector",
    "ConfigReader",
    "NodeScriptLoader",
    "CallableWindowEnumerator",
    # Fake implementations for testing
    "StaticPathGenerator",
    "FakeScriptLoader",
    "FakeWindowEnumerator",
]
