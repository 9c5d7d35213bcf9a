"""Services Package.

Lifecycle base classes extended by framework adapters.
"""

from .launcher import BaseLauncher
from .worker_service import BaseService

__all__ = [
    "BaseLauncher",
    "BaseService",
]
