"""
Service wrappers for test infrastructure.
"""

from ava_testsuite.services.base import RpcService
from ava_testsuite.services.gecko import GeckoNodeService, GeckoProps

__all__ = [
    "RpcService",
    "GeckoNodeService",
    "GeckoProps",
]
