"""
Per-subsystem bindings for the Gecko node RPC API.
"""

from ava_testsuite.api.base import BaseApi
from ava_testsuite.api.client import GeckoClient
from ava_testsuite.api.info import InfoApi
from ava_testsuite.api.keystore import KeystoreApi
from ava_testsuite.api.pchain import PChainApi
from ava_testsuite.api.xchain import XChainApi

__all__ = [
    "BaseApi",
    "GeckoClient",
    "InfoApi",
    "KeystoreApi",
    "PChainApi",
    "XChainApi",
]
