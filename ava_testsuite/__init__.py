"""
Core library for Gecko network tests.
Provides the RPC requester, per-subsystem API bindings, workflows and waiting utilities.
"""

from .api import GeckoClient
from .config import NetworkConfig, WorkflowConfig
from .rpc import JsonRpcRequester, RpcError, RpcErrorKind
from .wait import WaitTimeoutError, wait_until, wait_until_with_value
from .workflow import RpcWorkflowRunner, WorkflowError

__all__ = [
    "GeckoClient",
    "JsonRpcRequester",
    "NetworkConfig",
    "RpcError",
    "RpcErrorKind",
    "RpcWorkflowRunner",
    "WaitTimeoutError",
    "WorkflowConfig",
    "WorkflowError",
    "wait_until",
    "wait_until_with_value",
]
