"""
Service wrapper for nodes that are already running outside the test runtime.

Node deployment belongs to whatever brought the network up; these services only
know where to reach a node and how to tell whether it is answering.
"""

import logging
from typing import Any

import flexitest

from ava_testsuite.wait import wait_until


class RpcService(flexitest.Service):
    """
    flexitest.Service for a node reachable over RPC but not owned by the runtime.

    Subclasses build their client in `create_rpc()` and probe it in
    `_rpc_health_check()`, raising when the node is not usable.
    """

    def __init__(self, props: dict[str, Any], name: str):
        super().__init__(props)
        self._name = name
        self._in_use = False
        self._logger = logging.getLogger(f"service.{name}")

    # The node's process is owned by the network, so start/stop only track
    # whether this environment is using it.
    def start(self):
        self._in_use = True

    def stop(self):
        self._in_use = False

    def is_started(self) -> bool:
        return self._in_use

    def check_status(self) -> bool:
        return self._in_use

    def create_rpc(self) -> Any:
        raise NotImplementedError(f"{type(self).__name__} does not define an RPC client")

    def _rpc_health_check(self, rpc: Any) -> None:
        raise NotImplementedError(f"{type(self).__name__} does not define a health check")

    def check_health(self) -> bool:
        """True when the service is in use and its node answers the health check."""
        if not self._in_use:
            return False
        try:
            self._rpc_health_check(self.create_rpc())
        except Exception as e:
            self._logger.debug(f"Node not healthy yet: {e}")
            return False
        return True

    def wait_for_ready(self, timeout: float = 30, interval: float = 0.5) -> None:
        """
        Poll the health check until it passes.

        Raises:
            WaitTimeoutError: naming this service, if the node never answers
        """
        wait_until(
            self.check_health,
            error_with=f"Node '{self._name}' did not answer within {timeout}s",
            timeout=timeout,
            step=interval,
            resource=self._name,
        )
