"""
Gecko node service wrapper with Gecko-specific health checks.
"""

from typing import TypedDict

from ava_testsuite.api import GeckoClient
from ava_testsuite.config import GeckoNodeConfig
from ava_testsuite.services.base import RpcService


class GeckoProps(TypedDict):
    """Properties for a Gecko node service."""

    rpc_host: str
    rpc_port: int
    rpc_url: str
    request_timeout: float


class GeckoNodeService(RpcService):
    """
    RpcService for a Gecko node with health check via `info.getNodeID`.
    """

    props: GeckoProps

    def __init__(self, props: GeckoProps, name: str):
        super().__init__(dict(props), name)

    @classmethod
    def from_config(cls, node: GeckoNodeConfig) -> "GeckoNodeService":
        props = GeckoProps(
            rpc_host=node.host,
            rpc_port=node.port,
            rpc_url=node.rpc_url,
            request_timeout=node.request_timeout,
        )
        return cls(props, node.service_name)

    @property
    def name(self) -> str:
        return self._name

    def _rpc_health_check(self, rpc: GeckoClient):
        rpc.info_api().get_node_id()

    def create_rpc(self) -> GeckoClient:
        if not self.check_status():
            raise RuntimeError(f"Service '{self._name}' is not in use by any environment")

        return GeckoClient(
            self.props["rpc_host"],
            self.props["rpc_port"],
            request_timeout=self.props["request_timeout"],
        )
