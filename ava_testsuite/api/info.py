from ava_testsuite.api.base import BaseApi
from ava_testsuite.config.constants import INFO_ENDPOINT
from ava_testsuite.rpc_types import Peer


class InfoApi(BaseApi):
    """Node information queries."""

    endpoint = INFO_ENDPOINT

    def get_node_id(self) -> str:
        return self._call_for("info.getNodeID", "nodeID")

    def get_network_id(self) -> str:
        return self._call_for("info.getNetworkID", "networkID")

    def get_peers(self) -> list[Peer]:
        return self._call_for_list("info.peers", "peers")
