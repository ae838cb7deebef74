"""Basic node reachability checks."""

import logging

import flexitest

from ava_testsuite.base_test import GeckoNetworkTest

logger = logging.getLogger(__name__)


@flexitest.register
class NodeInfoTest(GeckoNetworkTest):
    """Every configured node answers info calls with a distinct node ID."""

    def __init__(self, ctx: flexitest.InitContext):
        ctx.set_env("gecko")

    def main(self, ctx):
        node_ids = set()
        for node in self.network.nodes:
            client = self.get_service(node.service_name).create_rpc()
            node_id = client.info_api().get_node_id()
            network_id = client.info_api().get_network_id()
            logger.info(f"Node {node.service_name}: id {node_id}, network {network_id}")
            node_ids.add(node_id)

        assert len(node_ids) == len(self.network.nodes), f"Expected distinct node IDs, got {node_ids}"
        return True
