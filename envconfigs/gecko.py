"""Environment configuration for an already running Gecko network."""

import logging

import flexitest

from ava_testsuite.config import NetworkConfig
from ava_testsuite.services import GeckoNodeService

logger = logging.getLogger(__name__)


class GeckoNetworkEnv(flexitest.EnvConfig):
    """
    Gecko network environment: wraps every node named in the network config as
    a service and waits for each to answer RPC calls.

    Services are keyed by node name.
    """

    def __init__(self, network: NetworkConfig, ready_timeout: int = 30):
        self.network = network
        self.ready_timeout = ready_timeout

    def init(self, ectx: flexitest.EnvContext) -> flexitest.LiveEnv:
        services = {}
        for node in self.network.nodes:
            svc = GeckoNodeService.from_config(node)
            svc.start()
            logger.info(f"Waiting for node {svc.name} at {node.rpc_url}")
            svc.wait_for_ready(timeout=self.ready_timeout)
            services[svc.name] = svc

        return flexitest.LiveEnv(services)
