from unittest.mock import patch

import pytest

pytest.importorskip("flexitest")

from ava_testsuite.config import GeckoNodeConfig, NetworkConfig  # noqa: E402
from ava_testsuite.rpc import RpcError, RpcErrorKind  # noqa: E402
from ava_testsuite.services import GeckoNodeService  # noqa: E402
from ava_testsuite.wait import WaitTimeoutError  # noqa: E402
from envconfigs import GeckoNetworkEnv  # noqa: E402


@pytest.fixture
def service():
    return GeckoNodeService.from_config(
        GeckoNodeConfig(host="10.0.0.7", port=9651, request_timeout=4, name="staker")
    )


def test_props_from_config(service):
    assert service.name == "staker"
    assert service.props["rpc_url"] == "http://10.0.0.7:9651"
    assert not service.is_started()


def test_create_rpc_requires_start(service):
    with pytest.raises(RuntimeError, match="staker"):
        service.create_rpc()

    service.start()
    client = service.create_rpc()

    assert client.requester.host == "10.0.0.7"
    assert client.requester.request_timeout == 4


@patch("ava_testsuite.api.info.InfoApi.get_node_id")
def test_healthy_when_node_answers(get_node_id, service):
    get_node_id.return_value = "NodeID-1"

    assert not service.check_health()
    service.start()
    assert service.check_health()


@patch("ava_testsuite.api.info.InfoApi.get_node_id")
def test_unhealthy_when_rpc_fails(get_node_id, service):
    get_node_id.side_effect = RpcError("connection refused", RpcErrorKind.Transport)
    service.start()

    assert not service.check_health()
    with pytest.raises(WaitTimeoutError) as exc_info:
        service.wait_for_ready(timeout=0.05, interval=0.01)
    assert exc_info.value.resource == "staker"


@patch("ava_testsuite.api.info.InfoApi.get_node_id")
def test_env_keys_services_by_node_name(get_node_id):
    get_node_id.return_value = "NodeID-1"
    network = NetworkConfig(nodes=[GeckoNodeConfig(name="a"), GeckoNodeConfig(port=9652, name="b")])

    live = GeckoNetworkEnv(network, ready_timeout=1).init(None)

    assert set(live.svcs) == {"a", "b"}
    assert all(svc.is_started() for svc in live.svcs.values())
