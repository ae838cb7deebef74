from ava_testsuite.api.info import InfoApi
from ava_testsuite.api.keystore import KeystoreApi
from ava_testsuite.api.pchain import PChainApi
from ava_testsuite.api.xchain import XChainApi
from ava_testsuite.rpc import JsonRpcRequester


class GeckoClient:
    """
    Entry point to one Gecko node: all subsystem APIs share one requester.

    Usage:
        client = GeckoClient("127.0.0.1", 9650, request_timeout=10)
        node_id = client.info_api().get_node_id()
    """

    def __init__(
        self,
        host: str,
        port: int,
        request_timeout: float = 30,
        requester: JsonRpcRequester | None = None,
    ):
        self.requester = requester or JsonRpcRequester(host, port, request_timeout)
        self._info = InfoApi(self.requester)
        self._keystore = KeystoreApi(self.requester)
        self._xchain = XChainApi(self.requester)
        self._pchain = PChainApi(self.requester)

    def info_api(self) -> InfoApi:
        return self._info

    def keystore_api(self) -> KeystoreApi:
        return self._keystore

    def xchain_api(self) -> XChainApi:
        return self._xchain

    def pchain_api(self) -> PChainApi:
        return self._pchain
