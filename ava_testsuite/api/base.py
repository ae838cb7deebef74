"""Base class for the per-subsystem API bindings."""

from collections.abc import Iterable
from typing import Any

from ava_testsuite.rpc import JsonRpcRequester, RpcError, RpcErrorKind


class BaseApi:
    """
    Binds one API endpoint of a node to a shared requester.

    Subclasses set `endpoint` and add one method per RPC method.
    """

    endpoint: str = ""

    def __init__(self, requester: JsonRpcRequester):
        self._requester = requester

    def _call(
        self,
        method: str,
        params: dict[str, Any] | None = None,
        required: Iterable[str] = (),
    ) -> Any:
        """
        Make a call and return its result, which must be an object carrying
        every key in `required`.
        """
        params = params or {}
        result = self._requester.make_rpc_request(self.endpoint, method, params)
        missing = [k for k in required if not isinstance(result, dict) or k not in result]
        if missing:
            raise self._malformed(method, params, f"result is missing field(s) {missing}: {result!r}")
        return result

    def _call_for(self, method: str, key: str, params: dict[str, Any] | None = None) -> Any:
        """Make a call and return the `key` field of its result."""
        return self._call(method, params, required=(key,))[key]

    def _call_for_list(self, method: str, key: str, params: dict[str, Any] | None = None) -> list:
        """
        Like `_call_for`, for list fields. The node encodes an empty list as
        null, which is returned as [].
        """
        value = self._call_for(method, key, params)
        if value is None:
            return []
        if not isinstance(value, list):
            raise self._malformed(method, params, f"field '{key}' is not a list: {value!r}")
        return value

    def _call_for_int(self, method: str, key: str, params: dict[str, Any] | None = None) -> int:
        """Like `_call_for`, for integers the node sends as decimal strings."""
        value = self._call_for(method, key, params)
        try:
            return int(value)
        except (TypeError, ValueError) as e:
            raise self._malformed(method, params, f"field '{key}' is not an integer: {value!r}") from e

    def _malformed(self, method: str, params: dict[str, Any] | None, reason: str) -> RpcError:
        return RpcError(
            reason,
            RpcErrorKind.MalformedResponse,
            endpoint=self.endpoint,
            method=method,
            params=params or {},
        )
