"""
JSON-RPC requester for Gecko node endpoints.
"""

import json
import logging
from enum import Enum
from typing import Any

import requests

from ava_testsuite.config.constants import JSON_RPC_VERSION, NO_IMPORT_INPUTS_ERROR_STR

# Calls are strictly sequential and never pipelined, so one id is enough.
REQUEST_ID = 1


class RpcErrorKind(str, Enum):
    """Where in the request/response cycle an RPC call failed."""

    Serialization = "serialization"
    Transport = "transport"
    HttpStatus = "http_status"
    MalformedResponse = "malformed_response"
    Application = "application"

    def __str__(self) -> str:
        return self.value


class RpcError(Exception):
    """
    Raised when an RPC call fails for any reason.

    `kind` tells transport problems apart from errors reported by the node.
    For `RpcErrorKind.Application` the node's `code`, `message` and `data`
    are kept as attributes.
    """

    def __init__(
        self,
        reason: str,
        kind: RpcErrorKind,
        endpoint: str | None = None,
        method: str | None = None,
        params: dict | None = None,
        code: int | None = None,
        message: str | None = None,
        data: Any = None,
    ):
        self.reason = reason
        self.kind = kind
        self.endpoint = endpoint
        self.method = method
        self.params = params
        self.code = code
        self.message = message
        self.data = data
        super().__init__(
            f"RPC call failed ({kind}) for method '{method}' on endpoint '{endpoint}': {reason}"
        )

    @classmethod
    def from_error_object(
        cls, error: dict, endpoint: str, method: str, params: dict
    ) -> "RpcError":
        return cls(
            f"RPC Error {error.get('code')}: {error.get('message')}",
            RpcErrorKind.Application,
            endpoint=endpoint,
            method=method,
            params=params,
            code=error.get("code"),
            message=error.get("message"),
            data=error.get("data"),
        )


def is_import_inputs_pending(err: Exception) -> bool:
    """
    Whether `err` means an X-Chain import found nothing to import yet because the
    P-Chain export it depends on has not been accepted.

    The node reports this only through the error text, so this is the one place
    that matches on it.
    """
    if isinstance(err, RpcError) and err.message is not None:
        return NO_IMPORT_INPUTS_ERROR_STR in err.message
    return NO_IMPORT_INPUTS_ERROR_STR in str(err)


class JsonRpcRequester:
    """
    Posts JSON-RPC 2.0 requests to a single Gecko node.

    Usage:
        requester = JsonRpcRequester("127.0.0.1", 9650)
        result = requester.make_rpc_request("ext/info", "info.getNodeID", {})
    """

    def __init__(self, host: str, port: int, request_timeout: float = 30, name: str | None = None):
        self.host = host
        self.port = port
        self.request_timeout = request_timeout
        self.name = name or f"{host}:{port}"
        self.logger = logging.getLogger(f"rpc.{self.name}")

    def make_rpc_request(self, endpoint: str, method: str, params: dict[str, Any]) -> Any:
        """
        Make a JSON-RPC call and return the `result` object of the response.

        Args:
            endpoint: Path of the API on the node, e.g. "ext/bc/X"
            method: RPC method name, e.g. "avm.getTxStatus"
            params: Method parameters

        Raises:
            RpcError: On any serialization, transport, HTTP or RPC-level failure
        """
        # A doubled '/' in the URL turns the POST into a GET on the node side.
        endpoint = endpoint.lstrip("/")

        def fail(reason: str, kind: RpcErrorKind) -> RpcError:
            return RpcError(reason, kind, endpoint=endpoint, method=method, params=params)

        payload = {
            "jsonrpc": JSON_RPC_VERSION,
            "method": method,
            "params": params,
            "id": REQUEST_ID,
        }
        try:
            body = json.dumps(payload)
        except (TypeError, ValueError) as e:
            raise fail(f"could not serialize params {params!r}: {e}", RpcErrorKind.Serialization) from e

        url = f"http://{self.host}:{self.port}/{endpoint}"
        self.logger.debug(f"Making request to url: {url}")
        self.logger.debug(f"Request body: {body}")

        try:
            resp = requests.post(
                url,
                data=body,
                headers={"Content-Type": "application/json"},
                timeout=self.request_timeout,
            )
        except requests.RequestException as e:
            self.logger.warning(f"RPC request to {url} failed: {e}")
            raise fail(f"error making POST request to {url}: {e}", RpcErrorKind.Transport) from e

        self.logger.debug(f"Got response with status code: {resp.status_code}")
        self.logger.debug(f"Response body: {resp.text}")

        if resp.status_code != 200:
            raise fail(
                f"received response with non-200 code '{resp.status_code}' "
                f"and response body '{resp.text}'",
                RpcErrorKind.HttpStatus,
            )

        try:
            response = resp.json()
        except ValueError as e:
            self.logger.warning(f"Invalid JSON response: {resp.text}")
            raise fail(f"invalid JSON: {e}", RpcErrorKind.MalformedResponse) from e

        if not isinstance(response, dict):
            raise fail(f"response is not a JSON object: {resp.text}", RpcErrorKind.MalformedResponse)

        error = response.get("error")
        if error:
            if not isinstance(error, dict):
                raise fail(f"malformed error object: {error!r}", RpcErrorKind.MalformedResponse)
            if error.get("code", 0) != 0:
                self.logger.warning(f"RPC error: {error}")
                raise RpcError.from_error_object(error, endpoint, method, params)

        if "result" not in response:
            raise fail(f"response has no result: {resp.text}", RpcErrorKind.MalformedResponse)

        return response["result"]
