"""Shared pytest fixtures: a fake clock and an in-memory Gecko node."""

import json
from collections import defaultdict

import pytest

from ava_testsuite.api import GeckoClient
from ava_testsuite.config import StakingConfig, WorkflowConfig
from ava_testsuite.config.constants import NO_IMPORT_INPUTS_ERROR_STR
from ava_testsuite.rpc import RpcError, RpcErrorKind
from ava_testsuite.wait import Clock
from ava_testsuite.workflow import RpcWorkflowRunner

START_TIME = 1_600_000_000.0
GENESIS_FUNDS = 10**15
NETWORK_ACCEPTANCE_TIMEOUT = 30


class FakeClock:
    """Clock whose sleeps advance time instantly."""

    def __init__(self, start: float = START_TIME):
        self.current = start
        self.sleeps: list[float] = []

    def now(self) -> float:
        return self.current

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.current += seconds

    def as_clock(self) -> Clock:
        return Clock(now=self.now, sleep=self.sleep)


class FakeGeckoNode:
    """
    In-memory stand-in for a Gecko node, served through the requester interface.

    Effects that take time on a real network are delayed by a number of polls:
    - `acceptance_polls`: avm.getTxStatus calls answering "Processing" per tx
    - `pchain_credit_polls`: platform.getAccount calls before an import is credited
    - `import_not_ready_attempts`: avm.importAVA calls failing with missing inputs
      after a P-Chain export is issued
    Validators show up once the clock passes their start time.
    """

    def __init__(
        self,
        clock: FakeClock,
        acceptance_polls: int = 2,
        pchain_credit_polls: int = 2,
        import_not_ready_attempts: int = 0,
    ):
        self.clock = clock
        self.acceptance_polls = acceptance_polls
        self.pchain_credit_polls = pchain_credit_polls
        self.import_not_ready_attempts = import_not_ready_attempts

        self.node_id = "NodeID-7Xhw2mDxuDS44j42TCB6U5579esbSt3Lg"
        self.calls: list[tuple[str, str, dict]] = []
        self.failures: dict[str, RpcError] = {}
        self.users: dict[str, str] = {}
        self.address_owner: dict[str, str] = {}
        self.xchain_balances: dict[str, int] = defaultdict(int)
        self.pchain_accounts: dict[str, dict] = {}
        self.pchain_pending_credit: dict[str, list[int]] = {}
        self.exported_to_pchain: dict[str, int] = defaultdict(int)
        self.pending_xchain_imports: dict[str, list[int]] = {}
        self.tx_status_polls: dict[str, int] = {}
        self.validators: list[dict] = []
        self.delegators: list[dict] = []
        self._counter = 0

    # Test helpers

    def methods(self) -> list[str]:
        return [method for _, method, _ in self.calls]

    def params_of(self, method: str) -> list[dict]:
        return [params for _, m, params in self.calls if m == method]

    def fail(self, method: str, message: str, code: int = -32000):
        self.failures[method] = self._app_error(method, message, code)

    def bump_nonce(self, address: str):
        """Simulates a transaction issued on `address` by someone else."""
        self.pchain_accounts[address]["nonce"] += 1

    # Requester interface

    def make_rpc_request(self, endpoint: str, method: str, params: dict):
        self.calls.append((endpoint, method, params))
        if method in self.failures:
            raise self.failures[method]
        handler = getattr(self, "_" + method.replace(".", "_"))
        return handler(params)

    # Internals

    def _next(self, prefix: str) -> str:
        self._counter += 1
        return f"{prefix}{self._counter}"

    def _app_error(self, method: str, message: str, code: int = -32000) -> RpcError:
        return RpcError(
            f"RPC Error {code}: {message}",
            RpcErrorKind.Application,
            method=method,
            code=code,
            message=message,
        )

    def _new_tx(self) -> str:
        tx_id = self._next("tx-")
        self.tx_status_polls[tx_id] = self.acceptance_polls
        return tx_id

    def _check_user(self, method: str, params: dict):
        if self.users.get(params["username"]) != params["password"]:
            raise self._app_error(method, "incorrect password or user doesn't exist")

    def _check_payer_nonce(self, method: str, payer: str, nonce: int):
        expected = self.pchain_accounts[payer]["nonce"] + 1
        if nonce != expected:
            raise self._app_error(method, f"invalid nonce: expected {expected}, got {nonce}")

    def _info_getNodeID(self, params):
        return {"nodeID": self.node_id}

    def _keystore_createUser(self, params):
        if params["username"] in self.users:
            raise self._app_error("keystore.createUser", "user already exists")
        self.users[params["username"]] = params["password"]
        return {"success": True}

    def _avm_importKey(self, params):
        self._check_user("avm.importKey", params)
        address = "X-genesis"
        if address not in self.address_owner:
            self.xchain_balances[address] = GENESIS_FUNDS
        self.address_owner[address] = params["username"]
        return {"address": address}

    def _avm_createAddress(self, params):
        self._check_user("avm.createAddress", params)
        address = self._next("X-addr")
        self.address_owner[address] = params["username"]
        return {"address": address}

    def _avm_send(self, params):
        self._check_user("avm.send", params)
        source = next(
            a
            for a, owner in self.address_owner.items()
            if owner == params["username"] and self.xchain_balances[a] >= params["amount"]
        )
        self.xchain_balances[source] -= params["amount"]
        self.xchain_balances[params["to"]] += params["amount"]
        return {"txID": self._new_tx()}

    def _avm_getBalance(self, params):
        return {"balance": str(self.xchain_balances[params["address"]])}

    def _avm_getTxStatus(self, params):
        tx_id = params["txID"]
        if tx_id not in self.tx_status_polls:
            return {"status": "Unknown"}
        if self.tx_status_polls[tx_id] > 0:
            self.tx_status_polls[tx_id] -= 1
            return {"status": "Processing"}
        return {"status": "Accepted"}

    def _avm_exportAVA(self, params):
        self._check_user("avm.exportAVA", params)
        amount = params["amount"]
        source = next(
            a
            for a, owner in self.address_owner.items()
            if owner == params["username"] and self.xchain_balances[a] >= amount
        )
        self.xchain_balances[source] -= amount
        self.exported_to_pchain[params["to"]] += amount
        return {"txID": self._new_tx()}

    def _avm_importAVA(self, params):
        self._check_user("avm.importAVA", params)
        to = params["to"]
        if not to.startswith("X-"):
            raise self._app_error("avm.importAVA", f"couldn't parse address {to}")
        pending = self.pending_xchain_imports.get(to.removeprefix("X-"))
        if pending is None or pending[1] > 0:
            if pending is not None:
                pending[1] -= 1
            raise self._app_error("avm.importAVA", NO_IMPORT_INPUTS_ERROR_STR)
        del self.pending_xchain_imports[to.removeprefix("X-")]
        self.xchain_balances[to] += pending[0]
        return {"txID": self._new_tx()}

    def _platform_createAccount(self, params):
        self._check_user("platform.createAccount", params)
        address = self._next("6Y3kysjF9jnHnYkdS9yGAuoHyae2eNmeV")
        self.address_owner[address] = params["username"]
        self.pchain_accounts[address] = {"nonce": 0, "balance": 0}
        return {"address": address}

    def _platform_getAccount(self, params):
        address = params["address"]
        account = self.pchain_accounts[address]
        pending = self.pchain_pending_credit.get(address)
        if pending is not None:
            if pending[1] > 0:
                pending[1] -= 1
            else:
                account["balance"] += pending[0]
                del self.pchain_pending_credit[address]
        return {
            "address": address,
            "nonce": str(account["nonce"]),
            "balance": str(account["balance"]),
        }

    def _platform_importAVA(self, params):
        self._check_user("platform.importAVA", params)
        self._check_payer_nonce("platform.importAVA", params["to"], params["payerNonce"])
        return {
            "tx": json.dumps(
                {"type": "import", "to": params["to"], "payerNonce": params["payerNonce"], "signer": params["to"]}
            )
        }

    def _platform_exportAVA(self, params):
        return {
            "unsignedTx": json.dumps(
                {"type": "export", "to": params["to"], "amount": params["amount"], "payerNonce": params["payerNonce"]}
            )
        }

    def _platform_addDefaultSubnetValidator(self, params):
        return {"unsignedTx": json.dumps({"type": "validator", **params})}

    def _platform_addDefaultSubnetDelegator(self, params):
        return {"unsignedTx": json.dumps({"type": "delegator", **params})}

    def _platform_sign(self, params):
        self._check_user("platform.sign", params)
        tx = json.loads(params["tx"])
        if "signer" in tx:
            raise self._app_error("platform.sign", "tx is already signed")
        tx["signer"] = params["address"]
        return {"tx": json.dumps(tx)}

    def _platform_issueTx(self, params):
        tx = json.loads(params["tx"])
        if "signer" not in tx:
            raise self._app_error("platform.issueTx", "tx is not signed")
        payer = tx["signer"]
        self._check_payer_nonce("platform.issueTx", payer, tx["payerNonce"])
        self.pchain_accounts[payer]["nonce"] += 1

        if tx["type"] == "import":
            amount = self.exported_to_pchain.pop(payer, 0)
            self.pchain_pending_credit[payer] = [amount, self.pchain_credit_polls]
        elif tx["type"] == "export":
            self.pchain_accounts[payer]["balance"] -= tx["amount"]
            self.pending_xchain_imports[tx["to"]] = [tx["amount"], self.import_not_ready_attempts]
        elif tx["type"] == "validator":
            self.pchain_accounts[payer]["balance"] -= tx["stakeAmount"]
            self.validators.append(
                {
                    "id": tx["id"],
                    "startTime": str(tx["startTime"]),
                    "endTime": str(tx["endTime"]),
                    "stakeAmount": str(tx["stakeAmount"]),
                }
            )
        elif tx["type"] == "delegator":
            self.pchain_accounts[payer]["balance"] -= tx["stakeAmount"]
            self.delegators.append(tx)
        return {"txID": self._next("ptx-")}

    def _platform_getCurrentValidators(self, params):
        now = self.clock.now()
        return {"validators": [v for v in self.validators if int(v["startTime"]) <= now]}


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def node(clock: FakeClock) -> FakeGeckoNode:
    return FakeGeckoNode(clock)


@pytest.fixture
def client(node: FakeGeckoNode) -> GeckoClient:
    return GeckoClient("127.0.0.1", 9650, requester=node)


@pytest.fixture
def config() -> WorkflowConfig:
    return WorkflowConfig(staking=StakingConfig())


@pytest.fixture
def runner(client: GeckoClient, config: WorkflowConfig, clock: FakeClock) -> RpcWorkflowRunner:
    return RpcWorkflowRunner(
        client,
        "test-user",
        "test-user-pw-1!",
        NETWORK_ACCEPTANCE_TIMEOUT,
        config=config,
        clock=clock.as_clock(),
    )
