"""
Standard testing workflows driven through a node's RPC API.

Every workflow is a strictly ordered chain of calls, each consuming what the
previous one returned. Failures propagate immediately and nothing is rolled
back, so a failed workflow leaves the network in whatever intermediate state
it reached.

Nonces are read back from the node right before each mutating P-Chain call.
Two workflows mutating the same P-Chain address concurrently race on that
read; callers must serialize them.
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass

from ava_testsuite.api import GeckoClient
from ava_testsuite.config import WorkflowConfig
from ava_testsuite.config.constants import TRANSACTION_ACCEPTED_STATUS, ZERO_BALANCE
from ava_testsuite.rpc import RpcError, is_import_inputs_pending
from ava_testsuite.rpc_types import Validator
from ava_testsuite.wait import (
    SYSTEM_CLOCK,
    Clock,
    WaitTimeoutError,
    wait_for_wall_clock,
    wait_until_with_value,
)

logger = logging.getLogger(__name__)


class WorkflowError(Exception):
    """Raised when a workflow step fails; the underlying error is the cause."""


@dataclass(frozen=True)
class GeckoUser:
    """Keystore credential the runner acts as."""

    username: str
    password: str


@contextmanager
def _stage(description: str) -> Iterator[None]:
    try:
        yield
    except (RpcError, WaitTimeoutError, WorkflowError) as e:
        raise WorkflowError(f"{description}: {e}") from e


def _validator_in(node_id: str, validators: list[Validator]) -> bool:
    return any(v.get("id") == node_id for v in validators)


class RpcWorkflowRunner:
    """
    Executes standard testing workflows like funding accounts from genesis and
    adding nodes as validators, using a GeckoClient as the entry point to the
    test network and acting as the given keystore user.

    `network_acceptance_timeout` bounds every wait for a state change to become
    visible through the node (X-Chain transaction acceptance, AVA arriving on the
    P-Chain, validator set membership). There is one timeout for all of them:
    each is the network accepting a transaction and the node's state catching up.

    Usage:
        runner = RpcWorkflowRunner(client, "alice", "alice-pw", network_acceptance_timeout=30)
        runner.get_funds_and_start_validating(seed_amount=5_000_000, stake_amount=1_000_000)
    """

    def __init__(
        self,
        client: GeckoClient,
        username: str,
        password: str,
        network_acceptance_timeout: float,
        config: WorkflowConfig | None = None,
        clock: Clock = SYSTEM_CLOCK,
    ):
        self.client = client
        self.gecko_user = GeckoUser(username, password)
        self.network_acceptance_timeout = network_acceptance_timeout
        self.config = config or WorkflowConfig()
        self.clock = clock

    def get_funds_and_start_validating(self, seed_amount: int, stake_amount: int) -> None:
        """
        Take a node with no AVA, fund it from genesis, move the funds to the
        P-Chain and register the node as a validator on the default subnet.

        The X-Chain account is seeded a second time after the transfer, before
        the validator is added.
        """
        with _stage("Could not get staker node ID"):
            staker_node_id = self.client.info_api().get_node_id()
        with _stage("Could not seed XChain account from genesis"):
            self.create_and_seed_xchain_account_from_genesis(seed_amount)
        with _stage("Could not transfer AVA from XChain to PChain"):
            staker_pchain_address = self.transfer_ava_xchain_to_pchain(seed_amount)
        with _stage("Could not seed XChain account from genesis"):
            self.create_and_seed_xchain_account_from_genesis(seed_amount)
        with _stage(f"Could not add staker {staker_node_id} to default subnet"):
            self.add_validator_on_subnet(staker_node_id, staker_pchain_address, stake_amount)

    def add_delegator_on_subnet(
        self, delegatee_node_id: str, pchain_address: str, stake_amount: int
    ) -> None:
        """
        Delegate `stake_amount` from `pchain_address` to `delegatee_node_id`, then
        block until the delegation period has started.
        """
        staking = self.config.staking
        pchain = self.client.pchain_api()
        current_payer_nonce = self.get_current_payer_nonce(pchain_address)
        start_time = int(self.clock.now() + staking.time_until_delegating_begins)
        end_time = int(self.clock.now() + staking.time_until_delegating_ends)
        unsigned_tx = pchain.add_default_subnet_delegator(
            delegatee_node_id,
            start_time,
            end_time,
            stake_amount,
            current_payer_nonce + 1,
            pchain_address,
        )
        signed_tx = pchain.sign(
            unsigned_tx, pchain_address, self.gecko_user.username, self.gecko_user.password
        )
        tx_id = pchain.issue_tx(signed_tx)
        logger.info(f"Issued delegator tx {tx_id} for node {delegatee_node_id} starting at {start_time}")
        wait_for_wall_clock(start_time, step=self.config.poll_interval, clock=self.clock)

    def add_validator_on_subnet(self, node_id: str, pchain_address: str, stake_amount: int) -> None:
        """
        Add `node_id` as a validator of the default subnet staking from
        `pchain_address`, block until the staking period has started and wait for
        the node to show up in the current validator set.
        """
        staking = self.config.staking
        pchain = self.client.pchain_api()
        current_payer_nonce = self.get_current_payer_nonce(pchain_address)
        start_time = int(self.clock.now() + staking.time_until_staking_begins)
        end_time = int(self.clock.now() + staking.time_until_staking_ends)
        unsigned_tx = pchain.add_default_subnet_validator(
            node_id,
            start_time,
            end_time,
            stake_amount,
            current_payer_nonce + 1,
            pchain_address,
            staking.delegation_fee_rate,
        )
        signed_tx = pchain.sign(
            unsigned_tx, pchain_address, self.gecko_user.username, self.gecko_user.password
        )
        tx_id = pchain.issue_tx(signed_tx)
        logger.info(f"Issued validator tx {tx_id} for node {node_id} starting at {start_time}")
        wait_for_wall_clock(start_time, step=self.config.poll_interval, clock=self.clock)
        self.wait_for_validator_addition(node_id)

    def create_and_seed_xchain_account_from_genesis(self, amount: int) -> str:
        """
        Create a new X-Chain address under the runner's user and send `amount`
        AVA to it from the genesis account.

        Returns the new, funded X-Chain address.
        """
        genesis = self.config.genesis
        user = self.gecko_user
        keystore = self.client.keystore_api()
        xchain = self.client.xchain_api()

        # Both users may already exist from an earlier workflow.
        for username, password in ((user.username, user.password), (genesis.username, genesis.password)):
            try:
                keystore.create_user(username, password)
            except RpcError as e:
                logger.debug(f"Could not create user {username}, continuing: {e}")

        genesis_address = xchain.import_key(genesis.username, genesis.password, genesis.private_key)
        logger.debug(f"Genesis address: {genesis_address}")
        address = xchain.create_address(user.username, user.password)
        logger.debug(f"Test account address: {address}")
        tx_id = xchain.send(
            amount, self.config.ava_asset_id, address, genesis.username, genesis.password
        )
        self.wait_for_xchain_transaction_acceptance(tx_id)
        return address

    def transfer_ava_xchain_to_pchain(self, amount: int) -> str:
        """
        Create a new P-Chain account under the runner's user and move `amount`
        AVA into it from the user's X-Chain holdings.

        Returns the new, funded P-Chain address.
        """
        user = self.gecko_user
        xchain = self.client.xchain_api()
        pchain = self.client.pchain_api()

        pchain_address = pchain.create_account(user.username, user.password)
        export_tx_id = xchain.export_ava(pchain_address, amount, user.username, user.password)
        self.wait_for_xchain_transaction_acceptance(export_tx_id)

        current_payer_nonce = self.get_current_payer_nonce(pchain_address)
        import_tx = pchain.import_ava(
            user.username, user.password, pchain_address, current_payer_nonce + 1
        )
        pchain.issue_tx(import_tx)
        # The P-Chain has no transaction status endpoint, so watch the balance.
        self.wait_for_pchain_nonzero_balance(pchain_address)
        return pchain_address

    def transfer_ava_pchain_to_xchain(
        self, pchain_address: str, xchain_address: str, amount: int
    ) -> str:
        """
        Move `amount` AVA from `pchain_address` to `xchain_address`. The runner's
        user must own both addresses.

        Returns the X-Chain address.
        """
        user = self.gecko_user
        pchain = self.client.pchain_api()

        # The P-Chain takes the X-Chain address without its prefix.
        xchain_address_without_prefix = xchain_address.removeprefix(self.config.xchain_address_prefix)
        current_payer_nonce = self.get_current_payer_nonce(pchain_address)
        unsigned_tx = pchain.export_ava(amount, xchain_address_without_prefix, current_payer_nonce + 1)
        signed_tx = pchain.sign(unsigned_tx, pchain_address, user.username, user.password)
        pchain.issue_tx(signed_tx)

        tx_id = self._import_ava_to_xchain(xchain_address)
        self.wait_for_xchain_transaction_acceptance(tx_id)
        return xchain_address

    def _import_ava_to_xchain(self, xchain_address: str) -> str:
        """
        Import into the X-Chain, retrying while the node reports that the P-Chain
        export has not been accepted yet.
        """
        user = self.gecko_user
        xchain = self.client.xchain_api()
        retry_limit = self.config.import_retry_limit
        retries = 0
        while True:
            try:
                return xchain.import_ava(xchain_address, user.username, user.password)
            except RpcError as e:
                if not is_import_inputs_pending(e):
                    raise
                if retry_limit is not None and retries >= retry_limit:
                    raise WorkflowError(
                        f"Gave up importing AVA to {xchain_address} after {retries} retries"
                    ) from e
                retries += 1
                logger.debug(f"Export to {xchain_address} not accepted yet, retry {retries}")
                self.clock.sleep(self.config.import_retry_interval)

    def wait_for_xchain_transaction_acceptance(self, tx_id: str) -> None:
        xchain = self.client.xchain_api()
        wait_until_with_value(
            lambda: xchain.get_tx_status(tx_id),
            lambda status: status == TRANSACTION_ACCEPTED_STATUS,
            error_with=f"Timed out waiting for transaction {tx_id} to be accepted on the XChain.",
            timeout=self.network_acceptance_timeout,
            step=self.config.poll_interval,
            clock=self.clock,
            resource=tx_id,
        )

    def wait_for_validator_addition(self, node_id: str, subnet_id: str | None = None) -> None:
        pchain = self.client.pchain_api()
        wait_until_with_value(
            lambda: pchain.get_current_validators(subnet_id),
            lambda validators: _validator_in(node_id, validators),
            error_with=(
                f"Timed out waiting for validator {node_id} to be accepted as a validator by the network."
            ),
            timeout=self.network_acceptance_timeout,
            step=self.config.poll_interval,
            clock=self.clock,
            resource=node_id,
        )

    def wait_for_pchain_nonzero_balance(self, pchain_address: str) -> None:
        pchain = self.client.pchain_api()
        wait_until_with_value(
            lambda: pchain.get_account(pchain_address)["balance"],
            lambda balance: balance != ZERO_BALANCE,
            error_with=f"Timed out waiting for PChain address {pchain_address} to receive funds.",
            timeout=self.network_acceptance_timeout,
            step=self.config.poll_interval,
            clock=self.clock,
            resource=pchain_address,
        )

    def get_current_payer_nonce(self, pchain_address: str) -> int:
        """Read the current payer nonce of `pchain_address` from the node."""
        account = self.client.pchain_api().get_account(pchain_address)
        try:
            nonce = int(account["nonce"])
        except (TypeError, ValueError) as e:
            raise WorkflowError(
                f"Could not parse payer nonce {account['nonce']!r} of PChain address {pchain_address}"
            ) from e
        if nonce < 0:
            raise WorkflowError(f"Negative payer nonce {nonce} for PChain address {pchain_address}")
        return nonce

    def get_xchain_balance(self, xchain_address: str) -> int:
        return self.client.xchain_api().get_balance(xchain_address, self.config.ava_asset_id)
