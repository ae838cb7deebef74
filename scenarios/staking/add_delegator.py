"""
Delegating stake to a validator of the default subnet.
"""

import logging

import flexitest

from ava_testsuite.base_test import GeckoNetworkTest

logger = logging.getLogger(__name__)

SEED_AMOUNT = 5_000_000
DELEGATION_AMOUNT = 1_000_000


@flexitest.register
class AddDelegatorTest(GeckoNetworkTest):
    """
    Delegates to the first validator in the current set and checks the
    delegation period has started when the workflow returns.
    """

    def __init__(self, ctx: flexitest.InitContext):
        ctx.set_env("gecko")

    def main(self, ctx):
        node = self.first_node()
        runner = self.create_runner(node, "delegator-user", "delegator-user-pw-1!")

        validators = node.create_rpc().pchain_api().get_current_validators()
        assert validators, "Network has no validators to delegate to"
        delegatee = validators[0]["id"]

        runner.create_and_seed_xchain_account_from_genesis(SEED_AMOUNT)
        pchain_address = runner.transfer_ava_xchain_to_pchain(SEED_AMOUNT)
        nonce_before = runner.get_current_payer_nonce(pchain_address)

        runner.add_delegator_on_subnet(delegatee, pchain_address, DELEGATION_AMOUNT)
        logger.info(f"Delegated {DELEGATION_AMOUNT} from {pchain_address} to {delegatee}")

        nonce_after = runner.get_current_payer_nonce(pchain_address)
        assert nonce_after == nonce_before + 1, (
            f"Nonce should advance by one: {nonce_before} -> {nonce_after}"
        )
        return True
