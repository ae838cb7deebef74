"""
Funding a node from genesis and registering it as a default subnet validator.
"""

import logging

import flexitest

from ava_testsuite.base_test import GeckoNetworkTest

logger = logging.getLogger(__name__)

SEED_AMOUNT = 5_000_000
STAKE_AMOUNT = 1_000_000


@flexitest.register
class FundAndValidateTest(GeckoNetworkTest):
    """
    Runs the full fund-and-validate workflow on the last configured node, which
    seeds the X-Chain twice before staking.
    """

    def __init__(self, ctx: flexitest.InitContext):
        ctx.set_env("gecko")

    def main(self, ctx):
        staker = self.get_service(self.network.nodes[-1].service_name)
        runner = self.create_runner(staker, "staker-user", "staker-user-pw-1!")

        runner.get_funds_and_start_validating(SEED_AMOUNT, STAKE_AMOUNT)

        node_id = staker.create_rpc().info_api().get_node_id()
        validators = staker.create_rpc().pchain_api().get_current_validators()
        logger.info(f"Current validators: {[v['id'] for v in validators]}")
        assert any(v["id"] == node_id for v in validators), f"{node_id} is not validating"
        return True
