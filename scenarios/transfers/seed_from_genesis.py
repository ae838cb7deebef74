"""
Seeding an X-Chain account from the genesis account.
"""

import logging

import flexitest

from ava_testsuite.base_test import GeckoNetworkTest

logger = logging.getLogger(__name__)

SEED_AMOUNT = 1_000_000


@flexitest.register
class SeedFromGenesisTest(GeckoNetworkTest):
    """The seeded address holds at least the seed amount once the send is accepted."""

    def __init__(self, ctx: flexitest.InitContext):
        ctx.set_env("gecko")

    def main(self, ctx):
        runner = self.create_runner(self.first_node(), "seed-user", "seed-user-pw-1!")

        address = runner.create_and_seed_xchain_account_from_genesis(SEED_AMOUNT)
        balance = runner.get_xchain_balance(address)
        logger.info(f"Seeded {address}, balance {balance}")

        assert balance >= SEED_AMOUNT, f"Expected at least {SEED_AMOUNT}, got {balance}"
        return True
