"""
Moving AVA from the X-Chain to the P-Chain and back.
"""

import logging

import flexitest

from ava_testsuite.base_test import GeckoNetworkTest

logger = logging.getLogger(__name__)

SEED_AMOUNT = 5_000_000
TRANSFER_AMOUNT = 1_000_000


@flexitest.register
class XChainPChainRoundTripTest(GeckoNetworkTest):
    """
    Value moved to the P-Chain and back arrives on the X-Chain, and the P-Chain
    nonce advances once per issued transaction.
    """

    def __init__(self, ctx: flexitest.InitContext):
        ctx.set_env("gecko")

    def main(self, ctx):
        runner = self.create_runner(self.first_node(), "roundtrip-user", "roundtrip-pw-1!")

        xchain_address = runner.create_and_seed_xchain_account_from_genesis(SEED_AMOUNT)
        pchain_address = runner.transfer_ava_xchain_to_pchain(TRANSFER_AMOUNT)
        nonce_after_import = runner.get_current_payer_nonce(pchain_address)
        logger.info(f"P-Chain address {pchain_address} funded, nonce {nonce_after_import}")

        balance_before = runner.get_xchain_balance(xchain_address)
        runner.transfer_ava_pchain_to_xchain(pchain_address, xchain_address, TRANSFER_AMOUNT)
        balance_after = runner.get_xchain_balance(xchain_address)
        logger.info(f"X-Chain balance {balance_before} -> {balance_after}")

        assert balance_after > balance_before, (
            f"Expected {xchain_address} to receive AVA back, balance {balance_before} -> {balance_after}"
        )
        assert balance_after <= balance_before + TRANSFER_AMOUNT, (
            f"Received more than was sent: {balance_before} -> {balance_after}"
        )
        nonce_after_export = runner.get_current_payer_nonce(pchain_address)
        assert nonce_after_export == nonce_after_import + 1, (
            f"Nonce should advance by one: {nonce_after_import} -> {nonce_after_export}"
        )
        return True
