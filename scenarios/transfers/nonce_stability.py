"""Reading a payer nonce without writes in between is stable."""

import flexitest

from ava_testsuite.base_test import GeckoNetworkTest

TRANSFER_AMOUNT = 1_000_000


@flexitest.register
class NonceStabilityTest(GeckoNetworkTest):
    def __init__(self, ctx: flexitest.InitContext):
        ctx.set_env("gecko")

    def main(self, ctx):
        runner = self.create_runner(self.first_node(), "nonce-user", "nonce-user-pw-1!")
        runner.create_and_seed_xchain_account_from_genesis(2 * TRANSFER_AMOUNT)
        pchain_address = runner.transfer_ava_xchain_to_pchain(TRANSFER_AMOUNT)

        nonces = [runner.get_current_payer_nonce(pchain_address) for _ in range(3)]
        assert len(set(nonces)) == 1, f"Nonce changed without writes: {nonces}"
        return True
