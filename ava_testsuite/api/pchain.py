"""
P-Chain (platform) API bindings.

Mutating calls on the P-Chain return an unsigned transaction that has to be
signed and issued by the caller, and take the payer nonce explicitly.
"""

from ava_testsuite.api.base import BaseApi
from ava_testsuite.config.constants import PCHAIN_ENDPOINT
from ava_testsuite.rpc_types import AccountInfo, BlockchainStatus, Subnet, Validator


class PChainApi(BaseApi):
    endpoint = PCHAIN_ENDPOINT

    def create_account(self, username: str, password: str, private_key: str | None = None) -> str:
        params = {"username": username, "password": password}
        if private_key is not None:
            params["privateKey"] = private_key
        return self._call_for("platform.createAccount", "address", params)

    def get_account(self, address: str) -> AccountInfo:
        return self._call(
            "platform.getAccount", {"address": address}, required=("address", "nonce", "balance")
        )

    def list_accounts(self, username: str, password: str) -> list[AccountInfo]:
        return self._call_for_list(
            "platform.listAccounts",
            "accounts",
            {"username": username, "password": password},
        )

    def import_key(self, username: str, password: str, private_key: str) -> str:
        return self._call_for(
            "platform.importKey",
            "address",
            {"username": username, "password": password, "privateKey": private_key},
        )

    def export_key(self, username: str, password: str, address: str) -> str:
        return self._call_for(
            "platform.exportKey",
            "privateKey",
            {"username": username, "password": password, "address": address},
        )

    def export_ava(self, amount: int, to: str, payer_nonce: int) -> str:
        """
        Build an unsigned export to an X-Chain address given without its prefix.
        """
        return self._call_for(
            "platform.exportAVA",
            "unsignedTx",
            {"amount": amount, "to": to, "payerNonce": payer_nonce},
        )

    def import_ava(self, username: str, password: str, to: str, payer_nonce: int) -> str:
        """Build a signed import of AVA exported from the X-Chain into `to`."""
        return self._call_for(
            "platform.importAVA",
            "tx",
            {"username": username, "password": password, "to": to, "payerNonce": payer_nonce},
        )

    def sign(self, tx: str, address: str, username: str, password: str) -> str:
        return self._call_for(
            "platform.sign",
            "tx",
            {"tx": tx, "address": address, "username": username, "password": password},
        )

    def issue_tx(self, tx: str) -> str:
        return self._call_for("platform.issueTx", "txID", {"tx": tx})

    def add_default_subnet_validator(
        self,
        node_id: str,
        start_time: int,
        end_time: int,
        stake_amount: int,
        payer_nonce: int,
        destination: str,
        delegation_fee_rate: int,
    ) -> str:
        return self._call_for(
            "platform.addDefaultSubnetValidator",
            "unsignedTx",
            {
                "id": node_id,
                "startTime": start_time,
                "endTime": end_time,
                "stakeAmount": stake_amount,
                "payerNonce": payer_nonce,
                "destination": destination,
                "delegationFeeRate": delegation_fee_rate,
            },
        )

    def add_default_subnet_delegator(
        self,
        node_id: str,
        start_time: int,
        end_time: int,
        stake_amount: int,
        payer_nonce: int,
        destination: str,
    ) -> str:
        return self._call_for(
            "platform.addDefaultSubnetDelegator",
            "unsignedTx",
            {
                "id": node_id,
                "startTime": start_time,
                "endTime": end_time,
                "stakeAmount": stake_amount,
                "payerNonce": payer_nonce,
                "destination": destination,
            },
        )

    def get_current_validators(self, subnet_id: str | None = None) -> list[Validator]:
        params = {} if subnet_id is None else {"subnetID": subnet_id}
        return self._call_for_list("platform.getCurrentValidators", "validators", params)

    def get_pending_validators(self, subnet_id: str | None = None) -> list[Validator]:
        params = {} if subnet_id is None else {"subnetID": subnet_id}
        return self._call_for_list("platform.getPendingValidators", "validators", params)

    def get_subnets(self, subnet_ids: list[str] | None = None) -> list[Subnet]:
        params = {} if subnet_ids is None else {"ids": subnet_ids}
        return self._call_for_list("platform.getSubnets", "subnets", params)

    def get_blockchain_status(self, blockchain_id: str) -> str:
        status: BlockchainStatus = self._call(
            "platform.getBlockchainStatus", {"blockchainID": blockchain_id}, required=("status",)
        )
        return status["status"]
