"""
X-Chain (AVM) API bindings.
"""

from ava_testsuite.api.base import BaseApi
from ava_testsuite.config.constants import XCHAIN_ENDPOINT


class XChainApi(BaseApi):
    """
    Calls against the X-Chain endpoint. Mutating calls take the keystore
    credential that controls the funds and return the issued transaction id.
    """

    endpoint = XCHAIN_ENDPOINT

    def create_address(self, username: str, password: str) -> str:
        return self._call_for(
            "avm.createAddress",
            "address",
            {"username": username, "password": password},
        )

    def import_key(self, username: str, password: str, private_key: str) -> str:
        """Import a private key into the user's keystore and return its address."""
        return self._call_for(
            "avm.importKey",
            "address",
            {"username": username, "password": password, "privateKey": private_key},
        )

    def export_key(self, username: str, password: str, address: str) -> str:
        return self._call_for(
            "avm.exportKey",
            "privateKey",
            {"username": username, "password": password, "address": address},
        )

    def send(self, amount: int, asset_id: str, to: str, username: str, password: str) -> str:
        return self._call_for(
            "avm.send",
            "txID",
            {
                "amount": amount,
                "assetID": asset_id,
                "to": to,
                "username": username,
                "password": password,
            },
        )

    def get_balance(self, address: str, asset_id: str) -> int:
        return self._call_for_int("avm.getBalance", "balance", {"address": address, "assetID": asset_id})

    def export_ava(self, to: str, amount: int, username: str, password: str) -> str:
        """Export AVA to a P-Chain address. Returns the X-Chain transaction id."""
        return self._call_for(
            "avm.exportAVA",
            "txID",
            {"to": to, "amount": amount, "username": username, "password": password},
        )

    def import_ava(self, to: str, username: str, password: str) -> str:
        """
        Import AVA exported from the P-Chain into `to`, which must carry the
        X-Chain address prefix.
        """
        return self._call_for(
            "avm.importAVA",
            "txID",
            {"to": to, "username": username, "password": password},
        )

    def get_tx_status(self, tx_id: str) -> str:
        return self._call_for("avm.getTxStatus", "status", {"txID": tx_id})
