from ava_testsuite.api.base import BaseApi
from ava_testsuite.config.constants import KEYSTORE_ENDPOINT


class KeystoreApi(BaseApi):
    """Keystore user management."""

    endpoint = KEYSTORE_ENDPOINT

    def create_user(self, username: str, password: str) -> bool:
        return self._call_for(
            "keystore.createUser",
            "success",
            {"username": username, "password": password},
        )

    def list_users(self) -> list[str]:
        return self._call_for_list("keystore.listUsers", "users")
