"""
Constants used throughout the test suite.
"""

JSON_RPC_VERSION = "2.0"

# API endpoints on a Gecko node
INFO_ENDPOINT = "ext/info"
KEYSTORE_ENDPOINT = "ext/keystore"
XCHAIN_ENDPOINT = "ext/bc/X"
PCHAIN_ENDPOINT = "ext/P"

TRANSACTION_ACCEPTED_STATUS = "Accepted"
ZERO_BALANCE = "0"

# Returned by the X-Chain importAVA call while the matching P-Chain export is
# still unaccepted.
# TODO: drop once the P-Chain exposes a transaction status endpoint
# (https://github.com/ava-labs/gecko/issues/296)
NO_IMPORT_INPUTS_ERROR_STR = "problem issuing transaction: no import inputs"
