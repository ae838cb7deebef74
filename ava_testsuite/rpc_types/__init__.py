from ava_testsuite.rpc_types.gecko import AccountInfo, BlockchainStatus, Peer, Subnet, Validator

__all__ = [
    "AccountInfo",
    "BlockchainStatus",
    "Peer",
    "Subnet",
    "Validator",
]
