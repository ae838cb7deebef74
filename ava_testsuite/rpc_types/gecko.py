from typing import List, TypedDict

# Gecko serializes its integers as JSON strings
NumericString = str


class AccountInfo(TypedDict):
    address: str
    nonce: NumericString
    balance: NumericString


class Validator(TypedDict):
    startTime: NumericString
    endTime: NumericString
    stakeAmount: NumericString
    id: str


class Subnet(TypedDict):
    id: str
    controlKeys: List[str]
    threshold: NumericString


class BlockchainStatus(TypedDict):
    status: str


class Peer(TypedDict):
    ip: str
    publicIP: str
    id: str
    version: str
    lastSent: str
    lastReceived: str
