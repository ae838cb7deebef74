"""
Configuration dataclasses for workflows and the test network.
"""

import os
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path

import toml


@dataclass(frozen=True)
class GenesisConfig:
    username: str = field(default="genesis")
    password: str = field(default="genesis34!23")
    # Private key of the address funded in the default local network genesis
    private_key: str = field(default="ewoqjP7PxY4yr3iLTpLisriqt94hdyDFNgchSxGGztUrTXtNN")


@dataclass(frozen=True)
class StakingConfig:
    """Offsets and durations in seconds, relative to the time a tx is built."""

    time_until_staking_begins: int = field(default=20)
    time_until_staking_ends: int = field(default=72 * 60 * 60)
    time_until_delegating_begins: int = field(default=20)
    time_until_delegating_ends: int = field(default=72 * 60 * 60)
    delegation_fee_rate: int = field(default=500000)


@dataclass(frozen=True)
class WorkflowConfig:
    genesis: GenesisConfig = field(default_factory=GenesisConfig)
    staking: StakingConfig = field(default_factory=StakingConfig)
    ava_asset_id: str = field(default="AVA")
    xchain_address_prefix: str = field(default="X-")
    poll_interval: float = field(default=1.0)
    import_retry_interval: float = field(default=1.0)
    # None retries the X-Chain import for as long as the node reports missing inputs
    import_retry_limit: int | None = field(default=None)

    def as_toml_string(self) -> str:
        d = asdict(self)
        # Remove None values (optional configs)
        d = {k: v for k, v in d.items() if v is not None}
        return toml.dumps(d)

    @classmethod
    def from_dict(cls, d: dict) -> "WorkflowConfig":
        d = dict(d)
        genesis = GenesisConfig(**d.pop("genesis", {}))
        staking = StakingConfig(**d.pop("staking", {}))
        _check_keys(cls, d)
        return cls(genesis=genesis, staking=staking, **d)

    @classmethod
    def from_toml(cls, path: str | Path) -> "WorkflowConfig":
        return cls.from_dict(toml.load(path))


@dataclass(frozen=True)
class GeckoNodeConfig:
    host: str = field(default="127.0.0.1")
    port: int = field(default=9650)
    request_timeout: float = field(default=30)
    name: str | None = field(default=None)

    @property
    def rpc_url(self) -> str:
        return f"http://{self.host}:{self.port}"

    @property
    def service_name(self) -> str:
        return self.name or f"{self.host}:{self.port}"


@dataclass(frozen=True)
class NetworkConfig:
    """
    Nodes of an already running test network and the policy used to drive it.

    Example network file:

        network_acceptance_timeout = 30

        [[nodes]]
        name = "bootstrapper"
        host = "127.0.0.1"
        port = 9650

        [workflow.staking]
        time_until_staking_begins = 10
    """

    nodes: list[GeckoNodeConfig] = field(default_factory=lambda: [GeckoNodeConfig()])
    network_acceptance_timeout: float = field(default=30)
    workflow: WorkflowConfig = field(default_factory=WorkflowConfig)

    def __post_init__(self):
        if not self.nodes:
            raise ValueError("network config must name at least one node")
        names = [n.service_name for n in self.nodes]
        if len(set(names)) != len(names):
            raise ValueError(f"node names must be unique, got: {names}")

    def as_toml_string(self) -> str:
        return toml.dumps(asdict(self))

    @classmethod
    def from_dict(cls, d: dict) -> "NetworkConfig":
        d = dict(d)
        kwargs = {}
        if "nodes" in d:
            kwargs["nodes"] = [GeckoNodeConfig(**n) for n in d.pop("nodes")]
        if "workflow" in d:
            kwargs["workflow"] = WorkflowConfig.from_dict(d.pop("workflow"))
        _check_keys(cls, d)
        return cls(**kwargs, **d)

    @classmethod
    def from_toml(cls, path: str | Path) -> "NetworkConfig":
        return cls.from_dict(toml.load(path))


def _check_keys(cls, d: dict) -> None:
    known = {f.name for f in fields(cls)}
    unknown = set(d) - known
    if unknown:
        raise ValueError(f"unknown {cls.__name__} keys: {sorted(unknown)}")


NETWORK_CONFIG_ENV_VAR = "GECKO_NETWORK_CONFIG"


def load_network_config(path: str | Path | None = None) -> NetworkConfig:
    """
    Load the network config from `path`, falling back to the file named by the
    GECKO_NETWORK_CONFIG environment variable, then to a single local node.
    """
    path = path or os.getenv(NETWORK_CONFIG_ENV_VAR)
    if not path:
        return NetworkConfig()
    return NetworkConfig.from_toml(path)
