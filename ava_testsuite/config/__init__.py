"""
Configuration dataclasses and constants.
"""

from ava_testsuite.config.config import (
    NETWORK_CONFIG_ENV_VAR,
    GeckoNodeConfig,
    GenesisConfig,
    NetworkConfig,
    StakingConfig,
    WorkflowConfig,
    load_network_config,
)

__all__ = [
    # config.py
    "NETWORK_CONFIG_ENV_VAR",
    "GeckoNodeConfig",
    "GenesisConfig",
    "NetworkConfig",
    "StakingConfig",
    "WorkflowConfig",
    "load_network_config",
]
