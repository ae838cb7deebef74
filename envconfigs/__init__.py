"""Environment configurations."""

from envconfigs.gecko import GeckoNetworkEnv

__all__ = [
    "GeckoNetworkEnv",
]
