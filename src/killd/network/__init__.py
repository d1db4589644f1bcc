"""Radio, access point and name-resolution collaborators for killd.

Public API:
    NetworkProvider -- Abstract access point owner
    NameResolver -- Abstract mDNS publisher
    NmcliNetworkProvider -- NetworkManager hotspot
    SimulatedNetworkProvider -- In-process stand-in
    ZeroconfNameResolver -- python-zeroconf publisher
"""

from killd.network.base import (
    LoggingNetworkListener,
    NameResolver,
    NetworkError,
    NetworkListener,
    NetworkProvider,
)
from killd.network.simulated import SimulatedNetworkProvider

__all__ = [
    "LoggingNetworkListener",
    "NameResolver",
    "NetworkError",
    "NetworkListener",
    "NetworkProvider",
    "NmcliNetworkProvider",
    "SimulatedNetworkProvider",
    "ZeroconfNameResolver",
]


def __getattr__(name: str) -> type:
    """Lazy import for concrete implementations that require external deps."""
    if name == "NmcliNetworkProvider":
        from killd.network.nmcli import NmcliNetworkProvider
        return NmcliNetworkProvider
    if name == "ZeroconfNameResolver":
        from killd.network.mdns import ZeroconfNameResolver
        return ZeroconfNameResolver
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
