"""mDNS hostname publication with python-zeroconf.

Makes the device reachable as ``<hostname>.local`` and advertises the
HTTP API as an ``_http._tcp`` service so the companion app can find it.
"""

from __future__ import annotations

import logging
import socket
import time
from typing import Callable

from zeroconf import ServiceInfo, Zeroconf

from killd.errors import StartupError
from killd.network.base import NameResolver
from killd.system import Restarter

logger = logging.getLogger(__name__)

SERVICE_TYPE = "_http._tcp.local."


class ZeroconfNameResolver(NameResolver):
    def __init__(self, port: int, address: Callable[[], str]) -> None:
        self._port = port
        self._address = address
        self._zeroconf: Zeroconf | None = None

    def begin(self, hostname: str) -> bool:
        self.close()
        zc = None
        try:
            info = ServiceInfo(
                SERVICE_TYPE,
                f"{hostname}.{SERVICE_TYPE}",
                addresses=[socket.inet_aton(self._address())],
                port=self._port,
                server=f"{hostname}.local.",
                properties={"path": "/"},
            )
            zc = Zeroconf()
            zc.register_service(info)
        except Exception as e:
            logger.debug("mDNS registration of %s failed: %s", hostname, e)
            if zc is not None:
                zc.close()
            return False
        self._zeroconf = zc
        return True

    def close(self) -> None:
        if self._zeroconf is not None:
            self._zeroconf.unregister_all_services()
            self._zeroconf.close()
            self._zeroconf = None


class NullNameResolver(NameResolver):
    """Used when mDNS is disabled; always succeeds."""

    def begin(self, hostname: str) -> bool:
        logger.info("mDNS disabled, not publishing %s", hostname)
        return True


def start_name_resolution(
    resolver: NameResolver,
    hostname: str,
    restarter: Restarter,
    max_retries: int = 5,
    retry_delay: float = 1.0,
    sleep: Callable[[float], None] = time.sleep,
) -> None:
    """Start the resolver, retrying up to ``max_retries`` times.

    When every attempt fails the device is restarted. If the restarter
    returns, StartupError is raised so startup cannot continue silently.
    """
    logger.info("Setting up local network name %s.local", hostname)
    for attempt in range(max_retries + 1):
        if resolver.begin(hostname):
            logger.info("mDNS responder started")
            return
        if attempt < max_retries:
            logger.debug("mDNS attempt %d failed, retrying", attempt + 1)
            sleep(retry_delay)

    logger.error("Error setting up mDNS responder! Restarting...")
    restarter.restart()
    raise StartupError(f"mDNS responder for {hostname} could not be started")
