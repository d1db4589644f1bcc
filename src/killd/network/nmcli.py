"""NetworkManager-backed access point.

Creates an open hotspot connection with a fixed address through
``nmcli`` and watches its clients with ``iw``. Client changes are
picked up by a polling thread and forwarded to listeners.
"""

from __future__ import annotations

import logging
import subprocess
import threading

from killd.network.base import NetworkError, NetworkProvider

logger = logging.getLogger(__name__)

WIFI_CONNECTION_TYPE = "802-11-wireless"


def run(cmd: list[str], check: bool = True) -> str:
    try:
        p = subprocess.run(cmd, stdout=subprocess.PIPE, stderr=subprocess.STDOUT, text=True)
    except OSError as e:
        raise NetworkError(f"Cannot run {cmd[0]}: {e}") from e
    if check and p.returncode != 0:
        raise NetworkError(
            f"Command failed ({p.returncode}): {' '.join(cmd)}\n{p.stdout}"
        )
    return p.stdout.strip()


class NmcliNetworkProvider(NetworkProvider):
    def __init__(
        self,
        interface: str = "wlan0",
        ap_address: str = "192.168.39.12",
        ap_gateway: str = "192.168.39.1",
        ap_prefix: int = 24,
        poll_interval: float = 2.0,
    ) -> None:
        super().__init__()
        self._interface = interface
        self._ap_address = ap_address
        self._ap_gateway = ap_gateway
        self._ap_prefix = ap_prefix
        self._poll_interval = poll_interval
        self._connection_name: str | None = None
        self._stations: set[str] = set()
        self._stop_event = threading.Event()
        self._poller: threading.Thread | None = None

    @property
    def is_running(self) -> bool:
        return self._connection_name is not None

    def start_access_point(self, name: str) -> None:
        # Replace any stale profile left by a previous run
        run(["nmcli", "connection", "delete", name], check=False)
        run([
            "nmcli", "connection", "add",
            "type", "wifi",
            "ifname", self._interface,
            "con-name", name,
            "autoconnect", "no",
            "ssid", name,
            "802-11-wireless.mode", "ap",
            "ipv4.method", "shared",
            "ipv4.addresses", f"{self._ap_address}/{self._ap_prefix}",
            "ipv4.gateway", self._ap_gateway,
        ])
        run(["nmcli", "connection", "up", name])
        self._connection_name = name
        logger.info("WiFi Access Point %s started at %s", name, self._ap_address)

        self._stop_event.clear()
        self._poller = threading.Thread(target=self._poll_stations, daemon=True)
        self._poller.start()

    def stop(self) -> None:
        if self._connection_name is None:
            return
        self._stop_event.set()
        if self._poller is not None:
            self._poller.join(timeout=self._poll_interval * 2)
            self._poller = None
        run(["nmcli", "connection", "down", self._connection_name], check=False)
        logger.info("WiFi Access Point %s stopped", self._connection_name)
        self._connection_name = None
        self._stations.clear()

    def current_local_address(self) -> str:
        address = self._station_address()
        return address if address else self._ap_address

    def _station_address(self) -> str | None:
        """Address on an external network joined alongside the AP, if any."""
        out = run(
            ["nmcli", "-t", "-f", "NAME,TYPE", "connection", "show", "--active"],
            check=False,
        )
        for line in out.splitlines():
            name, _, conn_type = line.rpartition(":")
            if conn_type != WIFI_CONNECTION_TYPE or not name or name == self._connection_name:
                continue
            addresses = run(["nmcli", "-g", "IP4.ADDRESS", "connection", "show", name], check=False)
            first = addresses.split("|")[0].strip()
            if first:
                return first.split("/")[0]
        return None

    def _list_stations(self) -> set[str]:
        out = run(["iw", "dev", self._interface, "station", "dump"], check=False)
        return {
            line.split()[1].upper()
            for line in out.splitlines()
            if line.startswith("Station ") and len(line.split()) > 1
        }

    def _poll_stations(self) -> None:
        while not self._stop_event.is_set():
            try:
                current = self._list_stations()
            except NetworkError as e:
                logger.debug("Station poll failed: %s", e)
            else:
                for mac in sorted(current - self._stations):
                    self._notify(mac, connected=True)
                for mac in sorted(self._stations - current):
                    self._notify(mac, connected=False)
                self._stations = current
            self._stop_event.wait(self._poll_interval)
