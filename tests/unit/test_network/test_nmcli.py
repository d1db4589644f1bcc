"""Tests for the NetworkManager access point provider."""

from __future__ import annotations

import subprocess
from unittest.mock import MagicMock, patch

import pytest

from killd.network.base import NetworkError, NetworkListener
from killd.network.nmcli import NmcliNetworkProvider, run
from killd.network.simulated import SimulatedNetworkProvider


def completed(stdout: str = "", returncode: int = 0) -> subprocess.CompletedProcess:
    return subprocess.CompletedProcess(args=[], returncode=returncode, stdout=stdout)


class TestRun:
    @patch("killd.network.nmcli.subprocess.run")
    def test_returns_stripped_output(self, mock_run: MagicMock) -> None:
        mock_run.return_value = completed("hello\n")
        assert run(["nmcli"]) == "hello"

    @patch("killd.network.nmcli.subprocess.run")
    def test_failure_raises(self, mock_run: MagicMock) -> None:
        mock_run.return_value = completed("boom", returncode=4)
        with pytest.raises(NetworkError):
            run(["nmcli", "connection", "up", "x"])

    @patch("killd.network.nmcli.subprocess.run")
    def test_failure_ignored_without_check(self, mock_run: MagicMock) -> None:
        mock_run.return_value = completed("boom", returncode=4)
        assert run(["nmcli"], check=False) == "boom"

    @patch("killd.network.nmcli.subprocess.run", side_effect=FileNotFoundError("nmcli"))
    def test_missing_binary(self, _mock_run: MagicMock) -> None:
        with pytest.raises(NetworkError):
            run(["nmcli"])


class TestNmcliNetworkProvider:
    @patch("killd.network.nmcli.subprocess.run")
    def test_access_point_lifecycle(self, mock_run: MagicMock) -> None:
        mock_run.return_value = completed()
        provider = NmcliNetworkProvider(interface="wlan1", poll_interval=0.01)

        provider.start_access_point("KiLL-ABC")
        assert provider.is_running is True
        commands = [c.args[0] for c in mock_run.call_args_list]
        add = next(c for c in commands if c[:3] == ["nmcli", "connection", "add"])
        assert add[add.index("ssid") + 1] == "KiLL-ABC"
        assert add[add.index("ifname") + 1] == "wlan1"
        assert add[add.index("ipv4.addresses") + 1] == "192.168.39.12/24"
        assert ["nmcli", "connection", "up", "KiLL-ABC"] in commands

        provider.stop()
        assert provider.is_running is False
        commands = [c.args[0] for c in mock_run.call_args_list]
        assert ["nmcli", "connection", "down", "KiLL-ABC"] in commands

    @patch("killd.network.nmcli.subprocess.run")
    def test_start_failure_raises(self, mock_run: MagicMock) -> None:
        mock_run.return_value = completed("Error", returncode=10)
        provider = NmcliNetworkProvider()
        with pytest.raises(NetworkError):
            provider.start_access_point("KiLL-ABC")
        assert provider.is_running is False

    @patch("killd.network.nmcli.run")
    def test_address_falls_back_to_access_point(self, mock_run: MagicMock) -> None:
        mock_run.return_value = ""
        provider = NmcliNetworkProvider(ap_address="192.168.39.12")
        assert provider.current_local_address() == "192.168.39.12"

    @patch("killd.network.nmcli.run")
    def test_address_prefers_station(self, mock_run: MagicMock) -> None:
        def fake_run(cmd: list[str], check: bool = True) -> str:
            if "--active" in cmd:
                return "Wired:802-3-ethernet\nHomeWifi:802-11-wireless"
            if cmd[-1] == "HomeWifi":
                return "10.0.0.7/24"
            return ""

        mock_run.side_effect = fake_run
        provider = NmcliNetworkProvider()
        assert provider.current_local_address() == "10.0.0.7"

    @patch("killd.network.nmcli.run")
    def test_station_events(self, mock_run: MagicMock) -> None:
        listener = MagicMock(spec=NetworkListener)
        provider = NmcliNetworkProvider(interface="wlan0", poll_interval=0)
        provider.add_listener(listener)
        outputs = [
            "Station aa:bb:cc:dd:ee:ff (on wlan0)\n\tinactive time: 10 ms",
            "Station 11:22:33:44:55:66 (on wlan0)",
        ]

        def fake_run(cmd: list[str], check: bool = True) -> str:
            out = outputs.pop(0)
            if not outputs:
                provider._stop_event.set()
            return out

        mock_run.side_effect = fake_run
        provider._poll_stations()

        assert [c.args[0] for c in listener.on_station_connected.call_args_list] == [
            "AA:BB:CC:DD:EE:FF", "11:22:33:44:55:66",
        ]
        listener.on_station_disconnected.assert_called_once_with("AA:BB:CC:DD:EE:FF")


class TestListeners:
    def test_simulated_events_reach_listeners(self) -> None:
        listener = MagicMock(spec=NetworkListener)
        provider = SimulatedNetworkProvider()
        provider.add_listener(listener)
        provider.simulate_station("AA:BB", connected=True)
        provider.simulate_station("AA:BB", connected=False)
        listener.on_station_connected.assert_called_once_with("AA:BB")
        listener.on_station_disconnected.assert_called_once_with("AA:BB")

    def test_failing_listener_does_not_stop_others(self) -> None:
        broken = MagicMock(spec=NetworkListener)
        broken.on_station_connected.side_effect = RuntimeError("oops")
        healthy = MagicMock(spec=NetworkListener)
        provider = SimulatedNetworkProvider()
        provider.add_listener(broken)
        provider.add_listener(healthy)
        provider.simulate_station("AA:BB")
        healthy.on_station_connected.assert_called_once_with("AA:BB")
