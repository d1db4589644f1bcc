"""Shared test fixtures for the killd test suite.

Provides an identity, in-memory collaborators (credential store,
simulated boiler and network) and a test client wired to them, with the
authentication proof fixed to ``"OK"``.
"""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from killd.api.server import create_app
from killd.boiler.simulated import SimulatedBoilerDriver
from killd.display import Display
from killd.domain.models import DeviceIdentity, ProvisioningRecord
from killd.network.base import NameResolver
from killd.network.simulated import SimulatedNetworkProvider
from killd.storage.memory import MemoryCredentialStore
from killd.system import Restarter

MAXIMUM_TEMPERATURE = 90
MINIMUM_TEMPERATURE = 30
PROOF = "OK"


# ---------------------------------------------------------------------------
# Domain Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def identity() -> DeviceIdentity:
    return DeviceIdentity(device_id="A1B2C3D4E5F6")


@pytest.fixture
def sample_record() -> ProvisioningRecord:
    return ProvisioningRecord(ssid="home", password="secret123", app_id="app1")


# ---------------------------------------------------------------------------
# Collaborator Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def store() -> MemoryCredentialStore:
    return MemoryCredentialStore()


@pytest.fixture
def boiler() -> SimulatedBoilerDriver:
    """A simulated boiler with a fixed water temperature."""
    return SimulatedBoilerDriver(
        minimum_temperature=MINIMUM_TEMPERATURE,
        target_temperature=40,
        current_temperature=35,
        drift=False,
    )


@pytest.fixture
def display() -> MagicMock:
    return MagicMock(spec=Display)


@pytest.fixture
def network() -> SimulatedNetworkProvider:
    return SimulatedNetworkProvider(ap_address="192.168.39.12")


@pytest.fixture
def resolver() -> MagicMock:
    mock = MagicMock(spec=NameResolver)
    mock.begin.return_value = True
    return mock


@pytest.fixture
def restarter() -> MagicMock:
    return MagicMock(spec=Restarter)


# ---------------------------------------------------------------------------
# App Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def app(
    identity: DeviceIdentity,
    network: SimulatedNetworkProvider,
    store: MemoryCredentialStore,
    boiler: SimulatedBoilerDriver,
    display: MagicMock,
    restarter: MagicMock,
    resolver: MagicMock,
) -> FastAPI:
    return create_app(
        identity=identity,
        network=network,
        store=store,
        boiler=boiler,
        display=display,
        restarter=restarter,
        derive_proof=lambda _identity: PROOF,
        resolver=resolver,
        maximum_temperature=MAXIMUM_TEMPERATURE,
        mdns_retry_delay=0,
    )


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    """A test client that skips startup (no access point, no mDNS)."""
    return TestClient(app)
