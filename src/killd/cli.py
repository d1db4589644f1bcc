"""Command-line interface for the killd daemon.

Provides the main entry point for serving the local API, printing the
device identity, and clearing stored credentials.
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from fastapi import FastAPI

    from killd.config.settings import Settings
    from killd.domain.models import DeviceIdentity
    from killd.storage.base import CredentialStore

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="killd",
        description="KiLL boiler controller local API",
    )
    parser.add_argument(
        "-c", "--config",
        type=Path,
        default=None,
        help="Path to YAML configuration file (default: config/killd.yaml)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("serve", help="Start the access point and the local API server")
    subparsers.add_parser("info", help="Show device identity and provisioning state")
    subparsers.add_parser("reset", help="Delete stored credentials (no restart)")

    return parser.parse_args(argv)


def build_store(settings: Settings) -> CredentialStore:
    from killd.storage.json_file import JsonFileCredentialStore

    return JsonFileCredentialStore(settings.storage.path)


def build_app(settings: Settings, identity: DeviceIdentity | None = None) -> FastAPI:
    """Construct every collaborator named in ``settings`` and the app."""
    from killd.api.server import create_app
    from killd.display import LoggingDisplay
    from killd.domain.models import DeviceIdentity
    from killd.errors import StartupError
    from killd.services.auth import hmac_proof_deriver
    from killd.system import ProcessRestarter

    secret = settings.auth.shared_secret.get_secret_value()
    if not secret:
        raise StartupError(
            "No shared secret configured (set KILL_SHARED_SECRET or auth.shared_secret)"
        )

    identity = identity or DeviceIdentity.from_hardware()
    net = settings.network
    boiler_cfg = settings.boiler

    if net.backend == "nmcli":
        from killd.network.nmcli import NmcliNetworkProvider
        network = NmcliNetworkProvider(
            interface=net.interface,
            ap_address=net.ap_address,
            ap_gateway=net.ap_gateway,
            ap_prefix=net.ap_prefix,
            poll_interval=net.event_poll_interval,
        )
    else:
        from killd.network.simulated import SimulatedNetworkProvider
        network = SimulatedNetworkProvider(ap_address=net.ap_address)

    resolver = None
    if net.mdns_backend == "zeroconf":
        from killd.network.mdns import ZeroconfNameResolver
        resolver = ZeroconfNameResolver(
            port=settings.server.port, address=network.current_local_address
        )

    if boiler_cfg.backend == "gpio":
        from killd.boiler.gpio import GpioBoilerDriver
        boiler = GpioBoilerDriver(
            relay_pin=boiler_cfg.relay_pin,
            sensor_path=boiler_cfg.sensor_path,
            minimum_temperature=boiler_cfg.minimum_temperature,
            target_temperature=boiler_cfg.initial_target,
        )
    else:
        from killd.boiler.simulated import SimulatedBoilerDriver
        boiler = SimulatedBoilerDriver(
            minimum_temperature=boiler_cfg.minimum_temperature,
            target_temperature=boiler_cfg.initial_target,
        )

    return create_app(
        identity=identity,
        network=network,
        store=build_store(settings),
        boiler=boiler,
        display=LoggingDisplay(),
        restarter=ProcessRestarter(mode=settings.restart.mode, exit_code=settings.restart.exit_code),
        derive_proof=hmac_proof_deriver(secret),
        resolver=resolver,
        proof_field=settings.auth.proof_field,
        maximum_temperature=boiler_cfg.maximum_temperature,
        acknowledge_before_commit=settings.provisioning.acknowledge_before_commit,
        max_mdns_retries=net.max_mdns_retries,
        mdns_retry_delay=net.mdns_retry_delay,
    )


def _info(settings: Settings) -> None:
    from killd.domain.models import DeviceIdentity

    identity = DeviceIdentity.from_hardware()
    store = build_store(settings)
    print(f"Device id:    {identity.device_id}")
    print(f"Access point: {identity.ssid}")
    print(f"URL:          {identity.url}")
    print(f"Provisioned:  {'yes' if store.has_record() else 'no'}")


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the killd CLI."""
    args = parse_args(argv)

    if args.command is None:
        parse_args(["--help"])
        return

    from killd.config.settings import load_settings
    from killd.utils.logging import setup_logging

    settings = load_settings(args.config)

    if args.verbose:
        settings.logging.level = "DEBUG"

    setup_logging(settings.logging)

    if args.command == "serve":
        logger.info("Starting local API server")
        from killd.api.server import serve
        serve(build_app(settings), host=settings.server.host, port=settings.server.port)

    elif args.command == "info":
        _info(settings)

    elif args.command == "reset":
        build_store(settings).clear()
        print("Stored credentials cleared.")


if __name__ == "__main__":
    main()
