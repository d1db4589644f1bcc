"""REST API server that runs on the boiler controller.

Lets the companion app provision the device once over its local access
point, then send authenticated commands and poll status:

    GET  /                    -> "KiLL"
    GET  /local               -> device id
    POST /setup               <- {"ssid": "...", "password": "...", "appId": "..."}
    POST /kill_reset_factory  <- {"auth": "..."}
    POST /command             <- {"auth": "...", "command": "set_temperature", "value": "55"}
    POST /status              <- {"auth": "..."}

Every POST body must be a non-empty JSON object. Failures answer 400
with ``{"error": "..."}``; unknown routes answer 404 ``Not found``.
"""

from __future__ import annotations

import json
import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator

import uvicorn
from fastapi import BackgroundTasks, FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import JSONResponse, PlainTextResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from killd.boiler.base import BoilerDriver
from killd.display import Display
from killd.domain.models import DeviceIdentity
from killd.errors import ControlError, InvalidData, NoData
from killd.network.base import LoggingNetworkListener, NameResolver, NetworkProvider
from killd.network.mdns import NullNameResolver, start_name_resolution
from killd.services.auth import DEFAULT_PROOF_FIELD, ProofDeriver, RequestAuthenticator
from killd.services.commands import CommandProcessor
from killd.services.provisioning import ProvisioningGate
from killd.services.status import StatusReporter
from killd.storage.base import CredentialStore
from killd.system import Restarter

logger = logging.getLogger(__name__)

ROOT_TEXT = "KiLL"
NOT_FOUND_TEXT = "Not found"
OK_RESPONSE = {"status": "OK"}


async def decode_body(request: Request, source: str) -> dict[str, Any]:
    """Parse the raw request body into a JSON object.

    Raises:
        NoData: The body is empty.
        InvalidData: The body is not a single JSON object.
    """
    body = await request.body()
    if not body:
        logger.warning("No data on %s", source)
        raise NoData()
    try:
        document = json.loads(body)
    except ValueError:
        logger.warning("Failed to parse %s data", source)
        raise InvalidData() from None
    if not isinstance(document, dict):
        logger.warning("Failed to parse %s data: not a JSON object", source)
        raise InvalidData()
    return document


# ---------------------------------------------------------------------------
# Application factory
# ---------------------------------------------------------------------------

def create_app(
    identity: DeviceIdentity,
    network: NetworkProvider,
    store: CredentialStore,
    boiler: BoilerDriver,
    display: Display,
    restarter: Restarter,
    derive_proof: ProofDeriver,
    resolver: NameResolver | None = None,
    proof_field: str = DEFAULT_PROOF_FIELD,
    maximum_temperature: int = 90,
    acknowledge_before_commit: bool = False,
    max_mdns_retries: int = 5,
    mdns_retry_delay: float = 1.0,
) -> FastAPI:
    """Create the device REST API application.

    Args:
        identity: Hardware identity; names the access point and hostname.
        network: Access point provider, started and stopped with the app.
        store: Persistent home of the provisioning record.
        boiler: Boiler driver.
        display: Status display collaborator.
        restarter: Called on factory reset and when mDNS cannot start.
        derive_proof: Produces the expected authentication proof.
        resolver: mDNS publisher; None disables name publication.
        proof_field: Request field carrying the authentication proof.
        maximum_temperature: Upper bound for set_temperature.
        acknowledge_before_commit: Answer /setup before writing the record.
            A second /setup may arrive before the write; the deferred
            write re-checks the store and drops the later record.
        max_mdns_retries: Extra mDNS attempts before restarting.
        mdns_retry_delay: Seconds between mDNS attempts.
    """
    resolver = resolver or NullNameResolver()
    authenticator = RequestAuthenticator(identity, derive_proof, proof_field)
    gate = ProvisioningGate(store, restarter.restart)
    commands = CommandProcessor(boiler, display, maximum_temperature)
    reporter = StatusReporter(boiler, network)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        network.add_listener(LoggingNetworkListener())
        network.start_access_point(identity.ssid)
        try:
            start_name_resolution(
                resolver,
                identity.hostname,
                restarter,
                max_retries=max_mdns_retries,
                retry_delay=mdns_retry_delay,
            )
        except Exception:
            network.stop()
            raise
        logger.info("Local server started at %s", identity.url)

        yield

        resolver.close()
        network.stop()
        boiler.close()
        logger.info("Local server stopped")

    app = FastAPI(
        title="KiLL",
        description="KiLL boiler controller local API",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.identity = identity
    app.state.gate = gate
    app.state.commands = commands
    app.state.reporter = reporter

    @app.exception_handler(ControlError)
    async def control_error_handler(request: Request, exc: ControlError) -> JSONResponse:
        logger.warning("Error on %s: %s", request.url.path, exc.message)
        return JSONResponse(status_code=400, content={"error": exc.message})

    @app.exception_handler(StarletteHTTPException)
    async def not_found_handler(request: Request, exc: StarletteHTTPException) -> Response:
        # Wrong method on a known path is reported like an unknown path
        if exc.status_code in (404, 405):
            return PlainTextResponse(NOT_FOUND_TEXT, status_code=404)
        return await http_exception_handler(request, exc)

    @app.get("/", response_class=PlainTextResponse)
    async def root() -> str:
        return ROOT_TEXT

    @app.get("/local", response_class=PlainTextResponse)
    async def local() -> str:
        return identity.device_id

    @app.post("/setup")
    async def setup(request: Request, background_tasks: BackgroundTasks) -> dict[str, str]:
        document = await decode_body(request, "setup")
        record = gate.attempt_setup(
            document.get("ssid"), document.get("password"), document.get("appId")
        )

        if acknowledge_before_commit:
            async def commit_after_response() -> None:
                if gate.is_provisioned():
                    logger.warning("Setup already committed by an earlier request, dropping")
                    return
                gate.commit(record)

            background_tasks.add_task(commit_after_response)
        else:
            gate.commit(record)
        return OK_RESPONSE

    @app.post("/kill_reset_factory")
    async def reset_factory(request: Request, background_tasks: BackgroundTasks) -> dict[str, str]:
        document = await decode_body(request, "reset factory")
        authenticator.require(document)

        async def reset_after_response() -> None:
            gate.reset_factory()

        # The reset restarts the device, so the answer has to go out first
        background_tasks.add_task(reset_after_response)
        return OK_RESPONSE

    @app.post("/command")
    async def command(request: Request) -> dict[str, str]:
        document = await decode_body(request, "command")
        authenticator.require(document)
        commands.dispatch(document)
        return OK_RESPONSE

    @app.post("/status")
    async def status(request: Request) -> dict[str, Any]:
        document = await decode_body(request, "status")
        authenticator.require(document)
        return reporter.snapshot().model_dump(by_alias=True)

    return app


# ---------------------------------------------------------------------------
# Standalone entry point
# ---------------------------------------------------------------------------

def serve(app: FastAPI, host: str = "0.0.0.0", port: int = 80) -> None:
    """Run the control loop: one process, one worker, one request at a time."""
    uvicorn.run(app, host=host, port=port, workers=1, log_config=None)
