"""Request-handling services: authentication, provisioning, commands, status."""

from killd.services.auth import RequestAuthenticator, hmac_proof_deriver
from killd.services.commands import CommandProcessor
from killd.services.provisioning import ProvisioningGate
from killd.services.status import StatusReporter

__all__ = [
    "CommandProcessor",
    "ProvisioningGate",
    "RequestAuthenticator",
    "StatusReporter",
    "hmac_proof_deriver",
]
