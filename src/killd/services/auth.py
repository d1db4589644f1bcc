"""Request authentication by proof of possession of the device secret.

The secret is installed on the device through configuration
(``KILL_SHARED_SECRET`` or ``auth.shared_secret``) and is known to the
companion app out of band; /setup never transmits it. Every request
after setup carries a proof derived from it. The proof is
derived from the device identity by a pluggable function; the default
is an HMAC keyed with the configured shared secret.
"""

from __future__ import annotations

import hashlib
import hmac
import logging
from typing import Any, Callable

from killd.domain.models import DeviceIdentity
from killd.errors import AuthenticationFailed

logger = logging.getLogger(__name__)

ProofDeriver = Callable[[DeviceIdentity], str]

DEFAULT_PROOF_FIELD = "auth"


def hmac_proof_deriver(shared_secret: str) -> ProofDeriver:
    """Return a deriver producing hex HMAC-SHA256(secret, device_id)."""
    key = shared_secret.encode("utf-8")

    def derive(identity: DeviceIdentity) -> str:
        return hmac.new(key, identity.device_id.encode("utf-8"), hashlib.sha256).hexdigest()

    return derive


class RequestAuthenticator:
    """Checks the proof field of a decoded request document.

    Args:
        identity: This device's identity.
        derive_proof: Function producing the expected proof value.
        proof_field: Name of the document field carrying the proof.
    """

    def __init__(
        self,
        identity: DeviceIdentity,
        derive_proof: ProofDeriver,
        proof_field: str = DEFAULT_PROOF_FIELD,
    ) -> None:
        self._identity = identity
        self._derive_proof = derive_proof
        self._proof_field = proof_field

    @property
    def proof_field(self) -> str:
        return self._proof_field

    def verify(self, document: dict[str, Any]) -> bool:
        proof = document.get(self._proof_field)
        if not isinstance(proof, str) or not proof:
            return False
        expected = self._derive_proof(self._identity)
        return hmac.compare_digest(proof.encode("utf-8"), expected.encode("utf-8"))

    def require(self, document: dict[str, Any]) -> None:
        """Raise AuthenticationFailed unless ``document`` carries a valid proof."""
        if not self.verify(document):
            logger.warning("Rejected request without valid '%s' proof", self._proof_field)
            raise AuthenticationFailed()
