"""Tests for request authentication."""

from __future__ import annotations

import hashlib
import hmac

import pytest

from killd.domain.models import DeviceIdentity
from killd.errors import AuthenticationFailed
from killd.services.auth import RequestAuthenticator, hmac_proof_deriver


@pytest.fixture
def authenticator(identity: DeviceIdentity) -> RequestAuthenticator:
    return RequestAuthenticator(identity, lambda _identity: "OK")


class TestRequestAuthenticator:
    def test_valid_proof(self, authenticator: RequestAuthenticator) -> None:
        assert authenticator.verify({"auth": "OK"}) is True

    @pytest.mark.parametrize("document", [
        {},
        {"auth": ""},
        {"auth": "ok"},
        {"auth": None},
        {"auth": ["OK"]},
        {"Auth": "OK"},
    ])
    def test_invalid_proof(self, authenticator: RequestAuthenticator, document: dict) -> None:
        assert authenticator.verify(document) is False

    def test_require_raises(self, authenticator: RequestAuthenticator) -> None:
        with pytest.raises(AuthenticationFailed) as exc_info:
            authenticator.require({"command": "turn_on"})
        assert exc_info.value.message == "Missing authentication"

    def test_require_passes(self, authenticator: RequestAuthenticator) -> None:
        authenticator.require({"auth": "OK"})

    def test_custom_proof_field(self, identity: DeviceIdentity) -> None:
        authenticator = RequestAuthenticator(identity, lambda _i: "OK", proof_field="token")
        assert authenticator.verify({"token": "OK"}) is True
        assert authenticator.verify({"auth": "OK"}) is False

    def test_proof_derived_per_call(self, identity: DeviceIdentity) -> None:
        seen: list[DeviceIdentity] = []

        def derive(i: DeviceIdentity) -> str:
            seen.append(i)
            return "OK"

        RequestAuthenticator(identity, derive).verify({"auth": "OK"})
        assert seen == [identity]


class TestHmacProofDeriver:
    def test_matches_hmac_sha256(self, identity: DeviceIdentity) -> None:
        expected = hmac.new(b"s3cret", identity.device_id.encode(), hashlib.sha256).hexdigest()
        assert hmac_proof_deriver("s3cret")(identity) == expected

    def test_depends_on_device(self) -> None:
        derive = hmac_proof_deriver("s3cret")
        a = derive(DeviceIdentity(device_id="AAAAAAAAAAAA"))
        b = derive(DeviceIdentity(device_id="BBBBBBBBBBBB"))
        assert a != b

    def test_authenticator_with_hmac(self, identity: DeviceIdentity) -> None:
        derive = hmac_proof_deriver("s3cret")
        authenticator = RequestAuthenticator(identity, derive)
        assert authenticator.verify({"auth": derive(identity)}) is True
        assert authenticator.verify({"auth": hmac_proof_deriver("other")(identity)}) is False
