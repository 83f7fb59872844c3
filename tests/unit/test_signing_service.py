"""Tests for the signing service dispatcher."""

import logging

import pytest

from request_signing.constants import (
    SIGNATURE_ALGORITHM_HEADER,
    SIGNATURE_HEADER,
    SIGNATURE_KEY_ID_HEADER,
    SIGNATURE_METHOD_HEADER,
)
from request_signing.exceptions import (
    SignatureKeyNotFoundError,
    UnknownSigningMethodError,
    UnsupportedHashingAlgorithmError,
)
from request_signing.keys import InMemorySignatureKeyRepository
from request_signing.methods import HmacSignature, RequestSigningMethod, VerificationOutcome
from request_signing.models import HttpRequest, SignatureKey
from request_signing.service import RequestSigningService, create_signing_service

SIGNATURE_KEY_ID = "SL-1234-1234"
KEY_SECRET = (
    "150a14ed5bea6cc731cf86c41566ac427a8db48ef1b9fd626664b3bfbb99071f"
    "a4c922f33dde38719b8c8354e2b7ab9d77e0e67fc12843920a712e73d558e197"
)


def _repository() -> InMemorySignatureKeyRepository:
    return InMemorySignatureKeyRepository([SignatureKey(id=SIGNATURE_KEY_ID, secret=KEY_SECRET)])


def _service() -> RequestSigningService:
    return RequestSigningService([HmacSignature(_repository())])


def _dummy_request() -> HttpRequest:
    return HttpRequest(method="POST", url="https://pay.nl")


class _RecordingMethod(RequestSigningMethod):
    METHOD_NAME = "HMAC"

    def __init__(self) -> None:
        self.calls = []

    def sign(self, request, key_id, algorithm):
        self.calls.append("sign")
        return request

    def verify(self, request):
        self.calls.append("verify")
        return request.header_line(SIGNATURE_HEADER) == "trusted"


@pytest.mark.parametrize("method", ["HMAC", "hmac"])
def test_service_signs_request(method):
    signed = _service().sign(_dummy_request(), SIGNATURE_KEY_ID, "sha512", method)

    assert signed.header_line(SIGNATURE_KEY_ID_HEADER) == SIGNATURE_KEY_ID
    assert signed.header_line(SIGNATURE_ALGORITHM_HEADER) == "sha512"
    assert signed.header_line(SIGNATURE_METHOD_HEADER) == "HMAC"
    assert signed.header_line(SIGNATURE_HEADER)


def test_service_verifies_signed_request():
    service = _service()
    signed = service.sign(_dummy_request(), SIGNATURE_KEY_ID, "sha512", "HMAC")

    assert service.verify(signed) is True
    assert service.verify(signed.with_body("changed")) is False


def test_sign_raises_for_unknown_method():
    with pytest.raises(UnknownSigningMethodError) as exc_info:
        _service().sign(_dummy_request(), SIGNATURE_KEY_ID, "sha512", "RSA")
    assert exc_info.value.method == "RSA"


def test_sign_propagates_key_and_algorithm_errors():
    service = _service()
    with pytest.raises(SignatureKeyNotFoundError):
        service.sign(_dummy_request(), "missing", "sha512", "HMAC")
    with pytest.raises(UnsupportedHashingAlgorithmError):
        service.sign(_dummy_request(), SIGNATURE_KEY_ID, "not-an-algorithm", "HMAC")


def test_verify_raises_for_unknown_method_header():
    service = _service()
    signed = service.sign(_dummy_request(), SIGNATURE_KEY_ID, "sha512", "HMAC")

    with pytest.raises(UnknownSigningMethodError):
        service.verify(signed.with_header(SIGNATURE_METHOD_HEADER, "RSA"))


def test_verify_returns_false_for_unknown_key():
    signed = _service().sign(_dummy_request(), SIGNATURE_KEY_ID, "sha512", "HMAC")
    service = RequestSigningService([HmacSignature(InMemorySignatureKeyRepository())])

    assert service.verify(signed) is False


def test_verify_without_request_and_factory_raises():
    with pytest.raises(UnknownSigningMethodError):
        _service().verify()


def test_verify_without_request_uses_factory():
    signed = _service().sign(_dummy_request(), SIGNATURE_KEY_ID, "sha512", "HMAC")
    service = RequestSigningService(
        [HmacSignature(_repository())], request_factory=lambda: signed
    )

    assert service.verify() is True


def test_earliest_registered_method_wins():
    first = _RecordingMethod()
    second = _RecordingMethod()
    service = RequestSigningService([first, second])

    service.sign(_dummy_request(), SIGNATURE_KEY_ID, "sha512", "hmac")
    assert not service.verify(_dummy_request().with_header(SIGNATURE_METHOD_HEADER, "HMAC"))

    assert first.calls == ["sign", "verify"]
    assert second.calls == []
    assert service.get_signing_method("Hmac") is first


def test_create_signing_service_uses_given_repository():
    service = create_signing_service(_repository())
    signed = service.sign(_dummy_request(), SIGNATURE_KEY_ID, "sha512", "HMAC")

    assert len(service.signing_methods) == 1
    assert service.verify(signed) is True


@pytest.mark.parametrize("algorithm", ["sha1", "sha224", "sha256", "sha384", "sha512", "sha3_256"])
@pytest.mark.parametrize("body", [b"", b"{}", "grüße".encode("utf-8")])
def test_sign_then_verify_succeeds(algorithm, body):
    service = _service()
    signed = service.sign(_dummy_request().with_body(body), SIGNATURE_KEY_ID, algorithm, "HMAC")
    assert service.verify(signed) is True


def test_service_accepts_method_implementing_only_verify():
    method = _RecordingMethod()
    service = RequestSigningService([method])
    request = _dummy_request().with_header(SIGNATURE_METHOD_HEADER, "hmac")

    assert service.verify(request.with_header(SIGNATURE_HEADER, "trusted")) is True
    assert service.verify(request.with_header(SIGNATURE_HEADER, "forged")) is False
    assert (
        method.check(request.with_header(SIGNATURE_HEADER, "trusted"))
        is VerificationOutcome.VALID
    )
    assert (
        method.check(request.with_header(SIGNATURE_HEADER, "forged"))
        is VerificationOutcome.SIGNATURE_MISMATCH
    )


def test_unknown_method_is_logged_before_raising(caplog):
    caplog.set_level(logging.WARNING, logger="request_signing")
    request = _dummy_request().with_header(SIGNATURE_METHOD_HEADER, "RSA")

    with pytest.raises(UnknownSigningMethodError):
        _service().verify(request)

    assert [r.levelno for r in caplog.records] == [logging.WARNING]
    assert "'RSA'" in caplog.text
