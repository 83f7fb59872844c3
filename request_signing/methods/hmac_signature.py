"""HMAC request signing."""

from __future__ import annotations

import hashlib
import hmac
import logging
from functools import lru_cache
from typing import FrozenSet

from ..constants import (
    SIGNATURE_ALGORITHM_HEADER,
    SIGNATURE_HEADER,
    SIGNATURE_KEY_ID_HEADER,
    SIGNATURE_METHOD_HEADER,
    SignatureMethod,
)
from ..exceptions import SignatureKeyNotFoundError, UnsupportedHashingAlgorithmError
from ..keys.repository import SignatureKeyRepository
from ..models import HttpRequest, SignatureData
from .base import RequestSigningMethod, VerificationOutcome

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def supported_algorithms() -> FrozenSet[str]:
    """Return the hash algorithms usable for HMAC in this interpreter.

    Variable-length digests (``shake_*``) and algorithms the linked OpenSSL
    refuses to instantiate are left out.
    """
    usable = set()
    for name in hashlib.algorithms_available:
        name = name.lower()
        if name.startswith("shake_"):
            continue
        try:
            hmac.new(b"", b"", name)
        except (ValueError, TypeError):
            continue
        usable.add(name)
    return frozenset(usable)


class HmacSignature(RequestSigningMethod):
    """Sign request bodies with ``hex(HMAC(algorithm, secret, body))``.

    Only the body is covered by the signature. Headers, method, path and
    query string are not.
    """

    METHOD_NAME = SignatureMethod.HMAC.value

    def __init__(self, signature_key_repository: SignatureKeyRepository) -> None:
        self.signature_key_repository = signature_key_repository

    def sign(self, request: HttpRequest, key_id: str, algorithm: str) -> HttpRequest:
        signature_data = self.generate_signature(request.body, key_id, algorithm)
        logger.debug(
            f"Signed request with key_id={signature_data.key_id} "
            f"algorithm={signature_data.algorithm}"
        )
        return (
            request.with_header(SIGNATURE_HEADER, signature_data.signature)
            .with_header(SIGNATURE_KEY_ID_HEADER, signature_data.key_id)
            .with_header(SIGNATURE_METHOD_HEADER, signature_data.method)
            .with_header(SIGNATURE_ALGORITHM_HEADER, signature_data.algorithm)
        )

    def generate_signature(self, body: bytes, key_id: str, algorithm: str) -> SignatureData:
        """Compute the signature of ``body`` with the key bound to ``key_id``.

        Raises:
            SignatureKeyNotFoundError: The repository has no such key.
            UnsupportedHashingAlgorithmError: ``algorithm`` cannot be used for HMAC.
        """
        key = self.signature_key_repository.find_one_by_id(key_id)

        algorithm = algorithm.lower()
        if algorithm not in supported_algorithms():
            raise UnsupportedHashingAlgorithmError(algorithm)

        digest = hmac.new(key.secret.encode("utf-8"), body, algorithm).hexdigest()
        return SignatureData(
            signature=digest,
            key_id=key_id,
            algorithm=algorithm,
            method=self.METHOD_NAME,
        )

    def check(self, request: HttpRequest) -> VerificationOutcome:
        key_id = request.header_line(SIGNATURE_KEY_ID_HEADER)
        signature = request.header_line(SIGNATURE_HEADER)
        algorithm = request.header_line(SIGNATURE_ALGORITHM_HEADER)

        if not (key_id and signature and algorithm):
            outcome = VerificationOutcome.MISSING_HEADERS
        else:
            outcome = self._compare(request.body, key_id, algorithm, signature)

        if outcome is not VerificationOutcome.VALID:
            logger.debug(
                f"Signature verification failed for key_id={key_id!r}: {outcome.value}"
            )
        return outcome

    def verify(self, request: HttpRequest) -> bool:
        return self.check(request) is VerificationOutcome.VALID

    def _compare(
        self, body: bytes, key_id: str, algorithm: str, signature: str
    ) -> VerificationOutcome:
        try:
            expected = self.generate_signature(body, key_id, algorithm).signature
        except SignatureKeyNotFoundError:
            return VerificationOutcome.KEY_NOT_FOUND
        except UnsupportedHashingAlgorithmError:
            return VerificationOutcome.UNSUPPORTED_ALGORITHM
        except Exception:
            logger.warning(
                f"Unexpected error while verifying signature for key_id={key_id!r}",
                exc_info=True,
            )
            return VerificationOutcome.ERROR

        if hmac.compare_digest(signature.encode("utf-8"), expected.encode("utf-8")):
            return VerificationOutcome.VALID
        return VerificationOutcome.SIGNATURE_MISMATCH
