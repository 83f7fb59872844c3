"""Base interface for request signing methods."""

from __future__ import annotations

import abc
from enum import Enum

from ..models import HttpRequest


class VerificationOutcome(str, Enum):
    """Result of checking a request signature.

    Only ``VALID`` means the request is trusted. The other members exist for
    logging and are never surfaced to callers of ``verify``.
    """

    VALID = "valid"
    SIGNATURE_MISMATCH = "signature_mismatch"
    MISSING_HEADERS = "missing_headers"
    KEY_NOT_FOUND = "key_not_found"
    UNSUPPORTED_ALGORITHM = "unsupported_algorithm"
    ERROR = "error"


class RequestSigningMethod(metaclass=abc.ABCMeta):
    """A named strategy for computing and verifying request signatures."""

    METHOD_NAME: str

    @abc.abstractmethod
    def sign(self, request: HttpRequest, key_id: str, algorithm: str) -> HttpRequest:
        """Return a copy of ``request`` carrying the signature headers.

        Raises:
            SignatureKeyNotFoundError: No key is bound to ``key_id``.
            UnsupportedHashingAlgorithmError: ``algorithm`` is not available.
        """
        raise NotImplementedError

    @abc.abstractmethod
    def verify(self, request: HttpRequest) -> bool:
        """Return ``True`` only when the request signature is valid.

        Never raises for an untrusted request; every failure is ``False``.
        """
        raise NotImplementedError

    def check(self, request: HttpRequest) -> VerificationOutcome:
        """Classify the signature carried by ``request`` without raising.

        Methods that only answer yes or no report every failure as a mismatch.
        """
        if self.verify(request):
            return VerificationOutcome.VALID
        return VerificationOutcome.SIGNATURE_MISMATCH

    def supports(self, method: str) -> bool:
        """Case-insensitive match against this method's name."""
        return self.METHOD_NAME.lower() == method.lower()
