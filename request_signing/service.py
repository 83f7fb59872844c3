"""Dispatches sign and verify calls to the matching signing method."""

from __future__ import annotations

import logging
from typing import Callable, Iterable, Optional, Tuple

from .config import RequestSigningConfig
from .constants import SIGNATURE_METHOD_HEADER
from .exceptions import UnknownSigningMethodError
from .keys import SignatureKeyRepository, get_key_repository
from .methods import HmacSignature, RequestSigningMethod
from .models import HttpRequest

logger = logging.getLogger(__name__)

RequestFactory = Callable[[], HttpRequest]


class RequestSigningService:
    """Service holding an ordered collection of signing methods.

    Method selection is a linear scan by case-insensitive name; the earliest
    registered method that supports a name wins.
    """

    def __init__(
        self,
        signing_methods: Iterable[RequestSigningMethod],
        request_factory: Optional[RequestFactory] = None,
    ) -> None:
        self._signing_methods: Tuple[RequestSigningMethod, ...] = tuple(signing_methods)
        self._request_factory = request_factory

    @property
    def signing_methods(self) -> Tuple[RequestSigningMethod, ...]:
        return self._signing_methods

    def sign(
        self, request: HttpRequest, key_id: str, algorithm: str, method: str
    ) -> HttpRequest:
        """Sign ``request`` with ``key_id`` and ``algorithm`` using ``method``.

        Args:
            request: The request to sign. It is not modified.
            key_id: Identifier of the key used for signing.
            algorithm: Hash algorithm name, e.g. ``sha512``.
            method: Signing method name, e.g. ``HMAC``.

        Returns:
            A copy of ``request`` carrying the signature headers.

        Raises:
            UnknownSigningMethodError: No registered method supports ``method``.
            SignatureKeyNotFoundError: No key is bound to ``key_id``.
            UnsupportedHashingAlgorithmError: ``algorithm`` is not available.
        """
        return self.get_signing_method(method).sign(request, key_id, algorithm)

    def verify(self, request: Optional[HttpRequest] = None) -> bool:
        """Verify the signature carried by ``request``.

        When ``request`` is omitted it is built by the request factory given
        at construction, or is an empty request when there is none.

        Raises:
            UnknownSigningMethodError: The ``Signature-Method`` header names a
                method no registered method supports.
        """
        if request is None:
            request = self._request_factory() if self._request_factory else HttpRequest()

        method = self.get_signing_method(request.header_line(SIGNATURE_METHOD_HEADER))
        return method.verify(request)

    def get_signing_method(self, method: str) -> RequestSigningMethod:
        """Return the first registered method supporting ``method``."""
        for signing_method in self._signing_methods:
            if signing_method.supports(method):
                return signing_method

        logger.warning(f"No signing method registered for {method!r}")
        raise UnknownSigningMethodError(method)


def create_signing_service(
    repository: Optional[SignatureKeyRepository] = None,
    config: Optional[RequestSigningConfig] = None,
    request_factory: Optional[RequestFactory] = None,
) -> RequestSigningService:
    """Build a service with the built-in HMAC method.

    The key repository defaults to the one described by ``config``.
    """
    if repository is None:
        repository = get_key_repository(config=config)
    return RequestSigningService([HmacSignature(repository)], request_factory=request_factory)
