"""Error taxonomy for request signing."""

from __future__ import annotations


class RequestSigningError(Exception):
    """Base class for all request signing errors."""


class SignatureKeyNotFoundError(RequestSigningError):
    """No secret is bound to the requested key id."""

    def __init__(self, key_id: str) -> None:
        self.key_id = key_id
        super().__init__(f"No key found for KeyID [{key_id}].")


class UnsupportedHashingAlgorithmError(RequestSigningError):
    """The hashing algorithm cannot be used for keyed hashing."""

    def __init__(self, algorithm: str) -> None:
        self.algorithm = algorithm
        super().__init__(f"Unsupported hashing algorithm [{algorithm}].")


class UnknownSigningMethodError(RequestSigningError):
    """No registered signing method matches the requested name.

    This is a routing error and is raised from both signing and verification.
    """

    def __init__(self, method: str) -> None:
        self.method = method
        super().__init__(f"Unknown signing method [{method}].")
