"""Wire-level constants shared by all signing methods."""

from __future__ import annotations

from enum import Enum

SIGNATURE_HEADER = "Signature"
SIGNATURE_KEY_ID_HEADER = "Signature-KeyID"
SIGNATURE_METHOD_HEADER = "Signature-Method"
SIGNATURE_ALGORITHM_HEADER = "Signature-Algorithm"

SIGNATURE_HEADERS = (
    SIGNATURE_HEADER,
    SIGNATURE_KEY_ID_HEADER,
    SIGNATURE_METHOD_HEADER,
    SIGNATURE_ALGORITHM_HEADER,
)

DEFAULT_ALGORITHM = "sha512"


class SignatureMethod(str, Enum):
    """Names of the signing methods shipped with this package."""

    HMAC = "HMAC"
