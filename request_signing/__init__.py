"""request-signing: sign and verify HTTP request bodies with named secrets."""

from .constants import (
    SIGNATURE_ALGORITHM_HEADER,
    SIGNATURE_HEADER,
    SIGNATURE_KEY_ID_HEADER,
    SIGNATURE_METHOD_HEADER,
    SignatureMethod,
)
from .exceptions import (
    RequestSigningError,
    SignatureKeyNotFoundError,
    UnknownSigningMethodError,
    UnsupportedHashingAlgorithmError,
)
from .keys import (
    InMemorySignatureKeyRepository,
    SignatureKeyRepository,
    SQLiteSignatureKeyRepository,
    YamlSignatureKeyRepository,
    get_key_repository,
)
from .methods import HmacSignature, RequestSigningMethod, VerificationOutcome
from .models import HttpRequest, SignatureData, SignatureKey
from .service import RequestSigningService, create_signing_service

__version__ = "0.1.0"
__all__ = [
    "SIGNATURE_HEADER",
    "SIGNATURE_KEY_ID_HEADER",
    "SIGNATURE_METHOD_HEADER",
    "SIGNATURE_ALGORITHM_HEADER",
    "SignatureMethod",
    "RequestSigningError",
    "SignatureKeyNotFoundError",
    "UnknownSigningMethodError",
    "UnsupportedHashingAlgorithmError",
    "SignatureKeyRepository",
    "InMemorySignatureKeyRepository",
    "SQLiteSignatureKeyRepository",
    "YamlSignatureKeyRepository",
    "get_key_repository",
    "HmacSignature",
    "RequestSigningMethod",
    "VerificationOutcome",
    "HttpRequest",
    "SignatureData",
    "SignatureKey",
    "RequestSigningService",
    "create_signing_service",
]
