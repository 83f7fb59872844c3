"""Signing methods available to the signing service."""

from __future__ import annotations

from .base import RequestSigningMethod, VerificationOutcome
from .hmac_signature import HmacSignature, supported_algorithms

__all__ = [
    "HmacSignature",
    "RequestSigningMethod",
    "VerificationOutcome",
    "supported_algorithms",
]
