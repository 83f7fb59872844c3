"""Value objects used while signing and verifying requests."""

from __future__ import annotations

from typing import Any, Dict, Optional, Union

import httpx
from pydantic import BaseModel, ConfigDict, Field, field_validator


class SignatureKey(BaseModel):
    """Identifier-bound secret used as keyed-hash material."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Key identifier")
    secret: str = Field(..., description="Shared secret", repr=False)


class SignatureData(BaseModel):
    """Signature value plus the metadata needed to verify it again."""

    model_config = ConfigDict(frozen=True)

    signature: str = Field(..., description="Hex-encoded digest")
    key_id: str = Field(..., description="Identifier of the signing key")
    algorithm: str = Field(..., description="Lower-cased hash algorithm")
    method: str = Field(..., description="Signing method name")


class HttpRequest(BaseModel):
    """Immutable HTTP request as seen by the signing methods.

    Header lookups are case-insensitive. Every ``with_*`` operation returns a
    new request and leaves the receiver untouched.
    """

    model_config = ConfigDict(frozen=True)

    method: str = "GET"
    url: str = "/"
    headers: Dict[str, str] = Field(default_factory=dict)
    body: bytes = b""

    @field_validator("body", mode="before")
    @classmethod
    def _encode_body(cls, value: Any) -> Any:
        if value is None:
            return b""
        if isinstance(value, str):
            return value.encode("utf-8")
        return value

    def _find_header(self, name: str) -> Optional[str]:
        lowered = name.lower()
        for key in self.headers:
            if key.lower() == lowered:
                return key
        return None

    def header_line(self, name: str) -> str:
        """Return the value of header ``name`` or an empty string."""
        key = self._find_header(name)
        return self.headers[key] if key is not None else ""

    def with_header(self, name: str, value: str) -> "HttpRequest":
        headers = dict(self.headers)
        existing = self._find_header(name)
        if existing is not None:
            del headers[existing]
        headers[name] = value
        return self.model_copy(update={"headers": headers})

    def without_header(self, name: str) -> "HttpRequest":
        existing = self._find_header(name)
        if existing is None:
            return self
        headers = {k: v for k, v in self.headers.items() if k != existing}
        return self.model_copy(update={"headers": headers})

    def with_body(self, body: Union[bytes, str]) -> "HttpRequest":
        if isinstance(body, str):
            body = body.encode("utf-8")
        return self.model_copy(update={"body": body})

    @classmethod
    def from_httpx(cls, request: httpx.Request) -> "HttpRequest":
        """Build a request from an ``httpx.Request``, keeping header casing."""
        headers = {
            key.decode("latin-1"): value.decode("latin-1")
            for key, value in request.headers.raw
        }
        return cls(
            method=request.method,
            url=str(request.url),
            headers=headers,
            body=request.read(),
        )

    def to_httpx(self) -> httpx.Request:
        """Return an equivalent ``httpx.Request`` ready to be sent."""
        return httpx.Request(
            self.method,
            self.url,
            headers=list(self.headers.items()),
            content=self.body,
        )
