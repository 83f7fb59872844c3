"""Signature key storage backends."""

from __future__ import annotations

from typing import Optional

from ..config import RequestSigningConfig, load_config
from .inmemory import InMemorySignatureKeyRepository
from .repository import SignatureKeyRepository
from .sqlite import SQLiteSignatureKeyRepository
from .yaml_file import YamlSignatureKeyRepository


def get_key_repository(
    database_url: Optional[str] = None, config: Optional[RequestSigningConfig] = None
) -> SignatureKeyRepository:
    """Factory function to obtain a signature key repository.

    The backend is selected from ``database_url``, which can be passed
    explicitly or taken from the loaded configuration (where
    ``REQUEST_SIGNING_DATABASE_URL`` overrides the YAML value). Without either
    an empty in-memory repository is returned.
    """

    if database_url is None:
        config = config or load_config()
        database_url = config.keys.database_url

    if not database_url:
        return InMemorySignatureKeyRepository()

    if database_url.startswith("sqlite://"):
        return SQLiteSignatureKeyRepository(database_url.replace("sqlite://", "", 1))
    if database_url.startswith("yaml://"):
        return YamlSignatureKeyRepository(database_url.replace("yaml://", "", 1))
    if database_url.endswith((".yaml", ".yml")):
        return YamlSignatureKeyRepository(database_url)
    raise ValueError(f"Unsupported key store: {database_url}")


__all__ = [
    "SignatureKeyRepository",
    "InMemorySignatureKeyRepository",
    "SQLiteSignatureKeyRepository",
    "YamlSignatureKeyRepository",
    "get_key_repository",
]
