"""In-memory implementation of the signature key repository."""

from __future__ import annotations

from typing import Dict, Iterable, Optional

from ..exceptions import SignatureKeyNotFoundError
from ..models import SignatureKey
from .repository import SignatureKeyRepository


class InMemorySignatureKeyRepository(SignatureKeyRepository):
    """Store signature keys in local memory.

    Useful for tests or when no key store is configured. Keys are not
    persisted across process restarts.
    """

    def __init__(self, keys: Optional[Iterable[SignatureKey]] = None) -> None:
        self._keys: Dict[str, SignatureKey] = {}
        for key in keys or ():
            self.add(key)

    def add(self, key: SignatureKey) -> None:
        self._keys[key.id] = key

    def remove(self, key_id: str) -> None:
        if self._keys.pop(key_id, None) is None:
            raise SignatureKeyNotFoundError(key_id)

    def find_one_by_id(self, key_id: str) -> SignatureKey:
        try:
            return self._keys[key_id]
        except KeyError:
            raise SignatureKeyNotFoundError(key_id) from None

    def list_keys(self) -> list[SignatureKey]:
        return list(self._keys.values())
