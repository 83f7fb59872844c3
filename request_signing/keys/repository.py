"""Repository abstraction for signature key lookup."""

from __future__ import annotations

from typing import Protocol

from ..models import SignatureKey


class SignatureKeyRepository(Protocol):
    """Resolves key identifiers to signature keys.

    The embedding application may provide any implementation; the backends in
    this package cover tests, single-host deployments and static key files.
    """

    def find_one_by_id(self, key_id: str) -> SignatureKey:
        """Return the key bound to ``key_id``.

        Raises:
            SignatureKeyNotFoundError: If no key is bound to ``key_id``.
        """
