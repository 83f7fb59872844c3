"""Read-only signature key repository backed by a YAML file."""

from __future__ import annotations

from pathlib import Path

import yaml

from ..models import SignatureKey
from .inmemory import InMemorySignatureKeyRepository


class YamlSignatureKeyRepository(InMemorySignatureKeyRepository):
    """Load keys from a YAML document of the form::

        keys:
          SL-1234-1234: 150a14ed...
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        with open(self.path) as f:
            data = yaml.safe_load(f) or {}
        entries = data.get("keys") or {}
        if not isinstance(entries, dict):
            raise ValueError(f"Expected a 'keys' mapping in {self.path}")
        keys = []
        for key_id, secret in entries.items():
            if secret is None or str(secret) == "":
                raise ValueError(f"Empty secret for key {key_id!r} in {self.path}")
            keys.append(SignatureKey(id=str(key_id), secret=str(secret)))
        super().__init__(keys)
