from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import BaseModel, Field, field_validator

from .constants import DEFAULT_ALGORITHM, SignatureMethod

CONFIG_ENV_VAR = "REQUEST_SIGNING_CONFIG"
DATABASE_URL_ENV_VAR = "REQUEST_SIGNING_DATABASE_URL"
DEFAULT_CONFIG_FILE = "request-signing.yaml"


class KeyStoreConfig(BaseModel):
    """Location of the signature key store."""

    database_url: Optional[str] = Field(
        default=None, description="sqlite://<path>, yaml://<path> or a .yaml file"
    )


class RequestSigningConfig(BaseModel):
    """Top-level configuration model."""

    keys: KeyStoreConfig = Field(default_factory=KeyStoreConfig)
    default_algorithm: str = DEFAULT_ALGORITHM
    default_method: str = SignatureMethod.HMAC.value
    log_level: str = "WARNING"

    @field_validator("log_level")
    @classmethod
    def _known_log_level(cls, value: str) -> str:
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {value}")
        return level


def _read_yaml(path: Path) -> Dict[str, Any]:
    with open(path) as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Expected a mapping at the top of {path}")
    return data


def load_config(path: Optional[str] = None) -> RequestSigningConfig:
    """Build the configuration for the signing service and CLI.

    The YAML file is taken from ``path``, then ``$REQUEST_SIGNING_CONFIG``,
    then ``request-signing.yaml`` in the working directory; defaults apply when
    none exists. ``$REQUEST_SIGNING_DATABASE_URL`` replaces ``keys.database_url``
    before validation.

    Raises:
        pydantic.ValidationError: The file holds invalid settings.
    """

    config_path = Path(path or os.getenv(CONFIG_ENV_VAR, DEFAULT_CONFIG_FILE))
    data = _read_yaml(config_path) if config_path.is_file() else {}

    env_db_url = os.getenv(DATABASE_URL_ENV_VAR)
    if env_db_url:
        data["keys"] = {**(data.get("keys") or {}), "database_url": env_db_url}
    return RequestSigningConfig.model_validate(data)


def configure_logging(config: RequestSigningConfig) -> None:
    """Apply the configured log level to the package logger."""
    logging.basicConfig(format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    logging.getLogger("request_signing").setLevel(config.log_level)
