"""Tests for configuration loading."""

import logging

import pytest
from pydantic import ValidationError

from request_signing.config import configure_logging, load_config
from request_signing.keys import SQLiteSignatureKeyRepository, get_key_repository


def test_load_config_defaults(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("REQUEST_SIGNING_CONFIG", raising=False)
    monkeypatch.delenv("REQUEST_SIGNING_DATABASE_URL", raising=False)

    config = load_config()
    assert config.default_algorithm == "sha512"
    assert config.default_method == "HMAC"
    assert config.keys.database_url is None


def test_load_config_from_env(tmp_path, monkeypatch):
    config_path = tmp_path / "config.yaml"
    config_path.write_text(
        """
keys:
  database_url: sqlite:///tmp/keys.db
default_algorithm: sha256
log_level: DEBUG
"""
    )
    monkeypatch.setenv("REQUEST_SIGNING_CONFIG", str(config_path))
    monkeypatch.delenv("REQUEST_SIGNING_DATABASE_URL", raising=False)

    config = load_config()
    assert config.keys.database_url == "sqlite:///tmp/keys.db"
    assert config.default_algorithm == "sha256"
    assert config.log_level == "DEBUG"


def test_database_url_env_override(tmp_path, monkeypatch):
    db_url = f"sqlite://{tmp_path / 'keys.db'}"
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("REQUEST_SIGNING_CONFIG", raising=False)
    monkeypatch.setenv("REQUEST_SIGNING_DATABASE_URL", db_url)

    config = load_config()
    assert config.keys.database_url == db_url
    assert isinstance(get_key_repository(config=config), SQLiteSignatureKeyRepository)


def test_invalid_log_level_is_rejected(tmp_path):
    config_path = tmp_path / "config.yaml"
    config_path.write_text("log_level: chatty\n")

    with pytest.raises(ValidationError):
        load_config(str(config_path))


def test_configure_logging_sets_package_level(tmp_path, monkeypatch):
    config_path = tmp_path / "config.yaml"
    config_path.write_text("log_level: debug\n")
    monkeypatch.delenv("REQUEST_SIGNING_DATABASE_URL", raising=False)

    package_logger = logging.getLogger("request_signing")
    previous = package_logger.level
    try:
        configure_logging(load_config(str(config_path)))
        assert package_logger.level == logging.DEBUG
    finally:
        package_logger.setLevel(previous)
