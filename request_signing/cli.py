"""Command line interface for signing and verifying request bodies."""

from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from typing import Iterator, List, Optional

import typer
import yaml

from request_signing.config import RequestSigningConfig, configure_logging, load_config
from request_signing.constants import SIGNATURE_HEADERS
from request_signing.exceptions import RequestSigningError
from request_signing.keys import (
    SignatureKeyRepository,
    SQLiteSignatureKeyRepository,
    get_key_repository,
)
from request_signing.methods import supported_algorithms
from request_signing.models import HttpRequest, SignatureKey
from request_signing.service import create_signing_service

app = typer.Typer(help="Sign and verify HTTP request bodies")

keys_app = typer.Typer(help="Commands for managing signature keys")
app.add_typer(keys_app, name="keys")


@app.callback()
def main(
    ctx: typer.Context,
    config: Optional[str] = typer.Option(None, help="Path to a YAML config file"),
) -> None:
    """request-signing CLI entry point."""
    try:
        loaded = load_config(config)
    except ValueError as exc:
        typer.secho(f"Invalid configuration: {exc}", fg=typer.colors.RED)
        raise typer.Exit(code=1)
    configure_logging(loaded)
    ctx.obj = loaded


def _config(ctx: typer.Context) -> RequestSigningConfig:
    return ctx.obj if isinstance(ctx.obj, RequestSigningConfig) else load_config()


def _read_body(body_file: str) -> bytes:
    if body_file == "-":
        return typer.get_binary_stream("stdin").read()
    try:
        with open(body_file, "rb") as f:
            return f.read()
    except OSError as exc:
        typer.secho(f"Cannot read {body_file}: {exc}", fg=typer.colors.RED)
        raise typer.Exit(code=1)


def _parse_headers(raw_headers: List[str]) -> dict[str, str]:
    headers: dict[str, str] = {}
    for raw in raw_headers:
        name, sep, value = raw.partition(":")
        if not sep or not name.strip():
            typer.secho(f"Invalid header {raw!r}, expected 'Name: value'", fg=typer.colors.RED)
            raise typer.Exit(code=1)
        headers[name.strip()] = value.strip()
    return headers


@contextmanager
def _key_repository(
    ctx: typer.Context, database_url: Optional[str]
) -> Iterator[SignatureKeyRepository]:
    """Open the configured key store, closing SQLite connections afterwards."""
    try:
        repository = get_key_repository(database_url, config=_config(ctx))
    except (ValueError, OSError, sqlite3.Error, yaml.YAMLError) as exc:
        typer.secho(f"Cannot open key store: {exc}", fg=typer.colors.RED)
        raise typer.Exit(code=1)
    try:
        yield repository
    finally:
        if isinstance(repository, SQLiteSignatureKeyRepository):
            repository.close()


@contextmanager
def _sqlite_repository(
    ctx: typer.Context, database_url: Optional[str]
) -> Iterator[SQLiteSignatureKeyRepository]:
    with _key_repository(ctx, database_url) as repository:
        if not isinstance(repository, SQLiteSignatureKeyRepository):
            typer.secho("Key management requires a sqlite:// key store", fg=typer.colors.RED)
            raise typer.Exit(code=1)
        yield repository


@app.command("sign")
def sign(
    ctx: typer.Context,
    body_file: str = typer.Argument(..., help="File holding the body, '-' for stdin"),
    key_id: str = typer.Option(..., "--key-id", help="Identifier of the signing key"),
    algorithm: Optional[str] = typer.Option(None, help="Hash algorithm, e.g. sha512"),
    method: Optional[str] = typer.Option(None, help="Signing method, e.g. HMAC"),
    url: str = typer.Option("/", help="Request URL"),
    http_method: str = typer.Option("POST", help="HTTP method of the request"),
    database_url: Optional[str] = typer.Option(None, help="Key store location"),
) -> None:
    """
    Sign a request body and print the signature headers.

    Example:
        request-signing sign body.json --key-id SL-1234-1234 --algorithm sha512
        # Output: Signature: 6086a3...
        #         Signature-KeyID: SL-1234-1234
        #         Signature-Method: HMAC
        #         Signature-Algorithm: sha512
    """
    config = _config(ctx)
    request = HttpRequest(method=http_method, url=url, body=_read_body(body_file))

    with _key_repository(ctx, database_url) as repository:
        try:
            signed = create_signing_service(repository).sign(
                request,
                key_id,
                algorithm or config.default_algorithm,
                method or config.default_method,
            )
        except RequestSigningError as exc:
            typer.secho(str(exc), fg=typer.colors.RED)
            raise typer.Exit(code=1)

    for name in SIGNATURE_HEADERS:
        typer.echo(f"{name}: {signed.header_line(name)}")


@app.command("verify")
def verify(
    ctx: typer.Context,
    body_file: str = typer.Argument(..., help="File holding the body, '-' for stdin"),
    header: List[str] = typer.Option([], "--header", "-H", help="Header as 'Name: value'"),
    database_url: Optional[str] = typer.Option(None, help="Key store location"),
) -> None:
    """
    Verify a request body against its signature headers.

    Prints ``valid`` and exits with 0, or prints ``invalid`` and exits with 1.

    Example:
        request-signing verify body.json -H "Signature: 6086a3..." \\
            -H "Signature-KeyID: SL-1234-1234" -H "Signature-Method: HMAC" \\
            -H "Signature-Algorithm: sha512"
    """
    request = HttpRequest(
        method="POST", headers=_parse_headers(header), body=_read_body(body_file)
    )

    with _key_repository(ctx, database_url) as repository:
        try:
            valid = create_signing_service(repository).verify(request)
        except RequestSigningError as exc:
            typer.secho(str(exc), fg=typer.colors.RED)
            raise typer.Exit(code=1)

    if not valid:
        typer.echo("invalid")
        raise typer.Exit(code=1)
    typer.echo("valid")


@app.command("algorithms")
def algorithms() -> None:
    """List the hash algorithms usable with HMAC."""
    for name in sorted(supported_algorithms()):
        typer.echo(name)


@keys_app.command("add")
def keys_add(
    ctx: typer.Context,
    key_id: str,
    secret: str,
    database_url: Optional[str] = typer.Option(None, help="Key store location"),
) -> None:
    """Store ``secret`` under ``key_id``, replacing any existing secret."""
    with _sqlite_repository(ctx, database_url) as repository:
        repository.add(SignatureKey(id=key_id, secret=secret))
    typer.echo(f"Stored key {key_id}")


@keys_app.command("list")
def keys_list(
    ctx: typer.Context,
    database_url: Optional[str] = typer.Option(None, help="Key store location"),
) -> None:
    """List stored key identifiers. Secrets are never printed."""
    with _sqlite_repository(ctx, database_url) as repository:
        keys = repository.list_keys()
    if not keys:
        typer.echo("No keys found")
        return
    for key in keys:
        typer.echo(key.id)


@keys_app.command("remove")
def keys_remove(
    ctx: typer.Context,
    key_id: str,
    database_url: Optional[str] = typer.Option(None, help="Key store location"),
) -> None:
    """Delete the key stored under ``key_id``."""
    with _sqlite_repository(ctx, database_url) as repository:
        try:
            repository.remove(key_id)
        except RequestSigningError as exc:
            typer.secho(str(exc), fg=typer.colors.RED)
            raise typer.Exit(code=1)
    typer.echo(f"Removed key {key_id}")


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    app()
