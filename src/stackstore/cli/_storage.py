"""CLI helpers for store construction."""

from __future__ import annotations

import os

import typer

from stackstore.cli import _exitcodes as ec
from stackstore.cli._output import print_error
from stackstore.config import StackstoreConfig
from stackstore.errors import CorruptStoreError
from stackstore.store import Store, open_store


def _config_from_env() -> StackstoreConfig:
    """Build container config from CLI environment defaults."""
    return StackstoreConfig(
        s3_region=os.getenv("STACKSTORE_S3_REGION"),
        s3_endpoint_url=os.getenv("STACKSTORE_S3_ENDPOINT_URL"),
    )


def open_cli_store() -> Store:
    """Open the store selected by the global ``--url`` option.

    Exits with CORRUPT_STORE or STORAGE_ERROR instead of raising.
    """
    from stackstore.cli import state

    try:
        return open_store(state.url, config=_config_from_env())
    except CorruptStoreError as e:
        print_error(str(e))
        raise typer.Exit(ec.CORRUPT_STORE)
    except Exception as e:
        print_error(f"Cannot open store '{state.url}': {e}")
        raise typer.Exit(ec.STORAGE_ERROR)
