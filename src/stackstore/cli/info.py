"""stackstore info — show the resolved layout of a store."""

from __future__ import annotations

from typing import Any

import typer

from stackstore.blob import parse_container_url
from stackstore.cli import _exitcodes as ec
from stackstore.cli._output import print_error, print_json
from stackstore.cli._storage import open_cli_store
from stackstore.meta import CURRENT_VERSION, META_KEY


def info_cmd() -> None:
    """Show backend, metadata record and resolved layout. Never writes."""
    from stackstore.cli import state

    store = open_cli_store()
    try:
        target = parse_container_url(state.url)
        data: dict[str, Any] = {
            "backend": target.backend,
            "url": state.url,
            "meta_key": META_KEY,
            "meta_record": store.has_meta_record(),
            "version": store.version,
            "layout": store.layout.value,
            "latest_version": CURRENT_VERSION,
        }
    except Exception as e:
        print_error(str(e))
        raise typer.Exit(ec.STORAGE_ERROR)
    finally:
        store.close()

    if state.json_output:
        print_json(data)
        return

    print(f"Backend: {data['backend']}")
    print(f"URL: {data['url']}")
    print(f"Metadata record: {META_KEY if data['meta_record'] else '(none)'}")
    print(f"Layout version: {data['version']}")
    print(f"Layout: {data['layout']}")
    if data["version"] > CURRENT_VERSION:
        print(f"Note: version {data['version']} is newer than this release ({CURRENT_VERSION})")
