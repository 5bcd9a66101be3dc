"""stackstore init — persist the resolved layout version."""

from __future__ import annotations

import typer

from stackstore.cli import _exitcodes as ec
from stackstore.cli._output import print_error, print_json
from stackstore.cli._storage import open_cli_store
from stackstore.meta import META_KEY


def init_cmd(
    dry_run: bool = typer.Option(False, "--dry-run", help="Preview without writing"),
) -> None:
    """Write the metadata record for the resolved layout.

    Legacy stores (version 0) are left untouched.
    """
    from stackstore.cli import state

    store = open_cli_store()
    try:
        if store.has_meta_record():
            status = "exists"
        elif store.version == 0:
            status = "skipped"
        elif dry_run:
            status = "dry_run"
        else:
            store.persist_meta()
            status = "initialized"
    except Exception as e:
        print_error(str(e))
        raise typer.Exit(ec.STORAGE_ERROR)
    finally:
        store.close()

    data = {
        "url": state.url,
        "meta_key": META_KEY,
        "version": store.version,
        "layout": store.layout.value,
        "status": status,
    }
    if state.json_output:
        print_json(data)
        return

    if status == "initialized":
        print(f"Initialized: {state.url} (version {store.version})")
    elif status == "dry_run":
        print(f"Would write {META_KEY} with version {store.version}")
    elif status == "exists":
        print(f"Already initialized: {state.url} (version {store.version})")
    else:
        print(f"Legacy layout in use; {META_KEY} not written")
