"""stackstore stack-path — print a stack's checkpoint key."""

from __future__ import annotations

import typer

from stackstore.cli import _exitcodes as ec
from stackstore.cli._output import print_error, print_json
from stackstore.cli._storage import open_cli_store


def stack_path_cmd(
    project: str = typer.Argument(..., help="Project name"),
    stack: str = typer.Argument(..., help="Stack name"),
) -> None:
    """Print the checkpoint and history keys under the resolved layout."""
    from stackstore.cli import state

    store = open_cli_store()
    try:
        data = {
            "layout": store.layout.value,
            "checkpoint": store.stack_key(project, stack),
            "history": store.history_prefix(project, stack),
        }
    except ValueError as e:
        print_error(str(e))
        raise typer.Exit(ec.USAGE_ERROR)
    finally:
        store.close()

    if state.json_output:
        print_json(data)
    else:
        print(data["checkpoint"])
