"""stackstore CLI: inspect and bootstrap blob-backed stores."""

from __future__ import annotations

import logging
from typing import Optional

import typer

from stackstore.cli import info, init_cmd, stack_path

DEFAULT_URL = "file://."

app = typer.Typer(
    name="stackstore",
    help="stackstore CLI — inspect and bootstrap blob-backed stack stores.",
    no_args_is_help=True,
)


class _State:
    """Global CLI state shared across subcommands."""

    url: str = DEFAULT_URL
    json_output: bool = False


state = _State()


def _version_callback(value: bool) -> None:
    if value:
        from importlib.metadata import PackageNotFoundError, version

        try:
            v = version("stackstore")
        except PackageNotFoundError:
            v = "unknown"
        print(f"stackstore {v}")
        raise typer.Exit()


@app.callback()
def main_callback(
    url: Optional[str] = typer.Option(
        None,
        "--url",
        envvar="STACKSTORE_URL",
        help="Store URL (e.g. file:///var/state, s3://bucket/prefix, mem://)",
    ),
    json_output: bool = typer.Option(False, "--json", help="JSON output"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
    version: bool = typer.Option(
        False, "--version", help="Show version", is_eager=True, callback=_version_callback
    ),
) -> None:
    """Global options for all stackstore commands."""
    from stackstore.blob import parse_container_url

    resolved_url = url or DEFAULT_URL
    try:
        parse_container_url(resolved_url)
    except Exception as e:
        raise typer.BadParameter(str(e))

    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(levelname)s %(name)s %(message)s",
        )

    state.url = resolved_url
    state.json_output = json_output


app.command(name="info")(info.info_cmd)
app.command(name="init")(init_cmd.init_cmd)
app.command(name="stack-path")(stack_path.stack_path_cmd)


def main() -> None:
    """Entry point for the stackstore CLI."""
    app()
