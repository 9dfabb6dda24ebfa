"""
Config tool: CLI subapp only. Implementation in book_pager.config.
"""

import typer

from book_pager import config as config_module
from book_pager.formats import FORMATS

config_app = typer.Typer(help="Default paper format, page budget and page store location.")


@config_app.command("show")
def _show() -> None:
    """Show config and the resolved page store path."""
    data = config_module.get_config()
    cf = data.get("_config_file", "")
    if data.get("_no_file", False):
        typer.echo(f"Config file: {cf} (not found; using defaults)")
    elif data.get("_load_error", False):
        typer.echo(f"Config file: {cf} (unreadable; using defaults)")
    else:
        typer.echo(f"Config file: {cf}")
    typer.echo(f"Paper format: {data.get('paper_format')}")
    typer.echo(f"Page budget (automatic mode): {data.get('chars_per_page')} chars")
    typer.echo(f"Page store: {data.get('store_path')}")
    typer.echo(f"Resolved page store: {data.get('_resolved_store_path')}")


@config_app.command("set-format")
def _set_format(
    name: str = typer.Argument(..., help=f"Paper format: {', '.join(f.value for f in FORMATS)}"),
) -> None:
    """Set the default paper format."""
    result = config_module.set_paper_format(name)
    if not result["ok"]:
        typer.echo(result["error"], err=True)
        raise typer.Exit(1)
    typer.echo(f"Paper format set to: {result['config'].get('paper_format')}")


@config_app.command("set-budget")
def _set_budget(chars: int = typer.Argument(..., help="Characters packed per page when splitting a chapter")) -> None:
    """Set the page budget used when splitting chapters without manual breaks."""
    result = config_module.set_chars_per_page(chars)
    if not result["ok"]:
        typer.echo(result["error"], err=True)
        raise typer.Exit(1)
    typer.echo(f"Page budget set to: {chars}")


@config_app.command("set-store")
def _set_store(path: str = typer.Argument(..., help="Page store JSON file (relative to config file dir)")) -> None:
    """Set the page store file."""
    result = config_module.set_store_path(path)
    if not result["ok"]:
        typer.echo(result["error"], err=True)
        raise typer.Exit(1)
    typer.echo(f"Page store set to: {path}")
    typer.echo(f"Resolved: {result['config'].get('_resolved_store_path')}")


@config_app.command("path")
def _path() -> None:
    """Print the config file path in use."""
    typer.echo(config_module.get_config_path())
