"""
Typer application for inspecting and scanning a WhatsApp catalog from a terminal.

The ``scan`` command plays the part of a query-engine host: it builds a
:class:`~whatsapp_catalog_fdw.fdw.host.HostContext`, runs the full lifecycle
against :class:`~whatsapp_catalog_fdw.fdw.controller.WhatsAppCatalogFdw` and
prints the emitted rows.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

import typer

from .. import __version__
from ..adapters.api.catalog import CatalogAdapter, WhatsAppCatalogClient
from ..config import CatalogSettings, load_server_options
from ..core.logging import configure_logging
from ..errors import FdwError
from ..fdw import COLUMN_SPECS, HOST_VERSION_REQUIREMENT, CatalogColumn, HostContext, WhatsAppCatalogFdw, host_version_satisfied, iter_rows

app = typer.Typer(
    no_args_is_help=True,
    add_completion=False,
    help=(
        "Read-only foreign data wrapper over the 2Chat WhatsApp catalog API.\n\n"
        "Commands:\n"
        "- columns: list the columns of the catalog table.\n"
        "- scan: fetch the catalog and print rows for the requested columns.\n"
        "- verify: check credentials and connectivity.\n"
        "- version: show the host version requirement."
    ),
)


@app.callback(invoke_without_command=False)
def main(
    ctx: typer.Context,
    secrets_file: Optional[Path] = typer.Option(
        None,
        "--secrets",
        help="TOML file with a [whatsapp_catalog] table of connection options.",
        exists=True,
        dir_okay=False,
        readable=True,
    ),
    phone_number: Optional[str] = typer.Option(None, "--phone-number", help="WhatsApp business number owning the catalog."),
    from_number: Optional[str] = typer.Option(None, "--from-number", help="2Chat-connected number issuing the request."),
    api_key: Optional[str] = typer.Option(None, "--api-key", help="2Chat API key (X-User-API-Key)."),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Logging level, e.g. INFO or DEBUG."),
) -> None:
    """Resolve connection options shared by all commands."""

    configure_logging(log_level)
    try:
        options = load_server_options(
            secrets_path=secrets_file,
            overrides={"phone_number": phone_number, "from_number": from_number, "api_key": api_key},
        )
    except ValueError as exc:
        raise typer.BadParameter(f"Invalid secrets file: {exc}") from exc
    state = ctx.ensure_object(dict)
    state["options"] = options


def _require_options(ctx: typer.Context) -> Dict[str, str]:
    state = ctx.ensure_object(dict)
    options = state.get("options")
    if not isinstance(options, dict):
        raise typer.Exit(code=2)
    return options


def _resolve_columns(columns: Optional[List[str]]) -> List[str]:
    if not columns:
        return [column.value for column in CatalogColumn]
    resolved: List[str] = []
    for entry in columns:
        for part in entry.split(","):
            name = part.strip()
            if not name:
                continue
            if name in resolved:
                raise typer.BadParameter(f"column '{name}' requested more than once", param_hint="--column")
            resolved.append(name)
    return resolved


def _format_value(value: Any) -> str:
    if value is None:
        return "NULL"
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


@app.command("columns")
def columns_command(output_json: bool = typer.Option(False, "--json", help="Emit the column list as JSON.")) -> None:
    """List the columns exposed by the catalog table."""

    if output_json:
        payload = [{"name": entry.column.value, "type": entry.kind.value} for entry in COLUMN_SPECS.values()]
        typer.echo(json.dumps(payload, indent=2))
        return

    header = f"{'Column':<30} Type"
    typer.echo(header)
    typer.echo("-" * len(header))
    for entry in COLUMN_SPECS.values():
        typer.echo(f"{entry.column.value:<30} {entry.kind.value}")


@app.command("scan")
def scan_command(
    ctx: typer.Context,
    column: Optional[List[str]] = typer.Option(
        None,
        "--column",
        "-c",
        help="Column to project. Repeat or comma-separate; defaults to every column.",
    ),
    output_json: bool = typer.Option(False, "--json", help="Emit rows as a JSON array of objects."),
) -> None:
    """Run a full scan and print the emitted rows."""

    columns = _resolve_columns(column)
    host = HostContext.build(_require_options(ctx), columns)
    fdw = WhatsAppCatalogFdw()
    try:
        fdw.initialize(host)
        fdw.begin_scan(host)
        try:
            rows = list(iter_rows(fdw, host))
        finally:
            fdw.end_scan(host)
    except FdwError as exc:
        typer.echo(f"Scan failed: {exc}", err=True)
        raise typer.Exit(code=1) from exc

    if output_json:
        typer.echo(json.dumps([dict(zip(columns, row)) for row in rows], ensure_ascii=False, indent=2))
        return

    typer.echo("\t".join(columns))
    for row in rows:
        typer.echo("\t".join(_format_value(value) for value in row))
    typer.echo(f"({len(rows)} rows)")


@app.command("verify")
def verify_command(ctx: typer.Context) -> None:
    """Check that the configured credentials can read the catalog."""

    options = _require_options(ctx)
    fdw = WhatsAppCatalogFdw()
    try:
        fdw.initialize(HostContext.build(options))
    except FdwError as exc:
        typer.echo(f"Configuration error: {exc}", err=True)
        raise typer.Exit(code=1) from exc

    settings: CatalogSettings = fdw.settings  # type: ignore[assignment]
    result = CatalogAdapter(client=WhatsAppCatalogClient(settings)).verify()
    status = "OK" if result.success else "FAILED"
    typer.echo(f"[{status}] {result.message}")
    for key, value in (result.details or {}).items():
        typer.echo(f"  {key}: {value}")
    if not result.success:
        raise typer.Exit(code=1)


@app.command("version")
def version_command(
    host_version: Optional[str] = typer.Option(None, "--host-version", help="Check a host version against the requirement."),
) -> None:
    """Show the package version and the host version requirement."""

    typer.echo(f"whatsapp-catalog-fdw {__version__}")
    typer.echo(f"Host version requirement: {HOST_VERSION_REQUIREMENT}")
    if host_version is None:
        return
    if host_version_satisfied(host_version):
        typer.echo(f"Host {host_version} is compatible.")
        return
    typer.echo(f"Host {host_version} is not compatible.", err=True)
    raise typer.Exit(code=1)


if __name__ == "__main__":  # pragma: no cover
    app()
