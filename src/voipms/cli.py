"""Command line interface for the VoIP.ms client."""

from __future__ import annotations

import uuid
from typing import NoReturn, Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from voipms.api.client import VoipMsClient
from voipms.api.errors import VoipMsError
from voipms.api.models import DidInfo, ServerInfo
from voipms.config import VoipMsConfig, get_config
from voipms.shared.logging import correlation_id_var, setup_logging

app = typer.Typer(no_args_is_help=True, help="CLI for VoIP.ms API")

_console = Console(soft_wrap=True)


def build_client(config: VoipMsConfig) -> VoipMsClient:
    return VoipMsClient(config)


def _client(ctx: typer.Context) -> VoipMsClient:
    return build_client(ctx.obj)


def _fail(message: str) -> NoReturn:
    """Print a diagnostic and terminate with exit code 1."""
    _console.print(message, style="red", markup=False, highlight=False)
    raise typer.Exit(code=1)


def _print_server(server: ServerInfo) -> None:
    recommended = "✅" if server.recommended else ""
    _console.print(
        f"{server.server_pop} {server.server_name} ({server.server_hostname} : {server.server_ip}) {recommended}".rstrip(),
        markup=False,
        highlight=False,
    )


def _print_dids(dids: list[DidInfo]) -> None:
    if not dids:
        _console.print("no DID listed", markup=False)
        return

    table = Table(title="DIDs")
    table.add_column("DID", style="bright_green", no_wrap=True)
    table.add_column("POP")
    table.add_column("Routing")
    table.add_column("Description", style="dim")
    table.add_column("Next billing")
    for did in dids:
        table.add_row(
            did.did,
            "" if did.pop is None else str(did.pop),
            did.routing,
            did.description,
            did.next_billing.isoformat() if did.next_billing else "",
        )
    _console.print(table)


@app.callback()
def main_callback(
    ctx: typer.Context,
    username: Optional[str] = typer.Option(None, "--username", "-u", help="VoIP.ms account email address"),
    api_key: Optional[str] = typer.Option(None, "--api-key", "-p", help="VoIP.ms API key"),
    api_url: Optional[str] = typer.Option(None, "--api-url", help="VoIP.ms API URL"),
    api_timeout: Optional[str] = typer.Option(
        None, "--api-timeout", help="Timeout for HTTP requests, e.g. 2, 2s or 500ms (default 2s)"
    ),
) -> None:
    """Resolve configuration from flags, VOIPMS_* variables and .env."""
    try:
        config = get_config(
            username=username,
            api_key=api_key,
            api_url=api_url,
            api_timeout=api_timeout,
        ).require_credentials()
    except ValidationError as e:
        _fail(f"invalid configuration: {e}")
    except ValueError as e:
        _fail(str(e))

    setup_logging(config.log_level)
    correlation_id_var.set(uuid.uuid4().hex)
    ctx.obj = config


@app.command("setdidpop")
def set_did_pop(
    ctx: typer.Context,
    did: str = typer.Argument(..., help="DID to update"),
    pop: str = typer.Argument(..., help="POP server hostname, e.g. montreal1.voip.ms"),
) -> None:
    """Set the POP for a DID."""
    try:
        response = _client(ctx).set_did_pop_by_hostname(did, pop).ensure_success()
    except VoipMsError as e:
        _fail(f"error setting pop to {pop} for did {did}: {e}")

    _console.print(f"success: {response.status or response.success}", markup=False)


@app.command("getserversinfo")
def get_servers_info(
    ctx: typer.Context,
    pop: Optional[str] = typer.Argument(None, help="POP id or hostname"),
) -> None:
    """Get information about VoIP.ms servers."""
    client = _client(ctx)

    if pop is not None:
        try:
            server = client.get_server_by_pop(int(pop)) if pop.isdigit() else client.get_server_by_hostname(pop)
        except VoipMsError as e:
            _fail(f"error getting server {pop}: {e}")
        _print_server(server)
        return

    try:
        response = client.get_servers_info()
    except VoipMsError as e:
        _fail(f"error getting servers info: {e}")

    if not response.servers:
        _console.print("no server listed", markup=False)
        return
    for server in response.servers:
        _print_server(server)


@app.command("getregistrationstatus")
def get_registration_status(
    ctx: typer.Context,
    did: str = typer.Argument(..., help="Account or sub-account to check"),
) -> None:
    """Get registration status for a DID."""
    try:
        response = _client(ctx).get_registration_status(did)
    except VoipMsError as e:
        _fail(f"error getting registration status for {did}: {e}")

    registered = {True: "yes", False: "no", None: "unknown"}[response.registered]
    _console.print(f"status: {response.envelope.status} registered: {registered}", markup=False)
    for reg in response.registrations:
        _console.print(
            f"{reg.account} {reg.server_hostname} {reg.register_ip}:{reg.register_port} "
            f"{reg.register_transport} {reg.register_useragent}",
            markup=False,
            highlight=False,
        )


@app.command("getclients")
def get_clients(
    ctx: typer.Context,
    client_id: Optional[str] = typer.Argument(None, help="Client id"),
) -> None:
    """Get a list of clients."""
    try:
        response = _client(ctx).get_clients(client_id)
    except VoipMsError as e:
        _fail(f"error while fetching clients: {e}")

    _console.print_json(data={"status": response.status, **response.extra_fields})


@app.command("getdidinfo")
def get_did_info(
    ctx: typer.Context,
    did: str = typer.Argument(..., help="DID"),
    client_id: Optional[str] = typer.Argument(None, help="Client id"),
) -> None:
    """Get information about one DID."""
    try:
        record = _client(ctx).get_did_info(did, client=client_id)
    except VoipMsError as e:
        _fail(f"error while fetching did info for {did}: {e}")

    _print_dids([record])


@app.command("getalldidsinfo")
def get_all_dids_info(ctx: typer.Context) -> None:
    """Get a list of all DIDs."""
    try:
        response = _client(ctx).get_dids_info()
    except VoipMsError as e:
        _fail(f"error while fetching did info: {e}")

    _print_dids(response.dids)


@app.command("getdidinfoforclient")
def get_did_info_for_client(
    ctx: typer.Context,
    client_id: str = typer.Argument(..., help="Client id"),
    did: Optional[str] = typer.Argument(None, help="DID"),
) -> None:
    """Get a list of DIDs for a client."""
    client = _client(ctx)
    try:
        if did is not None:
            dids = [client.get_did_info(did, client=client_id)]
        else:
            dids = client.get_dids_info(client=client_id).dids
    except VoipMsError as e:
        _fail(f"error while fetching did info for client {client_id}: {e}")

    _print_dids(dids)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
