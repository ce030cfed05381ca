"""Call a declared operation."""

import asyncio
import json
from pathlib import Path
from typing import Any

import click
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.text import Text

from ..client import ApiClient
from ..client.config import RestCallConfig
from ..client.exceptions import RestCallError
from ..request.modifiers import HeaderModifier
from ..response.details import CallDetails
from .common import contracts_option, load_registry, parse_arguments, parse_header

console = Console()


async def _execute(client: ApiClient, operation: str, arguments: dict[str, Any], detailed: bool):
    async with client:
        if detailed:
            return await client.call_detailed(operation, **arguments)
        return await client.call(operation, **arguments)


def _print_value(value: Any, as_json: bool) -> None:
    if as_json or isinstance(value, (dict, list)):
        console.print_json(json.dumps(value, default=str))
    elif value is None:
        console.print("[dim]No content[/dim]")
    else:
        console.print(Text(str(value)))


def _print_details(details: CallDetails, as_json: bool) -> None:
    if as_json:
        console.print_json(json.dumps({
            "status_code": details.status_code,
            "is_unexpected_status_code": details.is_unexpected_status_code,
            "unexpected_message": details.unexpected_message,
            "response_content": details.response_content,
            "request_dump": details.request_dump,
            "response_dump": details.response_dump,
        }, default=str))
        return

    console.print(Panel(Text(details.request_dump), title="[cyan]Request[/cyan]"))
    console.print(Panel(Text(details.response_dump), title="[cyan]Response[/cyan]"))
    if details.is_unexpected_status_code:
        console.print(f"[red]Unexpected status: {details.status_code}[/red]")
    else:
        console.print(f"[green]Status: {details.status_code}[/green]")
    if details.decode_error is not None:
        console.print(f"[yellow]Body not decoded: {escape(str(details.decode_error))}[/yellow]")


@click.command()
@click.argument("operation")
@click.option("-a", "--arg", "raw_args", multiple=True, help="Argument as name=value (repeatable)")
@click.option("-H", "--header", "headers", multiple=True, help="Extra header as 'Name: value' (repeatable)")
@contracts_option
@click.option("--base-url", help="Override the base URL")
@click.option("--detailed", is_flag=True, help="Show request/response dumps; do not fail on status")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def call(
    operation: str,
    raw_args: tuple[str, ...],
    headers: tuple[str, ...],
    contracts: Path | None,
    base_url: str | None,
    detailed: bool,
    as_json: bool,
):
    """Call OPERATION and print the decoded response."""
    config = RestCallConfig()
    registry = load_registry(contracts, config)
    if operation not in registry:
        raise click.BadParameter(
            f"Unknown operation '{operation}'. Known: {', '.join(registry) or 'none'}",
            param_hint="OPERATION",
        )
    arguments = parse_arguments(registry.get(operation), raw_args)

    client = ApiClient(registry, config, base_url=base_url)
    for raw in headers:
        client.modifiers.append(HeaderModifier(*parse_header(raw)))

    try:
        result = asyncio.run(_execute(client, operation, arguments, detailed))
    except RestCallError as e:
        console.print(f"[red]Call failed:[/red] {escape(str(e))}")
        raise click.Abort()

    if detailed:
        _print_details(result, as_json)
    else:
        _print_value(result, as_json)
