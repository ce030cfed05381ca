"""List declared operations."""

import json
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from ..client.config import RestCallConfig
from .common import contracts_option, load_registry

console = Console()


@click.command()
@contracts_option
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def operations(contracts: Path | None, as_json: bool):
    """List operations in the contracts file."""
    registry = load_registry(contracts, RestCallConfig())

    if as_json:
        data = {
            operation_id: description.model_dump(mode="json", exclude={"operation_id"})
            for operation_id, description in registry.items()
        }
        console.print_json(json.dumps(data))
        return

    if not len(registry):
        console.print("[yellow]No operations declared.[/yellow]")
        return

    table = Table(title="Operations")
    table.add_column("ID", style="cyan")
    table.add_column("Method")
    table.add_column("Path")
    table.add_column("Parameters")
    table.add_column("Expected")

    for operation_id, description in registry.items():
        table.add_row(
            operation_id,
            description.http_method,
            description.url or "/",
            ", ".join(f"{p.name} ({p.place.value})" for p in description.params),
            ", ".join(str(code) for code in sorted(description.expected_codes | {200})),
        )

    console.print(table)
