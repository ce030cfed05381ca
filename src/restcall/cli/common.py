"""Helpers shared by CLI commands."""

from pathlib import Path
from typing import Any

import click

from ..client.config import RestCallConfig
from ..client.exceptions import ConfigurationError
from ..contract import ContractRegistry, MethodDescription

contracts_option = click.option(
    "--contracts",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Contracts file (default: RESTCALL_CONTRACTS_FILE)",
)


def load_registry(contracts: Path | None, config: RestCallConfig) -> ContractRegistry:
    """Load the registry from --contracts or the configured contracts file."""
    path = contracts or config.contracts_file
    if path is None:
        raise click.UsageError("No contracts file given. Use --contracts or set RESTCALL_CONTRACTS_FILE.")
    try:
        return ContractRegistry.from_file(path)
    except (FileNotFoundError, ConfigurationError) as e:
        raise click.ClickException(str(e))


def parse_arguments(description: MethodDescription, raw_args: tuple[str, ...]) -> dict[str, Any]:
    """Turn repeated ``name=value`` options into typed call arguments."""
    params = {p.name: p for p in description.params}
    values: dict[str, Any] = {}
    for raw in raw_args:
        name, sep, value = raw.partition("=")
        if not sep:
            raise click.BadParameter(f"Expected name=value, got '{raw}'", param_hint="--arg")
        param = params.get(name)
        if param is None:
            raise click.BadParameter(
                f"Unknown argument '{name}'. Known: {', '.join(params) or 'none'}",
                param_hint="--arg",
            )
        try:
            values[name] = param.coerce(value)
        except ValueError as e:
            raise click.BadParameter(f"{name}: {e}", param_hint="--arg")
    return values


def parse_header(raw: str) -> tuple[str, str]:
    """Split a ``Name: value`` header option."""
    name, sep, value = raw.partition(":")
    if not sep or not name.strip():
        raise click.BadParameter(f"Expected 'Name: value', got '{raw}'", param_hint="--header")
    return name.strip(), value.strip()
