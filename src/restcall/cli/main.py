"""Main CLI entry point."""

import logging
from pathlib import Path

import click
from dotenv import load_dotenv

from restcall import __version__
from restcall.client.config import RestCallConfig

# Load .env from cwd
_env_file = Path.cwd() / ".env"
if _env_file.exists():
    load_dotenv(_env_file)


@click.group()
@click.version_option(version=__version__, prog_name="restcall")
@click.option("-v", "--verbose", is_flag=True, help="Log request details")
def cli(verbose: bool):
    """restcall CLI - Call operations declared in a contracts file."""
    level = "DEBUG" if verbose else RestCallConfig().log_level
    logging.basicConfig(
        level=getattr(logging, level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def setup_cli():
    """Register all commands."""
    from .call import call
    from .operations import operations

    cli.add_command(call)
    cli.add_command(operations)


setup_cli()


def main():
    """Entry point for restcall CLI."""
    cli()


if __name__ == "__main__":
    main()
