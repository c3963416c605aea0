import importlib.metadata

import click

from .cli_request import request as request  # type: ignore


def _get_safe_version() -> str:
    """Get the version of the netkit package."""
    try:
        return importlib.metadata.version("netkit")
    except importlib.metadata.PackageNotFoundError:
        return "unknown"


@click.group()
@click.version_option(
    _get_safe_version(),
    prog_name="netkit",
    message="%(prog)s version %(version)s",
)
def cli() -> None:
    """Send HTTP requests through the netkit execution pipeline."""


cli.add_command(request)
