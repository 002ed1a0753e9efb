"""CLI interface for the provisioning tool."""
from pathlib import Path

import typer
from . import utils
from . import steps
from .config import Config
from .system import System


def setup(
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation before installing"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Preview changes without applying them"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose output"),
):
    """Install the application and its dependencies on a Raspberry Pi."""
    utils.setup_logging(verbose)

    config = Config(install_dir=Path.cwd())
    result = steps.provision_system(config, System(dry_run=dry_run), force=yes)
    if not result.ok:
        utils.log_error(str(result.error))
        raise typer.Exit(1)


app = typer.Typer(
    name="piprovision",
    help="Raspberry Pi provisioning tool for a bundled application.",
    add_completion=False,
    invoke_without_command=True,
    callback=setup,
)


if __name__ == "__main__":
    app()
