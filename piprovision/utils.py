"""Utility functions for the provisioning tool."""
import logging
import os
import shutil

import typer

# answers accepted as "yes", including the Polish "tak"
YES_ANSWERS = ("yes", "tak", "y", "Y", "t", "T")


def command_exists(command: str) -> bool:
    """Check if a command exists in the system PATH."""
    return shutil.which(command) is not None


def is_root() -> bool:
    """Check if the script is running as root."""
    return os.geteuid() == 0


def log_info(message: str) -> None:
    """Log an informational message."""
    typer.secho(f"[INFO] {message}", fg=typer.colors.CYAN)


def log_action(message: str) -> None:
    """Log an action being performed."""
    typer.echo(f"  -> {message}")


def log_success(message: str) -> None:
    """Log a successful outcome."""
    typer.secho(message, fg=typer.colors.GREEN)


def log_warning(message: str) -> None:
    """Log a warning."""
    typer.secho(f"[WARN] {message}", fg=typer.colors.YELLOW)


def log_error(message: str) -> None:
    """Log an error."""
    typer.secho(f"[ERROR] {message}", fg=typer.colors.RED)


def prompt(question: str) -> bool:
    """Ask a yes/no question, anything but an explicit yes means no."""
    try:
        answer = typer.prompt(f"{question} [y/N]", default="", show_default=False)
    except typer.Abort:
        # no terminal to answer from
        typer.echo()
        return False
    return answer.strip() in YES_ANSWERS


def confirm(question: str, force: bool = False) -> bool:
    """Ask for confirmation unless forced."""
    if force:
        return True
    return prompt(question)


def setup_logging(verbose: bool = False) -> None:
    """Setup logging configuration.

    Console messages go through the log_* helpers; the logging module
    carries the command trace, which is only shown in verbose mode.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
