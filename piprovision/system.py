"""Access to the host: the step runner and the package/service queries built on it."""
import logging
import shlex
from typing import Optional

import sh

from piprovision.errors import StepFailure
from piprovision.utils import command_exists, log_action

logger = logging.getLogger(__name__)

# exit code reported by shells for a missing command
COMMAND_NOT_FOUND = 127


def format_command(command: str, *args: str) -> str:
    """Render a command line for logs and error messages."""
    return " ".join(shlex.quote(str(a)) for a in (command, *args))


class System:
    """Operations performed on the host.

    Every mutating action goes through run(), so a failing command always
    surfaces as StepFailure. Queries never raise; they report failure as
    False or None.
    """

    def __init__(self, dry_run: bool = False):
        self.dry_run = dry_run

    def run(self, command: str, *args: str) -> None:
        """Run a command in the foreground and fail fast on a non-zero exit."""
        cmdline = format_command(command, *args)
        if self.dry_run:
            log_action(f"[DRY RUN] Would run '{cmdline}'")
            return

        log_action(f"Running '{cmdline}'")
        logger.debug("CMD %s", cmdline)
        if not command_exists(command):
            raise StepFailure(cmdline, COMMAND_NOT_FOUND)

        try:
            sh.Command(command)(*[str(a) for a in args], _fg=True)
        except sh.ErrorReturnCode as e:
            raise StepFailure(cmdline, e.exit_code) from e

    def query(self, command: str, *args: str) -> Optional[str]:
        """Run a read-only command and return its output, or None if it failed."""
        if not command_exists(command):
            logger.debug("QUERY %s: command not found", command)
            return None
        try:
            return str(sh.Command(command)(*[str(a) for a in args]))
        except sh.ErrorReturnCode as e:
            logger.debug("QUERY %s exited with %s", format_command(command, *args), e.exit_code)
            return None

    def is_package_installed(self, name: str) -> bool:
        return self.query("dpkg", "-s", name) is not None

    def install_package(self, name: str) -> None:
        self.run("apt-get", "install", name, "-y", "--fix-missing")

    def enable_service(self, unit: str) -> None:
        self.run("systemctl", "enable", unit)

    def start_service(self, unit: str) -> None:
        self.run("systemctl", "start", unit)

    def probe(self, host: str, timeout: int = 1) -> bool:
        """Send a single ping to host."""
        return self.query("ping", "-q", "-c", "1", "-W", str(timeout), host) is not None
