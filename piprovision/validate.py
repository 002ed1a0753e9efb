"""Checks performed before anything on the host is changed."""
import platform
import re
import sys
from pathlib import Path
from typing import Optional

from piprovision.config import Config
from piprovision.errors import InsufficientPrivilege, NoNetworkAccess, UnsupportedPlatform
from piprovision.system import System
from piprovision.utils import is_root, log_info


def _file_contains(path: Path, marker: str) -> bool:
    if not path.is_file():
        return False
    return marker in path.read_text(errors="replace")


def check_root() -> None:
    """Require administrative rights."""
    if not is_root():
        raise InsufficientPrivilege(f"Install must be run as root. Try 'sudo {Path(sys.argv[0]).name}'")


def is_raspberry(config: Config) -> bool:
    return _file_contains(config.vendor_file, config.vendor_marker)


def is_supported_release(config: Config) -> bool:
    return any(_file_contains(config.os_release_file, release) for release in config.releases)


def is_arm(config: Config, machine: Optional[str] = None) -> bool:
    if machine is None:
        machine = platform.machine()
    return re.search(config.arch_pattern, machine) is not None


def check_platform(config: Config, machine: Optional[str] = None) -> None:
    """Require Raspbian on a Raspberry Pi, and an ARM CPU when arm_only is set."""
    supported = is_raspberry(config) and is_supported_release(config)
    if config.arm_only:
        supported = supported and is_arm(config, machine)
    if not supported:
        raise UnsupportedPlatform("This script is intended for Raspbian on a Raspberry Pi!")


def check_network(config: Config, system: System) -> None:
    """Require internet access."""
    if not system.probe(config.probe_host, config.probe_timeout):
        raise NoNetworkAccess("Please connect to the Internet before running this script")


def validate(config: Config, system: System) -> None:
    """Run every environment check, stopping at the first failure."""
    check_root()
    check_platform(config)
    check_network(config, system)
    log_info("Environment checks passed.")
