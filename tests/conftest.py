"""Shared fixtures for the provisioning tests."""
from pathlib import Path
from typing import Dict, List, Optional, Set, Tuple

import pytest

from piprovision.config import Config
from piprovision.errors import StepFailure
from piprovision.system import System, format_command


class FakeSystem(System):
    """System that records commands instead of running them."""

    def __init__(self, installed=(), fail_on: Optional[Tuple[str, ...]] = None,
                 outputs: Optional[Dict[Tuple[str, ...], str]] = None, online: bool = True):
        super().__init__(dry_run=False)
        self.commands: List[Tuple[str, ...]] = []
        self.installed: Set[str] = set(installed)
        self.fail_on = fail_on
        self.outputs = outputs or {}
        self.online = online

    def run(self, command: str, *args: str) -> None:
        argv = (command, *args)
        self.commands.append(argv)
        if self.fail_on is not None and argv[:len(self.fail_on)] == self.fail_on:
            raise StepFailure(format_command(*argv), 100)

    def query(self, command: str, *args: str) -> Optional[str]:
        return self.outputs.get((command, *args))

    def is_package_installed(self, name: str) -> bool:
        return name in self.installed

    def probe(self, host: str, timeout: int = 1) -> bool:
        return self.online

    def installed_packages(self) -> List[str]:
        return [c[2] for c in self.commands if c[:2] == ("apt-get", "install")]


@pytest.fixture
def fake_system():
    return FakeSystem()


@pytest.fixture
def config(tmp_path: Path) -> Config:
    """Config pointing every path into a temporary directory."""
    install_dir = tmp_path / "bundle"
    install_dir.mkdir()
    owner_home = tmp_path / "home" / "pi"
    owner_home.mkdir(parents=True)
    etc = tmp_path / "etc"
    etc.mkdir()
    return Config(
        install_dir=install_dir,
        owner_home=owner_home,
        install_path=owner_home / "program",
        boot_config=tmp_path / "boot" / "config.txt",
        vendor_file=etc / "rpi-issue",
        os_release_file=etc / "os-release",
        vnc_unit_file=tmp_path / "vncserver-x11-serviced.service",
    )
