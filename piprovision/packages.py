"""System upgrade and package installation."""
from typing import Iterable

from piprovision.config import Config
from piprovision.errors import MissingRequirements
from piprovision.system import System
from piprovision.utils import log_info

CLEANUP = (
    ("apt-get", "clean"),
    ("apt-get", "autoclean"),
    ("apt-get", "autoremove", "-y"),
)

UPGRADE = (
    ("dpkg", "--configure", "-a"),
    *CLEANUP,
    ("apt-get", "update", "--fix-missing"),
    ("apt-get", "dist-upgrade", "-y", "--allow-unauthenticated", "--fix-missing"),
    ("apt-get", "upgrade", "-y", "--allow-unauthenticated", "--fix-missing"),
    *CLEANUP,
)


def system_upgrade(system: System) -> None:
    """Repair dpkg, refresh the package indices and upgrade everything."""
    log_info("Upgrading the system...")
    for command, *args in UPGRADE:
        system.run(command, *args)


def install_packages(system: System, names: Iterable[str]) -> None:
    """Install packages in order, skipping the ones already present."""
    for name in names:
        if system.is_package_installed(name):
            log_info(f"{name} is already installed")
            continue
        system.install_package(name)


def install_python_requirements(system: System, config: Config) -> None:
    """Install the application's Python requirements with pip."""
    requirements = config.requirements_path
    if not requirements.is_file():
        raise MissingRequirements(f"Missing Python library requirements file ({config.requirements_file})")

    log_info("Installing Python libraries...")
    system.run("pip3", "install", "-r", str(requirements))
    for extra in config.python_extras:
        system.run("pip3", "install", "--upgrade", extra)
