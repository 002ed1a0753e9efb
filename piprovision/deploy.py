"""Unpacking the application bundle into the install path."""
from pathlib import Path
from typing import List

from piprovision.config import Config
from piprovision.errors import MissingArchive, MissingConfig, MissingSources
from piprovision.system import System
from piprovision.utils import log_info


def find_sources(config: Config) -> List[Path]:
    """Expand the source glob relative to the install directory."""
    return sorted(config.install_dir.glob(config.source_glob))


def deploy(system: System, config: Config) -> None:
    """Unpack the archive and copy configuration and sources into place.

    Every required file is checked before the step that uses it, so a
    missing archive leaves the install path untouched.
    """
    archive = config.archive_path
    if not archive.is_file():
        raise MissingArchive(f"Missing {config.archive}.")

    log_info(f"Installing {config.product_name} into {config.install_path}...")
    system.run("mkdir", "-p", str(config.install_path))
    system.run("unzip", "-o", str(archive), "-d", str(config.install_dir))

    if not config.config_path.is_file():
        raise MissingConfig(f"Missing {config.config_file}.")

    sources = find_sources(config)
    if not sources:
        raise MissingSources(f"Missing application sources ({config.source_glob}).")

    system.run("cp", str(config.config_path), str(config.install_path))
    system.run("cp", "-r", *[str(s) for s in sources], str(config.install_path))
    system.run("chown", "-R", f"{config.owner}:{config.owner}", str(config.install_path))
