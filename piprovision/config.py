"""Provisioning configuration."""
from dataclasses import dataclass, field
from pathlib import Path
from typing import Tuple


LIBRARIES = (
    "python-dev",
    "libatlas-base-dev",
    "libncurses5-dev",
    "libncursesw5-dev",
    "unclutter",
    "sharutils",
    "dos2unix",
    "x11-xserver-utils",
    "build-essential",
    "qt5-default",
    "pyqt5-dev",
    "pyqt5-dev-tools",
    "python3-scipy",
    "python3-numba",
)


@dataclass(frozen=True)
class Config:
    """Everything a provisioning run needs, built once at startup."""

    # features
    enable_vnc: bool = True
    enable_ssh: bool = True
    rotate: bool = False
    arm_only: bool = True

    # product
    owner: str = "pi"
    product_name: str = "PROGRAM"
    owner_home: Path = Path("/home/pi")
    install_path: Path = Path("/home/pi/program")

    # bundle, relative to install_dir
    install_dir: Path = field(default_factory=Path.cwd)
    archive: str = "install.zip"
    source_glob: str = "program/*"
    config_file: str = "program.cfg"
    start_script: str = "program.sh"
    requirements_file: str = "requirements.txt"
    autostart_name: str = ".Xsession"

    libraries: Tuple[str, ...] = LIBRARIES
    python_extras: Tuple[str, ...] = ("colorama",)

    # display
    boot_config: Path = Path("/boot/config.txt")
    rotation_key: str = "lcd_rotate"
    rotation_value: int = 2

    # platform identity
    vendor_file: Path = Path("/etc/rpi-issue")
    vendor_marker: str = "Raspberry"
    os_release_file: Path = Path("/etc/os-release")
    releases: Tuple[str, ...] = ("buster", "stretch")
    arch_pattern: str = r"armv.l"

    # network
    probe_host: str = "google.com"
    probe_timeout: int = 1

    # services
    vnc_service: str = "vncserver-x11-serviced.service"
    vnc_unit_file: Path = Path("/usr/lib/systemd/system/vncserver-x11-serviced.service")
    ssh_service: str = "ssh"

    @property
    def archive_path(self) -> Path:
        return self.install_dir / self.archive

    @property
    def config_path(self) -> Path:
        return self.install_dir / self.config_file

    @property
    def start_script_path(self) -> Path:
        return self.install_dir / self.start_script

    @property
    def requirements_path(self) -> Path:
        return self.install_dir / self.requirements_file

    @property
    def autostart_path(self) -> Path:
        return self.owner_home / self.autostart_name
