"""Power saving, remote access services and display rotation."""
import re
from pathlib import Path
from typing import Optional

from piprovision.config import Config
from piprovision.errors import StepFailure
from piprovision.system import System
from piprovision.utils import log_action, log_info

VNC_FOREGROUND = "ExecStart=/usr/bin/vncserver-x11-serviced -fg"
VNC_BACKGROUND = "ExecStart=/usr/bin/vncserver-x11-serviced"


def default_interface(system: System) -> Optional[str]:
    """Name of the interface carrying the default route."""
    routes = system.query("ip", "r")
    if not routes:
        return None
    for line in routes.splitlines():
        fields = line.split()
        if fields and fields[0] == "default" and len(fields) > 4:
            return fields[4]
    return None


def disable_power_saving(system: System, config: Config) -> None:
    """Turn off Wi-Fi power saving and the X screen saver."""
    log_info("Disabling power saving...")
    if config.arm_only:
        interface = default_interface(system)
        if interface and interface.startswith("wlan"):
            system.run("iw", interface, "set", "power_save", "off")

    system.run("dpkg", "--configure", "-a")
    system.install_package("x11-xserver-utils")
    if system.query("xset", "q") is not None:
        system.run("xset", "s", "off")
        system.run("xset", "-dpms")
        system.run("xset", "s", "noblank")


def read_file(path: Path) -> str:
    """Read a system file, failing like a step when it cannot be read."""
    try:
        return path.read_text(encoding="utf-8")
    except OSError as e:
        raise StepFailure(f"read {path}", e.errno or 1) from e
    except UnicodeDecodeError as e:
        raise StepFailure(f"read {path}", 1) from e


def write_file(path: Path, text: str) -> None:
    """Write a system file, failing like a step when it cannot be written."""
    try:
        path.write_text(text, encoding="utf-8")
    except OSError as e:
        raise StepFailure(f"write {path}", e.errno or 1) from e


def apply_rotation(text: str, key: str, value: int) -> str:
    """Return text with exactly one key=value line."""
    setting = f"{key}={value}"
    pattern = re.compile(rf"^{re.escape(key)}=.*$")
    lines = text.splitlines()
    result = []
    replaced = False
    for line in lines:
        if pattern.match(line):
            if not replaced:
                result.append(setting)
                replaced = True
            continue
        result.append(line)
    if not replaced:
        result.extend(["", setting])
    return "\n".join(result) + "\n"


def set_display_rotation(system: System, config: Config) -> None:
    """Set the rotation in the boot config, editing it in place."""
    path = config.boot_config
    current = read_file(path) if path.is_file() else ""
    updated = apply_rotation(current, config.rotation_key, config.rotation_value)
    if updated == current:
        log_info(f"{config.rotation_key} already set in {path}")
        return
    if system.dry_run:
        log_action(f"[DRY RUN] Would set {config.rotation_key}={config.rotation_value} in {path}")
        return
    log_action(f"Setting {config.rotation_key}={config.rotation_value} in {path}")
    write_file(path, updated)


def patch_vnc_unit(system: System, unit_file: Path) -> bool:
    """Make the VNC unit start in the background. Returns True if the file changed."""
    if not unit_file.is_file():
        return False
    content = read_file(unit_file)
    # matches the foreground flag only at the end of the line
    patched = re.sub(rf"^{re.escape(VNC_FOREGROUND)}$", VNC_BACKGROUND, content, flags=re.MULTILINE)
    if patched == content:
        return False
    if system.dry_run:
        log_action(f"[DRY RUN] Would patch {unit_file}")
        return True
    log_action(f"Patching {unit_file}")
    write_file(unit_file, patched)
    return True


def configure_services(system: System, config: Config) -> None:
    """Enable remote access and apply the display rotation."""
    if config.enable_vnc:
        log_info("Enabling VNC...")
        system.enable_service(config.vnc_service)
        if patch_vnc_unit(system, config.vnc_unit_file):
            system.run("systemctl", "daemon-reload")
        system.start_service(config.vnc_service)

    if config.enable_ssh:
        log_info("Enabling SSH...")
        system.enable_service(config.ssh_service)
        system.start_service(config.ssh_service)

    if config.rotate:
        set_display_rotation(system, config)
