"""X session autostart for the installed application."""
from piprovision.config import Config
from piprovision.errors import MissingStartScript
from piprovision.system import System
from piprovision.utils import log_info


def prepare_autostart(system: System, config: Config) -> None:
    """Normalize line endings and install the start script as the owner's X session."""
    scripts = sorted(config.install_path.glob("*.py"))
    if scripts:
        system.run("dos2unix", *[str(s) for s in scripts])

    start_script = config.start_script_path
    if not start_script.is_file():
        raise MissingStartScript(f"Missing {config.start_script} script")

    log_info(f"Setting {config.product_name} to start with the X session...")
    autostart = str(config.autostart_path)
    system.run("cp", str(start_script), autostart)
    system.run("dos2unix", autostart)
    system.run("chmod", "+x", autostart)
    system.run("chown", f"{config.owner}:{config.owner}", autostart)
