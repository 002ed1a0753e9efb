"""Provisioning workflow steps."""
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from piprovision.autostart import prepare_autostart
from piprovision.config import Config
from piprovision.deploy import deploy
from piprovision.errors import ProvisionError
from piprovision.packages import install_packages, install_python_requirements, system_upgrade
from piprovision.services import configure_services, disable_power_saving
from piprovision.system import System
from piprovision.utils import confirm, log_error, log_info, log_success, log_warning, prompt
from piprovision.validate import validate


class Stage(Enum):
    IDLE = "idle"
    VALIDATING = "validating"
    CONFIRMING = "confirming"
    UPGRADING = "upgrading"
    INSTALLING_PACKAGES = "installing packages"
    DEPLOYING = "deploying"
    INSTALLING_REQUIREMENTS = "installing requirements"
    CONFIGURING_SERVICES = "configuring services"
    PREPARING_AUTOSTART = "preparing autostart"
    REBOOTING = "rebooting"
    COMPLETED = "completed"
    ABORTED = "aborted"
    FAILED = "failed"


@dataclass
class ProvisionResult:
    """Where a run ended and the stages it went through."""

    stage: Stage = Stage.IDLE
    history: List[Stage] = field(default_factory=lambda: [Stage.IDLE])
    error: Optional[ProvisionError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def enter(self, stage: Stage) -> None:
        self.stage = stage
        self.history.append(stage)


def upgrade(system: System, config: Config) -> None:
    """Disable power saving, then upgrade the system."""
    disable_power_saving(system, config)
    system_upgrade(system)


def reboot(system: System) -> bool:
    """Offer to reboot. Returns True if the reboot was started."""
    log_warning("System must be rebooted to take effect.")
    if not prompt("Would you like to reboot now?"):
        return False
    system.run("sync")
    system.run("reboot")
    return True


def provision_system(config: Config, system: System, force: bool = False) -> ProvisionResult:
    """Main provisioning workflow.

    Stages run in order. The first error ends the run in the FAILED stage
    and is kept on the result for the caller to report.
    """
    result = ProvisionResult()
    stages = [
        (Stage.UPGRADING, lambda: upgrade(system, config)),
        (Stage.INSTALLING_PACKAGES, lambda: install_packages(system, config.libraries)),
        (Stage.DEPLOYING, lambda: deploy(system, config)),
        (Stage.INSTALLING_REQUIREMENTS, lambda: install_python_requirements(system, config)),
        (Stage.CONFIGURING_SERVICES, lambda: configure_services(system, config)),
        (Stage.PREPARING_AUTOSTART, lambda: prepare_autostart(system, config)),
    ]

    try:
        result.enter(Stage.VALIDATING)
        validate(config, system)

        result.enter(Stage.CONFIRMING)
        log_info("This script will install everything needed to use:")
        log_success(config.product_name)
        if not confirm("Do you wish to continue?", force=force):
            log_error("Aborting.")
            result.enter(Stage.ABORTED)
            return result

        for stage, action in stages:
            result.enter(stage)
            action()

        log_success(f"All done! {config.product_name} installed.")
        if reboot(system):
            result.enter(Stage.REBOOTING)
        else:
            result.enter(Stage.COMPLETED)
    except ProvisionError as e:
        result.enter(Stage.FAILED)
        result.error = e
    return result
