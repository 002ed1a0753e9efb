"""Errors raised by the provisioning workflow."""


class ProvisionError(Exception):
    """Base class for every error that aborts a provisioning run."""


class InsufficientPrivilege(ProvisionError):
    """The tool was not started as root."""


class UnsupportedPlatform(ProvisionError):
    """The host is not a supported Raspberry Pi / Raspbian combination."""


class NoNetworkAccess(ProvisionError):
    """The network probe did not get a reply."""


class StepFailure(ProvisionError):
    """An external command exited with a non-zero status."""

    def __init__(self, command: str, exit_code: int):
        self.command = command
        self.exit_code = exit_code
        super().__init__(f"The command '{command}' failed with exit code {exit_code}")


class MissingArchive(ProvisionError):
    """The install archive is not in the install directory."""


class MissingConfig(ProvisionError):
    """The configuration file was not found after unpacking."""


class MissingSources(ProvisionError):
    """No application sources were found after unpacking."""


class MissingStartScript(ProvisionError):
    """The start script used for autostart is missing."""


class MissingRequirements(ProvisionError):
    """The Python requirements file is missing."""
