"""Tests for the CLI interface."""
from typer.testing import CliRunner
from unittest.mock import patch
from pathlib import Path

from piprovision.cli import app
from piprovision.errors import MissingArchive
from piprovision.steps import ProvisionResult, Stage

runner = CliRunner()


def finished(stage=Stage.COMPLETED, error=None):
    result = ProvisionResult()
    result.enter(stage)
    result.error = error
    return result


def test_cli_help():
    """Test CLI help command."""
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    assert "raspberry pi" in result.stdout.lower()
    assert "--yes" in result.stdout
    assert "--dry-run" in result.stdout


@patch('piprovision.steps.provision_system')
def test_setup_command_default(mock_provision):
    """Test setup command with default options."""
    mock_provision.return_value = finished()

    result = runner.invoke(app, [])

    assert result.exit_code == 0
    config, system = mock_provision.call_args.args
    assert mock_provision.call_args.kwargs == {"force": False}
    assert config.install_dir == Path.cwd()
    assert system.dry_run is False


@patch('piprovision.steps.provision_system')
def test_setup_force(mock_provision):
    """Test -y skips the confirmation."""
    mock_provision.return_value = finished()

    result = runner.invoke(app, ["-y"])

    assert result.exit_code == 0
    assert mock_provision.call_args.kwargs == {"force": True}


@patch('piprovision.steps.provision_system')
def test_setup_dry_run(mock_provision):
    """Test setup with --dry-run option."""
    mock_provision.return_value = finished()

    result = runner.invoke(app, ["--dry-run"])

    assert result.exit_code == 0
    assert mock_provision.call_args.args[1].dry_run is True


@patch('piprovision.steps.provision_system')
def test_setup_abort_exits_zero(mock_provision):
    """Test declining the confirmation is not an error."""
    mock_provision.return_value = finished(Stage.ABORTED)

    result = runner.invoke(app, [])

    assert result.exit_code == 0


@patch('piprovision.steps.provision_system')
def test_setup_failure_exits_one(mock_provision):
    """Test any failure is reported and exits with 1."""
    mock_provision.return_value = finished(Stage.FAILED, MissingArchive("Missing install.zip."))

    result = runner.invoke(app, [])

    assert result.exit_code == 1
    assert "Missing install.zip." in result.stdout


@patch('piprovision.validate.is_root', return_value=False)
def test_setup_requires_root(mock_is_root):
    """Test the whole run fails early when not root."""
    result = runner.invoke(app, ["-y"])

    assert result.exit_code == 1
    assert "root" in result.stdout.lower()


@patch('piprovision.utils.setup_logging')
@patch('piprovision.steps.provision_system')
def test_setup_verbose(mock_provision, mock_setup_logging):
    """Test setup with --verbose option."""
    mock_provision.return_value = finished()

    result = runner.invoke(app, ["--verbose"])

    assert result.exit_code == 0
    mock_setup_logging.assert_called_once_with(True)


STAGES = ["validate", "disable_power_saving", "system_upgrade", "install_packages", "deploy",
          "install_python_requirements", "configure_services", "prepare_autostart"]


def run_without_input(args):
    """Invoke the CLI with every stage stubbed and nothing on stdin."""
    patchers = {name: patch(f'piprovision.steps.{name}') for name in STAGES}
    mocks = {name: p.start() for name, p in patchers.items()}
    try:
        return runner.invoke(app, args, input=""), mocks
    finally:
        for p in patchers.values():
            p.stop()


def test_forced_run_without_input_exits_zero():
    """Test an unanswerable reboot question counts as declining it."""
    result, mocks = run_without_input(["-y"])

    assert result.exit_code == 0
    assert "All done!" in result.stdout
    mocks["prepare_autostart"].assert_called_once()


def test_unforced_run_without_input_aborts():
    """Test an unanswerable confirmation aborts with exit code 0."""
    result, mocks = run_without_input([])

    assert result.exit_code == 0
    assert "Aborting." in result.stdout
    mocks["system_upgrade"].assert_not_called()
