import logging

from typer.testing import CliRunner

from soundcloud_cli import __version__
from soundcloud_cli.cli import app as app_module
from soundcloud_cli.cli.formatters import format_error_with_suggestions
from soundcloud_cli.exceptions import CredentialNotFoundError

runner = CliRunner()


def test_version():
    result = runner.invoke(app_module.app, ["--version"])

    assert result.exit_code == 0
    assert __version__ in result.output


def test_download_without_url_fails():
    result = runner.invoke(app_module.app, ["download"])

    assert result.exit_code == 1
    assert "link" in result.output


def test_download_with_invalid_config_fails(tmp_path, monkeypatch):
    config_file = tmp_path / "config.ini"
    config_file.write_text("[DEFAULT]\nmax_workers = 0\n", encoding="utf-8")
    monkeypatch.setattr(app_module, "CONFIG_FILE", config_file)

    async def no_network(*args, **kwargs):
        raise AssertionError("client_id must not be fetched")

    monkeypatch.setattr(app_module, "fetch_client_id", no_network)

    result = runner.invoke(
        app_module.app, ["download", "https://soundcloud.com/artist"]
    )

    assert result.exit_code == 1


def test_credential_failure_exits_with_error(tmp_path, monkeypatch):
    monkeypatch.setattr(app_module, "CONFIG_FILE", tmp_path / "config.ini")

    async def no_client_id(*args, **kwargs):
        raise CredentialNotFoundError("clientid not found")

    monkeypatch.setattr(app_module, "fetch_client_id", no_client_id)

    result = runner.invoke(
        app_module.app, ["download", "https://soundcloud.com/artist"]
    )

    assert result.exit_code == 1
    assert "clientid not found" in result.output


def test_init_writes_config(tmp_path, monkeypatch):
    config_file = tmp_path / "config.ini"
    monkeypatch.setattr(app_module, "CONFIG_FILE", config_file)

    result = runner.invoke(app_module.app, ["init"])

    assert result.exit_code == 0
    assert "max_workers = 8" in config_file.read_text(encoding="utf-8")


def test_init_keeps_existing_config_unless_confirmed(tmp_path, monkeypatch):
    config_file = tmp_path / "config.ini"
    config_file.write_text("[DEFAULT]\nmax_workers = 3\n", encoding="utf-8")
    monkeypatch.setattr(app_module, "CONFIG_FILE", config_file)

    result = runner.invoke(app_module.app, ["init"], input="n\n")

    assert result.exit_code == 1
    assert "max_workers = 3" in config_file.read_text(encoding="utf-8")


def test_error_panel_has_suggestions():
    panel = format_error_with_suggestions(CredentialNotFoundError("clientid not found"))

    assert "Error" in str(panel.title)


def test_single_verbose_flag_enables_debug_logging():
    logger = logging.getLogger("soundcloud_cli")
    try:
        runner.invoke(app_module.app, ["-v", "download"])
        assert logger.level == logging.DEBUG

        runner.invoke(app_module.app, ["download"])
        assert logger.level == logging.INFO
    finally:
        logger.setLevel(logging.INFO)
