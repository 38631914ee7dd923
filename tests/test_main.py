import os
import sys
import json
from unittest.mock import patch, MagicMock

import pytest

from artaudit.__main__ import CONFIG_DIR, load_config, main
from artaudit.cli.batch import parse_arguments
from artaudit.cli import prompt
from artaudit.iou.client import NotAuthenticatedError

from conftest import FakeClient, ScriptedAnswers

CONFIG = os.path.join(CONFIG_DIR, "config.json")
SCHEMA = os.path.join(CONFIG_DIR, "schema.json")


@pytest.fixture(autouse=True)
def log_file(tmp_path):
    """Keeps the log file of `main` out of the home directory."""
    path = tmp_path / "artaudit.log"
    with patch("artaudit.core.helpers.default_log_path", return_value=str(path)):
        yield path


def test_parse_arguments_no_flags():
    args = parse_arguments([])
    assert args.custom_config_path is None
    assert args.log_level is None


def test_parse_arguments_overrides():
    args = parse_arguments(["--custom_config_path", "/config.json", "--log_level", "DEBUG"])
    assert args.custom_config_path == "/config.json"
    assert args.log_level == "DEBUG"


def test_cli_help(capsys):
    with patch.object(sys, 'argv', ['artaudit', '--help']):
        with pytest.raises(SystemExit) as excinfo:
            parse_arguments()
        assert excinfo.value.code == 0
    assert "usage:" in capsys.readouterr().out


def test_packaged_config_is_valid():
    cfg = load_config(CONFIG, SCHEMA)
    assert cfg["api"]["base_url"] == "https://api.github.com"
    assert cfg["api"]["per_page"] == 100


def test_load_config_override():
    cfg = load_config(CONFIG, SCHEMA, overrides={"global_settings.log_level": "DEBUG", "api.timeout": None})
    assert cfg["global_settings"]["log_level"] == "DEBUG"
    assert cfg["api"]["timeout"] == 30


def test_load_config_invalid(tmp_path):
    cfg = load_config(CONFIG, SCHEMA)
    cfg["api"]["per_page"] = 500
    path = tmp_path / "config.json"
    path.write_text(json.dumps(cfg))
    with pytest.raises(ValueError, match="Invalid config"):
        load_config(str(path), SCHEMA)


def test_load_config_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(str(tmp_path / "nope.json"), SCHEMA)


def test_main_unauthenticated_exits(capsys):
    with patch("artaudit.iou.client.get_token", return_value=None):
        with pytest.raises(SystemExit) as excinfo:
            main([])
    assert excinfo.value.code == 2
    assert "ERROR" in capsys.readouterr().err


def test_main_rejected_token_exits():
    client = MagicMock()
    client.current_user.side_effect = NotAuthenticatedError("GitHub rejected the token (401).")
    with patch("artaudit.iou.client.client_from_config", return_value=client):
        with pytest.raises(SystemExit) as excinfo:
            main([])
    assert excinfo.value.code == 2


def test_main_runs_audit(fake_client, capsys):
    answers = ScriptedAnswers("q")
    with patch("artaudit.iou.client.client_from_config", return_value=fake_client):
        assert main([], ask=answers) == 0
    out = capsys.readouterr().out
    assert "Starting artifact audit..." in out
    assert "Artifact Usage Summary:" in out
    assert "Exiting artifact review." in out
    assert fake_client.deleted == []


def test_prompt_reads_input():
    with patch("builtins.input", return_value="y") as mock_input:
        assert prompt.ask("Delete? ") == "y"
    mock_input.assert_called_once_with("Delete? ")


def test_prompt_eof_quits():
    with patch("builtins.input", side_effect=EOFError):
        assert prompt.ask("Delete? ") == "q"


def test_main_without_login_exits(capsys):
    client = MagicMock()
    client.current_user.side_effect = NotAuthenticatedError("GitHub did not report a login for the token.")
    with patch("artaudit.iou.client.client_from_config", return_value=client):
        with pytest.raises(SystemExit) as excinfo:
            main([])
    assert excinfo.value.code == 2
    assert "did not report a login" in capsys.readouterr().err
