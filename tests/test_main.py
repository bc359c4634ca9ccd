"""Test command-line handling."""

import json
import sys
import pytest
from unittest.mock import patch
from promptline import __main__ as cli
from promptline.version import get_version_string


def test_parse_args_defaults():
    assert cli.parse_args([]) == {
        "keytest": False, "textual": False, "version": False, "save": False,
        "mode": None, "log": None,
    }


def test_parse_args_flags():
    options = cli.parse_args(["--textual", "--mode", "truncated", "--log", "debug.log"])
    assert options["textual"] is True
    assert options["mode"] == "truncated"
    assert options["log"] == "debug.log"
    assert cli.parse_args(["-V"])["version"] is True
    assert cli.parse_args(["--keyboard-test"])["keytest"] is True
    assert cli.parse_args(["--mode", "scroll", "--save"])["save"] is True


@pytest.mark.parametrize("args", [["--mode"], ["--bogus"], ["file.txt"]])
def test_parse_args_errors(args):
    assert cli.parse_args(args) is None


def test_version_string():
    assert get_version_string().startswith("promptline ")


def test_main_prints_version(capsys):
    with patch.object(sys, "argv", ["promptline", "--version"]):
        cli.main()
    assert capsys.readouterr().out.startswith("promptline ")


def test_main_usage_error_exits_2(capsys):
    with patch.object(sys, "argv", ["promptline", "--nope"]):
        with pytest.raises(SystemExit) as exc_info:
            cli.main()
    assert exc_info.value.code == 2
    assert "usage:" in capsys.readouterr().err


def test_main_rejects_unknown_mode(tmp_path, capsys):
    with patch.object(sys, "argv", ["promptline", "--mode", "sideways"]), \
            patch("platformdirs.user_config_dir", return_value=str(tmp_path)):
        with pytest.raises(SystemExit) as exc_info:
            cli.main()
    assert exc_info.value.code == 2
    assert "sideways" in capsys.readouterr().err


def test_main_runs_editor_with_settings(tmp_path):
    with patch.object(sys, "argv", ["promptline", "--mode", "static"]), \
            patch("platformdirs.user_config_dir", return_value=str(tmp_path)), \
            patch("promptline.editor.Editor") as editor_cls:
        cli.main()
    kwargs = editor_cls.call_args.kwargs
    assert kwargs["line_mode"] == "static"
    assert kwargs["settings"]["prompt"] == "> "
    editor_cls.return_value.run.assert_called_once_with()


def test_main_runs_textual_app(tmp_path):
    with patch.object(sys, "argv", ["promptline", "--textual", "--mode", "truncated"]), \
            patch("platformdirs.user_config_dir", return_value=str(tmp_path)), \
            patch("promptline.textual_app.PromptlineApp.run") as run:
        cli.main()
    run.assert_called_once_with()


def test_main_save_persists_mode(tmp_path):
    with patch.object(sys, "argv", ["promptline", "--mode", "truncated", "--save"]), \
            patch("platformdirs.user_config_dir", return_value=str(tmp_path)), \
            patch("promptline.editor.Editor"):
        cli.main()
    saved = json.loads((tmp_path / "settings.json").read_text(encoding="utf-8"))
    assert saved["line_mode"] == "truncated"
    assert saved["prompt"] == "> "


def test_main_without_save_writes_nothing(tmp_path):
    with patch.object(sys, "argv", ["promptline", "--mode", "truncated"]), \
            patch("platformdirs.user_config_dir", return_value=str(tmp_path)), \
            patch("promptline.editor.Editor"):
        cli.main()
    assert not (tmp_path / "settings.json").exists()
