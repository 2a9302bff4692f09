"""Tests for the wren CLI — argument parsing and route commands."""

import logging
import sys
import types

import pytest

from wren.app import App
from wren.cli import main
from wren.config import AppConfig
from wren.errors import ConfigurationError
from wren.routing import RouteTable


@pytest.fixture
def _fake_app_module(tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
    (tmp_path / "a.txt").write_text("a")
    (tmp_path / "b.txt").write_text("b")
    app = App(AppConfig(web_root=tmp_path))
    app.static("a", "a.txt", header="X-Foo: 1")
    app.static("a", "b.txt")
    app.static("", "b.txt")

    mod = types.ModuleType("_fake_wren_cli_app")
    mod.app = app  # type: ignore[attr-defined]
    mod.empty = App()  # type: ignore[attr-defined]
    mod.chatty = App(AppConfig(log_level="debug"))  # type: ignore[attr-defined]
    monkeypatch.setitem(sys.modules, "_fake_wren_cli_app", mod)


class TestMain:
    def test_no_command_prints_help(self, capsys) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code == 0
        assert "routes" in capsys.readouterr().out

    def test_unknown_app_exits_1(self, capsys) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["routes", "_no_such_module_here:app"])
        assert exc_info.value.code == 1
        assert "Error" in capsys.readouterr().err


@pytest.mark.usefixtures("_fake_app_module")
class TestRoutesCommand:
    def test_lists_routes_in_order(self, capsys) -> None:
        main(["routes", "_fake_wren_cli_app:app"])
        lines = capsys.readouterr().out.splitlines()
        assert lines[0].split() == ["PATH", "FILE", "HEADER"]
        assert lines[2].startswith("a ")
        assert lines[2].endswith("X-Foo: 1")
        assert "b.txt" in lines[3]
        assert lines[4].startswith("(root)")

    def test_empty_app(self, capsys) -> None:
        main(["routes", "_fake_wren_cli_app:empty"])
        assert "No static routes registered." in capsys.readouterr().out


@pytest.mark.usefixtures("_fake_app_module")
class TestCheckCommand:
    def test_ok_reports_shadowed(self, capsys) -> None:
        main(["check", "_fake_wren_cli_app:app"])
        out = capsys.readouterr().out
        assert "shadowed" in out
        assert "3 route(s) OK." in out

    def test_missing_file_exits_1(self, tmp_path, capsys) -> None:
        (tmp_path / "a.txt").unlink()
        with pytest.raises(SystemExit) as exc_info:
            main(["check", "_fake_wren_cli_app:app"])
        assert exc_info.value.code == 1
        assert "missing file" in capsys.readouterr().out

    def test_freezes_the_app(self, capsys) -> None:
        main(["check", "_fake_wren_cli_app:app"])
        app = sys.modules["_fake_wren_cli_app"].app
        assert app.routes.frozen

    def test_freeze_error_exits_1(self, monkeypatch: pytest.MonkeyPatch, capsys) -> None:
        def broken_freeze(self) -> None:
            raise ConfigurationError("route table rejected")

        monkeypatch.setattr(RouteTable, "freeze", broken_freeze)
        with pytest.raises(SystemExit) as exc_info:
            main(["check", "_fake_wren_cli_app:app"])
        assert exc_info.value.code == 1
        assert "route table rejected" in capsys.readouterr().err


@pytest.mark.usefixtures("_fake_app_module")
class TestLogLevel:
    def test_app_config_level_applies(self) -> None:
        main(["routes", "_fake_wren_cli_app:chatty"])
        assert logging.getLogger("wren").level == logging.DEBUG

    def test_flag_overrides_app_config(self) -> None:
        main(["--log-level", "error", "routes", "_fake_wren_cli_app:chatty"])
        assert logging.getLogger("wren").level == logging.ERROR

    def test_default_app_config_level(self) -> None:
        main(["routes", "_fake_wren_cli_app:empty"])
        assert logging.getLogger("wren").level == logging.INFO
