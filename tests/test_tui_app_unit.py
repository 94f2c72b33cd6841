from types import SimpleNamespace

import pytest
from prompt_toolkit.application import create_app_session
from prompt_toolkit.input import create_pipe_input
from prompt_toolkit.output import DummyOutput

import interface.tui_app as tui_app
from application.ports import StorageError
from core import FormValues
from core.navigation import InputEvent, Key
from infrastructure.sqlite_repository import SqliteProgressRepository
from interface.tui_app import ProgressTrackerTUI, cmd_tui


@pytest.fixture
def repo():
    repository = SqliteProgressRepository.in_memory()
    repository.create_topic_and_item(FormValues("Cardio", "Run", False, 10, 0, 0))
    yield repository
    repository.close()


@pytest.fixture
def tui(repo):
    with create_pipe_input() as pipe:
        with create_app_session(input=pipe, output=DummyOutput()):
            yield ProgressTrackerTUI(repo, theme="dark-contrast", tick_interval=0.2)


def test_app_settings(tui):
    assert tui.app.full_screen
    assert tui.app.refresh_interval == 0.2
    assert tui.app.ttimeoutlen == 0.05
    assert tui.app.timeoutlen < 1


def test_ttimeoutlen_env_override(repo, monkeypatch):
    monkeypatch.setenv("FITDB_TUI_TTIMEOUTLEN", "0.2")
    with create_pipe_input() as pipe:
        with create_app_session(input=pipe, output=DummyOutput()):
            assert ProgressTrackerTUI(repo).app.ttimeoutlen == 0.2
    monkeypatch.setenv("FITDB_TUI_TTIMEOUTLEN", "soon")
    with create_pipe_input() as pipe:
        with create_app_session(input=pipe, output=DummyOutput()):
            assert ProgressTrackerTUI(repo).app.ttimeoutlen == 0.05


def test_body_follows_state(tui):
    assert tui._resolve_body_container() is tui.home_window
    tui.handle_event(InputEvent(Key.TAB_TOPICS))
    assert tui._resolve_body_container() is tui.topics_body
    tui.handle_event(InputEvent(Key.RIGHT))
    tui.handle_event(InputEvent(Key.ENTER))
    assert tui._resolve_body_container() is tui.update_dialog
    tui.handle_event(InputEvent(Key.ESC))
    tui.handle_event(InputEvent(Key.DELETE))
    assert tui._resolve_body_container() is tui.confirm_dialog
    tui.handle_event(InputEvent(Key.ESC))
    tui.handle_event(InputEvent(Key.TAB_ADD))
    assert tui._resolve_body_container() is tui.add_body


def test_text_input_only_on_add_tab(tui):
    assert not tui._text_input_active()
    tui.handle_event(InputEvent(Key.TAB_ADD))
    assert tui._text_input_active()


def test_quit_exits_application(tui, monkeypatch):
    calls = []
    monkeypatch.setattr(tui.app, "exit", lambda: calls.append("exit"))
    tui.handle_event(InputEvent(Key.QUIT))
    assert calls == ["exit"]
    assert tui.controller.running is False


def test_cmd_tui_reports_startup_error(tmp_path, capsys, monkeypatch):
    built = []
    monkeypatch.setattr(tui_app, "ProgressTrackerTUI", lambda *a, **kw: built.append(a))
    code = cmd_tui(SimpleNamespace(db=str(tmp_path / "missing.db"), theme=None))
    assert code == 1
    assert "fitdb init" in capsys.readouterr().err
    assert built == []


def test_cmd_tui_runs_and_closes(tmp_path, monkeypatch):
    path = tmp_path / "fit.db"
    SqliteProgressRepository.initialize(path).close()
    seen = {}

    class FakeTUI:
        def __init__(self, repository, theme, tick_interval):
            seen.update(repository=repository, theme=theme, tick=tick_interval)

        def run(self):
            seen["ran"] = True

    monkeypatch.setattr(tui_app, "ProgressTrackerTUI", FakeTUI)
    monkeypatch.setattr(tui_app, "get_tick_interval", lambda: 0.3)
    assert cmd_tui(SimpleNamespace(db=str(path), theme="dark-contrast")) == 0
    assert seen["ran"] and seen["theme"] == "dark-contrast" and seen["tick"] == 0.3
    with pytest.raises(StorageError):
        seen["repository"].list_topics()
