import logging
import os
import sys
from pathlib import Path

from prompt_toolkit.application import Application
from prompt_toolkit.filters import Condition
from prompt_toolkit.layout import HSplit, Layout, VSplit, Window
from prompt_toolkit.layout.containers import DynamicContainer
from prompt_toolkit.layout.controls import FormattedTextControl
from prompt_toolkit.layout.dimension import Dimension
from prompt_toolkit.styles import Style

from application.controller import InteractionController
from application.ports import ProgressRepository, StartupError
from config import DEFAULT_TICK_INTERVAL, get_db_path, get_theme, get_tick_interval
from core.navigation import InputEvent, Modal, Tab
from infrastructure.sqlite_repository import SqliteProgressRepository

from .tui_keys import build_key_bindings
from .tui_render import (
    build_footer_text,
    build_tab_bar,
    render_add_form,
    render_add_help,
    render_confirm_dialog,
    render_home,
    render_item_table,
    render_topic_list,
    render_update_dialog,
)
from .tui_themes import DEFAULT_THEME, build_style

logger = logging.getLogger("fitdb.tui")


class ProgressTrackerTUI:
    @classmethod
    def build_style(cls, theme: str) -> Style:
        return build_style(theme)

    def __init__(
        self,
        repository: ProgressRepository,
        theme: str = DEFAULT_THEME,
        tick_interval: float = DEFAULT_TICK_INTERVAL,
    ):
        self.controller = InteractionController(repository)
        self.theme_name = theme
        self.style = self.build_style(theme)

        text_input_active = Condition(self._text_input_active)
        kb = build_key_bindings(self.handle_event, text_input_active)

        self.tab_bar = Window(content=FormattedTextControl(lambda: build_tab_bar(self.controller)), height=1, always_hide_cursor=True)
        self.separator = Window(height=1, char="─", style="class:border")
        self.footer = Window(content=FormattedTextControl(lambda: build_footer_text(self.controller)), height=1, always_hide_cursor=True)

        self.home_window = self._text_window(lambda: render_home(self.get_terminal_width() - 2))
        self.topics_body = VSplit(
            [
                self._text_window(lambda: render_topic_list(self.controller, self._topic_column_width()), width=Dimension(weight=1)),
                Window(width=1, char=" "),
                self._text_window(lambda: render_item_table(self.controller, self._item_column_width()), width=Dimension(weight=3)),
            ],
            padding=0,
        )
        self.add_body = VSplit(
            [
                self._text_window(lambda: render_add_form(self.controller, self._half_width()), width=Dimension(weight=1)),
                Window(width=1, char=" "),
                self._text_window(lambda: render_add_help(self.controller, self._half_width()), width=Dimension(weight=1)),
            ],
            padding=0,
        )
        self.update_dialog = self._dialog(lambda: render_update_dialog(self.controller, self._dialog_width()))
        self.confirm_dialog = self._dialog(lambda: render_confirm_dialog(self.controller, self._dialog_width()))

        self.body_container = DynamicContainer(self._resolve_body_container)
        root = HSplit([self.tab_bar, self.separator, self.body_container, self.footer])

        self.app = Application(
            layout=Layout(root),
            key_bindings=kb,
            style=self.style,
            full_screen=True,
            mouse_support=False,
            refresh_interval=tick_interval,
        )
        # Alt chords arrive as Escape + key; a short wait keeps a bare Esc responsive.
        try:
            self.app.ttimeoutlen = max(0.0, float(os.getenv("FITDB_TUI_TTIMEOUTLEN", "0.05")))
        except ValueError:
            self.app.ttimeoutlen = 0.05
        self.app.timeoutlen = 0.3

    @staticmethod
    def get_terminal_width() -> int:
        try:
            return os.get_terminal_size().columns
        except (AttributeError, ValueError, OSError):
            return 100

    def _topic_column_width(self) -> int:
        return min(32, max(16, self.get_terminal_width() // 4))

    def _item_column_width(self) -> int:
        return max(20, self.get_terminal_width() - self._topic_column_width() - 1)

    def _half_width(self) -> int:
        return max(20, (self.get_terminal_width() - 1) // 2)

    def _dialog_width(self) -> int:
        return min(72, max(30, self.get_terminal_width() - 8))

    @staticmethod
    def _text_window(get_text, width=None) -> Window:
        return Window(content=FormattedTextControl(get_text), always_hide_cursor=True, wrap_lines=False, width=width)

    def _dialog(self, get_text):
        return HSplit(
            [
                Window(height=Dimension(weight=1)),
                VSplit([Window(char=" "), self._text_window(get_text, width=Dimension.exact(self._dialog_width())), Window(char=" ")]),
                Window(height=Dimension(weight=1)),
            ]
        )

    def _text_input_active(self) -> bool:
        state = self.controller.state
        return state.active_tab is Tab.ADD and state.active_modal is Modal.NONE

    def _resolve_body_container(self):
        state = self.controller.state
        if state.active_modal is Modal.UPDATE_PROGRESS:
            return self.update_dialog
        if state.active_modal is Modal.CONFIRM_DELETE:
            return self.confirm_dialog
        if state.active_tab is Tab.TOPICS:
            return self.topics_body
        if state.active_tab is Tab.ADD:
            return self.add_body
        return self.home_window

    def handle_event(self, event: InputEvent) -> None:
        if not self.controller.dispatch(event):
            logger.info("quit requested")
            self.app.exit()
            return
        self.force_render()

    def force_render(self) -> None:
        app = getattr(self, "app", None)
        if app:
            app.invalidate()

    def run(self):
        logger.info("tui session started (theme=%s)", self.theme_name)
        try:
            self.app.run()
        finally:
            logger.info("tui session ended")


def cmd_tui(args) -> int:
    db = getattr(args, "db", None)
    db_path = Path(db).expanduser() if db else get_db_path()
    try:
        repository = SqliteProgressRepository.open(db_path)
    except StartupError as exc:
        logger.error("startup failed: %s", exc)
        print(str(exc), file=sys.stderr)
        return 1
    try:
        tui = ProgressTrackerTUI(
            repository,
            theme=getattr(args, "theme", None) or get_theme(),
            tick_interval=get_tick_interval(),
        )
        tui.run()
    finally:
        repository.close()
    return 0
