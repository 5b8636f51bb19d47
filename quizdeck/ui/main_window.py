"""Qt main window switching between the set list, a session and the editor."""

from __future__ import annotations

from enum import Enum, auto
from pathlib import Path

from PySide6.QtCore import QTimer
from PySide6.QtWidgets import (
    QFileDialog,
    QHBoxLayout,
    QMainWindow,
    QPushButton,
    QStackedWidget,
    QVBoxLayout,
    QWidget,
)

from quizdeck.constants.about import APP_ABOUT_TEXT, APP_LICENSE, APP_NAME, APP_VERSION, HELP_TEXT
from quizdeck.constants.storage_constants import DEFAULT_EXPORT_FILENAME
from quizdeck.constants.ui_constants import (
    DEFAULT_QUESTION_FONT_SIZE,
    DEFAULT_UI_FONT_SIZE,
    EXPORT_DIALOG_TITLE,
    EXPORT_FILE_FILTER,
    IMPORT_DIALOG_TITLE,
    IMPORT_FILE_FILTER,
    NO_SET_SELECTED_MESSAGE,
    PASTE_IMPORT_DIALOG_TITLE,
    SET_LIST_REFRESH_INTERVAL_MS,
    SHOW_JSON_DIALOG_TITLE,
    TOOLBAR_DELETE_SET,
    TOOLBAR_EDIT_SET,
    TOOLBAR_EXPORT,
    TOOLBAR_IMPORT,
    TOOLBAR_NEW_SET,
    TOOLBAR_PASTE_IMPORT,
    TOOLBAR_SHOW_JSON,
    TOOLBAR_START,
    WINDOW_TITLE,
)
from quizdeck.core.quiz_importer import QuizImportError
from quizdeck.core.quiz_manager import QuizManager
from quizdeck.core.services.progress_store import PersistenceError
from quizdeck.core.services.set_store import StoreEvent, UnknownSetError
from quizdeck.styling.styles import Styles
from quizdeck.ui.components.editor_panel import EditorPanel
from quizdeck.ui.components.session_panel import SessionPanel
from quizdeck.ui.components.set_list_panel import SetListPanel
from quizdeck.ui.dialog_helpers import confirm_delete_set, show_error, show_info, show_warning
from quizdeck.ui.json_text_dialog import JsonTextDialog
from quizdeck.ui.settings_dialog import SettingsDialog


class WindowMode(Enum):
    """Page currently shown in the main window."""

    SET_LIST = auto()
    SESSION = auto()
    EDITOR = auto()


class QuizDeckMainWindow(QMainWindow):
    """Main Qt window orchestrating the three application pages."""

    def __init__(self, quiz_manager: QuizManager) -> None:
        super().__init__()
        self.setWindowTitle(WINDOW_TITLE)

        self.quiz_manager = quiz_manager
        self._mode = WindowMode.SET_LIST
        self._ui_font_size: int = DEFAULT_UI_FONT_SIZE
        self._question_font_size: int = DEFAULT_QUESTION_FONT_SIZE
        self._last_export_path: Path | None = None
        # Store events may arrive on the API thread; the timer picks them up.
        self._sets_dirty: bool = True
        self._unsubscribe = self.quiz_manager.store.subscribe(self._handle_store_event)

        self._build_ui()
        self._configure_refresh_timer()
        self._apply_styles()
        self._refresh_state()

    def _build_ui(self) -> None:
        central_widget = QWidget(self)
        self.setCentralWidget(central_widget)

        root_layout = QVBoxLayout()
        central_widget.setLayout(root_layout)

        self._build_toolbar(root_layout)

        self.mode_stack = QStackedWidget(self)
        self.set_list_panel = SetListPanel(self.quiz_manager, on_open_set=self._start_session_for, parent=self)
        self.session_panel = SessionPanel(self.quiz_manager, on_leave=self._return_to_set_list, parent=self)
        self.editor_panel = EditorPanel(self.quiz_manager, on_done=self._handle_editor_done, parent=self)

        self.mode_stack.addWidget(self.set_list_panel)
        self.mode_stack.addWidget(self.session_panel)
        self.mode_stack.addWidget(self.editor_panel)
        root_layout.addWidget(self.mode_stack)

        self._set_mode(WindowMode.SET_LIST)

    def _build_toolbar(self, layout: QVBoxLayout) -> None:
        button_row = QHBoxLayout()

        self.new_set_button = self._add_toolbar_button(button_row, TOOLBAR_NEW_SET, self._handle_new_set)
        self.edit_set_button = self._add_toolbar_button(button_row, TOOLBAR_EDIT_SET, self._handle_edit_set)
        self.delete_set_button = self._add_toolbar_button(button_row, TOOLBAR_DELETE_SET, self._handle_delete_set)
        self.import_button = self._add_toolbar_button(button_row, TOOLBAR_IMPORT, self._handle_import_set)
        self.paste_import_button = self._add_toolbar_button(
            button_row, TOOLBAR_PASTE_IMPORT, self._handle_paste_import
        )
        self.export_button = self._add_toolbar_button(button_row, TOOLBAR_EXPORT, self._handle_export_set)
        self.show_json_button = self._add_toolbar_button(button_row, TOOLBAR_SHOW_JSON, self._handle_show_json)
        self.start_button = self._add_toolbar_button(button_row, TOOLBAR_START, self._handle_start)
        self.about_button = self._add_toolbar_button(button_row, f"About {APP_NAME}", self._handle_about)
        self.help_button = self._add_toolbar_button(button_row, "Help", self._handle_help)
        self.settings_button = self._add_toolbar_button(button_row, "Settings", self._handle_settings)

        layout.addLayout(button_row)

    def _add_toolbar_button(self, row: QHBoxLayout, text: str, handler) -> QPushButton:
        button = QPushButton(text, self)
        button.clicked.connect(handler)
        row.addWidget(button)
        return button

    def _configure_refresh_timer(self) -> None:
        self.refresh_timer = QTimer(self)
        self.refresh_timer.setInterval(SET_LIST_REFRESH_INTERVAL_MS)
        self.refresh_timer.timeout.connect(self._refresh_state)
        self.refresh_timer.start()

    def _handle_store_event(self, event: StoreEvent, set_id: str) -> None:
        self._sets_dirty = True

    def _refresh_state(self) -> None:
        if not self._sets_dirty or self._mode != WindowMode.SET_LIST:
            return
        self._sets_dirty = False
        self.set_list_panel.refresh_sets()

    def _set_mode(self, mode: WindowMode) -> None:
        self._mode = mode
        list_mode = mode == WindowMode.SET_LIST
        for button in (
            self.new_set_button,
            self.edit_set_button,
            self.delete_set_button,
            self.import_button,
            self.paste_import_button,
            self.export_button,
            self.show_json_button,
            self.start_button,
        ):
            button.setEnabled(list_mode)

        index_map = {
            WindowMode.SET_LIST: 0,
            WindowMode.SESSION: 1,
            WindowMode.EDITOR: 2,
        }
        self.mode_stack.setCurrentIndex(index_map[mode])

    def _selected_set_id(self) -> str | None:
        set_id = self.set_list_panel.selected_set_id()
        if set_id is None:
            show_warning(self, "No set", NO_SET_SELECTED_MESSAGE)
        return set_id

    # --- Sessions ---

    def _handle_start(self) -> None:
        set_id = self._selected_set_id()
        if set_id is not None:
            self._start_session_for(set_id)

    def _start_session_for(self, set_id: str) -> None:
        try:
            session_id = self.quiz_manager.start_session(set_id)
        except UnknownSetError as exc:
            show_error(self, "Set not found", str(exc))
            self._sets_dirty = True
            return
        self.session_panel.open_session(session_id)
        self._set_mode(WindowMode.SESSION)

    def _return_to_set_list(self) -> None:
        self._sets_dirty = True
        self._set_mode(WindowMode.SET_LIST)
        self._refresh_state()

    # --- Editing ---

    def _handle_new_set(self) -> None:
        self.editor_panel.start_editing(None)
        self._set_mode(WindowMode.EDITOR)

    def _handle_edit_set(self) -> None:
        set_id = self._selected_set_id()
        if set_id is None:
            return
        try:
            self.editor_panel.start_editing(set_id)
        except UnknownSetError as exc:
            show_error(self, "Set not found", str(exc))
            return
        self._set_mode(WindowMode.EDITOR)

    def _handle_editor_done(self, saved_set_id: str | None) -> None:
        self._return_to_set_list()
        if saved_set_id is not None:
            self.set_list_panel.select_set(saved_set_id)

    def _handle_delete_set(self) -> None:
        set_id = self._selected_set_id()
        if set_id is None:
            return
        try:
            quiz_set = self.quiz_manager.get_set(set_id)
        except UnknownSetError:
            self._sets_dirty = True
            return
        if not confirm_delete_set(self, quiz_set.name):
            return
        try:
            self.quiz_manager.delete_set(set_id)
        except PersistenceError as exc:
            show_error(self, "Delete failed", str(exc))
        self._refresh_state()

    # --- Import & Export ---

    def _handle_import_set(self) -> None:
        file_path, _ = QFileDialog.getOpenFileName(
            self,
            IMPORT_DIALOG_TITLE,
            str(Path.home()),
            IMPORT_FILE_FILTER,
        )
        if not file_path:
            return

        try:
            quiz_set = self.quiz_manager.import_set_from_file(Path(file_path))
        except (OSError, QuizImportError) as exc:
            show_error(self, "Import failed", str(exc))
            return
        except PersistenceError as exc:
            show_error(self, "Import not saved", str(exc))
            return

        self._announce_import(quiz_set)

    def _handle_paste_import(self) -> None:
        dialog = JsonTextDialog(self, PASTE_IMPORT_DIALOG_TITLE)
        if not dialog.exec():
            return

        try:
            quiz_set = self.quiz_manager.import_set_from_json(dialog.get_text())
        except QuizImportError as exc:
            show_error(self, "Import failed", str(exc))
            return
        except PersistenceError as exc:
            show_error(self, "Import not saved", str(exc))
            return

        self._announce_import(quiz_set)

    def _announce_import(self, quiz_set) -> None:
        self._refresh_state()
        self.set_list_panel.select_set(quiz_set.id)
        show_info(
            self,
            "Set imported",
            f"Imported '{quiz_set.name}' with {len(quiz_set.questions)} question(s).",
            font_point_size=self._ui_font_size,
        )

    def _handle_show_json(self) -> None:
        set_id = self._selected_set_id()
        if set_id is None:
            return

        try:
            document = self.quiz_manager.export_set_json(set_id)
        except (ValueError, UnknownSetError) as exc:
            show_error(self, "Export failed", str(exc))
            return

        JsonTextDialog(self, SHOW_JSON_DIALOG_TITLE, document, read_only=True).exec()

    def _handle_export_set(self) -> None:
        set_id = self._selected_set_id()
        if set_id is None:
            return

        default_path = self._last_export_path or (Path.cwd() / DEFAULT_EXPORT_FILENAME)
        file_path, _ = QFileDialog.getSaveFileName(
            self,
            EXPORT_DIALOG_TITLE,
            str(default_path),
            EXPORT_FILE_FILTER,
        )
        if not file_path:
            return

        try:
            self.quiz_manager.export_set_to_file(set_id, Path(file_path))
        except (OSError, ValueError, UnknownSetError) as exc:
            show_error(self, "Export failed", str(exc))
            return

        self._last_export_path = Path(file_path)
        show_info(self, "Set exported", f"Set exported to {file_path}.")

    # --- About, Help & Settings ---

    def _handle_about(self) -> None:
        details = f"{APP_NAME} v{APP_VERSION}\nLicense: {APP_LICENSE}\n\n{APP_ABOUT_TEXT}"
        show_info(self, f"About {APP_NAME}", details, font_point_size=self._ui_font_size)

    def _handle_help(self) -> None:
        show_info(self, f"{APP_NAME} Help", HELP_TEXT, font_point_size=self._ui_font_size)

    def _handle_settings(self) -> None:
        dialog = SettingsDialog(self, self._ui_font_size, self._question_font_size)
        if dialog.exec():
            self._ui_font_size = dialog.get_ui_font_size()
            self._question_font_size = dialog.get_question_font_size()
            self._apply_styles()

    def _apply_styles(self) -> None:
        self.setStyleSheet(Styles.get_main_window_style())

        ui_style = f"font-size: {self._ui_font_size}pt;"
        buttons = [
            self.new_set_button,
            self.edit_set_button,
            self.delete_set_button,
            self.import_button,
            self.paste_import_button,
            self.export_button,
            self.show_json_button,
            self.start_button,
            self.about_button,
            self.help_button,
            self.settings_button,
        ]
        for button in buttons:
            button.setStyleSheet(ui_style)

        self.set_list_panel.apply_font_size(self._ui_font_size)
        self.editor_panel.apply_font_size(self._ui_font_size)
        self.session_panel.set_question_font_size(self._question_font_size)

    def closeEvent(self, event) -> None:
        self._unsubscribe()
        self.session_panel.close_session()
        super().closeEvent(event)
