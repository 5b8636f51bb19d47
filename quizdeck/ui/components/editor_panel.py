"""Component for creating and editing quiz sets."""

from __future__ import annotations

from collections.abc import Callable

from PySide6.QtWebEngineWidgets import QWebEngineView
from PySide6.QtWidgets import (
    QCheckBox,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QListWidget,
    QPlainTextEdit,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from quizdeck.constants.ui_constants import (
    EDITOR_ADD_ANSWER,
    EDITOR_ANSWER_PLACEHOLDER,
    EDITOR_CANCEL,
    EDITOR_DELETE_QUESTION,
    EDITOR_NAME_PLACEHOLDER,
    EDITOR_NEW_QUESTION,
    EDITOR_QUESTION_PLACEHOLDER,
    EDITOR_REMOVE_ANSWER,
    EDITOR_SAVE_QUESTION,
    EDITOR_SAVE_SET,
)
from quizdeck.core.markdown_math_renderer import renderer
from quizdeck.core.quiz_manager import QuizManager
from quizdeck.core.services.progress_store import PersistenceError
from quizdeck.core.set_editor import AnswerDraft, SetEditor, SetEditorError
from quizdeck.ui.dialog_helpers import confirm_discard_draft, show_error, show_warning


class EditorPanel(QWidget):
    """UI component wrapping a ``SetEditor`` draft."""

    def __init__(
        self,
        quiz_manager: QuizManager,
        on_done: Callable[[str | None], None],
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.quiz_manager = quiz_manager
        self.on_done = on_done
        self._editor: SetEditor | None = None
        self._has_unsaved_changes: bool = False
        self._answer_rows: list[tuple[QLineEdit, QCheckBox, QWidget]] = []

        self._build_ui()

    def _build_ui(self) -> None:
        layout = QHBoxLayout()
        self.setLayout(layout)

        # Left: set name and question list
        left_column = QVBoxLayout()
        self.name_input = QLineEdit(self)
        self.name_input.setPlaceholderText(EDITOR_NAME_PLACEHOLDER)
        self.name_input.textChanged.connect(self._mark_dirty)
        left_column.addWidget(self.name_input)

        self.question_list = QListWidget(self)
        self.question_list.currentRowChanged.connect(self._handle_question_selected)
        left_column.addWidget(self.question_list, stretch=1)

        list_buttons = QHBoxLayout()
        self.new_question_button = QPushButton(EDITOR_NEW_QUESTION, self)
        self.new_question_button.clicked.connect(self._handle_new_question)
        list_buttons.addWidget(self.new_question_button)
        self.delete_question_button = QPushButton(EDITOR_DELETE_QUESTION, self)
        self.delete_question_button.clicked.connect(self._handle_delete_question)
        list_buttons.addWidget(self.delete_question_button)
        left_column.addLayout(list_buttons)

        set_buttons = QHBoxLayout()
        self.cancel_button = QPushButton(EDITOR_CANCEL, self)
        self.cancel_button.clicked.connect(self._handle_cancel)
        set_buttons.addWidget(self.cancel_button)
        self.save_set_button = QPushButton(EDITOR_SAVE_SET, self)
        self.save_set_button.clicked.connect(self._handle_save_set)
        set_buttons.addWidget(self.save_set_button)
        left_column.addLayout(set_buttons)
        layout.addLayout(left_column, stretch=1)

        # Right: question draft
        right_column = QVBoxLayout()
        self.question_input = QPlainTextEdit(self)
        self.question_input.setPlaceholderText(EDITOR_QUESTION_PLACEHOLDER)
        self.question_input.textChanged.connect(self._handle_question_text_changed)
        right_column.addWidget(self.question_input, stretch=1)

        right_column.addWidget(QLabel("Answers (tick every correct one):", self))
        self.answers_layout = QVBoxLayout()
        right_column.addLayout(self.answers_layout)

        answer_buttons = QHBoxLayout()
        self.add_answer_button = QPushButton(EDITOR_ADD_ANSWER, self)
        self.add_answer_button.clicked.connect(self._handle_add_answer)
        answer_buttons.addWidget(self.add_answer_button)
        self.remove_answer_button = QPushButton(EDITOR_REMOVE_ANSWER, self)
        self.remove_answer_button.clicked.connect(self._handle_remove_answer)
        answer_buttons.addWidget(self.remove_answer_button)
        self.save_question_button = QPushButton(EDITOR_SAVE_QUESTION, self)
        self.save_question_button.clicked.connect(self._handle_save_question)
        answer_buttons.addWidget(self.save_question_button)
        right_column.addLayout(answer_buttons)

        self.preview_view = QWebEngineView(self)
        right_column.addWidget(self.preview_view, stretch=1)
        layout.addLayout(right_column, stretch=2)

    # --- Public API ---

    def start_editing(self, set_id: str | None) -> None:
        self._editor = self.quiz_manager.create_editor(set_id)
        self.name_input.setText(self._editor.set_name)
        self._refresh_question_list()
        self._load_draft()
        self._has_unsaved_changes = False

    # --- Handlers ---

    def _handle_question_selected(self, row: int) -> None:
        if self._editor is None or row < 0 or row == self._editor.editing_question_index:
            return
        self._editor.load_question(row)
        self._load_draft()

    def _handle_new_question(self) -> None:
        if self._editor is None:
            return
        self._editor.reset_question_draft()
        self.question_list.blockSignals(True)
        self.question_list.setCurrentRow(-1)
        self.question_list.blockSignals(False)
        self._load_draft()

    def _handle_delete_question(self) -> None:
        if self._editor is None:
            return
        row = self.question_list.currentRow()
        if row < 0:
            return
        self._editor.remove_questions({row})
        self._editor.reset_question_draft()
        self._refresh_question_list()
        self._load_draft()
        self._mark_dirty()

    def _handle_add_answer(self) -> None:
        self._store_draft_fields()
        self._editor.add_answer()
        self._load_answer_rows()
        self._mark_dirty()

    def _handle_remove_answer(self) -> None:
        self._store_draft_fields()
        if self._editor.remove_answers({len(self._editor.answers) - 1}):
            self._load_answer_rows()
            self._mark_dirty()
        else:
            show_warning(self, "Answers", "A question needs at least two answer rows.")

    def _handle_save_question(self) -> None:
        self._store_draft_fields()
        try:
            self._editor.save_question()
        except SetEditorError as exc:
            show_warning(self, "Question not saved", str(exc))
            return
        self._refresh_question_list()
        self._load_draft()
        self._mark_dirty()

    def _handle_save_set(self) -> None:
        if self._editor is None:
            return
        self._editor.set_name = self.name_input.text()
        try:
            quiz_set = self.quiz_manager.save_editor(self._editor)
        except SetEditorError as exc:
            show_warning(self, "Set not saved", str(exc))
            return
        except PersistenceError as exc:
            show_error(self, "Set not saved", str(exc))
            return
        self._has_unsaved_changes = False
        self.on_done(quiz_set.id)

    def _handle_cancel(self) -> None:
        if self._has_unsaved_changes and not confirm_discard_draft(self):
            return
        self._editor = None
        self.on_done(None)

    def _handle_question_text_changed(self) -> None:
        self.preview_view.setHtml(renderer.render_full_document(self.question_input.toPlainText()))
        self._mark_dirty()

    def _mark_dirty(self) -> None:
        self._has_unsaved_changes = True

    # --- Draft synchronisation ---

    def _store_draft_fields(self) -> None:
        self._editor.question_text = self.question_input.toPlainText()
        for draft, (text_input, correct_checkbox, _) in zip(self._editor.answers, self._answer_rows):
            draft.text = text_input.text()
            draft.is_correct = correct_checkbox.isChecked()

    def _load_draft(self) -> None:
        self.question_input.blockSignals(True)
        self.question_input.setPlainText(self._editor.question_text)
        self.question_input.blockSignals(False)
        self.preview_view.setHtml(renderer.render_full_document(self._editor.question_text))
        self._load_answer_rows()

    def _load_answer_rows(self) -> None:
        for _, _, row_widget in self._answer_rows:
            self.answers_layout.removeWidget(row_widget)
            row_widget.deleteLater()
        self._answer_rows = []
        for draft in self._editor.answers:
            self._answer_rows.append(self._build_answer_row(draft))

    def _build_answer_row(self, draft: AnswerDraft) -> tuple[QLineEdit, QCheckBox, QWidget]:
        row_widget = QWidget(self)
        row_layout = QHBoxLayout()
        row_layout.setContentsMargins(0, 0, 0, 0)
        row_widget.setLayout(row_layout)

        text_input = QLineEdit(draft.text, row_widget)
        text_input.setPlaceholderText(EDITOR_ANSWER_PLACEHOLDER)
        text_input.textChanged.connect(self._mark_dirty)
        row_layout.addWidget(text_input, stretch=1)

        correct_checkbox = QCheckBox("Correct", row_widget)
        correct_checkbox.setChecked(draft.is_correct)
        correct_checkbox.toggled.connect(self._mark_dirty)
        row_layout.addWidget(correct_checkbox)

        self.answers_layout.addWidget(row_widget)
        return text_input, correct_checkbox, row_widget

    def _refresh_question_list(self) -> None:
        self.question_list.blockSignals(True)
        self.question_list.clear()
        for index, question in enumerate(self._editor.questions, start=1):
            first_line = question.text.splitlines()[0] if question.text else ""
            self.question_list.addItem(f"{index}. {first_line}")
        self.question_list.blockSignals(False)

    def apply_font_size(self, font_size: int) -> None:
        style = f"font-size: {font_size}pt;"
        self.question_list.setStyleSheet(style)
        self.question_input.setStyleSheet(style)
        self.name_input.setStyleSheet(style)
