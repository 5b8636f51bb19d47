"""Component that walks the user through the questions of one set."""

from __future__ import annotations

from collections.abc import Callable

from PySide6.QtWebEngineWidgets import QWebEngineView
from PySide6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QPushButton,
    QStackedWidget,
    QVBoxLayout,
    QWidget,
)

from quizdeck.constants.ui_constants import (
    DEFAULT_QUESTION_FONT_SIZE,
    EMPTY_SET_MESSAGE,
    SESSION_BACK_TO_SETS,
    SESSION_CHECK,
    SESSION_FINISH,
    SESSION_MULTIPLE_CHOICE_HINT,
    SESSION_NEXT,
    SESSION_PREVIOUS,
    SESSION_SAVE_FAILED_TEMPLATE,
)
from quizdeck.core.models import Answer
from quizdeck.core.quiz_manager import QuizManager, UnknownSessionError
from quizdeck.core.services.quiz_session import SessionAction, SessionState
from quizdeck.ui.components.summary_panel import SummaryPanel
from quizdeck.ui.dialog_helpers import confirm_reset_progress, show_warning
from quizdeck.ui.question_renderer import render_question
from quizdeck.styling.color_palette import AnswerState
from quizdeck.styling.styles import Styles


class SessionPanel(QWidget):
    """UI component rendering a ``QuizSession`` and forwarding user commands.

    All state lives in the session; the panel re-renders from the returned
    ``SessionState`` after every command.
    """

    def __init__(
        self,
        quiz_manager: QuizManager,
        on_leave: Callable[[], None],
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.quiz_manager = quiz_manager
        self.on_leave = on_leave
        self._session_id: str | None = None
        self._question_font_size: int = DEFAULT_QUESTION_FONT_SIZE
        self._answer_buttons: list[tuple[Answer, QPushButton]] = []

        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)

        self.page_stack = QStackedWidget(self)
        layout.addWidget(self.page_stack)

        # Question page
        self.question_page = QWidget(self)
        question_layout = QVBoxLayout()
        self.question_page.setLayout(question_layout)

        header_row = QHBoxLayout()
        self.set_name_label = QLabel("", self.question_page)
        self.set_name_label.setStyleSheet(Styles.get_large_label_style())
        header_row.addWidget(self.set_name_label)
        header_row.addStretch()
        self.progress_label = QLabel("", self.question_page)
        header_row.addWidget(self.progress_label)
        question_layout.addLayout(header_row)

        self.question_view = QWebEngineView(self.question_page)
        question_layout.addWidget(self.question_view, stretch=2)

        self.multiple_hint_label = QLabel(SESSION_MULTIPLE_CHOICE_HINT, self.question_page)
        question_layout.addWidget(self.multiple_hint_label)

        self.answers_layout = QVBoxLayout()
        question_layout.addLayout(self.answers_layout, stretch=1)

        self.save_error_label = QLabel("", self.question_page)
        self.save_error_label.setVisible(False)
        question_layout.addWidget(self.save_error_label)

        nav_row = QHBoxLayout()
        self.back_button = QPushButton(SESSION_BACK_TO_SETS, self.question_page)
        self.back_button.clicked.connect(self._handle_leave)
        nav_row.addWidget(self.back_button)
        nav_row.addStretch()

        self.previous_button = QPushButton(SESSION_PREVIOUS, self.question_page)
        self.previous_button.clicked.connect(lambda: self._apply(SessionAction.PREVIOUS_QUESTION))
        nav_row.addWidget(self.previous_button)

        self.check_button = QPushButton(SESSION_CHECK, self.question_page)
        self.check_button.clicked.connect(lambda: self._apply(SessionAction.SUBMIT_ANSWER))
        nav_row.addWidget(self.check_button)

        self.next_button = QPushButton(SESSION_NEXT, self.question_page)
        self.next_button.clicked.connect(self._handle_next_or_finish)
        nav_row.addWidget(self.next_button)
        question_layout.addLayout(nav_row)

        self.page_stack.addWidget(self.question_page)

        # Summary page
        self.summary_panel = SummaryPanel(
            on_review_incorrect=lambda: self._apply(SessionAction.REVIEW_INCORRECT),
            on_show_all=lambda: self._apply(SessionAction.SHOW_ALL_QUESTIONS),
            on_reset=self._handle_reset,
            on_back=self._handle_leave,
            parent=self,
        )
        self.page_stack.addWidget(self.summary_panel)

    # --- Public API ---

    def open_session(self, session_id: str) -> None:
        self._session_id = session_id
        self._render(self.quiz_manager.get_session_state(session_id))

    def close_session(self) -> None:
        if self._session_id is not None:
            self.quiz_manager.close_session(self._session_id)
        self._session_id = None
        self._clear_answer_buttons()

    def has_session(self) -> bool:
        return self._session_id is not None

    def set_question_font_size(self, font_size: int) -> None:
        self._question_font_size = font_size
        self.summary_panel.apply_font_size(font_size)
        if self._session_id is not None:
            self._render(self.quiz_manager.get_session_state(self._session_id))

    # --- Commands ---

    def _apply(self, action: SessionAction, answer_id: str | None = None) -> None:
        if self._session_id is None:
            return
        try:
            state = self.quiz_manager.dispatch(self._session_id, action, answer_id)
        except UnknownSessionError:
            self._handle_session_lost()
            return
        self._render(state)

    def _handle_session_lost(self) -> None:
        # The manager drops sessions whose set definition changed.
        self._session_id = None
        self._clear_answer_buttons()
        show_warning(self, "Session closed", "This set changed elsewhere. Open it again to continue.")
        self.on_leave()

    def _handle_next_or_finish(self) -> None:
        if self._session_id is None:
            return
        try:
            state = self.quiz_manager.get_session_state(self._session_id)
        except UnknownSessionError:
            self._handle_session_lost()
            return
        if state.is_last_question:
            self._apply(SessionAction.FINISH_SET)
        else:
            self._apply(SessionAction.NEXT_QUESTION)

    def _handle_reset(self) -> None:
        if confirm_reset_progress(self):
            self._apply(SessionAction.RESET_PROGRESS)

    def _handle_leave(self) -> None:
        self.close_session()
        self.on_leave()

    # --- Rendering ---

    def _render(self, state: SessionState) -> None:
        if state.showing_summary:
            self.summary_panel.show_summary(state, self.quiz_manager.get_session_summary(self._session_id))
            self.page_stack.setCurrentWidget(self.summary_panel)
            return

        self.page_stack.setCurrentWidget(self.question_page)
        self.set_name_label.setText(state.set_name)
        self.progress_label.setText(state.progress_text)

        question = state.current_question
        if question is None:
            self.question_view.setHtml(EMPTY_SET_MESSAGE)
            self._clear_answer_buttons()
            return

        self.question_view.setHtml(render_question(question, font_size=self._question_font_size))
        self.multiple_hint_label.setVisible(question.allows_multiple_selection)
        self._rebuild_answer_buttons(state)

        self.previous_button.setEnabled(state.can_go_previous)
        self.check_button.setEnabled(state.can_submit)
        self.next_button.setText(SESSION_FINISH if state.is_last_question else SESSION_NEXT)
        self.next_button.setEnabled(state.answer_checked and (state.can_go_next or state.can_finish))

        self.save_error_label.setVisible(state.save_error is not None)
        if state.save_error is not None:
            self.save_error_label.setText(SESSION_SAVE_FAILED_TEMPLATE.format(error=state.save_error))

    def _rebuild_answer_buttons(self, state: SessionState) -> None:
        self._clear_answer_buttons()
        question = state.current_question
        for answer in question.answers:
            button = QPushButton(answer.text, self.question_page)
            button.setEnabled(not state.answer_checked)
            button.clicked.connect(lambda _=False, answer_id=answer.id: self._apply(SessionAction.SELECT_ANSWER, answer_id))
            button.setStyleSheet(
                Styles.get_answer_button_style(self._answer_state(state, answer), self._question_font_size)
            )
            self.answers_layout.addWidget(button)
            self._answer_buttons.append((answer, button))

    def _clear_answer_buttons(self) -> None:
        for _, button in self._answer_buttons:
            self.answers_layout.removeWidget(button)
            button.deleteLater()
        self._answer_buttons = []

    @staticmethod
    def _answer_state(state: SessionState, answer: Answer) -> AnswerState:
        selected = state.is_selected(answer)
        if not state.answer_checked:
            return AnswerState.SELECTED if selected else AnswerState.IDLE
        if answer.is_correct:
            return AnswerState.CORRECT if selected else AnswerState.MISSED
        return AnswerState.INCORRECT if selected else AnswerState.IDLE
