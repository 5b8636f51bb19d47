"""Component showing the result of a finished pass through a set."""

from __future__ import annotations

from collections.abc import Callable

from PySide6.QtCore import Qt
from PySide6.QtWidgets import QLabel, QProgressBar, QPushButton, QVBoxLayout, QWidget

from quizdeck.constants.ui_constants import (
    EMPTY_SET_MESSAGE,
    SESSION_BACK_TO_SETS,
    SUMMARY_ALL_PERFECT,
    SUMMARY_GOOD_SCORE_THRESHOLD,
    SUMMARY_PERCENTAGE_TEMPLATE,
    SUMMARY_RESET,
    SUMMARY_REVIEW_INCORRECT_TEMPLATE,
    SUMMARY_SCORE_TEMPLATE,
    SUMMARY_SHOW_ALL,
    SUMMARY_TITLE,
    SUMMARY_WITH_ERRORS,
)
from quizdeck.core.scoring import SetSummary
from quizdeck.core.services.quiz_session import SessionState
from quizdeck.styling.styles import Styles


class SummaryPanel(QWidget):
    """Score card with the review, show-all and start-over actions."""

    def __init__(
        self,
        on_review_incorrect: Callable[[], None],
        on_show_all: Callable[[], None],
        on_reset: Callable[[], None],
        on_back: Callable[[], None],
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self._build_ui(on_review_incorrect, on_show_all, on_reset, on_back)

    def _build_ui(
        self,
        on_review_incorrect: Callable[[], None],
        on_show_all: Callable[[], None],
        on_reset: Callable[[], None],
        on_back: Callable[[], None],
    ) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)
        layout.addStretch()

        self.title_label = QLabel(SUMMARY_TITLE, self)
        self.title_label.setAlignment(Qt.AlignCenter)
        self.title_label.setStyleSheet(Styles.get_large_label_style())
        layout.addWidget(self.title_label)

        self.score_label = QLabel("", self)
        self.score_label.setAlignment(Qt.AlignCenter)
        layout.addWidget(self.score_label)

        self.percentage_label = QLabel("", self)
        self.percentage_label.setAlignment(Qt.AlignCenter)
        layout.addWidget(self.percentage_label)

        self.result_label = QLabel("", self)
        self.result_label.setAlignment(Qt.AlignCenter)
        layout.addWidget(self.result_label)

        self.score_bar = QProgressBar(self)
        self.score_bar.setRange(0, 100)
        self.score_bar.setTextVisible(False)
        layout.addWidget(self.score_bar)

        self.review_button = QPushButton("", self)
        self.review_button.clicked.connect(on_review_incorrect)
        layout.addWidget(self.review_button)

        self.show_all_button = QPushButton(SUMMARY_SHOW_ALL, self)
        self.show_all_button.clicked.connect(on_show_all)
        layout.addWidget(self.show_all_button)

        self.reset_button = QPushButton(SUMMARY_RESET, self)
        self.reset_button.clicked.connect(on_reset)
        layout.addWidget(self.reset_button)

        self.back_button = QPushButton(SESSION_BACK_TO_SETS, self)
        self.back_button.clicked.connect(on_back)
        layout.addWidget(self.back_button)

        layout.addStretch()

    def show_summary(self, state: SessionState, summary: SetSummary) -> None:
        self.title_label.setText(f"{SUMMARY_TITLE}: {state.set_name}")
        self.score_label.setText(
            SUMMARY_SCORE_TEMPLATE.format(correct=summary.correct_count, total=summary.total_count)
        )
        self.percentage_label.setText(SUMMARY_PERCENTAGE_TEMPLATE.format(percentage=summary.percentage))
        self.percentage_label.setStyleSheet(
            Styles.get_score_label_style(summary.percentage, SUMMARY_GOOD_SCORE_THRESHOLD)
        )
        self.score_bar.setValue(summary.percentage)

        if summary.total_count == 0:
            self.result_label.setText(EMPTY_SET_MESSAGE)
        elif state.all_perfect_in_session:
            self.result_label.setText(SUMMARY_ALL_PERFECT)
        elif state.completed_with_errors:
            self.result_label.setText(SUMMARY_WITH_ERRORS)
        else:
            self.result_label.setText("")

        self.review_button.setText(SUMMARY_REVIEW_INCORRECT_TEMPLATE.format(count=summary.incorrect_count))
        self.review_button.setVisible(summary.incorrect_count > 0)
        self.show_all_button.setEnabled(summary.total_count > 0)

    def apply_font_size(self, font_size: int) -> None:
        widgets = (
            self.score_label,
            self.result_label,
            self.review_button,
            self.show_all_button,
            self.reset_button,
            self.back_button,
        )
        for widget in widgets:
            widget.setStyleSheet(f"font-size: {font_size}pt;")
