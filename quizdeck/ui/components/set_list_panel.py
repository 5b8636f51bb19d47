"""Component listing the stored quiz sets with their progress."""

from __future__ import annotations

from collections.abc import Callable

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QLabel,
    QListWidget,
    QListWidgetItem,
    QProgressBar,
    QVBoxLayout,
    QWidget,
)

from quizdeck.constants.ui_constants import SET_CARD_TEMPLATE
from quizdeck.core.models import QuizSet
from quizdeck.core.quiz_manager import QuizManager
from quizdeck.core.scoring import completion_ratio, summarize_set


class SetListPanel(QWidget):
    """UI component showing every set as a progress card."""

    def __init__(
        self,
        quiz_manager: QuizManager,
        on_open_set: Callable[[str], None],
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.quiz_manager = quiz_manager
        self.on_open_set = on_open_set
        self._snapshot: list[tuple[str, str, int, int, bool]] = []

        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)

        self.set_list = QListWidget(self)
        self.set_list.setAlternatingRowColors(True)
        self.set_list.itemDoubleClicked.connect(self._handle_double_click)
        self.set_list.currentItemChanged.connect(lambda *_: self._refresh_details())
        layout.addWidget(self.set_list, stretch=1)

        self.progress_bar = QProgressBar(self)
        self.progress_bar.setRange(0, 100)
        layout.addWidget(self.progress_bar)

        self.details_label = QLabel("", self)
        self.details_label.setAlignment(Qt.AlignLeft)
        layout.addWidget(self.details_label)

    def refresh_sets(self) -> None:
        sets = self.quiz_manager.list_sets()
        snapshot = [
            (s.id, s.name, len(s.questions), len(s.progress), s.is_completed) for s in sets
        ]
        if snapshot == self._snapshot:
            return
        self._snapshot = snapshot

        selected_id = self.selected_set_id()
        self.set_list.clear()
        for quiz_set in sets:
            item = QListWidgetItem(self._card_text(quiz_set), self.set_list)
            item.setData(Qt.UserRole, quiz_set.id)
            if quiz_set.id == selected_id:
                self.set_list.setCurrentItem(item)
        if self.set_list.currentItem() is None and self.set_list.count():
            self.set_list.setCurrentRow(0)
        self._refresh_details()

    def selected_set_id(self) -> str | None:
        item = self.set_list.currentItem()
        return item.data(Qt.UserRole) if item is not None else None

    def select_set(self, set_id: str) -> None:
        for row in range(self.set_list.count()):
            if self.set_list.item(row).data(Qt.UserRole) == set_id:
                self.set_list.setCurrentRow(row)
                return

    def apply_font_size(self, font_size: int) -> None:
        self.set_list.setStyleSheet(f"font-size: {font_size}pt;")
        self.details_label.setStyleSheet(f"font-size: {font_size}pt;")

    def _handle_double_click(self, item: QListWidgetItem) -> None:
        self.on_open_set(item.data(Qt.UserRole))

    def _refresh_details(self) -> None:
        set_id = self.selected_set_id()
        if set_id is None:
            self.progress_bar.setValue(0)
            self.details_label.setText("No quiz sets yet.")
            return
        quiz_set = next((s for s in self.quiz_manager.list_sets() if s.id == set_id), None)
        if quiz_set is None:
            return
        summary = summarize_set(quiz_set)
        answered = len(quiz_set.progress)
        self.progress_bar.setValue(round(completion_ratio(quiz_set) * 100))
        self.details_label.setText(
            f"Answered: {answered} of {summary.total_count}   "
            f"Remaining: {summary.total_count - answered}   "
            f"Correct so far: {summary.correct_count}"
        )

    @staticmethod
    def _card_text(quiz_set: QuizSet) -> str:
        completed = round(completion_ratio(quiz_set) * 100)
        text = SET_CARD_TEMPLATE.format(name=quiz_set.name, count=len(quiz_set.questions), completed=completed)
        if quiz_set.is_completed:
            text += "  ✔"
        return text
