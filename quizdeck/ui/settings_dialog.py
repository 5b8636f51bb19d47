"""Settings dialog for configuring QuizDeck display preferences."""

from __future__ import annotations

from PySide6.QtWidgets import (
    QDialog,
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QSpinBox,
    QVBoxLayout,
)


class SettingsDialog(QDialog):
    """Dialog for configuring font sizes."""

    def __init__(self, parent=None, ui_font_size: int = 10, question_font_size: int = 14) -> None:
        super().__init__(parent)
        self.setWindowTitle("Settings")
        self.setModal(True)
        self.setMinimumWidth(380)

        self._ui_font_size = ui_font_size
        self._question_font_size = question_font_size

        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)

        font_group = QGroupBox("Font Sizes")
        font_layout = QVBoxLayout()
        font_group.setLayout(font_layout)

        self.ui_font_spinbox = self._add_spin_row(
            font_layout, "UI Font Size (buttons, lists):", (8, 24), self._ui_font_size
        )
        self.question_font_spinbox = self._add_spin_row(
            font_layout, "Question Font Size (questions, answers):", (10, 32), self._question_font_size
        )
        layout.addWidget(font_group)

        button_row = QHBoxLayout()
        button_row.addStretch()

        self.cancel_button = QPushButton("Cancel")
        self.cancel_button.clicked.connect(self.reject)  # type: ignore[arg-type]
        button_row.addWidget(self.cancel_button)

        self.apply_button = QPushButton("Apply")
        self.apply_button.clicked.connect(self.accept)  # type: ignore[arg-type]
        self.apply_button.setDefault(True)
        button_row.addWidget(self.apply_button)

        layout.addLayout(button_row)

    def _add_spin_row(self, layout: QVBoxLayout, label: str, bounds: tuple[int, int], value: int) -> QSpinBox:
        row = QHBoxLayout()
        row.addWidget(QLabel(label))
        row.addStretch()
        spinbox = QSpinBox()
        spinbox.setRange(*bounds)
        spinbox.setValue(value)
        spinbox.setSuffix(" pt")
        row.addWidget(spinbox)
        layout.addLayout(row)
        return spinbox

    def get_ui_font_size(self) -> int:
        """Get the selected UI font size."""
        return self.ui_font_spinbox.value()

    def get_question_font_size(self) -> int:
        """Get the selected question font size."""
        return self.question_font_spinbox.value()
