"""Dialog for pasting a JSON set definition or copying an exported one."""

from __future__ import annotations

from PySide6.QtGui import QFontDatabase, QGuiApplication
from PySide6.QtWidgets import (
    QDialog,
    QHBoxLayout,
    QLabel,
    QPlainTextEdit,
    QPushButton,
    QVBoxLayout,
)

from quizdeck.constants.ui_constants import (
    JSON_DIALOG_CANCEL,
    JSON_DIALOG_CLOSE,
    JSON_DIALOG_COPIED,
    JSON_DIALOG_COPY,
    JSON_DIALOG_IMPORT,
    JSON_DIALOG_PLACEHOLDER,
)


class JsonTextDialog(QDialog):
    """Editable for pasting a document to import, read-only for showing an export."""

    def __init__(self, parent=None, title: str = "", text: str = "", read_only: bool = False) -> None:
        super().__init__(parent)
        self.setWindowTitle(title)
        self.setModal(True)
        self.setMinimumSize(560, 420)

        self._read_only = read_only
        self._build_ui(text)

    def _build_ui(self, text: str) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)

        self.text_edit = QPlainTextEdit(self)
        self.text_edit.setFont(QFontDatabase.systemFont(QFontDatabase.FixedFont))
        self.text_edit.setPlainText(text)
        self.text_edit.setReadOnly(self._read_only)
        if not self._read_only:
            self.text_edit.setPlaceholderText(JSON_DIALOG_PLACEHOLDER)
        layout.addWidget(self.text_edit)

        self.status_label = QLabel("", self)
        layout.addWidget(self.status_label)

        button_row = QHBoxLayout()
        button_row.addStretch()

        if self._read_only:
            self.copy_button = QPushButton(JSON_DIALOG_COPY)
            self.copy_button.clicked.connect(self._copy_to_clipboard)  # type: ignore[arg-type]
            button_row.addWidget(self.copy_button)

            self.close_button = QPushButton(JSON_DIALOG_CLOSE)
            self.close_button.clicked.connect(self.accept)  # type: ignore[arg-type]
            self.close_button.setDefault(True)
            button_row.addWidget(self.close_button)
        else:
            self.cancel_button = QPushButton(JSON_DIALOG_CANCEL)
            self.cancel_button.clicked.connect(self.reject)  # type: ignore[arg-type]
            button_row.addWidget(self.cancel_button)

            self.import_button = QPushButton(JSON_DIALOG_IMPORT)
            self.import_button.clicked.connect(self.accept)  # type: ignore[arg-type]
            self.import_button.setDefault(True)
            button_row.addWidget(self.import_button)

        layout.addLayout(button_row)

    def _copy_to_clipboard(self) -> None:
        QGuiApplication.clipboard().setText(self.text_edit.toPlainText())
        self.status_label.setText(JSON_DIALOG_COPIED)

    def get_text(self) -> str:
        """Get the text currently in the editor."""
        return self.text_edit.toPlainText()
