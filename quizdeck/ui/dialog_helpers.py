"""Helper functions for common dialog patterns in the QuizDeck UI."""

from __future__ import annotations

from PySide6.QtGui import QFont
from PySide6.QtWidgets import QMessageBox, QWidget


def _apply_optional_font(widget: QWidget, font_point_size: int | None) -> None:
    """Apply font size to a widget when requested."""
    if font_point_size is None or font_point_size <= 0:
        return

    font: QFont = widget.font()
    font.setPointSize(font_point_size)
    widget.setFont(font)


def _confirm(parent: QWidget, title: str, message: str) -> bool:
    reply = QMessageBox.question(
        parent,
        title,
        message,
        QMessageBox.Yes | QMessageBox.No,
        QMessageBox.No,
    )
    return reply == QMessageBox.Yes


def confirm_delete_set(parent: QWidget, set_name: str) -> bool:
    """Ask before deleting a set together with its progress.

    Args:
        parent: Parent widget for the dialog
        set_name: Name of the set shown in the prompt

    Returns:
        True if user confirmed, False otherwise
    """
    return _confirm(
        parent,
        "Confirm Delete",
        f"Delete the set '{set_name}' and all of its progress?",
    )


def confirm_reset_progress(parent: QWidget) -> bool:
    """Ask before clearing every answer of the current set."""
    return _confirm(
        parent,
        "Start Over",
        "This clears all of your answers for this set. Continue?",
    )


def confirm_discard_draft(parent: QWidget) -> bool:
    """Ask before leaving the editor with unsaved changes."""
    return _confirm(
        parent,
        "Unsaved Changes",
        "The set has unsaved changes. Discard them?",
    )


def show_error(parent: QWidget, title: str, message: str) -> None:
    """Show error dialog."""
    QMessageBox.critical(parent, title, message)


def show_info(
    parent: QWidget,
    title: str,
    message: str,
    *,
    font_point_size: int | None = None,
) -> None:
    """Show information dialog.

    Args:
        parent: Parent widget for the dialog
        title: Dialog title
        message: Information message
        font_point_size: Optional point size for the message text
    """
    msg_box = QMessageBox(parent)
    msg_box.setIcon(QMessageBox.Information)
    msg_box.setWindowTitle(title)
    msg_box.setText(message)
    msg_box.setStandardButtons(QMessageBox.Ok)
    _apply_optional_font(msg_box, font_point_size)
    msg_box.exec()


def show_warning(parent: QWidget, title: str, message: str) -> None:
    """Show warning dialog."""
    QMessageBox.warning(parent, title, message)
