"""Centralized Qt stylesheets for the application."""

from .color_palette import AnswerState, ColorPalette, Theme


class Styles:
    """Helper class to generate Qt stylesheets based on the current theme."""

    @staticmethod
    def get_main_window_style(theme: Theme = Theme.LIGHT) -> str:
        return f"""
            QMainWindow {{
                background-color: {ColorPalette.BACKGROUND_PRIMARY.get(theme)};
                color: {ColorPalette.TEXT_PRIMARY.get(theme)};
            }}
            QWidget {{
                background-color: {ColorPalette.BACKGROUND_PRIMARY.get(theme)};
                color: {ColorPalette.TEXT_PRIMARY.get(theme)};
                font-family: 'Segoe UI', 'Roboto', sans-serif;
            }}
            QPushButton {{
                background-color: {ColorPalette.BUTTON_SECONDARY_BG.get(theme)};
                border: 1px solid {ColorPalette.BORDER_PRIMARY.get(theme)};
                border-radius: 4px;
                padding: 6px 12px;
            }}
            QPushButton:hover {{
                background-color: {ColorPalette.BUTTON_HOVER_BG.get(theme)};
            }}
            QPushButton:disabled {{
                color: {ColorPalette.TEXT_SECONDARY.get(theme)};
            }}
            QLineEdit, QPlainTextEdit, QSpinBox {{
                border: 1px solid {ColorPalette.BORDER_PRIMARY.get(theme)};
                border-radius: 4px;
                padding: 4px;
            }}
            QListWidget {{
                border: 1px solid {ColorPalette.BORDER_PRIMARY.get(theme)};
                border-radius: 4px;
            }}
            QGroupBox {{
                border: 1px solid {ColorPalette.BORDER_PRIMARY.get(theme)};
                border-radius: 6px;
                margin-top: 6px;
                padding-top: 10px;
            }}
        """

    @staticmethod
    def get_answer_button_style(state: AnswerState, font_size: int, theme: Theme = Theme.LIGHT) -> str:
        border = ColorPalette.for_answer_state(state).get(theme)
        weight = "bold" if state is not AnswerState.IDLE else "normal"
        return (
            f"QPushButton {{ font-size: {font_size}pt; font-weight: {weight}; text-align: left; "
            f"padding: 10px; border: 2px solid {border}; border-radius: 8px; }}"
        )

    @staticmethod
    def get_score_label_style(percentage: int, threshold: int, theme: Theme = Theme.LIGHT) -> str:
        color = ColorPalette.for_score(percentage, threshold).get(theme)
        return f"font-size: 18pt; font-weight: bold; color: {color};"

    @staticmethod
    def get_large_label_style() -> str:
        return "font-size: 16pt; font-weight: bold;"
