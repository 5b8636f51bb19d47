"""Application entry point for QuizDeck."""

from __future__ import annotations

import sys

from PySide6.QtWidgets import QApplication

from quizdeck.constants.network_constants import DEFAULT_HOST, DEFAULT_PORT
from quizdeck.constants.storage_constants import DEFAULT_STORE_PATH
from quizdeck.core.quiz_manager import QuizManager
from quizdeck.core.services.set_store import SetStore
from quizdeck.server.api_server import start_api_server
from quizdeck.ui.main_window import QuizDeckMainWindow
from quizdeck.utils.logging_config import configure_logging


def main() -> None:
    """Initialize logging, open the set store, start the API server, and launch the Qt UI."""
    logger = configure_logging()
    logger.info("Starting QuizDeck…")

    store = SetStore(DEFAULT_STORE_PATH)
    quiz_manager = QuizManager(store)
    start_api_server(quiz_manager=quiz_manager, host=DEFAULT_HOST, port=DEFAULT_PORT)
    logger.info("API available at http://%s:%d/", DEFAULT_HOST, DEFAULT_PORT)

    app = QApplication(sys.argv)
    window = QuizDeckMainWindow(quiz_manager=quiz_manager)
    window.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
