"""Network configuration constants for the QuizDeck HTTP API."""

DEFAULT_HOST: str = "127.0.0.1"
DEFAULT_PORT: int = 8765
API_LOG_LEVEL: str = "info"
