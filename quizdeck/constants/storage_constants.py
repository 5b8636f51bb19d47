"""Storage locations and format constants for persisted quiz sets."""

from pathlib import Path

DEFAULT_STORE_PATH: Path = Path.home() / ".quizdeck" / "quiz_sets.json"
STORE_FORMAT_VERSION: int = 1
DEFAULT_EXPORT_FILENAME: str = "quiz_set.json"
