"""Contract the quiz session uses to persist its working copy of a set."""

from __future__ import annotations

from typing import Protocol

from quizdeck.core.models import QuizSet


class PersistenceError(Exception):
    """Raised when a quiz set could not be written to durable storage."""


class ProgressStore(Protocol):
    """Anything that can durably upsert a quiz set by its identity."""

    def save(self, quiz_set: QuizSet) -> None:
        """Fully overwrite the stored state of ``quiz_set``.

        Raises:
            PersistenceError: if the write did not reach storage.
        """
        ...
