"""Shared test fixtures."""

from __future__ import annotations

import os

import pytest

# Run Qt headless unless a platform is chosen explicitly.
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


class SequenceRandom:
    """Deterministic stand-in for ``random.Random``: replays fixed values."""

    def __init__(self, values: list[float]) -> None:
        self._values = list(values)
        self.calls = 0

    def random(self) -> float:
        value = self._values[self.calls % len(self._values)]
        self.calls += 1
        return value


@pytest.fixture(scope="session")
def qapp():
    """Provide a QApplication instance for the entire test session."""
    from PyQt6.QtWidgets import QApplication

    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    yield app


@pytest.fixture
def seq_rng():
    """Factory for a random source replaying the given values."""
    return SequenceRandom


@pytest.fixture
def english():
    """Force the translator to English for the duration of a test."""
    from sheet_trainer.core.translator import translator

    previous = translator.current_language
    translator.set_language("en")
    yield translator
    translator.set_language(previous)
