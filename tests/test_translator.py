"""Tests for the translation table."""

from __future__ import annotations

from sheet_trainer.core.translator import LANGUAGES, Translator


def test_english_default():
    tr = Translator()
    assert tr.current_language == "en"
    assert tr.tr("trainer.next") == "Next note"


def test_format_kwargs():
    tr = Translator()
    assert tr.tr("trainer.score", percent="25.00%") == "Score 25.00%"


def test_missing_key_returns_key():
    assert Translator().tr("no.such.key") == "no.such.key"


def test_switch_language_emits(qapp):
    tr = Translator()
    fired = []
    tr.language_changed.connect(lambda: fired.append(True))
    tr.set_language("zh_tw")
    assert fired == [True]
    assert tr.tr("trainer.next") == "下一個音"


def test_unknown_or_same_language_ignored(qapp):
    tr = Translator()
    fired = []
    tr.language_changed.connect(lambda: fired.append(True))
    tr.set_language("en")
    tr.set_language("xx")
    assert fired == []
    assert tr.current_language == "en"


def test_every_language_covers_english_keys():
    tr = Translator()
    english = set(tr._data["en"])
    for code in LANGUAGES:
        assert set(tr._data[code]) == english
