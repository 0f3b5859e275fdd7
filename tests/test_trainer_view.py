"""Tests for TrainerView: gestures forwarded to the trainer and re-rendered."""

from __future__ import annotations

import pytest
from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import QApplication

from sheet_trainer.core.note_catalog import BASS_NOTES, KEY_OPTIONS, PIANO_KEYS, KeySignature
from sheet_trainer.core.trainer import NoteTrainer
from sheet_trainer.gui.views.trainer_view import TrainerView


def _key(note: str):
    return next(k for k in PIANO_KEYS if k.note == note)


@pytest.fixture()
def view(qtbot, english, seq_rng):
    trainer = NoteTrainer(seq_rng([0.5, 0.0, 0.75]))
    widget = TrainerView(trainer)
    qtbot.addWidget(widget)
    yield widget
    widget.close()
    QApplication.processEvents()


# ── Initial state ────────────────────────────────────────


class TestInitialState:
    def test_prompt_shown(self, view):
        assert view._feedback_lbl.text() == "Which note is this?"

    def test_score_labels_zero(self, view):
        assert view._score_lbl.text() == "Score 0.00%"
        assert view._attempts_lbl.text() == "Attempts: 0"
        assert view._correct_lbl.text() == "Correct: 0"
        assert view._score_bar.value() == 0

    def test_controls_mirror_trainer(self, view):
        assert view._key_combo.currentIndex() == 0
        assert view._key_combo.count() == len(KEY_OPTIONS)
        assert not view._accidentals_check.isChecked()
        assert not view._bass_check.isChecked()

    def test_staff_shows_start_note(self, view):
        assert view._staff._label == "C4 (C)"
        assert view._staff._offset == view.trainer.staff_note_offset

    def test_next_button_text(self, view):
        assert view._next_btn.text() == "Next note"


# ── Answering ────────────────────────────────────────────


class TestAnswering:
    def test_correct_piano_answer(self, view):
        view.answer_with_key(_key("C"))
        assert view.trainer.correct_count == 1
        assert view._feedback_lbl.text().startswith("Correct!")
        assert view._score_lbl.text() == "Score 100.00%"
        assert view._piano.selected_note == "C"
        assert view._score_bar.value() == 10000

    def test_wrong_answer_shows_choice(self, view):
        view.answer_with_key(_key("D#"))
        assert view.trainer.total_attempts == 1
        assert view.trainer.correct_count == 0
        assert "D♯" in view._feedback_lbl.text()
        assert view._feedback_lbl.property("class") == "feedback-bad"

    def test_piano_click_signal_reaches_trainer(self, view):
        view._piano.key_clicked.emit(_key("C"))
        assert view.trainer.total_attempts == 1

    def test_second_answer_not_rescored(self, view):
        view.answer_with_key(_key("C"))
        view.answer_with_key(_key("E"))
        assert view.trainer.total_attempts == 1
        assert view._attempts_lbl.text() == "Attempts: 1"
        assert view._piano.selected_note == "E"

    def test_next_note_clears_feedback(self, view, qtbot):
        view.answer_with_key(_key("C"))
        qtbot.mouseClick(view._next_btn, Qt.MouseButton.LeftButton)
        assert view.trainer.selected_answer is None
        assert view._feedback_lbl.text() == "Which note is this?"
        assert view._piano.selected_note is None
        assert view.trainer.current_note.id == "G4"  # 0.5 * 8 = index 4


# ── Settings ─────────────────────────────────────────────


class TestSettings:
    def test_bass_clef_checkbox(self, view, qtbot):
        with qtbot.waitSignal(view.settings_changed, timeout=1000):
            view._bass_check.setChecked(True)
        assert view.trainer.use_bass_clef is True
        assert view.trainer.current_note is BASS_NOTES[4]
        assert view._staff._clef_glyph == view.trainer.clef_glyph

    def test_bass_clef_abandons_answered_round(self, view):
        view.answer_with_key(_key("C"))
        view._bass_check.setChecked(True)
        assert view.trainer.total_attempts == 1
        assert view._feedback_lbl.text() == "Which note is this?"

    def test_accidentals_checkbox(self, view):
        view._accidentals_check.setChecked(True)
        assert view.trainer.include_accidentals is True

    def test_key_combo_is_cosmetic(self, view):
        view.answer_with_key(_key("C"))
        view._key_combo.setCurrentIndex(KEY_OPTIONS.index(KeySignature.E_FLAT))
        assert view.trainer.current_key is KeySignature.E_FLAT
        assert view._staff._key_glyphs == "♭♭♭"
        assert view.trainer.selected_answer == "C"
        assert view.trainer.current_note.id == "C4"

    def test_refresh_does_not_reenter_handlers(self, view):
        view.trainer.toggle_bass_clef(True)
        note = view.trainer.current_note
        view.refresh()
        assert view._bass_check.isChecked()
        assert view.trainer.current_note is note

    def test_show_name_toggles_label(self, view):
        view._show_name_check.setChecked(True)
        assert view._staff.label_visible is True


def test_language_switch_retranslates(view, english):
    english.set_language("zh_tw")
    assert view._next_btn.text() == "下一個音"
    english.set_language("en")
    assert view._next_btn.text() == "Next note"
