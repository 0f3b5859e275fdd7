"""Tests for the trainer state machine.

Covers the start state, round operations (show_note, next_random_note,
select_answer, select_key), configuration operations, derived values, the
pure helpers, and building a trainer from configuration.
"""

from __future__ import annotations

import random

import pytest

from sheet_trainer.core.constants import STAFF_STEP_PX
from sheet_trainer.core.note_catalog import (
    BASS_NOTES,
    PIANO_KEYS,
    TREBLE_NOTES,
    Clef,
    KeySignature,
)
from sheet_trainer.core.note_pool import available_notes
from sheet_trainer.core.trainer import (
    NoteTrainer,
    TrainerState,
    display_note_name,
    format_percent,
    score_percent,
    staff_note_offset,
)


@pytest.fixture
def trainer():
    return NoteTrainer(random.Random(1234))


def _key(note: str):
    return next(k for k in PIANO_KEYS if k.note == note)


# ── Start state ──────────────────────────────────────────


def test_start_state(trainer):
    assert trainer.current_note.id == "C4"
    assert trainer.selected_answer is None
    assert trainer.current_key is KeySignature.C
    assert trainer.include_accidentals is False
    assert trainer.use_bass_clef is False
    assert trainer.total_attempts == 0
    assert trainer.correct_count == 0
    assert trainer.current_clef is Clef.TREBLE
    assert trainer.is_correct is False
    assert trainer.score_percent == 0
    assert trainer.score_percent_label == "0.00%"


def test_default_rng_is_created():
    t = NoteTrainer()
    assert t.next_random_note() in TREBLE_NOTES


# ── select_answer ────────────────────────────────────────


def test_first_correct_answer_scores(trainer):
    trainer.select_answer("C")
    assert trainer.total_attempts == 1
    assert trainer.correct_count == 1
    assert trainer.is_correct is True
    assert trainer.is_answered is True


def test_repeat_answer_does_not_rescore(trainer):
    trainer.select_answer("C")
    trainer.select_answer("D")
    assert trainer.total_attempts == 1
    assert trainer.correct_count == 1
    assert trainer.selected_answer == "D"
    assert trainer.is_correct is False


def test_wrong_then_right_counts_only_the_wrong(trainer):
    trainer.select_answer("E")
    trainer.select_answer("C")
    assert trainer.total_attempts == 1
    assert trainer.correct_count == 0
    assert trainer.is_correct is True


def test_exact_spelling_required(trainer):
    trainer.show_note("B4")
    trainer.select_answer("Cb")
    assert trainer.correct_count == 0
    assert trainer.is_correct is False


def test_octave_is_ignored():
    t = NoteTrainer(random.Random(0))
    t.toggle_bass_clef(True)
    t.show_note("C3")
    t.select_key(_key("C"))  # piano key is C4
    assert t.is_correct is True
    assert t.correct_count == 1


def test_new_note_allows_new_scoring(trainer):
    trainer.select_answer("C")
    trainer.show_note("D4")
    trainer.select_answer("C")
    assert trainer.total_attempts == 2
    assert trainer.correct_count == 1


def test_select_key_delegates(trainer):
    trainer.select_key(_key("C"))
    assert trainer.selected_answer == "C"
    assert trainer.correct_count == 1


def test_black_key_answer(trainer):
    trainer.select_key(_key("C#"))
    assert trainer.selected_answer == "C#"
    assert trainer.is_correct is False
    assert trainer.total_attempts == 1


def test_counters_never_exceed(seq_rng):
    t = NoteTrainer(seq_rng([0.0, 0.3, 0.6, 0.9]))
    for _ in range(20):
        note = t.next_random_note()
        t.select_answer(note.name)
        t.select_answer("A")
    assert t.total_attempts == 20
    assert 0 <= t.correct_count <= t.total_attempts


# ── Score ────────────────────────────────────────────────


def test_score_quarter(trainer):
    trainer.select_answer("C")
    for note_id in ("D4", "E4", "F4"):
        trainer.show_note(note_id)
        trainer.select_answer("B")
    assert trainer.total_attempts == 4
    assert trainer.correct_count == 1
    assert trainer.score_percent == pytest.approx(25.0)
    assert trainer.score_percent_label == "25.00%"


def test_score_third_rounds_label(trainer):
    trainer.select_answer("C")
    trainer.show_note("D4")
    trainer.select_answer("C")
    trainer.show_note("E4")
    trainer.select_answer("C")
    assert trainer.score_percent_label == "33.33%"


# ── show_note ────────────────────────────────────────────


def test_show_note_sets_and_clears(trainer):
    trainer.select_answer("G")
    assert trainer.show_note("A4") is True
    assert trainer.current_note.id == "A4"
    assert trainer.selected_answer is None


def test_show_note_unknown_is_noop(trainer):
    trainer.select_answer("G")
    before = trainer.snapshot()
    assert trainer.show_note("Z9") is False
    assert trainer.snapshot() == before


def test_show_note_other_clef_is_noop(trainer):
    assert trainer.show_note("E2") is False
    assert trainer.current_note.id == "C4"


# ── next_random_note ─────────────────────────────────────


def test_next_random_note_uses_floor_index(seq_rng):
    t = NoteTrainer(seq_rng([0.0, 0.999, 0.5, 0.124, 0.125]))
    assert t.next_random_note().id == "C4"
    assert t.next_random_note().id == "C5"
    assert t.next_random_note().id == "G4"
    assert t.next_random_note().id == "C4"
    assert t.next_random_note().id == "D4"


def test_next_random_note_clears_answer(trainer):
    trainer.select_answer("C")
    trainer.next_random_note()
    assert trainer.selected_answer is None


@pytest.mark.parametrize("bass", [False, True])
@pytest.mark.parametrize("accidentals", [False, True])
def test_next_random_note_in_pool(bass, accidentals):
    t = NoteTrainer(random.Random(99))
    t.toggle_bass_clef(bass)
    t.toggle_accidentals(accidentals)
    pool = available_notes(t.current_clef, accidentals)
    for _ in range(50):
        assert t.next_random_note() in pool
        assert t.current_note in pool


def test_next_random_note_does_not_score(trainer):
    trainer.next_random_note()
    assert trainer.total_attempts == 0


# ── Configuration ────────────────────────────────────────


def test_toggle_bass_clef_reselects_from_bass(seq_rng):
    t = NoteTrainer(seq_rng([0.5]))
    t.toggle_bass_clef(True)
    assert t.current_clef is Clef.BASS
    assert t.current_note is BASS_NOTES[4]
    assert t.selected_answer is None


def test_toggle_bass_clef_abandons_round_unscored(trainer):
    trainer.select_answer("C")
    trainer.toggle_bass_clef(True)
    assert trainer.total_attempts == 1
    trainer.toggle_bass_clef(False)
    assert trainer.total_attempts == 1
    assert trainer.current_note in TREBLE_NOTES


def test_toggle_before_answer_never_counts(trainer):
    trainer.toggle_bass_clef(True)
    trainer.toggle_accidentals(True)
    assert trainer.total_attempts == 0
    assert trainer.current_note in BASS_NOTES


def test_toggle_accidentals_sets_flag_and_reselects(seq_rng):
    rng = seq_rng([0.3])
    t = NoteTrainer(rng)
    t.select_answer("C")
    t.toggle_accidentals(True)
    assert t.include_accidentals is True
    assert t.selected_answer is None
    assert rng.calls == 1


def test_set_key_signature_is_cosmetic(trainer):
    trainer.show_note("E4")
    trainer.select_answer("E")
    trainer.set_key_signature(KeySignature.D)
    assert trainer.current_key is KeySignature.D
    assert trainer.key_signature_glyphs == "♯♯"
    assert trainer.current_note.id == "E4"
    assert trainer.selected_answer == "E"
    assert trainer.total_attempts == 1
    assert trainer.available_notes == TREBLE_NOTES


def test_set_key_signature_accepts_strings(trainer):
    trainer.set_key_signature("Eb")
    assert trainer.current_key is KeySignature.E_FLAT
    assert trainer.key_signature_glyphs == "♭♭♭"


def test_set_key_signature_unknown_falls_back(trainer):
    trainer.set_key_signature("F#")
    assert trainer.current_key is KeySignature.C
    assert trainer.key_signature_glyphs == ""


# ── Derived display values ───────────────────────────────


def test_clef_glyphs(trainer):
    treble = trainer.clef_glyph
    trainer.toggle_bass_clef(True)
    assert trainer.clef_glyph != treble
    assert trainer.clef_glyph == "\U0001D122"
    assert treble == "\U0001D11E"


def test_display_note_label(trainer):
    assert trainer.display_note_name == "C"
    assert trainer.display_note_label == "C4 (C)"


def test_staff_note_offset_property(trainer):
    assert trainer.staff_note_offset == -4 * STAFF_STEP_PX
    trainer.show_note("G4")
    assert trainer.staff_note_offset == 0


def test_higher_note_moves_up_on_screen(trainer):
    low = trainer.staff_note_offset
    trainer.show_note("C5")
    assert trainer.staff_note_offset < low  # screen y grows downward


def test_snapshot_is_a_copy(trainer):
    snap = trainer.snapshot()
    snap.total_attempts = 99
    assert trainer.total_attempts == 0
    assert isinstance(snap, TrainerState)


# ── Pure helpers ─────────────────────────────────────────


@pytest.mark.parametrize(
    "name, shown",
    [("C#", "C♯"), ("Bb", "B♭"), ("G", "G"), ("B", "B"), ("Eb", "E♭")],
)
def test_display_note_name(name, shown):
    assert display_note_name(name) == shown


def test_score_percent_helper():
    assert score_percent(0, 0) == 0
    assert score_percent(1, 4) == 25.0
    assert score_percent(3, 3) == 100.0


def test_format_percent():
    assert format_percent(25) == "25.00%"
    assert format_percent(0) == "0.00%"
    assert format_percent(66.666) == "66.67%"


def test_offset_symmetry():
    assert staff_note_offset(2) == -staff_note_offset(-2)
    assert staff_note_offset(2) != 0
    assert staff_note_offset(0) == 0
    assert staff_note_offset(3, unit=10) == 30


# ── from_config ──────────────────────────────────────────


class _DictConfig:
    def __init__(self, values: dict) -> None:
        self._values = values

    def get(self, key_path, default=None):
        return self._values.get(key_path, default)


def test_from_config_defaults_match_start_state():
    t = NoteTrainer.from_config(_DictConfig({}))
    assert t.current_note.id == "C4"
    assert t.current_key is KeySignature.C
    assert t.use_bass_clef is False


def test_from_config_applies_settings(seq_rng):
    config = _DictConfig({
        "trainer.use_bass_clef": True,
        "trainer.key_signature": "Bb",
        "trainer.include_accidentals": False,
    })
    t = NoteTrainer.from_config(config, seq_rng([0.0]))
    assert t.current_clef is Clef.BASS
    assert t.current_note.id == "E2"
    assert t.current_key is KeySignature.B_FLAT
    assert t.total_attempts == 0


def test_from_config_seed_is_reproducible():
    config = _DictConfig({"trainer.random_seed": 42})
    a = NoteTrainer.from_config(config)
    b = NoteTrainer.from_config(config)
    assert [a.next_random_note().id for _ in range(10)] == [b.next_random_note().id for _ in range(10)]


def test_from_config_bad_key_falls_back():
    t = NoteTrainer.from_config(_DictConfig({"trainer.key_signature": "H"}))
    assert t.current_key is KeySignature.C


@pytest.mark.parametrize("seed", [[1, 2], {"a": 1}])
def test_from_config_unusable_seed_is_ignored(seed, caplog):
    t = NoteTrainer.from_config(_DictConfig({"trainer.random_seed": seed}))
    assert t.next_random_note() in TREBLE_NOTES
    assert "Ignoring unusable trainer.random_seed" in caplog.text
