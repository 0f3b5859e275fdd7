"""Note-reading trainer: current note, answer evaluation, and score.

Pure Python, no Qt dependency.  The GUI layer calls the operations below in
response to user gestures and re-reads the derived properties afterwards.

Usage::

    trainer = NoteTrainer(random.Random(7))
    trainer.next_random_note()
    trainer.select_key(PIANO_KEYS[0])
    label = trainer.score_percent_label
"""

from __future__ import annotations

import copy
import logging
import random
from dataclasses import dataclass
from typing import Any, Protocol

from .constants import (
    BASS_CLEF_GLYPH,
    FLAT_GLYPH,
    SHARP_GLYPH,
    STAFF_STEP_PX,
    TREBLE_CLEF_GLYPH,
)
from .key_signature import key_signature_glyphs
from .note_catalog import (
    TREBLE_NOTES,
    Clef,
    KeySignature,
    PianoKey,
    StaffNoteDefinition,
)
from .note_pool import available_notes, find_note

log = logging.getLogger(__name__)

_CLEF_GLYPHS = {
    Clef.TREBLE: TREBLE_CLEF_GLYPH,
    Clef.BASS: BASS_CLEF_GLYPH,
}


class RandomSource(Protocol):
    def random(self) -> float: ...


@dataclass
class TrainerState:
    """Everything that changes during a session."""

    current_note: StaffNoteDefinition = TREBLE_NOTES[0]
    selected_answer: str | None = None
    current_key: KeySignature = KeySignature.C
    include_accidentals: bool = False
    use_bass_clef: bool = False
    total_attempts: int = 0
    correct_count: int = 0


# ── Pure helpers ──────────────────────────────────────────


def display_note_name(name: str) -> str:
    """Render a trailing ``#``/``b`` as a sharp/flat glyph."""
    if name.endswith("#"):
        return f"{name[0]}{SHARP_GLYPH}"
    if len(name) > 1 and name.endswith("b"):
        return f"{name[0]}{FLAT_GLYPH}"
    return name


def score_percent(correct: int, attempts: int) -> float:
    if attempts == 0:
        return 0.0
    return correct / attempts * 100


def format_percent(value: float) -> str:
    return f"{value:.2f}%"


def staff_note_offset(position: int, unit: float = STAFF_STEP_PX) -> float:
    """Vertical pixel offset of a note head from the middle staff line."""
    return position * unit


# ── Trainer ───────────────────────────────────────────────


class NoteTrainer:
    """State machine for one flashcard session.

    Two coupled dimensions: configuration (clef, accidentals, key signature)
    and round (current note, selected answer).  Changing the clef or the
    accidental setting starts a new round without scoring the abandoned one;
    changing the key signature does not.
    """

    def __init__(
        self,
        rng: RandomSource | None = None,
        *,
        state: TrainerState | None = None,
    ) -> None:
        self._rng = rng or random.Random()
        self._state = state or TrainerState()

    @classmethod
    def from_config(cls, config: Any, rng: RandomSource | None = None) -> NoteTrainer:
        """Build a trainer whose initial settings come from *config*.

        *config* is anything with ``get(key_path, default)``
        (see :class:`~sheet_trainer.core.config.ConfigManager`).
        """
        if rng is None:
            seed = config.get("trainer.random_seed")
            if seed is not None and not isinstance(seed, (int, float, str)):
                log.warning("Ignoring unusable trainer.random_seed %r", seed)
                seed = None
            rng = random.Random(seed)
        state = TrainerState(
            current_key=KeySignature.coerce(config.get("trainer.key_signature", "C")),
            include_accidentals=bool(config.get("trainer.include_accidentals", False)),
            use_bass_clef=bool(config.get("trainer.use_bass_clef", False)),
        )
        trainer = cls(rng, state=state)
        if state.use_bass_clef or state.include_accidentals:
            trainer.next_random_note()
        return trainer

    # ── State reads ─────────────────────────────────────

    @property
    def current_note(self) -> StaffNoteDefinition:
        return self._state.current_note

    @property
    def selected_answer(self) -> str | None:
        return self._state.selected_answer

    @property
    def current_key(self) -> KeySignature:
        return self._state.current_key

    @property
    def include_accidentals(self) -> bool:
        return self._state.include_accidentals

    @property
    def use_bass_clef(self) -> bool:
        return self._state.use_bass_clef

    @property
    def total_attempts(self) -> int:
        return self._state.total_attempts

    @property
    def correct_count(self) -> int:
        return self._state.correct_count

    def snapshot(self) -> TrainerState:
        return copy.deepcopy(self._state)

    # ── Derived values ──────────────────────────────────

    @property
    def is_answered(self) -> bool:
        return self._state.selected_answer is not None

    @property
    def is_correct(self) -> bool:
        answer = self._state.selected_answer
        return answer is not None and answer == self._state.current_note.name

    @property
    def current_clef(self) -> Clef:
        return Clef.BASS if self._state.use_bass_clef else Clef.TREBLE

    @property
    def clef_glyph(self) -> str:
        return _CLEF_GLYPHS[self.current_clef]

    @property
    def key_signature_glyphs(self) -> str:
        return key_signature_glyphs(self._state.current_key)

    @property
    def display_note_name(self) -> str:
        return display_note_name(self._state.current_note.name)

    @property
    def display_note_label(self) -> str:
        return f"{self._state.current_note.id} ({self.display_note_name})"

    @property
    def score_percent(self) -> float:
        return score_percent(self._state.correct_count, self._state.total_attempts)

    @property
    def score_percent_label(self) -> str:
        return format_percent(self.score_percent)

    @property
    def staff_note_offset(self) -> float:
        return staff_note_offset(self._state.current_note.position)

    @property
    def available_notes(self) -> tuple[StaffNoteDefinition, ...]:
        return available_notes(self.current_clef, self._state.include_accidentals)

    # ── Round operations ────────────────────────────────

    def show_note(self, note_id: str) -> bool:
        """Show a specific note from the current pool.

        Returns ``False`` and leaves the state untouched when *note_id* is
        not in the pool.
        """
        found = find_note(note_id, self.current_clef, self._state.include_accidentals)
        if found is None:
            log.debug("show_note(%r): not in current pool, ignored", note_id)
            return False
        self._start_round(found)
        return True

    def next_random_note(self) -> StaffNoteDefinition:
        """Pick a note uniformly at random from the current pool."""
        pool = self.available_notes
        index = int(self._rng.random() * len(pool))
        note = pool[index]
        self._start_round(note)
        return note

    def select_answer(self, name: str) -> None:
        """Record a guess.  Only the first guess for a note is scored."""
        state = self._state
        was_unanswered = state.selected_answer is None
        state.selected_answer = name

        if was_unanswered:
            correct = name == state.current_note.name
            state.total_attempts += 1
            if correct:
                state.correct_count += 1
            log.debug(
                "Answer %s for %s: %s (%d/%d)",
                name,
                state.current_note.id,
                "correct" if correct else "wrong",
                state.correct_count,
                state.total_attempts,
            )

    def select_key(self, key: PianoKey) -> None:
        self.select_answer(key.note)

    # ── Configuration operations ────────────────────────

    def set_key_signature(self, key: KeySignature | str) -> None:
        """Change the displayed key signature.

        Cosmetic only: the note pool and spellings are unaffected and the
        current round continues.
        """
        self._state.current_key = KeySignature.coerce(key)
        log.info("Key signature: %s", self._state.current_key.value)

    def toggle_accidentals(self, checked: bool) -> None:
        self._state.include_accidentals = checked
        log.info("Include accidentals: %s", checked)
        self.next_random_note()

    def toggle_bass_clef(self, checked: bool) -> None:
        self._state.use_bass_clef = checked
        log.info("Clef: %s", self.current_clef.value)
        self.next_random_note()

    # ── Internal ────────────────────────────────────────

    def _start_round(self, note: StaffNoteDefinition) -> None:
        self._state.selected_answer = None
        self._state.current_note = note
        log.debug("Showing %s", note.id)
