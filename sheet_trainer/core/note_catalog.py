"""Static note data: staff notes per clef and one octave of piano keys.

Pure Python, no Qt dependency.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .constants import PIANO_OCTAVE, SHARP_GLYPH

# ── Note names ────────────────────────────────────────────

NATURAL_NOTES = ("C", "D", "E", "F", "G", "A", "B")
ACCIDENTAL_NOTES = ("C#", "D#", "F#", "G#", "A#", "Db", "Eb", "Gb", "Ab", "Bb")
NOTE_NAMES = NATURAL_NOTES + ACCIDENTAL_NOTES


class Clef(str, Enum):
    TREBLE = "treble"
    BASS = "bass"


class KeySignature(str, Enum):
    """Key signatures offered by the trainer (major keys)."""

    C = "C"
    G = "G"
    D = "D"
    A = "A"
    E = "E"
    F = "F"
    B_FLAT = "Bb"
    E_FLAT = "Eb"

    @classmethod
    def coerce(cls, value: object) -> KeySignature:
        """Return the member for *value*, falling back to C."""
        try:
            return cls(value)
        except ValueError:
            return cls.C


KEY_OPTIONS: tuple[KeySignature, ...] = tuple(KeySignature)


class KeyType(str, Enum):
    WHITE = "white"
    BLACK = "black"


@dataclass(frozen=True, slots=True)
class StaffNoteDefinition:
    """A note that can be shown on the staff.

    ``position`` counts staff steps from the middle line: 0 = middle line,
    +1 = one step up, -1 = one step down.
    """

    id: str
    name: str
    clef: Clef
    position: int
    accidental: bool = False


@dataclass(frozen=True, slots=True)
class PianoKey:
    """One key of the on-screen piano."""

    id: str
    note: str
    type: KeyType
    label: str  # text drawn on the key

    @property
    def is_black(self) -> bool:
        return self.type is KeyType.BLACK


# ── Staff catalogs ────────────────────────────────────────

TREBLE_NOTES: tuple[StaffNoteDefinition, ...] = (
    StaffNoteDefinition("C4", "C", Clef.TREBLE, -4),
    StaffNoteDefinition("D4", "D", Clef.TREBLE, -3),
    StaffNoteDefinition("E4", "E", Clef.TREBLE, -2),
    StaffNoteDefinition("F4", "F", Clef.TREBLE, -1),
    StaffNoteDefinition("G4", "G", Clef.TREBLE, 0),
    StaffNoteDefinition("A4", "A", Clef.TREBLE, 1),
    StaffNoteDefinition("B4", "B", Clef.TREBLE, 2),
    StaffNoteDefinition("C5", "C", Clef.TREBLE, 3),
)

BASS_NOTES: tuple[StaffNoteDefinition, ...] = (
    StaffNoteDefinition("E2", "E", Clef.BASS, -4),
    StaffNoteDefinition("F2", "F", Clef.BASS, -3),
    StaffNoteDefinition("G2", "G", Clef.BASS, -2),
    StaffNoteDefinition("A2", "A", Clef.BASS, -1),
    StaffNoteDefinition("B2", "B", Clef.BASS, 0),
    StaffNoteDefinition("C3", "C", Clef.BASS, 1),
    StaffNoteDefinition("D3", "D", Clef.BASS, 2),
    StaffNoteDefinition("E3", "E", Clef.BASS, 3),
)

_CATALOGS = {
    Clef.TREBLE: TREBLE_NOTES,
    Clef.BASS: BASS_NOTES,
}


def notes_for_clef(clef: Clef) -> tuple[StaffNoteDefinition, ...]:
    """Return the ordered staff notes for *clef*."""
    return _CATALOGS[Clef(clef)]


# ── Piano keys ────────────────────────────────────────────

# Chromatic octave, sharps spelling (index = pitch class)
_CHROMATIC = ("C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B")


def _build_piano_keys(octave: int) -> tuple[PianoKey, ...]:
    keys = []
    for name in _CHROMATIC:
        if name.endswith("#"):
            keys.append(PianoKey(f"{name}{octave}", name, KeyType.BLACK, name[0] + SHARP_GLYPH))
        else:
            keys.append(PianoKey(f"{name}{octave}", name, KeyType.WHITE, f"{name}{octave}"))
    return tuple(keys)


PIANO_KEYS = _build_piano_keys(PIANO_OCTAVE)
PIANO_WHITE_KEYS = tuple(k for k in PIANO_KEYS if k.type is KeyType.WHITE)
PIANO_BLACK_KEYS = tuple(k for k in PIANO_KEYS if k.type is KeyType.BLACK)


def piano_key_for_midi(midi_note: int) -> PianoKey:
    """Map a MIDI note number onto the on-screen key with the same pitch class."""
    return PIANO_KEYS[midi_note % 12]
