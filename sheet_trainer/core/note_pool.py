"""Answerable note pool for the active clef and accidental setting."""

from __future__ import annotations

from .note_catalog import Clef, StaffNoteDefinition, notes_for_clef


def available_notes(
    clef: Clef,
    include_accidentals: bool,
) -> tuple[StaffNoteDefinition, ...]:
    """Return the notes eligible for selection, in catalog order.

    Accidental entries are dropped unless *include_accidentals* is set.
    The result is never empty: every catalog holds the natural notes.
    """
    base = notes_for_clef(clef)
    if include_accidentals:
        return base
    return tuple(n for n in base if not n.accidental)


def find_note(
    note_id: str,
    clef: Clef,
    include_accidentals: bool,
) -> StaffNoteDefinition | None:
    for note in available_notes(clef, include_accidentals):
        if note.id == note_id:
            return note
    return None
