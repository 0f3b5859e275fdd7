"""Key signature → accidental glyph string.

Accidentals accumulate one per step around the circle of fifths, in the
conventional order of sharps (F C G D A E B) and flats (B E A D G C F).
"""

from __future__ import annotations

from .constants import FLAT_GLYPH, SHARP_GLYPH
from .note_catalog import KeySignature

# Number of sharps (+) or flats (-) per offered key
_ACCIDENTAL_COUNT = {
    KeySignature.C: 0,
    KeySignature.G: 1,
    KeySignature.D: 2,
    KeySignature.A: 3,
    KeySignature.E: 4,
    KeySignature.F: -1,
    KeySignature.B_FLAT: -2,
    KeySignature.E_FLAT: -3,
}


def accidental_count(key: KeySignature | str) -> int:
    """Return sharps as a positive count and flats as a negative one.

    Unknown keys count as 0.
    """
    try:
        return _ACCIDENTAL_COUNT[KeySignature(key)]
    except ValueError:
        return 0


def key_signature_glyphs(key: KeySignature | str) -> str:
    """Return the glyph string drawn after the clef for *key*.

    >>> key_signature_glyphs("D")
    '♯♯'
    >>> key_signature_glyphs("Eb")
    '♭♭♭'
    """
    count = accidental_count(key)
    if count >= 0:
        return SHARP_GLYPH * count
    return FLAT_GLYPH * -count
