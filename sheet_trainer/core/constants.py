"""Glyphs, drawing units, and static display lists."""

# Unicode music symbols
SHARP_GLYPH = "\u266F"  # ♯
FLAT_GLYPH = "\u266D"  # ♭
TREBLE_CLEF_GLYPH = "\U0001D11E"  # 𝄞
BASS_CLEF_GLYPH = "\U0001D122"  # 𝄢

# Pixels per staff step (one line or space).
# Negative because screen y grows downward: higher positions move the note up.
STAFF_STEP_PX = -8.0

# Staff positions of the outer lines (0 = middle line)
STAFF_TOP_POSITION = 4
STAFF_BOTTOM_POSITION = -4

# Five staff lines, drawing helper only
STAFF_LINES = (1, 2, 3, 4, 5)

# Octave of the on-screen piano
PIANO_OCTAVE = 4
