"""Staff view: one note on a five-line staff, painted with QPainter."""

from __future__ import annotations

from PyQt6.QtCore import QPointF, QRectF, Qt
from PyQt6.QtGui import QColor, QFont, QPainter, QPainterPath, QPen
from PyQt6.QtWidgets import QWidget

from ...core.constants import (
    STAFF_BOTTOM_POSITION,
    STAFF_LINES,
    STAFF_STEP_PX,
    STAFF_TOP_POSITION,
)
from ..theme import ACCENT, BG_DESK, INK, MUSIC_FONT, PAPER, STAFF_LINE, TEXT_SECONDARY

# Layout constants
_CARD_MARGIN = 16
_CARD_RADIUS = 12
_LEFT_MARGIN = 24
_CLEF_WIDTH = 56
_NOTE_X_RATIO = 0.62  # note head x as a fraction of the card width
_NOTE_HEAD_RX = 8.0
_NOTE_HEAD_RY = 6.0
_STEM_HEIGHT = 48
_LEDGER_EXTENSION = 7


def ledger_positions(position: int) -> list[int]:
    """Staff positions needing a ledger line for a note at *position*."""
    if position > STAFF_TOP_POSITION:
        return list(range(STAFF_TOP_POSITION + 2, position + 1, 2))
    if position < STAFF_BOTTOM_POSITION:
        return list(range(STAFF_BOTTOM_POSITION - 2, position - 1, -2))
    return []


class StaffView(QWidget):
    """Displays the current note.  Holds no trainer state of its own."""

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._clef_glyph = ""
        self._key_glyphs = ""
        self._position = 0
        self._offset = 0.0
        self._label = ""
        self._label_visible = False
        self.setMinimumSize(360, 220)

    def set_note(
        self,
        *,
        clef_glyph: str,
        key_glyphs: str,
        position: int,
        offset: float,
        label: str,
    ) -> None:
        self._clef_glyph = clef_glyph
        self._key_glyphs = key_glyphs
        self._position = position
        self._offset = offset
        self._label = label
        self.update()

    def set_label_visible(self, visible: bool) -> None:
        self._label_visible = visible
        self.update()

    @property
    def label_visible(self) -> bool:
        return self._label_visible

    # ── Coordinate helpers ──────────────────────────────────

    def _middle_y(self) -> float:
        return self.height() / 2

    def _staff_y(self, position: int) -> float:
        """Convert a staff position (0 = middle line) to a y coordinate."""
        return self._middle_y() + position * STAFF_STEP_PX

    def note_center(self) -> QPointF:
        card_w = self.width() - 2 * _CARD_MARGIN
        x = _CARD_MARGIN + card_w * _NOTE_X_RATIO
        return QPointF(x, self._middle_y() + self._offset)

    # ── Paint ───────────────────────────────────────────────

    def paintEvent(self, event) -> None:  # noqa: N802
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)
        w, h = self.width(), self.height()

        painter.fillRect(0, 0, w, h, QColor(BG_DESK))

        card = QRectF(_CARD_MARGIN, _CARD_MARGIN, w - 2 * _CARD_MARGIN, h - 2 * _CARD_MARGIN)
        card_path = QPainterPath()
        card_path.addRoundedRect(card, _CARD_RADIUS, _CARD_RADIUS)
        painter.fillPath(card_path, QColor(PAPER))

        self._draw_staff(painter, card)
        self._draw_clef_and_key(painter, card)
        self._draw_note(painter)

        if self._label_visible and self._label:
            painter.setPen(QColor(TEXT_SECONDARY))
            painter.setFont(QFont("Segoe UI", 11))
            label_rect = QRectF(card.left(), card.bottom() - 28, card.width(), 24)
            painter.drawText(label_rect, Qt.AlignmentFlag.AlignCenter, self._label)

        painter.end()

    def _draw_staff(self, painter: QPainter, card: QRectF) -> None:
        """Draw the five staff lines, bottom to top."""
        painter.setPen(QPen(QColor(STAFF_LINE), 1.2))
        left = card.left() + _LEFT_MARGIN
        right = card.right() - _LEFT_MARGIN
        for line in STAFF_LINES:
            y = self._staff_y(STAFF_BOTTOM_POSITION + (line - 1) * 2)
            painter.drawLine(QPointF(left, y), QPointF(right, y))

    def _draw_clef_and_key(self, painter: QPainter, card: QRectF) -> None:
        painter.setPen(QColor(INK))
        painter.setFont(QFont(MUSIC_FONT, 40))
        x = card.left() + _LEFT_MARGIN + 4
        clef_rect = QRectF(x, self._staff_y(STAFF_TOP_POSITION + 3), _CLEF_WIDTH,
                           self._staff_y(STAFF_BOTTOM_POSITION - 3) - self._staff_y(STAFF_TOP_POSITION + 3))
        painter.drawText(clef_rect, Qt.AlignmentFlag.AlignCenter, self._clef_glyph)

        if self._key_glyphs:
            painter.setFont(QFont(MUSIC_FONT, 18))
            key_rect = QRectF(x + _CLEF_WIDTH, self._staff_y(STAFF_TOP_POSITION), 80,
                              self._staff_y(0) - self._staff_y(STAFF_TOP_POSITION))
            painter.drawText(key_rect, Qt.AlignmentFlag.AlignLeft | Qt.AlignmentFlag.AlignVCenter,
                             self._key_glyphs)

    def _draw_note(self, painter: QPainter) -> None:
        center = self.note_center()

        painter.setPen(QPen(QColor(INK), 1.2))
        for pos in ledger_positions(self._position):
            ly = self._staff_y(pos)
            painter.drawLine(
                QPointF(center.x() - _NOTE_HEAD_RX - _LEDGER_EXTENSION, ly),
                QPointF(center.x() + _NOTE_HEAD_RX + _LEDGER_EXTENSION, ly),
            )

        painter.setBrush(QColor(INK))
        head = QPainterPath()
        head.addEllipse(center, _NOTE_HEAD_RX, _NOTE_HEAD_RY)
        painter.drawPath(head)

        # Stem up below the middle line, down from it upward
        painter.setPen(QPen(QColor(INK), 1.6))
        if self._position < 0:
            sx = center.x() + _NOTE_HEAD_RX - 0.5
            painter.drawLine(QPointF(sx, center.y()), QPointF(sx, center.y() - _STEM_HEIGHT))
        else:
            sx = center.x() - _NOTE_HEAD_RX + 0.5
            painter.drawLine(QPointF(sx, center.y()), QPointF(sx, center.y() + _STEM_HEIGHT))

        # Accent ring
        painter.setBrush(Qt.BrushStyle.NoBrush)
        painter.setPen(QPen(QColor(ACCENT), 1.0))
        painter.drawEllipse(center, _NOTE_HEAD_RX + 3, _NOTE_HEAD_RY + 3)
