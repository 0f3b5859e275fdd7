"""Interactive one-octave piano: click a key to answer.

White keys span the full width; black keys sit on top between them.
The selected key is tinted green when the answer is correct, red otherwise.
"""

from __future__ import annotations

from PyQt6.QtCore import QRectF, Qt, pyqtSignal
from PyQt6.QtGui import QBrush, QColor, QFont, QLinearGradient, QPainter, QPainterPath, QPen
from PyQt6.QtWidgets import QWidget

from ...core.note_catalog import PIANO_BLACK_KEYS, PIANO_WHITE_KEYS, PianoKey
from ..theme import ERROR, SUCCESS

_COLOR_WHITE_TOP = QColor(0xFA, 0xF7, 0xF0)
_COLOR_WHITE_BOTTOM = QColor(0xE4, 0xDE, 0xD0)
_COLOR_BLACK = QColor(0x1E, 0x1F, 0x24)
_COLOR_HOVER = QColor(0xC9, 0xA2, 0x27, 90)
_COLOR_BORDER = QColor(0x3C, 0x42, 0x4F)
_COLOR_TEXT_ON_WHITE = QColor(0x55, 0x58, 0x60)
_COLOR_TEXT_ON_BLACK = QColor(0xC8, 0xC4, 0xBA)

_BLACK_WIDTH_RATIO = 0.6
_BLACK_HEIGHT_RATIO = 0.62

# Index of the white key each black key sits after (C# after C, D# after D, ...)
_BLACK_AFTER_WHITE = {"C#": 0, "D#": 1, "F#": 3, "G#": 4, "A#": 5}


class ClickablePiano(QWidget):
    """Piano keyboard for answer input."""

    key_clicked = pyqtSignal(object)  # PianoKey

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._hover_key: PianoKey | None = None
        self._selected_note: str | None = None
        self._selected_correct = False
        self.setFixedHeight(150)
        self.setMinimumWidth(420)
        self.setMouseTracking(True)
        self.setCursor(Qt.CursorShape.PointingHandCursor)

    def set_selection(self, note: str | None, correct: bool) -> None:
        """Highlight the key whose note is *note* (None clears)."""
        self._selected_note = note
        self._selected_correct = correct
        self.update()

    @property
    def selected_note(self) -> str | None:
        return self._selected_note

    # ── Geometry ────────────────────────────────────────────

    def _white_width(self) -> float:
        return self.width() / len(PIANO_WHITE_KEYS)

    def key_rect(self, key: PianoKey) -> QRectF:
        ww = self._white_width()
        h = self.height()
        if key.is_black:
            bw = ww * _BLACK_WIDTH_RATIO
            x = (_BLACK_AFTER_WHITE[key.note] + 1) * ww - bw / 2
            return QRectF(x, 0, bw, h * _BLACK_HEIGHT_RATIO)
        index = PIANO_WHITE_KEYS.index(key)
        return QRectF(index * ww, 0, ww, h)

    def key_at(self, x: float, y: float) -> PianoKey | None:
        """Hit-test: black keys first since they overlap white ones."""
        if x < 0 or x >= self.width() or y < 0 or y >= self.height():
            return None
        for key in PIANO_BLACK_KEYS:
            if self.key_rect(key).contains(x, y):
                return key
        for key in PIANO_WHITE_KEYS:
            if self.key_rect(key).contains(x, y):
                return key
        return None

    # ── Mouse ───────────────────────────────────────────────

    def mousePressEvent(self, event) -> None:  # noqa: N802
        if event.button() == Qt.MouseButton.LeftButton:
            key = self.key_at(event.position().x(), event.position().y())
            if key is not None:
                self.key_clicked.emit(key)
        super().mousePressEvent(event)

    def mouseMoveEvent(self, event) -> None:  # noqa: N802
        key = self.key_at(event.position().x(), event.position().y())
        if key != self._hover_key:
            self._hover_key = key
            self.update()
        super().mouseMoveEvent(event)

    def leaveEvent(self, event) -> None:  # noqa: N802
        self._hover_key = None
        self.update()
        super().leaveEvent(event)

    # ── Paint ───────────────────────────────────────────────

    def _selection_color(self) -> QColor:
        color = QColor(SUCCESS if self._selected_correct else ERROR)
        color.setAlpha(200)
        return color

    def paintEvent(self, event) -> None:  # noqa: N802
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)

        ww = self._white_width()
        font = QFont("Segoe UI", max(7, int(ww / 6)))
        painter.setFont(font)

        for key in PIANO_WHITE_KEYS:
            rect = self.key_rect(key).adjusted(0.5, 0, -0.5, -1)
            path = QPainterPath()
            path.addRoundedRect(rect, 4, 4)

            if key.note == self._selected_note:
                painter.fillPath(path, QBrush(self._selection_color()))
            else:
                grad = QLinearGradient(rect.left(), rect.top(), rect.left(), rect.bottom())
                grad.setColorAt(0, _COLOR_WHITE_TOP)
                grad.setColorAt(1, _COLOR_WHITE_BOTTOM)
                painter.fillPath(path, grad)
                if key == self._hover_key:
                    painter.fillPath(path, QBrush(_COLOR_HOVER))

            painter.setPen(QPen(_COLOR_BORDER, 1.0))
            painter.drawPath(path)

            painter.setPen(_COLOR_TEXT_ON_WHITE)
            label_rect = QRectF(rect.left(), rect.bottom() - 28, rect.width(), 24)
            painter.drawText(label_rect, Qt.AlignmentFlag.AlignCenter, key.label)

        for key in PIANO_BLACK_KEYS:
            rect = self.key_rect(key)
            path = QPainterPath()
            path.addRoundedRect(rect, 3, 3)

            if key.note == self._selected_note:
                painter.fillPath(path, QBrush(self._selection_color()))
            elif key == self._hover_key:
                painter.fillPath(path, QBrush(_COLOR_BLACK))
                painter.fillPath(path, QBrush(_COLOR_HOVER))
            else:
                painter.fillPath(path, QBrush(_COLOR_BLACK))

            painter.setPen(QPen(_COLOR_BORDER, 0.8))
            painter.drawPath(path)

            painter.setPen(_COLOR_TEXT_ON_BLACK)
            label_rect = QRectF(rect.left(), rect.bottom() - 22, rect.width(), 18)
            painter.drawText(label_rect, Qt.AlignmentFlag.AlignCenter, key.label)

        painter.end()
