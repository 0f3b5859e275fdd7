"""Trainer view: staff, piano, settings, and score for one session."""

from __future__ import annotations

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtGui import QFont
from PyQt6.QtWidgets import (
    QCheckBox,
    QComboBox,
    QHBoxLayout,
    QLabel,
    QProgressBar,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from ...core.key_signature import key_signature_glyphs
from ...core.note_catalog import KEY_OPTIONS, PianoKey
from ...core.trainer import NoteTrainer, display_note_name
from ...core.translator import translator
from ..theme import BG_PANEL, TEXT_SECONDARY
from ..widgets.clickable_piano import ClickablePiano
from ..widgets.staff_view import StaffView


def _key_option_text(key) -> str:
    glyphs = key_signature_glyphs(key)
    name = display_note_name(key.value)
    return f"{name}  {glyphs}" if glyphs else name


class TrainerView(QWidget):
    """Presentation adapter for a :class:`NoteTrainer`.

    Every user gesture is forwarded to the trainer and followed by
    :meth:`refresh`, which re-reads all derived values.
    """

    settings_changed = pyqtSignal()  # clef, accidentals or key signature changed

    def __init__(self, trainer: NoteTrainer, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._trainer = trainer
        self._build_ui()
        self._connect_signals()
        self.refresh()

    @property
    def trainer(self) -> NoteTrainer:
        return self._trainer

    def _build_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(32, 24, 32, 24)
        layout.setSpacing(14)

        # ── Header ──
        self._title_lbl = QLabel()
        self._title_lbl.setProperty("class", "title")
        layout.addWidget(self._title_lbl)

        self._desc_lbl = QLabel()
        self._desc_lbl.setProperty("class", "secondary")
        layout.addWidget(self._desc_lbl)

        # ── Settings row ──
        settings = QWidget()
        settings.setStyleSheet(f"background-color: {BG_PANEL}; border-radius: 8px;")
        row = QHBoxLayout(settings)
        row.setContentsMargins(16, 10, 16, 10)
        row.setSpacing(18)

        self._key_lbl = QLabel()
        row.addWidget(self._key_lbl)
        self._key_combo = QComboBox()
        for key in KEY_OPTIONS:
            self._key_combo.addItem(_key_option_text(key), key)
        row.addWidget(self._key_combo)

        self._accidentals_check = QCheckBox()
        row.addWidget(self._accidentals_check)

        self._bass_check = QCheckBox()
        row.addWidget(self._bass_check)

        self._show_name_check = QCheckBox()
        row.addWidget(self._show_name_check)

        row.addStretch()
        layout.addWidget(settings)

        # ── Staff ──
        self._staff = StaffView()
        layout.addWidget(self._staff, 1)

        # ── Prompt / feedback ──
        self._feedback_lbl = QLabel()
        self._feedback_lbl.setFont(QFont("Segoe UI", 13))
        self._feedback_lbl.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self._feedback_lbl)

        # ── Piano ──
        self._piano = ClickablePiano()
        layout.addWidget(self._piano)

        # ── Score row ──
        score_row = QHBoxLayout()
        score_row.setSpacing(16)

        self._next_btn = QPushButton()
        self._next_btn.setProperty("class", "accent")
        self._next_btn.setCursor(Qt.CursorShape.PointingHandCursor)
        score_row.addWidget(self._next_btn)

        self._attempts_lbl = QLabel()
        self._attempts_lbl.setStyleSheet(f"color: {TEXT_SECONDARY};")
        score_row.addWidget(self._attempts_lbl)

        self._correct_lbl = QLabel()
        self._correct_lbl.setStyleSheet(f"color: {TEXT_SECONDARY};")
        score_row.addWidget(self._correct_lbl)

        score_row.addStretch()

        self._score_lbl = QLabel()
        self._score_lbl.setFont(QFont("Segoe UI", 13, QFont.Weight.Bold))
        score_row.addWidget(self._score_lbl)

        self._score_bar = QProgressBar()
        self._score_bar.setRange(0, 10000)  # hundredths of a percent
        self._score_bar.setTextVisible(False)
        self._score_bar.setFixedWidth(180)
        score_row.addWidget(self._score_bar)

        layout.addLayout(score_row)

    def _connect_signals(self) -> None:
        self._key_combo.currentIndexChanged.connect(self._on_key_changed)
        self._accidentals_check.toggled.connect(self._on_accidentals_toggled)
        self._bass_check.toggled.connect(self._on_bass_clef_toggled)
        self._show_name_check.toggled.connect(self._staff.set_label_visible)
        self._piano.key_clicked.connect(self.answer_with_key)
        self._next_btn.clicked.connect(self._on_next_clicked)
        translator.language_changed.connect(self.refresh)

    # ── Gesture handlers ────────────────────────────────────

    def answer_with_key(self, key: PianoKey) -> None:
        self._trainer.select_key(key)
        self.refresh()

    def _on_next_clicked(self) -> None:
        self._trainer.next_random_note()
        self.refresh()

    def _on_key_changed(self, index: int) -> None:
        key = self._key_combo.itemData(index)
        if key is None:
            return
        self._trainer.set_key_signature(key)
        self.refresh()
        self.settings_changed.emit()

    def _on_accidentals_toggled(self, checked: bool) -> None:
        self._trainer.toggle_accidentals(checked)
        self.refresh()
        self.settings_changed.emit()

    def _on_bass_clef_toggled(self, checked: bool) -> None:
        self._trainer.toggle_bass_clef(checked)
        self.refresh()
        self.settings_changed.emit()

    # ── Rendering ───────────────────────────────────────────

    def refresh(self) -> None:
        """Re-read every derived value from the trainer."""
        t = self._trainer

        self._title_lbl.setText(translator.tr("trainer.title"))
        self._desc_lbl.setText(translator.tr("trainer.desc"))
        self._key_lbl.setText(translator.tr("trainer.key"))
        self._accidentals_check.setText(translator.tr("trainer.accidentals"))
        self._bass_check.setText(translator.tr("trainer.bass_clef"))
        self._show_name_check.setText(translator.tr("trainer.show_name"))
        self._next_btn.setText(translator.tr("trainer.next"))

        # Mirror configuration without re-entering the handlers
        for widget in (self._key_combo, self._accidentals_check, self._bass_check):
            widget.blockSignals(True)
        self._key_combo.setCurrentIndex(KEY_OPTIONS.index(t.current_key))
        self._accidentals_check.setChecked(t.include_accidentals)
        self._bass_check.setChecked(t.use_bass_clef)
        for widget in (self._key_combo, self._accidentals_check, self._bass_check):
            widget.blockSignals(False)

        note = t.current_note
        self._staff.set_note(
            clef_glyph=t.clef_glyph,
            key_glyphs=t.key_signature_glyphs,
            position=note.position,
            offset=t.staff_note_offset,
            label=t.display_note_label,
        )

        answer = t.selected_answer
        self._piano.set_selection(answer, t.is_correct)
        if answer is None:
            self._feedback_lbl.setText(translator.tr("trainer.prompt"))
            self._set_feedback_class("secondary")
        elif t.is_correct:
            self._feedback_lbl.setText(translator.tr("trainer.correct", note=t.display_note_label))
            self._set_feedback_class("feedback-ok")
        else:
            self._feedback_lbl.setText(
                translator.tr(
                    "trainer.wrong",
                    answer=display_note_name(answer),
                    note=t.display_note_label,
                )
            )
            self._set_feedback_class("feedback-bad")

        self._attempts_lbl.setText(translator.tr("trainer.attempts", count=t.total_attempts))
        self._correct_lbl.setText(translator.tr("trainer.correct_count", count=t.correct_count))
        self._score_lbl.setText(translator.tr("trainer.score", percent=t.score_percent_label))
        self._score_bar.setValue(round(t.score_percent * 100))

    def _set_feedback_class(self, css_class: str) -> None:
        if self._feedback_lbl.property("class") == css_class:
            return
        self._feedback_lbl.setProperty("class", css_class)
        # Re-polish so the stylesheet picks up the new property
        style = self._feedback_lbl.style()
        style.unpolish(self._feedback_lbl)
        style.polish(self._feedback_lbl)
