"""Top-level application window: trainer view, MIDI keyboard bar, status bar."""

from __future__ import annotations

import logging

from PyQt6.QtCore import QByteArray, QObject, pyqtSignal
from PyQt6.QtWidgets import (
    QComboBox,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QPushButton,
    QStatusBar,
    QVBoxLayout,
    QWidget,
)

from ..core.config import ConfigManager, get_config
from ..core.midi_listener import MidiListener
from ..core.note_catalog import PianoKey
from ..core.trainer import NoteTrainer
from ..core.translator import LANGUAGES, translator
from .theme import BG_PANEL, DIVIDER
from .views.trainer_view import TrainerView

log = logging.getLogger(__name__)


class MidiBridge(QObject):
    """Bridge between the rtmidi callback thread and the Qt main thread.

    The listener callback only emits; the queued signal delivers the key on
    the GUI thread where the trainer lives.
    """

    key_pressed = pyqtSignal(object)  # PianoKey

    def on_midi_key(self, key: PianoKey) -> None:
        """Called on the rtmidi callback thread."""
        self.key_pressed.emit(key)


class AppShell(QMainWindow):
    """Main window.

    Layout:
    ┌──────────────────────────────────────────────┐
    │  MIDI keyboard bar          language          │
    ├──────────────────────────────────────────────┤
    │  TrainerView                                  │
    ├──────────────────────────────────────────────┤
    │  Status bar                                   │
    └──────────────────────────────────────────────┘
    """

    def __init__(
        self,
        trainer: NoteTrainer | None = None,
        config: ConfigManager | None = None,
        listener: MidiListener | None = None,
    ) -> None:
        super().__init__()
        self._config = config or get_config()
        translator.set_language(self._config.get("ui.language", "en"))

        self._trainer = trainer or NoteTrainer.from_config(self._config)
        self._listener = listener or MidiListener()
        self._bridge = MidiBridge()

        self.setMinimumSize(760, 620)
        self.resize(960, 720)

        self._build_ui()
        self._connect_signals()
        self._restore_geometry()
        self._refresh_ports()
        self._retranslate()

        if self._config.get("midi.auto_connect", True):
            last_port = self._config.get("midi.last_port", "")
            if last_port and last_port in self._listener.list_ports():
                self._open_port(last_port)

    @property
    def trainer_view(self) -> TrainerView:
        return self._trainer_view

    def _build_ui(self) -> None:
        central = QWidget()
        root = QVBoxLayout(central)
        root.setContentsMargins(0, 0, 0, 0)
        root.setSpacing(0)

        bar = QWidget()
        bar.setStyleSheet(f"background-color: {BG_PANEL}; border-bottom: 1px solid {DIVIDER};")
        bar_layout = QHBoxLayout(bar)
        bar_layout.setContentsMargins(16, 8, 16, 8)
        bar_layout.setSpacing(10)

        self._midi_lbl = QLabel()
        bar_layout.addWidget(self._midi_lbl)

        self._port_combo = QComboBox()
        self._port_combo.setMinimumWidth(220)
        bar_layout.addWidget(self._port_combo)

        self._refresh_btn = QPushButton()
        bar_layout.addWidget(self._refresh_btn)

        self._connect_btn = QPushButton()
        bar_layout.addWidget(self._connect_btn)

        bar_layout.addStretch()

        self._lang_combo = QComboBox()
        for code, name in LANGUAGES.items():
            self._lang_combo.addItem(name, code)
        self._lang_combo.setCurrentIndex(list(LANGUAGES).index(translator.current_language))
        bar_layout.addWidget(self._lang_combo)

        root.addWidget(bar)

        self._trainer_view = TrainerView(self._trainer)
        root.addWidget(self._trainer_view, 1)

        self.setCentralWidget(central)
        self.setStatusBar(QStatusBar())

    def _connect_signals(self) -> None:
        self._bridge.key_pressed.connect(self._trainer_view.answer_with_key)
        self._trainer_view.settings_changed.connect(self._save_trainer_settings)
        self._refresh_btn.clicked.connect(self._refresh_ports)
        self._connect_btn.clicked.connect(self._on_connect_clicked)
        self._lang_combo.currentIndexChanged.connect(self._on_language_changed)
        translator.language_changed.connect(self._retranslate)

    # ── MIDI ────────────────────────────────────────────────

    def _refresh_ports(self) -> None:
        ports = self._listener.list_ports()
        self._port_combo.clear()
        if ports:
            self._port_combo.addItems(ports)
            current = self._listener.port_name or self._config.get("midi.last_port", "")
            if current in ports:
                self._port_combo.setCurrentIndex(ports.index(current))
        else:
            self._port_combo.addItem(translator.tr("midi.none"))
        self._port_combo.setEnabled(bool(ports))
        self._connect_btn.setEnabled(bool(ports) or self._listener.connected)

    def _on_connect_clicked(self) -> None:
        if self._listener.connected:
            self._listener.close()
            self._retranslate()
            return
        port = self._port_combo.currentText()
        if port:
            self._open_port(port)

    def _open_port(self, port: str) -> None:
        try:
            self._listener.open(port, self._bridge.on_midi_key)
        except (OSError, RuntimeError):
            log.warning("Failed to open MIDI port %s", port, exc_info=True)
            self.statusBar().showMessage(translator.tr("status.open_failed", port=port))
            return
        self._config.set("midi.last_port", port)
        self._retranslate()

    # ── Trainer settings ────────────────────────────────

    def _save_trainer_settings(self) -> None:
        trainer = self._trainer_view.trainer
        self._config.set("trainer.use_bass_clef", trainer.use_bass_clef)
        self._config.set("trainer.include_accidentals", trainer.include_accidentals)
        self._config.set("trainer.key_signature", trainer.current_key.value)

    # ── i18n / status ───────────────────────────────────────

    def _on_language_changed(self, index: int) -> None:
        code = self._lang_combo.itemData(index)
        if code:
            translator.set_language(code)
            self._config.set("ui.language", code)

    def _retranslate(self) -> None:
        self.setWindowTitle(translator.tr("app.title") + " — " + translator.tr("app.subtitle"))
        self._midi_lbl.setText(translator.tr("midi.device"))
        self._refresh_btn.setText(translator.tr("midi.refresh"))
        self._connect_btn.setText(
            translator.tr("midi.disconnect" if self._listener.connected else "midi.connect")
        )
        self._update_status()

    def _update_status(self) -> None:
        if self._listener.connected:
            msg = translator.tr("status.connected", port=self._listener.port_name)
        else:
            msg = translator.tr("status.disconnected")
        self.statusBar().showMessage(msg)

    # ── Window state ────────────────────────────────────────

    def _restore_geometry(self) -> None:
        encoded = self._config.get("window.geometry")
        if encoded:
            self.restoreGeometry(QByteArray.fromBase64(encoded.encode("ascii")))

    def closeEvent(self, event) -> None:  # noqa: N802
        geometry = bytes(self.saveGeometry().toBase64()).decode("ascii")
        self._config.set("window.geometry", geometry)
        self._listener.close()
        super().closeEvent(event)
