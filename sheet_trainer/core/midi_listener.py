"""MIDI keyboard as an answer source, using mido/rtmidi.

Each key press on a connected keyboard is reduced to its pitch class and
delivered as the matching on-screen :class:`PianoKey`, so answering from a
real keyboard follows the same name-only rule as clicking the piano.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

import mido

from .note_catalog import PianoKey, piano_key_for_midi

log = logging.getLogger(__name__)


class MidiListener:
    """Enumerates MIDI input ports and delivers pressed keys via callback.

    The callback runs on the rtmidi C++ thread; GUI code must marshal it
    to the main thread before touching the trainer.
    """

    def __init__(self) -> None:
        self._port: mido.ports.BaseInput | None = None
        self._port_name: str | None = None
        self._callback: Callable[[PianoKey], None] | None = None

    @staticmethod
    def list_ports() -> list[str]:
        """Return available MIDI input port names."""
        return mido.get_input_names()  # type: ignore[no-any-return]

    @property
    def connected(self) -> bool:
        return self._port is not None and not getattr(self._port, "closed", True)

    @property
    def port_name(self) -> str | None:
        return self._port_name

    def open(self, port_name: str, callback: Callable[[PianoKey], None]) -> None:
        """Open a MIDI port and register a callback.

        Args:
            port_name: The MIDI input port name to open.
            callback: Called with the pressed PianoKey on the rtmidi thread.
        """
        self.close()
        self._callback = callback
        self._port_name = port_name
        try:
            self._port = mido.open_input(port_name, callback=self._on_message)
            log.info("Opened MIDI port: %s", port_name)
        except (OSError, RuntimeError):
            self._port = None
            self._port_name = None
            self._callback = None
            raise

    def close(self) -> None:
        """Close the current MIDI port if open."""
        if self._port is not None:
            try:
                self._port.close()
            except (OSError, RuntimeError):
                log.warning("Error closing MIDI port", exc_info=True)
            self._port = None
            self._port_name = None
            log.info("MIDI port closed")

    def _on_message(self, msg: mido.Message) -> None:
        """Internal callback from rtmidi thread. Only key presses count."""
        if self._callback is None:
            return
        try:
            if msg.type == "note_on" and msg.velocity > 0:
                self._callback(piano_key_for_midi(msg.note))
            # note_off, zero-velocity note_on, CC, sysex etc. are not answers
        except (AttributeError, IndexError, TypeError, ValueError):
            log.exception("Error in MIDI callback")
