"""Translation manager for multi-language support (I18N)."""

from __future__ import annotations

from PyQt6.QtCore import QObject, pyqtSignal

LANGUAGES = {
    "en": "English",
    "zh_tw": "繁體中文",
}


class Translator(QObject):
    """Global translation manager singleton."""

    language_changed = pyqtSignal()

    def __init__(self) -> None:
        super().__init__()
        self._current_lang = "en"

        self._data = {
            "en": {
                "app.title": "Sheet Trainer",
                "app.subtitle": "Note Reading Flashcards",

                "trainer.title": "Name That Note",
                "trainer.desc": "Read the note on the staff and press the matching piano key.",
                "trainer.key": "Key",
                "trainer.accidentals": "Include sharps & flats",
                "trainer.bass_clef": "Bass clef",
                "trainer.show_name": "Show note name",
                "trainer.next": "Next note",
                "trainer.prompt": "Which note is this?",
                "trainer.correct": "Correct! It is {note}.",
                "trainer.wrong": "Not quite: you chose {answer}, the note is {note}.",
                "trainer.score": "Score {percent}",
                "trainer.attempts": "Attempts: {count}",
                "trainer.correct_count": "Correct: {count}",

                "midi.device": "MIDI Keyboard",
                "midi.none": "(no devices)",
                "midi.refresh": "Refresh",
                "midi.connect": "Connect",
                "midi.disconnect": "Disconnect",

                "status.connected": "Connected: {port}",
                "status.disconnected": "No MIDI keyboard connected",
                "status.open_failed": "Could not open {port}",

                "error.title": "Application Error",
                "error.text": "An unexpected error occurred. The application will close.",
            },
            "zh_tw": {
                "app.title": "五線譜練習",
                "app.subtitle": "識譜閃卡",

                "trainer.title": "這是什麼音？",
                "trainer.desc": "讀出五線譜上的音符，按下對應的琴鍵。",
                "trainer.key": "調號",
                "trainer.accidentals": "包含升降記號",
                "trainer.bass_clef": "低音譜號",
                "trainer.show_name": "顯示音名",
                "trainer.next": "下一個音",
                "trainer.prompt": "這是哪個音？",
                "trainer.correct": "答對了！這是 {note}。",
                "trainer.wrong": "不對喔：你選了 {answer}，正確是 {note}。",
                "trainer.score": "得分 {percent}",
                "trainer.attempts": "作答：{count}",
                "trainer.correct_count": "答對：{count}",

                "midi.device": "MIDI 鍵盤",
                "midi.none": "（無裝置）",
                "midi.refresh": "重新整理",
                "midi.connect": "連線",
                "midi.disconnect": "中斷連線",

                "status.connected": "已連線：{port}",
                "status.disconnected": "未連接 MIDI 鍵盤",
                "status.open_failed": "無法開啟 {port}",

                "error.title": "應用程式錯誤",
                "error.text": "發生未預期的錯誤，應用程式即將關閉。",
            },
        }

    @property
    def current_language(self) -> str:
        return self._current_lang

    def set_language(self, lang_code: str) -> None:
        """Change current language and emit signal."""
        if lang_code in LANGUAGES and lang_code != self._current_lang:
            self._current_lang = lang_code
            self.language_changed.emit()

    def tr(self, key: str, **kwargs) -> str:
        """Translate key to current language. Returns key if not found."""
        lang_data = self._data.get(self._current_lang, {})
        text = lang_data.get(key)

        if text is None:
            # Fallback to English
            text = self._data.get("en", {}).get(key, key)

        try:
            return text.format(**kwargs)
        except (KeyError, ValueError):
            return text


# Global singleton instance
translator = Translator()
