import html
import re

from PySide6.QtCore import Qt, QTimer, Signal
from PySide6.QtGui import QColor, QFont, QSyntaxHighlighter, QTextCharFormat
from PySide6.QtWidgets import QLabel, QPlainTextEdit, QStackedWidget, QVBoxLayout, QWidget

from fuzztester.notifier import NotificationKind, Notifier

HIGHLIGHT_RULES = {
    "json": [
        (r'"[^"\\]*(\\.[^"\\]*)*"\s*(?=:)', "#c084fc"),
        (r':\s*"[^"\\]*(\\.[^"\\]*)*"', "#86efac"),
        (r"\b(true|false|null)\b", "#fbbf24"),
        (r"-?\b\d+(\.\d+)?([eE][+-]?\d+)?\b", "#7dd3fc"),
    ],
    "xml": [
        (r"</?[\w:.-]+", "#c084fc"),
        (r"/?>", "#c084fc"),
        (r'\b[\w:.-]+(?==")', "#fbbf24"),
        (r'"[^"]*"', "#86efac"),
        (r"<\?.*\?>", "#9ca3af"),
    ],
    "plaintext": [],
}

TOAST_STYLES = {
    NotificationKind.ERROR: "border: 1px solid #ef4444;",
    NotificationKind.LOADING: "border: 1px solid rgba(255, 255, 255, 0.125);",
    NotificationKind.SUCCESS: "border: 1px solid #10b981;",
}

TOAST_TITLES = {
    NotificationKind.ERROR: "Error",
    NotificationKind.LOADING: "Testing API",
    NotificationKind.SUCCESS: "Success",
}


class BodyHighlighter(QSyntaxHighlighter):
    def __init__(self, document, language: str = "plaintext") -> None:
        super().__init__(document)
        self._rules: list[tuple[re.Pattern, QTextCharFormat]] = []
        self.language: str | None = None
        self.set_language(language)

    def set_language(self, language: str) -> None:
        if language not in HIGHLIGHT_RULES:
            language = "plaintext"
        if language == self.language:
            return
        self.language = language
        self._rules = []
        for pattern, color in HIGHLIGHT_RULES[language]:
            text_format = QTextCharFormat()
            text_format.setForeground(QColor(color))
            self._rules.append((re.compile(pattern), text_format))
        self.rehighlight()

    def highlightBlock(self, text: str) -> None:
        for pattern, text_format in self._rules:
            for match in pattern.finditer(text):
                self.setFormat(match.start(), match.end() - match.start(), text_format)


class BodyEditor(QWidget):
    """Editing view over the draft's body text.

    Holds no request state: ``render`` pushes the draft in, user edits come
    back through ``content_changed``.
    """

    content_changed = Signal(str)
    ready = Signal()

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._rendering = False
        self._is_ready = False
        self.language = "plaintext"
        self._setup_ui()

    def _setup_ui(self) -> None:
        self.placeholder = QLabel("Loading editor...")
        self.placeholder.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.placeholder.setStyleSheet("color: #9ca3af;")

        self.text_edit = QPlainTextEdit()
        self.text_edit.setFont(QFont("Consolas", 11))
        self.text_edit.setTabStopDistance(self.text_edit.fontMetrics().horizontalAdvance(" ") * 2)
        self.text_edit.setMinimumHeight(300)
        self.text_edit.textChanged.connect(self._on_text_changed)
        self.highlighter = BodyHighlighter(self.text_edit.document())

        self._stack = QStackedWidget()
        self._stack.addWidget(self.placeholder)
        self._stack.addWidget(self.text_edit)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.addWidget(self._stack)

    def is_ready(self) -> bool:
        return self._is_ready

    def render(self, visible: bool, language: str, content: str) -> None:
        self.setVisible(visible)
        self.language = language
        self.highlighter.set_language(language)
        if self.text_edit.toPlainText() != content:
            self._rendering = True
            self.text_edit.setPlainText(content)
            self._rendering = False

    def content(self) -> str:
        return self.text_edit.toPlainText()

    def showEvent(self, event) -> None:
        super().showEvent(event)
        if not self._is_ready:
            QTimer.singleShot(0, self._mark_ready)

    def _mark_ready(self) -> None:
        if self._is_ready:
            return
        self._is_ready = True
        self._stack.setCurrentWidget(self.text_edit)
        self.ready.emit()

    def _on_text_changed(self) -> None:
        if self._rendering:
            return
        self.content_changed.emit(self.text_edit.toPlainText())


class ToastNotifier(Notifier):
    """Renders notices as a toast in the top-right corner of ``host``.

    Loading notices stay until dismissed; terminal notices hide after
    ``duration_ms``.
    """

    def __init__(self, host: QWidget, duration_ms: int = 4000) -> None:
        super().__init__()
        self.host = host
        self.duration_ms = duration_ms
        self._handle = 0
        self._visible_handle: int | None = None
        self._label = QLabel(host)
        self._label.setWordWrap(True)
        self._label.setMinimumWidth(300)
        self._label.setMaximumWidth(500)
        self._label.setAttribute(Qt.WidgetAttribute.WA_TransparentForMouseEvents, True)
        self._label.hide()
        self._timer = QTimer(host)
        self._timer.setSingleShot(True)
        self._timer.timeout.connect(self.dismiss)

    def notify(self, kind: NotificationKind, message: str) -> int:
        self._handle += 1
        self._visible_handle = self._handle
        self._label.setStyleSheet(
            "QLabel { background: rgba(17, 25, 40, 0.9); color: #ffffff; "
            "border-radius: 16px; padding: 20px 24px; font-size: 12pt; "
            f"{TOAST_STYLES[kind]} }}"
        )
        self._label.setText(f"<b>{TOAST_TITLES[kind]}</b><br>{html.escape(message)}")
        self._label.adjustSize()
        self.reposition()
        self._label.show()
        self._label.raise_()
        if kind is NotificationKind.LOADING:
            self._timer.stop()
        else:
            self._timer.start(self.duration_ms)
        return self._handle

    def dismiss(self, handle=None) -> None:
        if handle is not None and handle != self._visible_handle:
            return
        self._timer.stop()
        self._visible_handle = None
        self._label.hide()

    def is_visible(self) -> bool:
        return not self._label.isHidden()

    def text(self) -> str:
        return self._label.text()

    def reposition(self) -> None:
        x = self.host.width() - self._label.width() - 40
        self._label.move(max(x, 0), 40)
