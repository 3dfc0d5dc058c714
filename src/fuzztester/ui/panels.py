from PySide6.QtCore import Qt, Signal
from PySide6.QtGui import QFont, QKeySequence, QShortcut
from PySide6.QtWidgets import (
    QComboBox,
    QGridLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from fuzztester.models import BodyFormat, HttpMethod
from fuzztester.ui.widgets import BodyEditor


class ComposerPanel(QWidget):
    method_changed = Signal(str)
    url_changed = Signal(str)
    body_format_changed = Signal(str)
    submit_requested = Signal()

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._loading = False
        self._setup_ui()

    def _setup_ui(self) -> None:
        title = QLabel("API Fuzztester")
        title.setObjectName("pageTitle")
        title.setAlignment(Qt.AlignmentFlag.AlignCenter)
        title.setFont(QFont("Segoe UI", 22, QFont.Weight.Bold))

        method_label = QLabel("HTTP Method")
        self.method_combo = QComboBox()
        for method in HttpMethod:
            self.method_combo.addItem(method.value, method.value)
        self.method_combo.currentIndexChanged.connect(self._on_method_changed)

        url_label = QLabel("API URL")
        self.url_input = QLineEdit()
        self.url_input.setPlaceholderText("https://api.example.com/endpoint")
        self.url_input.textChanged.connect(self._on_url_changed)
        self.url_input.returnPressed.connect(self._on_submit_clicked)

        self.body_format_label = QLabel("Body Format")
        self.body_format_combo = QComboBox()
        for body_format in BodyFormat:
            self.body_format_combo.addItem(body_format.value, body_format.value)
        self.body_format_combo.currentIndexChanged.connect(self._on_body_format_changed)

        self.editor = BodyEditor()

        self.submit_button = QPushButton("Start Testing")
        self.submit_button.setObjectName("submitButton")
        self.submit_button.setToolTip("Start testing (Ctrl + Enter)")
        self.submit_button.clicked.connect(self._on_submit_clicked)
        QShortcut(QKeySequence("Ctrl+Return"), self, activated=self._on_submit_clicked)

        grid = QGridLayout()
        grid.setHorizontalSpacing(24)
        grid.setVerticalSpacing(8)
        grid.addWidget(method_label, 0, 0)
        grid.addWidget(url_label, 0, 1)
        grid.addWidget(self.method_combo, 1, 0)
        grid.addWidget(self.url_input, 1, 1)
        grid.setColumnStretch(0, 1)
        grid.setColumnStretch(1, 1)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(32, 32, 32, 32)
        layout.setSpacing(16)
        layout.addWidget(title)
        layout.addLayout(grid)
        layout.addWidget(self.body_format_label)
        layout.addWidget(self.body_format_combo)
        layout.addWidget(self.editor, 1)
        layout.addStretch(0)
        layout.addWidget(self.submit_button)

    def apply_draft(self, draft) -> None:
        self._loading = True
        self._select_data(self.method_combo, draft.method.value)
        self._select_data(self.body_format_combo, draft.body_format.value)
        if self.url_input.text() != draft.url:
            self.url_input.setText(draft.url)
        self._loading = False
        visible = draft.is_body_editor_visible()
        self.body_format_label.setVisible(visible)
        self.body_format_combo.setVisible(visible)
        self.editor.render(visible, draft.editor_language(), draft.body_content)

    def set_busy(self, busy: bool) -> None:
        self.submit_button.setEnabled(not busy)
        self.submit_button.setText("Testing..." if busy else "Start Testing")

    def _select_data(self, combo: QComboBox, value: str) -> None:
        index = combo.findData(value)
        if index >= 0 and index != combo.currentIndex():
            combo.setCurrentIndex(index)

    def _on_method_changed(self) -> None:
        if self._loading:
            return
        self.method_changed.emit(self.method_combo.currentData())

    def _on_url_changed(self, text: str) -> None:
        if self._loading:
            return
        self.url_changed.emit(text)

    def _on_body_format_changed(self) -> None:
        if self._loading:
            return
        self.body_format_changed.emit(self.body_format_combo.currentData())

    def _on_submit_clicked(self) -> None:
        if not self.submit_button.isEnabled():
            return
        self.submit_requested.emit()
