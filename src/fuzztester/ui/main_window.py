from PySide6.QtGui import QFont
from PySide6.QtWidgets import QMainWindow

from fuzztester.config import Settings, build_transport
from fuzztester.controller import ComposerController
from fuzztester.notifier import LogNotifier, attach
from fuzztester.runner import TestRunner
from fuzztester.ui.panels import ComposerPanel
from fuzztester.ui.widgets import ToastNotifier


class MainWindow(QMainWindow):
    def __init__(self, settings: Settings | None = None) -> None:
        super().__init__()
        self.settings = settings or Settings.from_env()
        self.setWindowTitle("API Fuzztester")
        self.resize(960, 760)
        self.setFont(QFont("Segoe UI", 10))
        self._setup_ui()

    def _setup_ui(self) -> None:
        self.panel = ComposerPanel()
        self.setCentralWidget(self.panel)

        self.runner = TestRunner(
            build_transport(self.settings),
            timeout_ms=self.settings.timeout_ms,
            parent=self,
        )
        self.toast = ToastNotifier(self, duration_ms=self.settings.toast_duration_ms)
        attach(self.runner, self.toast)
        attach(self.runner, LogNotifier())
        self.controller = ComposerController(self.panel, self.runner)

    def resizeEvent(self, event) -> None:
        super().resizeEvent(event)
        self.toast.reposition()

    def closeEvent(self, event) -> None:
        self.runner.shutdown()
        super().closeEvent(event)
