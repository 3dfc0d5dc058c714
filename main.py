import sys
from pathlib import Path

from PySide6.QtGui import QIcon
from PySide6.QtWidgets import QApplication


def _ensure_src_on_path() -> None:
    root = Path(__file__).resolve().parent
    src_path = root / "src"
    sys.path.insert(0, str(src_path))


def main() -> int:
    _ensure_src_on_path()
    from fuzztester.config import Settings, configure_logging
    from fuzztester.ui.main_window import MainWindow

    settings = Settings.from_env()
    configure_logging(settings.log_level)

    app = QApplication(sys.argv)
    icon_path = Path(__file__).resolve().parent / "assets" / "fuzztester.ico"
    if icon_path.exists():
        app.setWindowIcon(QIcon(str(icon_path)))
    style = [
        "QMainWindow { background-color: qlineargradient(x1:0, y1:0, x2:1, y2:1, stop:0 #111827, stop:1 #1f2937); }",
        "QWidget { background-color: transparent; color: #ffffff; }",
        "QLabel { color: #ffffff; font-weight: 500; }",
        "QLabel#pageTitle { margin-bottom: 16px; }",
        "QLineEdit, QComboBox, QPlainTextEdit { background-color: rgba(31, 41, 55, 0.5); color: #ffffff; border: 1px solid #374151; border-radius: 8px; padding: 8px 12px; }",
        "QLineEdit { min-height: 28px; font-size: 10pt; }",
        "QPlainTextEdit { background-color: #1e1e1e; font-family: Consolas, \"Courier New\", monospace; }",
        "QLineEdit:hover, QComboBox:hover { background-color: rgba(55, 65, 81, 0.5); }",
        "QLineEdit:focus, QComboBox:focus, QPlainTextEdit:focus { border: 2px solid #a855f7; }",
        "QComboBox QAbstractItemView { background-color: #1f2937; color: #ffffff; selection-background-color: #7c3aed; }",
        "QPushButton { background-color: #9333ea; color: #ffffff; border: none; border-radius: 8px; padding: 12px 24px; font-weight: 500; }",
        "QPushButton:hover { background-color: #7e22ce; }",
        "QPushButton:pressed { background-color: #6b21a8; }",
        "QPushButton:disabled { background-color: rgba(147, 51, 234, 0.5); color: rgba(255, 255, 255, 0.7); }",
    ]
    app.setStyleSheet("\n".join(style))
    window = MainWindow(settings)
    window.show()
    return app.exec()


if __name__ == "__main__":
    raise SystemExit(main())
