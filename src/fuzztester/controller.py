import logging

from PySide6.QtCore import QObject, Slot

from fuzztester.draft import RequestDraft
from fuzztester.models import RunState

logger = logging.getLogger(__name__)


class ComposerController(QObject):
    def __init__(self, panel, runner, draft: RequestDraft | None = None) -> None:
        super().__init__()
        self.panel = panel
        self.runner = runner
        self.draft = draft or RequestDraft()

        panel.method_changed.connect(self._on_method_changed)
        panel.url_changed.connect(self._on_url_changed)
        panel.body_format_changed.connect(self._on_body_format_changed)
        panel.submit_requested.connect(self.submit)
        panel.editor.content_changed.connect(self._on_body_content_changed)
        panel.editor.ready.connect(self._on_editor_ready)
        runner.state_changed.connect(self._on_state_changed)
        self.refresh()

    def refresh(self) -> None:
        self.panel.apply_draft(self.draft)
        self.panel.set_busy(self.runner.is_pending())

    @Slot()
    def submit(self) -> bool:
        if self.runner.is_pending():
            return False
        return self.runner.submit(self.draft)

    @Slot(str)
    def _on_method_changed(self, method: str) -> None:
        self.draft.set_method(method)
        self.refresh()

    @Slot(str)
    def _on_url_changed(self, url: str) -> None:
        self.draft.set_url(url)

    @Slot(str)
    def _on_body_format_changed(self, body_format: str) -> None:
        self.draft.set_body_format(body_format)
        self.refresh()

    @Slot(str)
    def _on_body_content_changed(self, content: str) -> None:
        self.draft.set_body_content(content)

    @Slot()
    def _on_editor_ready(self) -> None:
        logger.debug("body editor ready")

    @Slot(str)
    def _on_state_changed(self, state: str) -> None:
        self.panel.set_busy(state == RunState.PENDING.value)
