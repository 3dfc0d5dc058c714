from PySide6.QtCore import QObject, Signal


class TestAttemptWorker(QObject):
    __test__ = False

    finished = Signal(dict)
    error = Signal(dict)

    def __init__(self, run_id: int, transport, request_data: dict) -> None:
        super().__init__()
        self.run_id = run_id
        self.transport = transport
        self.request_data = request_data

    def run(self) -> None:
        try:
            result = self.transport.execute(
                self.request_data.get("method"),
                self.request_data.get("url"),
                self.request_data.get("headers"),
                self.request_data.get("body"),
            )
            self.finished.emit(
                {
                    "run_id": self.run_id,
                    "response": result,
                }
            )
        except Exception as exc:
            self.error.emit(
                {
                    "run_id": self.run_id,
                    "error_type": "WorkerError",
                    "error_message": str(exc),
                }
            )
