from fuzztester.workers import TestAttemptWorker


class _Transport:
    def execute(self, method, url, headers=None, body=None):
        return {"success": True, "status_code": 204}


class _FailingTransport:
    def execute(self, method, url, headers=None, body=None):
        raise ValueError("bad transport")


def test_worker_emits_finished():
    payloads = []
    worker = TestAttemptWorker(7, _Transport(), {"method": "GET", "url": "http://x"})
    worker.finished.connect(lambda payload: payloads.append(payload))
    worker.run()

    assert payloads
    assert payloads[0]["run_id"] == 7
    assert payloads[0]["response"]["success"] is True


def test_worker_emits_error():
    errors = []
    worker = TestAttemptWorker(3, _FailingTransport(), {"method": "POST", "url": "http://x", "body": "x"})
    worker.error.connect(lambda payload: errors.append(payload))
    worker.run()

    assert errors == [{"run_id": 3, "error_type": "WorkerError", "error_message": "bad transport"}]
