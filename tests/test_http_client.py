import requests

from fuzztester import http_client


class _Elapsed:
    def __init__(self, seconds: float) -> None:
        self._seconds = seconds

    def total_seconds(self) -> float:
        return self._seconds


class _Response:
    def __init__(self, status_code: int, text: str, headers: dict) -> None:
        self.status_code = status_code
        self.text = text
        self.headers = headers
        self.encoding = "utf-8"
        self.apparent_encoding = None
        self.elapsed = _Elapsed(0.123)


def test_invalid_method():
    result = http_client.send_request({"method": "TRACE", "url": "http://x"})
    assert result["success"] is False
    assert result["error_type"] == "InvalidMethod"


def test_invalid_url():
    result = http_client.send_request({"method": "GET", "url": ""})
    assert result["success"] is False
    assert result["error_type"] == "InvalidURL"


def test_send_request_raw_body(monkeypatch):
    called = {}

    def fake_request(**kwargs):
        called.update(kwargs)
        return _Response(201, "created", {"X": "1"})

    monkeypatch.setattr(http_client.requests, "request", fake_request)
    result = http_client.send_request(
        {
            "method": "patch",
            "url": "http://x",
            "headers": {"Content-Type": "application/json"},
            "body": '{"broken": ',
        }
    )
    assert result["success"] is True
    assert result["status_code"] == 201
    assert result["elapsed_ms"] == 123
    assert called["method"] == "PATCH"
    assert called["data"] == b'{"broken": '
    assert "json" not in called


def test_send_request_without_body(monkeypatch):
    called = {}

    def fake_request(**kwargs):
        called.update(kwargs)
        return _Response(200, "ok", {})

    monkeypatch.setattr(http_client.requests, "request", fake_request)
    result = http_client.send_request({"method": "GET", "url": "http://x"})
    assert result["success"] is True
    assert "data" not in called


def test_timeout_error(monkeypatch):
    def fake_request(**kwargs):
        raise requests.exceptions.Timeout("timeout")

    monkeypatch.setattr(http_client.requests, "request", fake_request)
    result = http_client.send_request({"method": "GET", "url": "http://x"})
    assert result["success"] is False
    assert result["error_type"] == "Timeout"


def test_connection_error(monkeypatch):
    def fake_request(**kwargs):
        raise requests.exceptions.ConnectionError("refused")

    monkeypatch.setattr(http_client.requests, "request", fake_request)
    result = http_client.send_request({"method": "POST", "url": "http://x", "body": "a=1"})
    assert result["error_type"] == "ConnectionError"
    assert result["error_message"] == "refused"


def test_http_transport_passes_timeout(monkeypatch):
    called = {}

    def fake_request(**kwargs):
        called.update(kwargs)
        return _Response(200, "ok", {})

    monkeypatch.setattr(http_client.requests, "request", fake_request)
    transport = http_client.HttpTransport(timeout=2.5)
    result = transport.execute("PUT", "http://x", {"Content-Type": "text/plain"}, "hello")
    assert result["success"] is True
    assert called["timeout"] == 2.5
    assert called["headers"] == {"Content-Type": "text/plain"}
    assert called["data"] == b"hello"


def test_simulated_transport_waits_and_succeeds():
    delays = []
    transport = http_client.SimulatedTransport(delay_ms=1500, sleep=delays.append)
    result = transport.execute("POST", "https://x", {}, "body")
    assert delays == [1.5]
    assert result["success"] is True
    assert result["simulated"] is True


def test_simulated_transport_zero_delay_skips_sleep():
    delays = []
    transport = http_client.SimulatedTransport(delay_ms=0, sleep=delays.append)
    transport.execute("GET", "https://x")
    assert delays == []


def test_response_encoding_left_alone(monkeypatch):
    response = _Response(200, "ok", {})
    response.encoding = "iso-8859-1"
    response.apparent_encoding = "utf-8"
    monkeypatch.setattr(http_client.requests, "request", lambda **kwargs: response)
    result = http_client.send_request({"method": "GET", "url": "http://x"})
    assert result["success"] is True
    assert response.encoding == "iso-8859-1"
