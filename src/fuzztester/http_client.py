from __future__ import annotations

import time
from typing import Any, Callable

import requests

from fuzztester.models import HttpMethod

SUPPORTED_METHODS = {method.value for method in HttpMethod}


def send_request(params: dict) -> dict:
    method = params.get("method")
    url = params.get("url")
    headers = params.get("headers")
    body = params.get("body")
    timeout = params.get("timeout")
    method = str(method).upper() if method is not None else None

    if not method:
        return {
            "success": False,
            "error_type": "InvalidMethod",
            "error_message": "method is required",
        }

    if method not in SUPPORTED_METHODS:
        return {
            "success": False,
            "error_type": "InvalidMethod",
            "error_message": f"unsupported method: {method}",
        }

    if not url:
        return {
            "success": False,
            "error_type": "InvalidURL",
            "error_message": "url is required",
        }

    try:
        request_kwargs: dict[str, Any] = {
            "method": method,
            "url": url,
            "headers": headers,
            "timeout": timeout,
        }
        if body is not None:
            # Sent as typed; malformed payloads are the point of a fuzz test.
            request_kwargs["data"] = body.encode("utf-8") if isinstance(body, str) else body

        response = requests.request(
            **request_kwargs,
        )
        elapsed_ms = int(response.elapsed.total_seconds() * 1000)
        return {
            "success": True,
            "status_code": response.status_code,
            "headers": dict(response.headers),
            "response_text": response.text,
            "elapsed_ms": elapsed_ms,
        }
    except requests.exceptions.Timeout as exc:
        return {
            "success": False,
            "error_type": "Timeout",
            "error_message": str(exc),
        }
    except requests.exceptions.ConnectionError as exc:
        return {
            "success": False,
            "error_type": "ConnectionError",
            "error_message": str(exc),
        }
    except requests.RequestException as exc:
        return {
            "success": False,
            "error_type": "RequestException",
            "error_message": str(exc),
        }


class HttpTransport:
    name = "http"

    def __init__(self, timeout: float | None = 20) -> None:
        self.timeout = timeout

    def execute(self, method: str, url: str, headers: dict | None = None, body: Any = None) -> dict:
        return send_request(
            {
                "method": method,
                "url": url,
                "headers": headers or {},
                "body": body,
                "timeout": self.timeout,
            }
        )


class SimulatedTransport:
    """Stand-in transport: waits a fixed delay and always reports success."""

    name = "simulated"

    def __init__(self, delay_ms: int = 1500, sleep: Callable[[float], None] = time.sleep) -> None:
        self.delay_ms = delay_ms
        self._sleep = sleep

    def execute(self, method: str, url: str, headers: dict | None = None, body: Any = None) -> dict:
        if self.delay_ms > 0:
            self._sleep(self.delay_ms / 1000)
        return {
            "success": True,
            "status_code": None,
            "headers": {},
            "response_text": "",
            "elapsed_ms": self.delay_ms,
            "simulated": True,
        }

