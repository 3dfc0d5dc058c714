from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from types import MappingProxyType
from typing import Any


class HttpMethod(Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    PATCH = "PATCH"


class BodyFormat(Enum):
    JSON = "JSON"
    XML = "XML"
    FORM_DATA = "Form Data"
    TEXT = "Text"


class ErrorKind(Enum):
    MISSING_URL = "MissingUrl"
    TRANSPORT_ERROR = "TransportError"
    TIMEOUT = "Timeout"
    CANCELLED = "Cancelled"


class RunState(Enum):
    IDLE = "idle"
    PENDING = "pending"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


DEFAULT_METHOD = HttpMethod.POST
DEFAULT_BODY_FORMAT = BodyFormat.JSON

BODYLESS_METHODS = frozenset({HttpMethod.GET, HttpMethod.DELETE})

BODY_TEMPLATES = MappingProxyType(
    {
        BodyFormat.JSON: (
            "{\n"
            '  "key": "value",\n'
            '  "number": 42,\n'
            '  "nested": { "example": true }\n'
            "}"
        ),
        BodyFormat.XML: (
            '<?xml version="1.0" encoding="UTF-8"?>\n'
            "<root>\n"
            "  <key>value</key>\n"
            "  <number>42</number>\n"
            "  <nested>\n"
            "    <example>true</example>\n"
            "  </nested>\n"
            "</root>"
        ),
        BodyFormat.FORM_DATA: "key=value\nnumber=42\nnested[example]=true",
        BodyFormat.TEXT: "Example request body\nLine 2\nLine 3",
    }
)

EDITOR_LANGUAGES = MappingProxyType(
    {
        BodyFormat.JSON: "json",
        BodyFormat.XML: "xml",
        BodyFormat.FORM_DATA: "plaintext",
        BodyFormat.TEXT: "plaintext",
    }
)

CONTENT_TYPES = MappingProxyType(
    {
        BodyFormat.JSON: "application/json",
        BodyFormat.XML: "application/xml",
        BodyFormat.FORM_DATA: "application/x-www-form-urlencoded",
        BodyFormat.TEXT: "text/plain",
    }
)


def requires_body(method: HttpMethod) -> bool:
    return method not in BODYLESS_METHODS


def parse_method(value: Any) -> HttpMethod:
    if isinstance(value, HttpMethod):
        return value
    text = str(value or "").strip().upper()
    try:
        return HttpMethod(text)
    except ValueError:
        raise ValueError(f"unsupported method: {value}") from None


def parse_body_format(value: Any) -> BodyFormat:
    if isinstance(value, BodyFormat):
        return value
    text = str(value or "").strip().lower()
    for body_format in BodyFormat:
        label = body_format.value.lower()
        if text in {body_format.name.lower(), label, label.replace(" ", "")}:
            return body_format
    raise ValueError(f"unsupported body format: {value}")


@dataclass
class TestRun:
    __test__ = False

    run_id: int
    state: RunState = RunState.PENDING
    started_at: datetime = field(default_factory=datetime.now)
    completed_at: datetime | None = None
    error: str | None = None
    error_kind: ErrorKind | None = None
    result: dict[str, Any] | None = None

    @property
    def settled(self) -> bool:
        return self.state in {RunState.SUCCEEDED, RunState.FAILED}

    @property
    def elapsed_ms(self) -> int | None:
        if self.completed_at is None:
            return None
        return int((self.completed_at - self.started_at).total_seconds() * 1000)
