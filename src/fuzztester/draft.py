from __future__ import annotations

from typing import Any

from fuzztester.errors import MissingUrlError
from fuzztester.models import (
    BODY_TEMPLATES,
    CONTENT_TYPES,
    DEFAULT_BODY_FORMAT,
    DEFAULT_METHOD,
    EDITOR_LANGUAGES,
    BodyFormat,
    HttpMethod,
    parse_body_format,
    parse_method,
    requires_body,
)


class RequestDraft:
    """In-progress request description edited by the composer.

    Body format and content are kept even while the method carries no body,
    so switching back to POST/PUT/PATCH restores the user's edits.
    """

    def __init__(
        self,
        method: HttpMethod | str = DEFAULT_METHOD,
        url: str = "",
        body_format: BodyFormat | str = DEFAULT_BODY_FORMAT,
        body_content: str | None = None,
    ) -> None:
        self.method = parse_method(method)
        self.url = url
        self.body_format = parse_body_format(body_format)
        if body_content is None:
            body_content = BODY_TEMPLATES[self.body_format]
        self.body_content = body_content

    def __repr__(self) -> str:
        return (
            f"RequestDraft(method={self.method.value!r}, url={self.url!r}, "
            f"body_format={self.body_format.value!r})"
        )

    def set_method(self, method: HttpMethod | str) -> RequestDraft:
        self.method = parse_method(method)
        return self

    def set_url(self, url: str) -> RequestDraft:
        self.url = url
        return self

    def set_body_format(self, body_format: BodyFormat | str) -> RequestDraft:
        # Always a fresh template; content is never carried across formats.
        self.body_format = parse_body_format(body_format)
        self.body_content = BODY_TEMPLATES[self.body_format]
        return self

    def set_body_content(self, content: str) -> RequestDraft:
        self.body_content = content
        return self

    def is_body_editor_visible(self) -> bool:
        return requires_body(self.method)

    def editor_language(self) -> str:
        return EDITOR_LANGUAGES[self.body_format]

    def validate(self) -> None:
        if not self.url:
            raise MissingUrlError()

    def to_request(self) -> dict[str, Any]:
        carries_body = requires_body(self.method)
        headers: dict[str, str] = {}
        if carries_body:
            headers["Content-Type"] = CONTENT_TYPES[self.body_format]
        return {
            "method": self.method.value,
            "url": self.url,
            "headers": headers,
            "body": self.body_content if carries_body else None,
        }
