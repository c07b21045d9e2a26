"""Exceptions raised by robots_policy, with user-friendly messages."""

from __future__ import annotations


class RobotsPolicyError(Exception):
    """Base exception for robots_policy errors."""

    def __init__(self, message: str, user_hint: str | None = None):
        self.message = message
        self.user_hint = user_hint
        super().__init__(message)

    def __str__(self) -> str:
        if self.user_hint:
            return f"{self.message}\n  Hint: {self.user_hint}"
        return self.message


class InvalidContentError(RobotsPolicyError):
    """A non-empty line has no ``key: value`` separator."""

    def __init__(self, line_number: int, line: str):
        self.line_number = line_number
        self.line = line
        super().__init__(
            message=f"robots: invalid content at line {line_number}: {line!r}",
            user_hint="Every directive must look like 'Key: value'",
        )


class WrongContentTypeError(RobotsPolicyError):
    """The response does not declare a text/plain body."""

    def __init__(self, content_type: str | None):
        self.content_type = content_type
        super().__init__(
            message=f"robots: wrong content type {content_type or '<missing>'!r}",
            user_hint="robots.txt must be served as text/plain",
        )


class UnavailableError(RobotsPolicyError):
    """The resource is temporarily unavailable (redirect, 5xx, transport failure)."""

    def __init__(self, status: int | None = None, url: str | None = None):
        self.status = status
        self.url = url
        msg = "robots: resource temporary unavailable"
        if status is not None:
            msg += f" (HTTP {status})"
        if url:
            msg += f" (URL: {url})"
        super().__init__(message=msg)


__all__ = [
    "RobotsPolicyError",
    "InvalidContentError",
    "WrongContentTypeError",
    "UnavailableError",
]
