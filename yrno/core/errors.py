from __future__ import annotations


class YrError(Exception):
    pass


class InvalidArgumentError(YrError, ValueError):
    pass


class ParseError(YrError, ValueError):
    pass


class MissingFieldError(ParseError):
    def __init__(self, field: str, message: str | None = None) -> None:
        self.field = field
        super().__init__(message or f"Missing required field: {field}")


class ServiceUnavailableError(YrError, RuntimeError):
    def __init__(self, message: str, *, status: object | None = None) -> None:
        self.status = status
        super().__init__(message)


class AssemblyError(YrError, RuntimeError):
    pass
