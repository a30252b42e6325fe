"""Error type shared by every stage of the render pipeline."""

from __future__ import annotations


class GenerateError(Exception):
    """Raised when a pipeline stage cannot complete.

    Attributes:
        message: Human-readable description of what failed
        cause: The underlying exception, if any
    """

    def __init__(self, message: str, cause: BaseException | None = None):
        self.message = message
        self.cause = cause
        super().__init__(message)
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        if self.cause is None:
            return self.message
        return f"{self.message} (caused by {type(self.cause).__name__}: {self.cause})"
