from __future__ import annotations


class ConsoleError(Exception):
    """Base for failures reported back to the admin as a notification."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationFailed(ConsoleError):
    """Rejected before any remote call was made."""


class NotFound(ConsoleError):
    pass


class OperationFailed(ConsoleError):
    """The remote write was rejected; message is the fixed per-operation text."""


class OperationInProgress(ConsoleError):
    def __init__(self, message: str = "Operation already in progress"):
        super().__init__(message)
