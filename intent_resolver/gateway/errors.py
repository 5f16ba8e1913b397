"""Profile store client errors."""

from typing import Any


class GatewayError(Exception):
    """Raised when a profile store call fails or returns an unexpected shape."""

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        status_code: int | None = None,
        details: Any = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.operation = operation
        self.status_code = status_code
        self.details = details
