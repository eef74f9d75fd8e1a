"""SCM exceptions."""

from __future__ import annotations


class ScmError(Exception):
    """Base exception for SCM operations."""


class NotSupportedError(ScmError):
    """Raised when the selected provider has no equivalent operation."""

    def __init__(self, operation: str = "", driver: str = "") -> None:
        self.operation = operation
        self.driver = driver
        if operation and driver:
            msg = f"{operation} is not supported by the {driver} driver"
        else:
            msg = "Operation not supported by this provider"
        super().__init__(msg)


class ScmApiError(ScmError):
    """Raised when the provider API returns a non-success response."""

    def __init__(self, status_code: int, status_text: str, body: str = "") -> None:
        self.status_code = status_code
        self.status_text = status_text
        self.body = body
        super().__init__(f"SCM API Error {status_code} {status_text}: {body}")


class ScmAuthError(ScmApiError):
    """Raised on 401/403 authentication failures."""

    def __init__(self, status_code: int, body: str = "") -> None:
        status_text = "Unauthorized" if status_code == 401 else "Forbidden"
        super().__init__(status_code, status_text, body)


class ScmNotFoundError(ScmApiError):
    """Raised on 404 responses."""

    def __init__(self, body: str = "") -> None:
        super().__init__(404, "Not Found", body)


class UnexpectedStatusError(ScmApiError):
    """Raised when a success-range status code has no meaning for the operation."""

    def __init__(self, status_code: int, body: str = "") -> None:
        super().__init__(status_code, "Unexpected Status", body)


class ScmDecodeError(ScmError):
    """Raised when a provider response does not match the expected shape."""


class ScmWriteDisabledError(ScmError):
    """Raised when a write operation is attempted in read-only mode."""

    def __init__(self) -> None:
        super().__init__("Write operations are disabled (SCM_READ_ONLY=true)")
