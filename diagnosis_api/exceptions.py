"""Domain errors raised by the diagnosis service and store.

Each error carries the HTTP status it maps to and a message that is safe to
return to the caller.
"""


class DiagnosisError(Exception):
    """Base class for all diagnosis service errors."""

    status_code: int = 500
    default_message: str = "server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidInputError(DiagnosisError):
    """Raised for a malformed client id, missing fields or an empty update."""

    status_code = 400
    default_message = "invalid input"


class NotFoundError(DiagnosisError):
    """Raised when no diagnosis matches the lookup."""

    status_code = 404
    default_message = "diagnosis not found"


class StoreError(DiagnosisError):
    """Raised when the database is unreachable or a query fails.

    The message is always generic; the underlying exception is chained
    and logged server-side only.
    """

    status_code = 500
    default_message = "server error"

    def __init__(self):
        super().__init__(self.default_message)
