"""Errors raised by the record store clients.

Store failures are never swallowed: they reach the caller with the
store's own message so an operator can see what was refused.
"""


class ClientError(Exception):
    """Base for every failure talking to the record store."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ConnectionError(ClientError):
    """The store could not be reached, or did not answer in time."""


class APIError(ClientError):
    """The store answered with a non-2xx status.

    PostgREST error bodies carry a Postgres error ``code`` (e.g. ``23503``
    for a foreign key violation) with optional ``details`` and ``hint``;
    they are kept alongside the message when the store sends them.
    """

    def __init__(
        self,
        message: str,
        status_code: int,
        code: str | None = None,
        details: str | None = None,
        hint: str | None = None,
    ):
        self.status_code = status_code
        self.code = code
        self.details = details
        self.hint = hint
        super().__init__(message)

    @property
    def is_constraint_violation(self) -> bool:
        """True for Postgres integrity errors (SQLSTATE class 23)."""
        return bool(self.code) and self.code.startswith("23")


class RateLimitError(APIError):
    """The store throttled the request (HTTP 429)."""

    def __init__(self, message: str = "Rate limit exceeded"):
        super().__init__(message, status_code=429)


class NotFoundError(APIError):
    """The addressed endpoint does not exist (HTTP 404)."""

    def __init__(self, message: str = "Resource not found"):
        super().__init__(message, status_code=404)


class ValidationError(ClientError):
    """Rows returned by the store do not match the entity schemas."""

    def __init__(self, message: str, errors: list | None = None):
        self.errors = errors or []
        super().__init__(message)
