# storefront/domain/errors.py
from sqlalchemy.exc import IntegrityError


class DomainError(Exception):
    """Base for errors that map onto the public error envelope."""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None, details: str | None = None):
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)


class Unauthenticated(DomainError):
    status_code = 401
    default_message = "Authentication failed"


class Forbidden(DomainError):
    status_code = 403
    default_message = "Not authorized to access this resource"


class InvalidInput(DomainError):
    status_code = 400
    default_message = "Invalid input"


class NotFound(DomainError):
    status_code = 404
    default_message = "Resource not found"


class Conflict(DomainError):
    status_code = 409
    default_message = "Resource already exists"


class UpstreamFailure(DomainError):
    status_code = 500
    default_message = "Upstream service failure"


class Internal(DomainError):
    status_code = 500


UNIQUE_VIOLATION = "unique"
NOT_NULL_VIOLATION = "not_null"
FOREIGN_KEY_VIOLATION = "foreign_key"
OTHER_VIOLATION = "other"

_SQLSTATES = {
    "23505": UNIQUE_VIOLATION,
    "23502": NOT_NULL_VIOLATION,
    "23503": FOREIGN_KEY_VIOLATION,
}


def classify_integrity_error(exc: IntegrityError) -> str:
    """Postgres drivers expose the SQLSTATE, sqlite only a message."""
    orig = exc.orig
    code = getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)
    if code in _SQLSTATES:
        return _SQLSTATES[code]

    msg = str(orig).upper()
    if "UNIQUE" in msg:
        return UNIQUE_VIOLATION
    if "NOT NULL" in msg:
        return NOT_NULL_VIOLATION
    if "FOREIGN KEY" in msg:
        return FOREIGN_KEY_VIOLATION
    return OTHER_VIOLATION
