from __future__ import annotations
from typing import Any, Dict, List, Optional


class LinkBioError(Exception):
    """Base of every error the HTTP boundary knows how to render.

    Each subclass is tagged with a `kind`, an HTTP `status_code` and a
    client-safe default `message`. Callers may override the message.
    """
    kind: str = "SERVER_ERROR"
    status_code: int = 500
    message: str = "Server Error"

    def __init__(self, message: Optional[str] = None, *, errors: Optional[List[str]] = None):
        if message is not None:
            self.message = message
        self.errors = errors
        super().__init__(self.message)

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"success": False, "message": self.message}
        if self.errors:
            payload["errors"] = list(self.errors)
        return payload


class ServerError(LinkBioError):
    pass


class ConflictError(LinkBioError):
    kind = "CONFLICT"
    status_code = 400
    message = "User already exists"


class InvalidCredentialsError(LinkBioError):
    kind = "INVALID_CREDENTIALS"
    status_code = 400
    message = "Invalid credentials"


class InvalidMfaCodeError(LinkBioError):
    kind = "INVALID_MFA_CODE"
    status_code = 400
    message = "Invalid MFA token"


class AuthRequiredError(LinkBioError):
    kind = "AUTH_REQUIRED"
    status_code = 401
    message = "No token, authorization denied"


class InvalidTokenError(LinkBioError):
    kind = "INVALID_TOKEN"
    status_code = 401
    message = "Invalid token"


class ExpiredTokenError(InvalidTokenError):
    kind = "EXPIRED_TOKEN"
    message = "Token expired"


class InvalidSignatureError(InvalidTokenError):
    kind = "INVALID_SIGNATURE"


class MalformedTokenError(InvalidTokenError):
    kind = "MALFORMED_TOKEN"


class ForbiddenError(LinkBioError):
    kind = "FORBIDDEN"
    status_code = 403
    message = "Not authorized"


class NotFoundError(LinkBioError):
    kind = "NOT_FOUND"
    status_code = 404
    message = "Resource not found"


class ValidationError(LinkBioError):
    kind = "VALIDATION"
    status_code = 400
    message = "Validation error"


class PayloadTooLargeError(LinkBioError):
    kind = "PAYLOAD_TOO_LARGE"
    status_code = 413
    message = "Request entity too large"


class RateLimitedError(LinkBioError):
    kind = "RATE_LIMITED"
    status_code = 429
    message = "Too many requests from this IP, please try again later."


class DuplicateKeyError(Exception):
    """Raised by the document store when a unique index would be violated."""

    def __init__(self, collection: str, field: str):
        super().__init__(f"duplicate key on {collection}.{field}")
        self.collection = collection
        self.field = field
