"""
Exception hierarchy for the credential and session-token layer.

Two families live here:
- ServiceError subclasses are caller-visible: each one carries the HTTP status
  and error code that api.errors renders into the uniform error envelope.
- The remaining classes are internal failure kinds raised by the primitives
  (tokens, headers, refresh token lookups, stores). The session orchestrator
  translates them into ServiceErrors; they never reach the client as-is.
"""
from __future__ import annotations


class ServiceError(Exception):
    status = 500
    error = "INTERNAL_ERROR"
    default_message = "An unexpected error occurred"

    def __init__(self, message: str | None = None, details: dict | None = None):
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)


class InputMalformed(ServiceError):
    status = 400
    error = "BAD_REQUEST"
    default_message = "Malformed request"


class Unauthenticated(ServiceError):
    status = 401
    error = "UNAUTHORIZED"
    default_message = "Unauthorized"


class Forbidden(ServiceError):
    status = 403
    error = "FORBIDDEN"
    default_message = "Forbidden"


class ResourceNotFound(ServiceError):
    status = 404
    error = "NOT_FOUND"
    default_message = "Resource not found"


class Conflict(ServiceError):
    status = 409
    error = "CONFLICT"
    default_message = "Conflict"


class InternalError(ServiceError):
    pass


class HashingError(InternalError):
    default_message = "Password hashing failed"


class SigningError(InternalError):
    default_message = "Access token signing failed"


class TokenCollision(InternalError):
    default_message = "Refresh token value already exists"


class UnknownRefreshToken(InternalError):
    default_message = "Refresh token does not exist"


# access tokens
class TokenError(Exception):
    pass


class InvalidSignature(TokenError):
    pass


class TokenExpired(TokenError):
    pass


class MalformedToken(TokenError):
    pass


# authorization headers
class CredentialHeaderError(Exception):
    pass


class MissingHeader(CredentialHeaderError):
    pass


class MalformedHeader(CredentialHeaderError):
    pass


# refresh tokens
class RefreshTokenError(Exception):
    kind = "invalid"


class RefreshTokenNotFound(RefreshTokenError):
    kind = "not_found"


class RefreshTokenExpired(RefreshTokenError):
    kind = "expired"


class RefreshTokenRevoked(RefreshTokenError):
    kind = "revoked"


# persistence collaborator
class RecordNotFound(Exception):
    pass


class ConstraintViolation(Exception):
    pass
