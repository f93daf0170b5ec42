"""
Error taxonomy shared by services and routers.
Every error carries a stable code (CONFIGURATION_MISSING, UNAUTHORIZED, NOT_FOUND, VALIDATION,
UPSTREAM_FAILURE...) and is rendered as {"error": code, "message": ..., "reason": ...} by main.py.
"""
from fastapi import status


class ServiceError(Exception):
    code = "INTERNAL_ERROR"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal error"

    def __init__(self, message: str | None = None, *, reason: str | None = None, headers: dict | None = None):
        self.message = message or self.default_message
        self.reason = reason
        self.headers = headers
        super().__init__(self.message)

    def to_dict(self) -> dict:
        body = {"error": self.code, "message": self.message}
        if self.reason:
            body["reason"] = self.reason
        return body


class ConfigurationMissing(ServiceError):
    code = "CONFIGURATION_MISSING"
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_message = "Required external service credentials are not configured."


class Unauthorized(ServiceError):
    code = "UNAUTHORIZED"
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Not authenticated"

    def __init__(self, message: str | None = None, **kwargs):
        kwargs.setdefault("headers", {"WWW-Authenticate": "Bearer"})
        super().__init__(message, **kwargs)


class Forbidden(ServiceError):
    code = "FORBIDDEN"
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Only admin can access."


class NotFound(ServiceError):
    code = "NOT_FOUND"
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class ValidationFailed(ServiceError):
    code = "VALIDATION"
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class PayloadTooLarge(ValidationFailed):
    status_code = status.HTTP_413_REQUEST_ENTITY_TOO_LARGE
    default_message = "File is too large"


class UpstreamFailure(ServiceError):
    """A dependency (identity, storage, row store) returned an error. Message is the dependency's own."""
    code = "UPSTREAM_FAILURE"
    status_code = status.HTTP_502_BAD_GATEWAY
    default_message = "Upstream service failed"
