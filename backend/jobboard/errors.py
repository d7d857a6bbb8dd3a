"""Error kinds raised by repositories and services.

Each kind carries the HTTP status it maps to; the handlers registered in
``jobboard.main`` turn them into ``{"message": ...}`` bodies.
"""


class ServiceError(Exception):
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(ServiceError):
    status_code = 400
    default_message = "Invalid request"


class InvalidIdError(ValidationError):
    default_message = "Invalid ID"


class NoChangeError(ValidationError):
    default_message = "No changes made"


class AuthenticationError(ServiceError):
    status_code = 401
    default_message = "Authentication required"


class AuthorizationError(ServiceError):
    status_code = 403
    default_message = "Not authorized"


class NotFoundError(ServiceError):
    status_code = 404
    default_message = "Not found"


class ConflictError(ServiceError):
    status_code = 400
    default_message = "Conflicting request"


class InternalError(ServiceError):
    status_code = 500


class PayloadTooLargeError(ServiceError):
    status_code = 413
    default_message = "Upload too large"
