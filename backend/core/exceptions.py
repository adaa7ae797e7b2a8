"""Error taxonomy shared by the services and the HTTP layer.

Every exception carries the HTTP status it is reported with, so route
handlers can let them propagate to the single handler registered in
``backend.main``.
"""


class EnrollmentAPIError(Exception):
    """Base class for errors surfaced directly to the caller."""

    status_code = 500

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ValidationError(EnrollmentAPIError):
    """Missing or malformed request fields."""

    status_code = 400


class MissingFields(ValidationError):
    pass


class InvalidRole(ValidationError):
    def __init__(self, role: str):
        self.role = role
        super().__init__(f"Invalid role '{role}'. Role must be 'student' or 'instructor'.")


class AlreadyExists(EnrollmentAPIError):
    """Raised when a unique identity (email or username) is already taken."""

    status_code = 400


class UserNotFound(EnrollmentAPIError):
    # Reported as 400 on login rather than 404.
    status_code = 400

    def __init__(self, message: str = "User not found."):
        super().__init__(message)


class InvalidCredentials(EnrollmentAPIError):
    status_code = 400

    def __init__(self, message: str = "Invalid credentials."):
        super().__init__(message)


class AlreadyEnrolled(EnrollmentAPIError):
    status_code = 400

    def __init__(self, message: str = "Already enrolled in this course"):
        super().__init__(message)


class Unauthenticated(EnrollmentAPIError):
    """No token on the request. Reported as 403, not 401."""

    status_code = 403

    def __init__(self, message: str = "Access Denied"):
        super().__init__(message)


class Forbidden(EnrollmentAPIError):
    """Invalid or expired token, or the wrong role for the operation."""

    status_code = 403

    def __init__(self, message: str = "Invalid Token"):
        super().__init__(message)


class NotFound(EnrollmentAPIError):
    status_code = 404


class StoreError(EnrollmentAPIError):
    """Any failure reported by the database layer."""

    status_code = 500
