# meditime/errors.py


class MeditimeError(Exception):
    """Base for errors that reach the client as a JSON error envelope."""
    status_code = 500
    error_code = "INTERNAL_ERROR"
    message = "Unexpected error"

    def __init__(self, message=None, error_code=None):
        super().__init__(message or self.message)
        self.message = message or self.message
        if error_code:
            self.error_code = error_code


class NotFoundError(MeditimeError):
    status_code = 404
    error_code = "NOT_FOUND"
    message = "Resource not found"


class AlreadyExistsError(MeditimeError):
    status_code = 409
    error_code = "ALREADY_EXISTS"
    message = "Resource already exists"


class ValidationError(MeditimeError):
    status_code = 422
    error_code = "VALIDATION_ERROR"
    message = "Invalid input"


class UnauthenticatedError(MeditimeError):
    status_code = 401
    error_code = "UNAUTHENTICATED"
    message = "Login required"
