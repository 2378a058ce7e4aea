class AppError(Exception):
    """Base for failures a request handler can classify.

    ``error`` is the kind reported in the JSON body, ``status_code`` the HTTP
    status it maps to.
    """

    status_code = 500
    error = "InternalError"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotFoundError(AppError):
    status_code = 404
    error = "NotFound"


class ConflictError(AppError):
    status_code = 400
    error = "Conflict"


class ValidationError(AppError):
    status_code = 400
    error = "ValidationError"


class InternalError(AppError):
    pass
