"""
API exceptions

Raised anywhere below a view; apps.core.middleware.ApiErrorMiddleware turns
them into JSON error responses.
"""


def status_for(status_code):
    """Envelope status of an error response: 4xx → 'fail', 5xx → 'error'"""
    return 'fail' if 400 <= int(status_code) < 500 else 'error'


class AppError(Exception):
    """
    An expected failure with a client-facing message

    Args:
        message (str): Message sent back to the client
        status_code (int): HTTP status code (defaults to the class value)
    """

    status_code = 500

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    @property
    def status(self):
        return status_for(self.status_code)


class BadRequest(AppError):
    status_code = 400


class NotFound(AppError):
    status_code = 404


class QueryParamError(BadRequest):
    """Query string could not be turned into a filter/sort/projection"""


class ValidationFailed(BadRequest):
    """
    Form validation failed

    Carries the per-field messages so the client can show them next to
    the inputs.
    """

    def __init__(self, errors, message='Invalid input data'):
        super().__init__(message)
        self.errors = errors
