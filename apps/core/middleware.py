"""
JSON error handling for /api/ requests

Every exception raised by an API view ends up here and is returned as

    {'status': 'fail' | 'error', 'message': '...'}

Operational errors (AppError and Django's own client errors) keep their
message. Anything else is logged and hidden behind a generic 500 unless
DEBUG is on.
"""
import logging
import traceback

from django.conf import settings
from django.core.exceptions import (
    FieldDoesNotExist,
    FieldError,
    PermissionDenied,
    ValidationError,
)
from django.db import DataError, IntegrityError
from django.http import Http404, JsonResponse

from .exceptions import AppError, ValidationFailed, status_for

logger = logging.getLogger(__name__)


class ApiErrorMiddleware:

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        return self.get_response(request)

    def process_exception(self, request, exception):
        # Non-API pages (admin) keep Django's default handling
        if not request.path.startswith('/api/'):
            return None

        status_code, message, extra = self._classify(exception)

        if status_code >= 500:
            logger.error(
                'Unhandled error on %s %s: %s',
                request.method, request.path, exception,
                exc_info=exception,
            )
        else:
            logger.info('%s %s → %s: %s', request.method, request.path, status_code, message)

        body = {
            'status': exception.status if isinstance(exception, AppError) else status_for(status_code),
            'message': message,
            **extra,
        }

        if settings.DEBUG and status_code >= 500:
            body['message'] = str(exception)
            body['stack'] = traceback.format_exception(type(exception), exception, exception.__traceback__)

        return JsonResponse(body, status=status_code)

    @staticmethod
    def _classify(exception):
        """(status_code, message, extra body) for an exception"""
        if isinstance(exception, ValidationFailed):
            return exception.status_code, exception.message, {'errors': exception.errors}

        if isinstance(exception, AppError):
            return exception.status_code, exception.message, {}

        if isinstance(exception, ValidationError):
            return 400, '; '.join(exception.messages), {}

        if isinstance(exception, (FieldError, FieldDoesNotExist)):
            return 400, str(exception), {}

        # Forms catch duplicates first; what reaches the database is a
        # broken reference or constraint, not necessarily a duplicate
        if isinstance(exception, IntegrityError):
            return 409, 'The change conflicts with existing data', {}

        if isinstance(exception, DataError):
            return 400, 'A value is out of range for its field', {}

        if isinstance(exception, Http404):
            return 404, str(exception) or 'Not found', {}

        if isinstance(exception, PermissionDenied):
            return 403, 'You do not have permission to perform this action', {}

        return 500, 'Something went very wrong!', {}
