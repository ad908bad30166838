"""
Maps application exceptions to HTTP responses.

Body shape for every domain error: {"detail": ..., "code": ..., "details": {...}}
"""
import logging

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

from core.exceptions import (
    BaseApplicationException,
    BusinessLogicError,
    NotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)

STATUS_BY_EXCEPTION = [
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (BusinessLogicError, status.HTTP_409_CONFLICT),
]


def status_for(exc):
    for exc_class, code in STATUS_BY_EXCEPTION:
        if isinstance(exc, exc_class):
            return code
    return status.HTTP_400_BAD_REQUEST


def exception_handler(exc, context):
    """DRF exception handler aware of BaseApplicationException"""
    if isinstance(exc, BaseApplicationException):
        http_status = status_for(exc)
        view = context.get('view')
        logger.warning(
            f"{exc.code} in {view.__class__.__name__ if view else 'unknown view'}: {exc.message}",
            extra={'details': exc.details}
        )
        return Response(exc.to_dict(), status=http_status)
    return drf_exception_handler(exc, context)
