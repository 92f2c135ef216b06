"""
Translate application exceptions raised by services into API responses
"""
import logging
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

from core.exceptions import (
    BaseApplicationException, ValidationError, NotFoundError,
    PermissionDeniedError, ConflictError, BusinessLogicError
)

logger = logging.getLogger(__name__)

STATUS_MAP = [
    (ConflictError, status.HTTP_409_CONFLICT),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (PermissionDeniedError, status.HTTP_403_FORBIDDEN),
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (BusinessLogicError, status.HTTP_400_BAD_REQUEST),
]


def app_exception_handler(exc, context):
    """DRF EXCEPTION_HANDLER: application exceptions first, then the DRF default"""
    if isinstance(exc, BaseApplicationException):
        status_code = status.HTTP_400_BAD_REQUEST
        for exc_class, code in STATUS_MAP:
            if isinstance(exc, exc_class):
                status_code = code
                break
        request = context.get('request')
        request_id = getattr(request, 'request_id', 'N/A')
        logger.info(f"[{request_id}] API {type(exc).__name__}: {exc.message} (code={exc.code})")
        body = {'detail': exc.message}
        if exc.code:
            body['code'] = exc.code
        if exc.details:
            body['details'] = exc.details
        return Response(body, status=status_code)
    return exception_handler(exc, context)
