"""
Per-request correlation ids for log lines.

RequestIDMiddleware tags every request with a short id (or the caller's
X-Request-ID) and RequestIDFilter stamps it on each record logged while the
request is being served.
"""
import logging
import threading
import uuid

_local = threading.local()

REQUEST_ID_HEADER = 'HTTP_X_REQUEST_ID'
MAX_INCOMING_ID_LENGTH = 32


def get_current_request_id():
    return getattr(_local, 'request_id', None)


def _new_request_id():
    return uuid.uuid4().hex[:8]


class RequestIDFilter(logging.Filter):

    def filter(self, record):
        if not getattr(record, 'request_id', None):
            record.request_id = get_current_request_id() or 'N/A'
        return True


class RequestIDMiddleware:

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        request.request_id = request.META.get(REQUEST_ID_HEADER, '')[:MAX_INCOMING_ID_LENGTH] or _new_request_id()
        _local.request_id = request.request_id
        try:
            response = self.get_response(request)
        finally:
            _local.__dict__.pop('request_id', None)
        response['X-Request-ID'] = request.request_id
        return response

    def process_exception(self, request, exception):
        request_id = getattr(request, 'request_id', 'N/A')
        logging.getLogger('django.request').error(
            f"[{request_id}] Unhandled {type(exception).__name__}: {exception}",
            exc_info=True,
            extra={'request_id': request_id},
        )
