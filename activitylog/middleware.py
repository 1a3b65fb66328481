"""
Middleware exposing the current request to the activity log.
"""
import contextvars

from django.utils.deprecation import MiddlewareMixin


_current_request = contextvars.ContextVar('activitylog_current_request', default=None)


def get_current_request():
    """Return the request being handled in this context, or None."""
    return _current_request.get()


class ActivityLogMiddleware(MiddlewareMixin):
    """
    Remembers the current request for the duration of the response cycle.

    The activity logger reads the authenticated user and client IP from it.
    Place this AFTER AuthenticationMiddleware so that request.user exists.
    """

    def process_request(self, request):
        request._activitylog_token = _current_request.set(request)

    def process_response(self, request, response):
        token = getattr(request, '_activitylog_token', None)
        if token is not None:
            _current_request.reset(token)
            del request._activitylog_token
        return response
