"""
Default actor and IP address lookups, backed by Django auth and the current request.
"""

import logging
from typing import Any, Optional

from django.conf import settings
from django.contrib.auth import BACKEND_SESSION_KEY, load_backend
from django.core.exceptions import ValidationError
from django.db.models import Model

from activitylog.middleware import get_current_request

logger = logging.getLogger(__name__)


class AuthActorResolver:
    """
    Resolves actors through Django's authentication backends.

    A driver is the dotted path of an auth backend, as listed in
    AUTHENTICATION_BACKENDS.
    """

    def default_driver(self) -> Optional[str]:
        backends = getattr(settings, 'AUTHENTICATION_BACKENDS', [])
        return backends[0] if backends else None

    def current_actor(self, driver: Optional[str]) -> Optional[Model]:
        """
        Get the authenticated user of the current request.

        Args:
            driver: Auth backend path; a user logged in through a different
                    backend is not considered authenticated for this driver

        Returns:
            User instance or None outside a request or for anonymous users
        """
        request = get_current_request()
        user = getattr(request, 'user', None)
        if user is None or not user.is_authenticated:
            return None

        # login() stores the backend in the session; authenticate() sets user.backend
        session = getattr(request, 'session', None)
        backend = session.get(BACKEND_SESSION_KEY) if session is not None else None
        backend = backend or getattr(user, 'backend', None)
        if driver and backend and backend != driver:
            return None
        return user

    def resolve_by_id(self, driver: Optional[str], identifier: Any) -> Optional[Model]:
        """
        Look up a user by primary key through the given auth backend.

        Args:
            driver: Auth backend path (defaults to default_driver())
            identifier: Primary key of the user

        Returns:
            User instance or None if the backend does not know the identifier
        """
        backend = load_backend(driver or self.default_driver())
        try:
            return backend.get_user(identifier)
        except (ValueError, TypeError, ValidationError) as e:
            logger.warning(f"Invalid user identifier {identifier!r}: {e}")
            return None


class ClientIPLookup:
    """Reads the client IP address from the current request."""

    def client_ip_address(self) -> Optional[str]:
        request = get_current_request()
        if request is None:
            return None

        forwarded_for = request.META.get('HTTP_X_FORWARDED_FOR')
        if forwarded_for:
            return forwarded_for.split(',')[0].strip()
        return request.META.get('REMOTE_ADDR')
