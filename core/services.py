"""
Base class for the per-app service layer.

Services hold the business rules; views and viewsets only translate requests
into service calls and exceptions into responses.
"""
import logging

from core.constants import UserRole
from core.exceptions import PermissionDeniedError


class BaseService:

    def __init__(self):
        self.logger = logging.getLogger(f"services.{self.__class__.__name__}")

    def require_role(self, user, roles, action="perform this action"):
        role = getattr(user, 'role', None)
        if role in roles:
            return
        allowed = ', '.join(r.lower() for r in roles)
        raise PermissionDeniedError(
            f"Only {allowed} users can {action}",
            code="ROLE_REQUIRED",
            details={'role': role, 'allowed': list(roles)},
        )

    def require_staff(self, user, action="perform this action"):
        """ADMIN, MANAGER or STAFF"""
        self.require_role(user, UserRole.STAFF_ROLES, action)

    def log_info(self, message: str, **context):
        if context:
            message = f"{message} | " + ", ".join(f"{key}={value}" for key, value in context.items())
        self.logger.info(message)
