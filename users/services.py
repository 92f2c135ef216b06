"""
User service - role management for administrators.
"""
from django.db import transaction
from core.constants import UserRole
from core.services import BaseService
from core.exceptions import NotFoundError, ValidationError, BusinessLogicError
from .models import User


class UserService(BaseService):
    """Service for user administration"""

    def get_user(self, user_id: int) -> User:
        user = User.objects.filter(id=user_id).first()
        if not user:
            raise NotFoundError(resource_type="User", resource_id=user_id)
        return user

    def users_by_role(self):
        """Counts per role for the user management page"""
        counts = {role: 0 for role, _ in UserRole.CHOICES}
        for role in User.objects.values_list('role', flat=True):
            counts[role] = counts.get(role, 0) + 1
        return counts

    def change_role(self, actor, target: User, role: str) -> User:
        """
        Change a user's role.

        Raises:
            PermissionDeniedError: If actor is not an admin
            ValidationError: If the role is unknown
            BusinessLogicError: If an admin tries to demote themselves
        """
        self.require_role(actor, [UserRole.ADMIN], "change user roles")
        if role not in dict(UserRole.CHOICES):
            raise ValidationError(f"Unknown role: {role}", code="INVALID_ROLE")
        if target.pk == actor.pk and role != actor.role:
            raise BusinessLogicError("You cannot change your own role", code="SELF_ROLE_CHANGE")

        with transaction.atomic():
            old_role = target.role
            target.role = role
            target.save(update_fields=['role'])
            self.log_info("Role changed", user_id=target.id, old=old_role, new=role, by=actor.username)
        return target
