"""
Block service - Business logic layer for Block domain.
Only administrators manage blocks.
"""
from typing import Optional
from django.db import transaction
from core.constants import UserRole
from core.services import BaseService
from core.exceptions import NotFoundError, ValidationError, BusinessLogicError
from core.validators import BlockValidator
from .repositories import BlockRepository
from .models import Block


class BlockService(BaseService):
    """Service for block-related business logic"""

    def __init__(self):
        super().__init__()
        self.block_repo = BlockRepository(Block)

    def _clean(self, name, description, floors, location, exclude_id=None):
        BlockValidator.validate_name(name)
        BlockValidator.validate_floors(floors)
        if self.block_repo.name_taken(name, exclude_id=exclude_id):
            raise ValidationError(
                "A block with this name already exists",
                code="DUPLICATE_BLOCK",
                details={'name': name.strip()}
            )
        return {
            'name': name.strip(),
            'description': (description or '').strip(),
            'floors': floors,
            'location': (location or '').strip(),
        }

    def get_block(self, block_id: int) -> Block:
        block = self.block_repo.get_by_id(block_id)
        if not block:
            raise NotFoundError(resource_type="Block", resource_id=block_id)
        return block

    def create_block(self, user, name: str, description: str = "",
                     floors: Optional[int] = None, location: str = "") -> Block:
        """
        Create a new block.

        Raises:
            PermissionDeniedError: If user is not an admin
            ValidationError: If the name is missing or already used
        """
        self.require_role(user, [UserRole.ADMIN], "manage blocks")
        data = self._clean(name, description, floors, location)

        with transaction.atomic():
            block = self.block_repo.create(**data)
            self.log_info(f"Block created: {block.name}", block_id=block.id, user=user.username)
            return block

    def update_block(self, user, block_id: int, name: str, description: str = "",
                     floors: Optional[int] = None, location: str = "") -> Block:
        self.require_role(user, [UserRole.ADMIN], "manage blocks")
        block = self.get_block(block_id)
        data = self._clean(name, description, floors, location, exclude_id=block.id)

        with transaction.atomic():
            self.block_repo.update(block, **data)
            self.log_info(f"Block updated: {block.name}", block_id=block.id, user=user.username)
            return block

    def delete_block(self, user, block_id: int) -> None:
        """
        Delete a block. Refused while rooms are still assigned to it.
        """
        self.require_role(user, [UserRole.ADMIN], "manage blocks")
        block = self.get_block(block_id)

        room_count = block.rooms.count()
        if room_count > 0:
            raise BusinessLogicError(
                f"Cannot delete block with {room_count} room(s). Please reassign or delete the rooms first.",
                code="BLOCK_HAS_ROOMS",
                details={'rooms': room_count}
            )

        with transaction.atomic():
            name = block.name
            self.block_repo.delete(block)
            self.log_info(f"Block deleted: {name}", block_id=block_id, user=user.username)
