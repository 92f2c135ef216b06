"""
Data access shared by the per-app repositories (rooms, blocks, bookings).
"""
import logging
from typing import Generic, Optional, TypeVar

from django.db.models import Model, QuerySet

logger = logging.getLogger(__name__)

ModelT = TypeVar('ModelT', bound=Model)


class BaseRepository(Generic[ModelT]):
    """Thin wrapper around a model manager; subclasses add the domain queries"""

    def __init__(self, model: type[ModelT]):
        self.model = model

    def get_queryset(self) -> QuerySet[ModelT]:
        return self.model.objects.all()

    def get_by_id(self, pk: int, **filters) -> Optional[ModelT]:
        return self.get_queryset().filter(pk=pk, **filters).first()

    def create(self, **fields) -> ModelT:
        return self.model.objects.create(**fields)

    def update(self, instance: ModelT, **fields) -> ModelT:
        for name, value in fields.items():
            setattr(instance, name, value)
        instance.save()
        return instance

    def delete(self, instance: ModelT) -> None:
        pk = instance.pk
        instance.delete()
        logger.info(f"Deleted {self.model.__name__} #{pk}")
