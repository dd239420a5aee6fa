"""
Generic Repository Pattern.
Operazioni comuni a tutti i repository; il commit resta alla UnitOfWork.
"""
from typing import Generic, List, Optional, Type, TypeVar

from commissions.extensions import db

T = TypeVar("T", bound=db.Model)


class SqlAlchemyRepository(Generic[T]):
    def __init__(self, session, model_cls: Type[T]):
        self.session = session
        self.model_cls = model_cls

    def add(self, entity: T) -> T:
        self.session.add(entity)
        return entity

    def get_by_id(self, entity_id: Optional[int]) -> Optional[T]:
        if entity_id is None:
            return None
        return self.session.get(self.model_cls, entity_id)

    def list_ordered(self, *order_by) -> List[T]:
        """Tutti i record; senza criteri l'ordine è quello di inserimento (id crescente)."""
        criteria = order_by or (self.model_cls.id.asc(),)
        return self.session.query(self.model_cls).order_by(*criteria).all()

    def delete(self, entity: T) -> None:
        self.session.delete(entity)
