"""
Repository specifico per Category.
L'ordine di inserimento (id crescente) è anche l'ordine delle righe nel
calcolatore, quindi list_ordered() della base è sufficiente.
"""
from commissions.models import Category
from commissions.repositories.base import SqlAlchemyRepository


class CategoryRepository(SqlAlchemyRepository[Category]):
    def __init__(self, session):
        super().__init__(session, Category)
