from sqlalchemy.ext.asyncio import AsyncSession

from catalog_service.domain.product.model import Product
from catalog_service.infrastructure.repositories.product_repository import ProductRepository


class ListProductsQuery:
    """Query: Pobierz wszystkie produkty z wariantami"""

    def __init__(self, session: AsyncSession):
        self.repo = ProductRepository(session)

    async def execute(self) -> list[Product]:
        """
        Get the whole catalog.

        No filtering, sorting or pagination, an empty catalog is an empty list.
        """
        return await self.repo.list_products()
