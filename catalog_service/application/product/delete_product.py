import logging

from sqlalchemy.ext.asyncio import AsyncSession

from catalog_service.domain.product.commands import DeleteProduct
from catalog_service.infrastructure.repositories.product_repository import ProductRepository


logger = logging.getLogger(__name__)


class DeleteProductUseCase:
    """
    Use Case: Usuń produkt razem z wariantami.

    Usunięcie nieistniejącego produktu nie jest błędem.
    """

    def __init__(self, session: AsyncSession):
        self.repo = ProductRepository(session)

    async def execute(self, command: DeleteProduct) -> bool:
        """
        Returns:
            True if a product was removed, False if there was nothing to remove
        """
        deleted = await self.repo.delete_product(command.product_id)

        if not deleted:
            logger.info("Product %s not found, nothing deleted", command.product_id)
            return False

        logger.info("Deleted product %s", command.product_id)
        return True
