import logging

from sqlalchemy.ext.asyncio import AsyncSession

from catalog_service.domain.product.commands import UpdateVariantStock
from catalog_service.domain.product.exceptions import ProductNotFoundError
from catalog_service.domain.product.model import Product
from catalog_service.infrastructure.repositories.product_repository import ProductRepository


logger = logging.getLogger(__name__)


class UpdateVariantStockUseCase:
    """
    Use Case: Zmień stan magazynowy jednego wariantu.

    Flow:
    1. Załaduj produkt po id
    2. Podmień stock wariantu pod wskazanym indeksem
    3. Zapisz całą listę wariantów (jeden wiersz)

    Read-modify-write bez wersjonowania - dwie równoległe zmiany
    tego samego produktu: wygrywa ostatni zapis.
    """

    def __init__(self, session: AsyncSession):
        self.repo = ProductRepository(session)

    async def execute(self, command: UpdateVariantStock) -> Product:
        """
        Execute update stock command.

        Raises:
            ProductNotFoundError: product doesn't exist
            InvalidVariantIndexError: index outside the variant list
        """
        product = await self.repo.get_product(command.product_id)

        if product is None:
            raise ProductNotFoundError(command.product_id)

        previous = product.variant_at(command.variant_index).stock
        product.set_variant_stock(command.variant_index, command.stock)

        await self.repo.save_variants(product)

        logger.info(
            "Stock of product %s variant %d changed %d -> %d",
            product.id, command.variant_index, previous, command.stock,
        )
        return product
