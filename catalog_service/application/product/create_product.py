import logging
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from catalog_service.domain.product.commands import CreateProduct, parse_variants, validate_command
from catalog_service.domain.product.model import Product
from catalog_service.infrastructure.repositories.product_repository import ProductRepository


logger = logging.getLogger(__name__)


class CreateProductUseCase:
    """
    Use Case: Dodaj produkt do katalogu.

    Flow:
    1. Zdekoduj warianty (JSON array w polu formularza)
    2. Zwaliduj wszystkie pola komendy
    3. Zbuduj nowy dokument produktu z nowymi id
    4. Zapisz produkt

    Nic nie jest zapisywane, jeśli krok 1 lub 2 się nie powiedzie.
    """

    def __init__(self, session: AsyncSession):
        self.repo = ProductRepository(session)

    async def execute(self, payload: dict[str, Any]) -> Product:
        """
        Execute create product command.

        Args:
            payload: name, price, category and variants (JSON text or list)

        Raises:
            VariantsParseError: variants is not a JSON array
            ProductValidationError: a field is missing or out of bounds
        """
        variants = parse_variants(payload.get("variants"))

        command = validate_command(
            CreateProduct,
            {
                "name": payload.get("name"),
                "price": payload.get("price"),
                "category": payload.get("category"),
                "variants": variants,
            },
        )

        product = command.to_product()
        await self.repo.add_product(product)

        logger.info(
            "Created product %s (%s) with %d variants",
            product.id, product.name, len(product.variants),
        )
        return product
