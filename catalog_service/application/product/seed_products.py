import logging

from sqlalchemy.ext.asyncio import AsyncSession

from catalog_service.domain.product.commands import CreateProduct
from catalog_service.infrastructure.database import STORAGE_ERRORS, Database
from catalog_service.infrastructure.repositories.product_repository import ProductRepository


logger = logging.getLogger(__name__)


SAMPLE_PRODUCTS = [
    {
        "name": "T-Shirt",
        "price": 19.99,
        "category": "Clothing",
        "variants": [
            {"color": "Red", "size": "M", "stock": 10},
            {"color": "Blue", "size": "L", "stock": 5},
        ],
    },
    {
        "name": "Sneakers",
        "price": 49.99,
        "category": "Footwear",
        "variants": [
            {"color": "Black", "size": "9", "stock": 8},
            {"color": "White", "size": "10", "stock": 6},
        ],
    },
]


class SeedSampleProductsUseCase:
    """Use Case: Wstaw przykładowe produkty, jeśli katalog jest pusty"""

    def __init__(self, session: AsyncSession):
        self.repo = ProductRepository(session)

    async def execute(self) -> int:
        """
        Returns:
            Number of inserted products (0 when catalog already had data)
        """
        if await self.repo.count_products() > 0:
            logger.info("Products already initialized")
            return 0

        sample = [CreateProduct.model_validate(data).to_product() for data in SAMPLE_PRODUCTS]
        await self.repo.add_products(sample)

        logger.info("Initialized %d sample products", len(sample))
        return len(sample)


async def initialize_products(db: Database) -> int:
    """
    Seed the database at startup.

    Best-effort: storage errors are logged and startup goes on.
    """
    async with db.session() as session:
        try:
            return await SeedSampleProductsUseCase(session).execute()
        except STORAGE_ERRORS:
            logger.exception("Seeding sample products failed")
            return 0
