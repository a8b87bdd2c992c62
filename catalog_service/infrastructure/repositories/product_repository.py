from sqlalchemy import select, insert, update, delete, func
from sqlalchemy.ext.asyncio import AsyncSession

from catalog_service.domain.product.model import Product, Variant
from catalog_service.infrastructure.database import products


class ProductRepository:
    """
    Repository for product documents.

    Each method works on a single row, the store is the only source of truth.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    @staticmethod
    def _to_product(row) -> Product:
        return Product(
            id=row.id,
            name=row.name,
            price=row.price,
            category=row.category,
            variants=[Variant(**variant) for variant in row.variants or []],
            created_at=row.created_at,
            updated_at=row.updated_at,
        )

    async def get_product(self, product_id: str) -> Product | None:
        """Get product by id"""
        stmt = select(products).where(products.c.id == product_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()

        if row is None:
            return None

        return self._to_product(row)

    async def list_products(self) -> list[Product]:
        """List all products in storage order"""
        result = await self.session.execute(select(products))
        return [self._to_product(row) for row in result.fetchall()]

    async def count_products(self) -> int:
        result = await self.session.execute(select(func.count()).select_from(products))
        return result.scalar_one()

    async def add_products(self, new_products: list[Product]) -> None:
        """Insert new product documents in one commit"""
        if not new_products:
            return

        stmt = insert(products).values(
            [
                {
                    "id": product.id,
                    "name": product.name,
                    "price": product.price,
                    "category": product.category,
                    "variants": product.variants_document(),
                    "created_at": product.created_at,
                    "updated_at": product.updated_at,
                }
                for product in new_products
            ]
        )
        await self.session.execute(stmt)
        await self.session.commit()

    async def add_product(self, product: Product) -> None:
        await self.add_products([product])

    async def save_variants(self, product: Product) -> None:
        """Write back the whole variant list of an existing product"""
        stmt = (
            update(products)
            .where(products.c.id == product.id)
            .values(
                variants=product.variants_document(),
                updated_at=product.updated_at,
            )
        )
        await self.session.execute(stmt)
        await self.session.commit()

    async def delete_product(self, product_id: str) -> int:
        """
        Delete product row.

        Returns:
            Number of deleted rows (0 when product didn't exist)
        """
        stmt = delete(products).where(products.c.id == product_id)
        result = await self.session.execute(stmt)
        await self.session.commit()
        return result.rowcount
