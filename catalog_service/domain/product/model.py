from datetime import datetime, timezone
from uuid import uuid4

from pydantic import BaseModel, Field

from catalog_service.domain.product.exceptions import InvalidVariantIndexError


def new_id() -> str:
    return str(uuid4())


class Variant(BaseModel):
    """Color/size combination of a product with its own stock count"""
    id: str = Field(default_factory=new_id)
    color: str
    size: str
    stock: int = Field(ge=0)


class Product(BaseModel):
    """
    Product document - one catalog entry with its embedded variants.

    Business Rules:
    1. Variants have no life of their own, they are stored and deleted with the product
    2. Variants are addressed by position in the list
    3. Stock is never negative when written
    """
    id: str = Field(default_factory=new_id)
    name: str
    price: float = Field(ge=0)
    category: str
    variants: list[Variant] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    def variant_at(self, index: int) -> Variant:
        # Negative indexes are out of range, not counted from the end
        if index < 0 or index >= len(self.variants):
            raise InvalidVariantIndexError(index, len(self.variants))
        return self.variants[index]

    def set_variant_stock(self, index: int, stock: int) -> None:
        """Replace stock of a single variant, other variants stay untouched"""
        if stock < 0:
            raise ValueError("Stock cannot be negative")

        variant = self.variant_at(index)
        variant.stock = stock
        self.updated_at = datetime.now(timezone.utc)

    def variants_document(self) -> list[dict]:
        """Serialize variants for the JSON column"""
        return [variant.model_dump(mode="json") for variant in self.variants]
