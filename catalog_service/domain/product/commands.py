import json
import math
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from catalog_service.domain.product.exceptions import ProductValidationError, VariantsParseError
from catalog_service.domain.product.model import Product, Variant


class Command(BaseModel):
    """Base class for all commands"""
    pass


class VariantSpec(BaseModel):
    """Variant as submitted by the client, before it gets an id"""
    model_config = ConfigDict(coerce_numbers_to_str=True)

    color: str = Field(min_length=1)
    size: str = Field(min_length=1)
    stock: int = Field(ge=0)


class CreateProduct(Command):
    """Command: Create a new product with its variants"""
    name: str = Field(min_length=1)
    price: float = Field(ge=0)
    category: str = Field(min_length=1)
    variants: list[VariantSpec] = Field(default_factory=list)

    @field_validator("price")
    @classmethod
    def validate_price(cls, v: float) -> float:
        if math.isnan(v) or math.isinf(v):
            raise ValueError("Price must be a finite number")
        return v

    def to_product(self) -> Product:
        """Build a new product document with fresh ids"""
        return Product(
            name=self.name,
            price=self.price,
            category=self.category,
            variants=[Variant(**item.model_dump()) for item in self.variants],
        )


class UpdateVariantStock(Command):
    """Command: Replace stock of one variant addressed by position"""
    model_config = ConfigDict(populate_by_name=True)

    product_id: str
    variant_index: int = Field(alias="variantIndex")
    stock: int = Field(ge=0)


class DeleteProduct(Command):
    """Command: Delete product together with its variants"""
    product_id: str


def parse_variants(raw: Any) -> list[Any]:
    """
    Decode the variants payload into a list.

    Form submissions carry variants as JSON text, JSON bodies may already
    hold a decoded list. Anything that is not a JSON array is rejected.

    Raises:
        VariantsParseError: payload missing, not JSON or not an array
    """
    if isinstance(raw, list):
        return raw
    if not isinstance(raw, (str, bytes)):
        raise VariantsParseError()

    try:
        decoded = json.loads(raw)
    except json.JSONDecodeError:
        raise VariantsParseError()

    if not isinstance(decoded, list):
        raise VariantsParseError()
    return decoded


def describe_errors(exc: ValidationError) -> str:
    """Flatten pydantic errors into a single readable line"""
    parts = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"])
        parts.append(f"{location}: {error['msg']}" if location else error["msg"])
    return "; ".join(parts)


def validate_command(command_cls: type[Command], data: dict[str, Any]) -> Command:
    """
    Run explicit validation before anything touches storage.

    Raises:
        ProductValidationError: with pydantic's error list attached
    """
    try:
        return command_cls.model_validate(data)
    except ValidationError as e:
        raise ProductValidationError(
            f"{command_cls.__name__} validation failed: {describe_errors(e)}",
            errors=e.errors(include_url=False),
        )
