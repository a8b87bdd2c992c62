from typing import Any


class CatalogError(Exception):
    """Base class for all catalog errors"""
    pass


class VariantsParseError(CatalogError):
    """Raised when the variants payload is not a JSON array"""

    def __init__(self, message: str = "Invalid JSON for variants"):
        super().__init__(message)


class ProductValidationError(CatalogError):
    """
    Raised when product or variant fields break the schema rules.

    Keeps pydantic's error list so callers can inspect which field failed.
    """

    def __init__(self, message: str, errors: list[dict[str, Any]] | None = None):
        super().__init__(message)
        self.errors = errors or []


class ProductNotFoundError(CatalogError):
    """Raised when product doesn't exist in storage"""

    def __init__(self, product_id: str):
        super().__init__("Product not found")
        self.product_id = product_id


class InvalidVariantIndexError(CatalogError):
    """Raised when variant index is outside the product's variant list"""

    def __init__(self, index: int, variant_count: int):
        super().__init__("Invalid variant index")
        self.index = index
        self.variant_count = variant_count
