import logging
from pathlib import Path
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import HTMLResponse, JSONResponse, PlainTextResponse, RedirectResponse
from fastapi.templating import Jinja2Templates
from sqlalchemy.ext.asyncio import AsyncSession

from catalog_service.infrastructure.database import STORAGE_ERRORS, Database
from catalog_service.application.product.list_products import ListProductsQuery
from catalog_service.application.product.create_product import CreateProductUseCase
from catalog_service.application.product.update_stock import UpdateVariantStockUseCase
from catalog_service.application.product.delete_product import DeleteProductUseCase
from catalog_service.domain.product.commands import (
    DeleteProduct,
    UpdateVariantStock,
    validate_command,
)
from catalog_service.domain.product.exceptions import (
    InvalidVariantIndexError,
    ProductNotFoundError,
    ProductValidationError,
    VariantsParseError,
)
from catalog_service.domain.product.model import Product


logger = logging.getLogger(__name__)

router = APIRouter(tags=["products"])
templates = Jinja2Templates(directory=str(Path(__file__).resolve().parents[2] / "templates"))

DEFAULT_VARIANTS_EXAMPLE = '[{"color":"Red","size":"M","stock":10}]'


# === Dependency Injection ===

async def get_db_session(request: Request) -> AsyncSession:
    """Get database session from app state"""
    db: Database = request.app.state.db
    async with db.session() as session:
        yield session


async def read_payload(request: Request) -> dict[str, Any]:
    """Read request body as a dict, JSON and form submissions alike"""
    content_type = request.headers.get("content-type", "")

    if content_type.startswith("application/json"):
        try:
            data = await request.json()
        except ValueError:
            return {}
        return data if isinstance(data, dict) else {}

    form = await request.form()
    return dict(form)


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


# === UI Routes ===

@router.get("/", response_class=HTMLResponse)
async def home(
    request: Request,
    session: AsyncSession = Depends(get_db_session),
):
    """Catalog page: products with variants and the add product form"""
    try:
        products = await ListProductsQuery(session).execute()
    except STORAGE_ERRORS as e:
        logger.exception("Listing products failed")
        raise HTTPException(status_code=500, detail=f"Internal error: {str(e)}")

    return templates.TemplateResponse(
        request,
        "index.html",
        {"products": products, "variants_example": DEFAULT_VARIANTS_EXAMPLE},
    )


# === Command Endpoints (Write) ===

@router.post("/add")
async def add_product(
    request: Request,
    session: AsyncSession = Depends(get_db_session),
):
    """
    Add a product from the catalog form.

    Variants come as JSON array text. Nothing is stored on parse
    or validation errors.
    """
    payload = await read_payload(request)

    try:
        await CreateProductUseCase(session).execute(payload)
    except VariantsParseError as e:
        return PlainTextResponse(str(e), status_code=400)
    except ProductValidationError as e:
        return PlainTextResponse(f"Error: {str(e)}", status_code=400)
    except STORAGE_ERRORS as e:
        logger.exception("Creating product failed")
        return PlainTextResponse(f"Error: {str(e)}", status_code=500)

    return RedirectResponse(url="/", status_code=303)


@router.post("/update-stock/{product_id}")
async def update_stock(
    product_id: str,
    request: Request,
    session: AsyncSession = Depends(get_db_session),
):
    """
    Replace stock of the variant at ``variantIndex``.

    400 for a bad payload or index, 404 for an unknown product.
    """
    payload = await read_payload(request)

    try:
        command = validate_command(UpdateVariantStock, {**payload, "product_id": product_id})
    except ProductValidationError as e:
        return error_response(400, str(e))

    try:
        product = await UpdateVariantStockUseCase(session).execute(command)
    except ProductNotFoundError as e:
        return error_response(404, str(e))
    except InvalidVariantIndexError as e:
        return error_response(400, str(e))
    except STORAGE_ERRORS as e:
        logger.exception("Updating stock of product %s failed", product_id)
        return error_response(500, str(e))

    return {"ok": True, "product": product.model_dump(mode="json")}


@router.post("/delete/{product_id}")
async def delete_product(
    product_id: str,
    session: AsyncSession = Depends(get_db_session),
):
    """Delete product with all its variants, unknown ids are not an error"""
    try:
        await DeleteProductUseCase(session).execute(DeleteProduct(product_id=product_id))
    except STORAGE_ERRORS as e:
        logger.exception("Deleting product %s failed", product_id)
        return error_response(500, str(e))

    return RedirectResponse(url="/", status_code=303)


# === Query Endpoints (Read) ===

@router.get("/products", response_model=list[Product])
async def list_products(
    session: AsyncSession = Depends(get_db_session),
):
    """List all products with variants as JSON"""
    try:
        return await ListProductsQuery(session).execute()
    except STORAGE_ERRORS as e:
        logger.exception("Listing products failed")
        raise HTTPException(status_code=500, detail=f"Internal error: {str(e)}")
