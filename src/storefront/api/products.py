"""FastAPI endpoints for the product catalog."""

from fastapi import APIRouter, File, HTTPException, UploadFile
from fastapi.concurrency import run_in_threadpool
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.api.schemas import (
    CreateProductRequest,
    ImageUploadResponse,
    ProductAvailability,
    ProductIdResponse,
    ProductView,
    StatusResponse,
    UpdateProductRequest,
)
from storefront.media.functions import get_functions_client
from storefront.product.management import CreateProduct, DeactivateProduct, SetProductImage, UpdateProduct
from storefront.product.product import Product

product_router = APIRouter(prefix="/products", tags=["products"])


def _live_product(product_id: str) -> Product:
    product = current_domain.repository_for(Product).find_live(product_id)
    if product is None:
        raise ObjectNotFoundError({"_entity": f"Product `{product_id}` not found"})
    return product


@product_router.get("", response_model=list[ProductView])
async def list_products() -> list[ProductView]:
    products = current_domain.repository_for(Product).list_active()
    return [ProductView.from_product(p) for p in products]


@product_router.get("/{product_id}", response_model=ProductView)
async def get_product(product_id: str) -> ProductView:
    return ProductView.from_product(_live_product(product_id))


@product_router.get("/{product_id}/availability", response_model=ProductAvailability)
async def get_product_availability(product_id: str) -> ProductAvailability:
    """Live price and stock, used when composing an order."""
    product = _live_product(product_id)
    return ProductAvailability(
        product_id=str(product.id),
        product_name=product.name,
        price=product.price,
        stock=product.stock,
    )


@product_router.post("", status_code=201, response_model=ProductIdResponse)
async def create_product(body: CreateProductRequest) -> ProductIdResponse:
    command = CreateProduct(
        name=body.name,
        description=body.description,
        price=body.price,
        stock=body.stock,
        category=body.category,
        image_url=body.image_url,
    )
    result = current_domain.process(command, asynchronous=False)
    return ProductIdResponse(product_id=result)


@product_router.put("/{product_id}", response_model=StatusResponse)
async def update_product(product_id: str, body: UpdateProductRequest) -> StatusResponse:
    command = UpdateProduct(
        product_id=product_id,
        name=body.name,
        description=body.description,
        price=body.price,
        stock=body.stock,
        category=body.category,
        image_url=body.image_url,
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@product_router.delete("/{product_id}", response_model=StatusResponse)
async def delete_product(product_id: str) -> StatusResponse:
    """Withdraw a product from sale. Orders that reference it are unaffected."""
    current_domain.process(DeactivateProduct(product_id=product_id), asynchronous=False)
    return StatusResponse()


@product_router.post("/{product_id}/image", response_model=ImageUploadResponse)
async def upload_product_image(product_id: str, file: UploadFile = File(...)) -> ImageUploadResponse:
    _live_product(product_id)

    content = await file.read()
    image_url = await run_in_threadpool(
        get_functions_client().upload_product_image, file.filename, content, file.content_type
    )
    if not image_url:
        raise HTTPException(status_code=502, detail="Image upload failed. Please try again.")

    current_domain.process(SetProductImage(product_id=product_id, image_url=image_url), asynchronous=False)
    return ImageUploadResponse(product_id=product_id, image_url=image_url)
