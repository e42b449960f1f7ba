"""FastAPI routes for the product catalogue."""

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from chairup.api.auth import Actor, require_admin
from chairup.api.schemas import (
    AddProductRequest,
    AdjustStockRequest,
    MessageResponse,
    ProductResponse,
    UpdateProductRequest,
)
from chairup.api.views import product_view
from chairup.catalogue.management import AddProduct, AdjustStock, RemoveProduct, UpdateProductDetails
from chairup.catalogue.product import Product

product_router = APIRouter(prefix="/products", tags=["products"])


@product_router.get("", response_model=list[ProductResponse])
async def list_products(category: str | None = None) -> list[ProductResponse]:
    products = current_domain.repository_for(Product).listed(category=category)
    return [product_view(p) for p in products]


@product_router.get("/categories", response_model=list[str])
async def list_categories() -> list[str]:
    return current_domain.repository_for(Product).categories()


@product_router.get("/{product_id}", response_model=ProductResponse)
async def get_product(product_id: str) -> ProductResponse:
    return product_view(current_domain.repository_for(Product).get_active(product_id))


@product_router.post("", status_code=201, response_model=ProductResponse)
async def add_product(body: AddProductRequest, admin: Actor = Depends(require_admin)) -> ProductResponse:
    product_id = current_domain.process(
        AddProduct(
            name=body.name,
            price=body.price,
            category=body.category,
            description=body.description,
            image=body.image,
            stock_quantity=body.stock_quantity,
        ),
        asynchronous=False,
    )
    return product_view(current_domain.repository_for(Product).get(product_id))


@product_router.put("/{product_id}", response_model=ProductResponse)
async def update_product(
    product_id: str, body: UpdateProductRequest, admin: Actor = Depends(require_admin)
) -> ProductResponse:
    current_domain.process(
        UpdateProductDetails(product_id=product_id, **body.model_dump(exclude_none=True)),
        asynchronous=False,
    )
    return product_view(current_domain.repository_for(Product).get(product_id))


@product_router.delete("/{product_id}", response_model=MessageResponse)
async def remove_product(product_id: str, admin: Actor = Depends(require_admin)) -> MessageResponse:
    current_domain.process(RemoveProduct(product_id=product_id), asynchronous=False)
    return MessageResponse(message="Product removed")


@product_router.post("/{product_id}/stock", response_model=ProductResponse)
async def adjust_stock(
    product_id: str, body: AdjustStockRequest, admin: Actor = Depends(require_admin)
) -> ProductResponse:
    current_domain.process(
        AdjustStock(product_id=product_id, quantity_change=body.quantity_change, reason=body.reason),
        asynchronous=False,
    )
    return product_view(current_domain.repository_for(Product).get(product_id))
