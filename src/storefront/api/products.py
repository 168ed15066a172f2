"""FastAPI endpoints for the product catalogue."""

from fastapi import APIRouter, Depends, Query
from protean.utils.globals import current_domain

from storefront.api.principal import Principal, require_admin
from storefront.api.schemas import (
    CategorySummaryResponse,
    CreateProductRequest,
    PaginationSchema,
    ProductIdResponse,
    ProductListResponse,
    ProductResponse,
    StatusResponse,
    UpdateProductRequest,
)
from storefront.product.management import CreateProduct, DeleteProduct, UpdateProduct
from storefront.product.product import Product
from storefront.product.queries import ProductQuery
from storefront.utils.concurrency import process_with_retry

product_router = APIRouter(prefix="/api/products", tags=["products"])


def _product_list(page) -> ProductListResponse:
    return ProductListResponse(
        products=[ProductResponse.from_product(product) for product in page.items],
        pagination=PaginationSchema.from_page(page),
    )


# --- Public endpoints ---


@product_router.get("", response_model=ProductListResponse)
async def list_products(
    category: str | None = None,
    search: str | None = None,
    min_price: float | None = None,
    max_price: float | None = None,
    page: int = 1,
    limit: int = 12,
    sort_by: str = "created_at",
    sort_order: str = "desc",
) -> ProductListResponse:
    query = ProductQuery(
        category=category,
        search=search,
        min_price=min_price,
        max_price=max_price,
        page=page,
        limit=limit,
        sort_by=sort_by,
        sort_order=sort_order,
    )
    result = current_domain.repository_for(Product).search(query)
    return _product_list(result)


@product_router.get("/categories", response_model=list[CategorySummaryResponse])
async def list_categories() -> list[CategorySummaryResponse]:
    summary = current_domain.repository_for(Product).category_summary()
    return [CategorySummaryResponse(**entry) for entry in summary]


@product_router.get("/category/{category}", response_model=ProductListResponse)
async def list_products_by_category(
    category: str,
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=12, ge=1, le=100),
) -> ProductListResponse:
    # Unknown categories are rejected the same way as on the main listing
    ProductQuery(category=category)
    result = current_domain.repository_for(Product).by_category(category, page=page, limit=limit)
    return _product_list(result)


@product_router.get("/{product_id}", response_model=ProductResponse)
async def get_product(product_id: str) -> ProductResponse:
    product = current_domain.repository_for(Product).fetch(product_id)
    return ProductResponse.from_product(product)


# --- Admin endpoints ---


@product_router.post("", status_code=201, response_model=ProductIdResponse)
async def create_product(
    body: CreateProductRequest, principal: Principal = Depends(require_admin)
) -> ProductIdResponse:
    command = CreateProduct(
        name=body.name,
        description=body.description,
        price=body.price,
        category=body.category,
        stock=body.stock,
        image_url=body.image_url,
    )
    result = current_domain.process(command, asynchronous=False)
    return ProductIdResponse(product_id=result)


@product_router.put("/{product_id}", response_model=ProductResponse)
async def update_product(
    product_id: str,
    body: UpdateProductRequest,
    principal: Principal = Depends(require_admin),
) -> ProductResponse:
    command = UpdateProduct(product_id=product_id, **body.model_dump(exclude_none=True))
    process_with_retry(command)
    product = current_domain.repository_for(Product).fetch(product_id)
    return ProductResponse.from_product(product)


@product_router.delete("/{product_id}", response_model=StatusResponse)
async def delete_product(product_id: str, principal: Principal = Depends(require_admin)) -> StatusResponse:
    process_with_retry(DeleteProduct(product_id=product_id))
    return StatusResponse()
