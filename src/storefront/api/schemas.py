"""Pydantic request/response schemas for the Storefront API.

These are external contracts (anti-corruption layer), kept apart from
internal Protean commands.
"""

from datetime import datetime

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Shared sub-models
# ---------------------------------------------------------------------------
class AddressSchema(BaseModel):
    street: str = Field(min_length=1)
    city: str = Field(min_length=1)
    state: str = Field(min_length=1)
    zip_code: str = Field(pattern=r"^\d{5}(-\d{4})?$")
    country: str = Field(default="USA", min_length=1)


class PaginationSchema(BaseModel):
    current_page: int
    total_pages: int
    total_items: int
    has_next_page: bool
    has_prev_page: bool

    @classmethod
    def from_page(cls, page) -> "PaginationSchema":
        return cls(
            current_page=page.page,
            total_pages=page.total_pages,
            total_items=page.total,
            has_next_page=page.has_next,
            has_prev_page=page.has_prev,
        )


class StatusResponse(BaseModel):
    status: str = "ok"


class ErrorResponse(BaseModel):
    success: bool = False
    message: str
    error: str | None = None


# ---------------------------------------------------------------------------
# Product Schemas
# ---------------------------------------------------------------------------
class CreateProductRequest(BaseModel):
    name: str = Field(min_length=2, max_length=100)
    description: str = Field(min_length=10, max_length=500)
    price: float = Field(ge=0)
    category: str
    stock: int = Field(ge=0)
    image_url: str

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Fresh Organic Apples",
                    "description": "Crisp and sweet organic apples, perfect for snacking or baking.",
                    "price": 4.99,
                    "category": "fruits",
                    "stock": 100,
                    "image_url": "https://images.unsplash.com/photo-1560806887-1e4cd0b6cbd6?w=400",
                }
            ]
        }
    }


class UpdateProductRequest(BaseModel):
    name: str | None = Field(default=None, min_length=2, max_length=100)
    description: str | None = Field(default=None, min_length=10, max_length=500)
    price: float | None = Field(default=None, ge=0)
    category: str | None = None
    stock: int | None = Field(default=None, ge=0)
    image_url: str | None = None


class ProductIdResponse(BaseModel):
    product_id: str


class ProductResponse(BaseModel):
    product_id: str
    name: str
    description: str
    price: float
    category: str
    stock: int
    image_url: str
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_product(cls, product) -> "ProductResponse":
        return cls(
            product_id=str(product.id),
            name=product.name,
            description=product.description,
            price=product.price,
            category=product.category,
            stock=product.stock,
            image_url=product.image_url,
            created_at=product.created_at,
            updated_at=product.updated_at,
        )


class ProductListResponse(BaseModel):
    products: list[ProductResponse]
    pagination: PaginationSchema


class CategorySummaryResponse(BaseModel):
    category: str
    count: int
    average_price: float


# ---------------------------------------------------------------------------
# Order Schemas
# ---------------------------------------------------------------------------
class OrderItemRequest(BaseModel):
    product_id: str
    quantity: int = Field(ge=1)


class PlaceOrderRequest(BaseModel):
    items: list[OrderItemRequest] = Field(min_length=1)
    shipping_address: AddressSchema

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "items": [{"product_id": "prod-001", "quantity": 2}],
                    "shipping_address": {
                        "street": "123 Main St",
                        "city": "Springfield",
                        "state": "IL",
                        "zip_code": "62701",
                        "country": "USA",
                    },
                }
            ]
        }
    }


class UpdateOrderStatusRequest(BaseModel):
    order_status: str | None = None
    payment_status: str | None = None


class OrderIdResponse(BaseModel):
    order_id: str


class OrderItemResponse(BaseModel):
    product_id: str
    quantity: int
    price: float
    subtotal: float


class OrderResponse(BaseModel):
    order_id: str
    user_id: str
    items: list[OrderItemResponse]
    total_amount: float
    payment_status: str
    order_status: str
    shipping_address: AddressSchema
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_order(cls, order) -> "OrderResponse":
        address = order.shipping_address
        return cls(
            order_id=str(order.id),
            user_id=str(order.user_id),
            items=[
                OrderItemResponse(
                    product_id=str(item.product_id),
                    quantity=item.quantity,
                    price=item.price,
                    subtotal=item.subtotal,
                )
                for item in order.items
            ],
            total_amount=order.total_amount,
            payment_status=order.payment_status,
            order_status=order.order_status,
            shipping_address=AddressSchema(
                street=address.street,
                city=address.city,
                state=address.state,
                zip_code=address.zip_code,
                country=address.country,
            ),
            created_at=order.created_at,
            updated_at=order.updated_at,
        )


class OrderListResponse(BaseModel):
    orders: list[OrderResponse]
    pagination: PaginationSchema


class OrderStatsResponse(BaseModel):
    total_orders: int
    total_revenue: float
    average_order_value: float
    by_order_status: dict[str, int]
    by_payment_status: dict[str, int]
