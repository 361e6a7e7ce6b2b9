# storefront/domain/schemas.py
from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    PlainSerializer,
    field_validator,
    model_validator,
)
from typing import Any, Annotated, Dict, List
from decimal import Decimal
from datetime import datetime

from storefront.domain.order_status import OrderStatus, parse_status

# The remote API wants JSON numbers for prices
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


def _pick_id(data: Dict[str, Any]) -> Any:
    return data.get("_id", data.get("id"))


# =====================================================
# CART
# =====================================================
class CartLine(BaseModel):
    """One product in the cart. Stored as-is in the local store."""

    product_id: str = Field(..., min_length=1)
    name: str
    unit_price: Decimal = Field(..., ge=0)
    quantity: int = Field(1, ge=1)
    image: str | None = None

    @classmethod
    def from_product(cls, product: Dict[str, Any] | "Product") -> "CartLine":
        if isinstance(product, Product):
            return cls(
                product_id=product.id,
                name=product.name,
                unit_price=product.price,
                image=product.image,
            )

        product_id = _pick_id(product)
        if product_id is None:
            raise ValueError("Product has no id")

        return cls(
            product_id=str(product_id),
            name=product.get("name", ""),
            unit_price=Decimal(str(product["price"])),
            image=product.get("image"),
        )


class OrderTotals(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    items_price: Money = Field(alias="itemsPrice")
    tax_price: Money = Field(alias="taxPrice")
    shipping_price: Money = Field(alias="shippingPrice")
    total_price: Money = Field(alias="totalPrice")


# =====================================================
# MENU
# =====================================================
class Review(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str | None = Field(None, validation_alias=AliasChoices("_id", "id"))
    rating: int = Field(..., ge=1, le=5)
    comment: str = ""
    name: str | None = None
    created_at: datetime | None = Field(
        None, validation_alias=AliasChoices("createdAt", "created_at")
    )


class ReviewIn(BaseModel):
    """New review for a menu item."""

    rating: int = Field(5, ge=1, le=5, description="Star rating 1-5")
    comment: str = Field(..., min_length=1)

    @field_validator("comment")
    @classmethod
    def comment_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Comment cannot be blank")
        return v.strip()


class Product(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str = Field(..., validation_alias=AliasChoices("_id", "id"))
    name: str
    price: Money = Field(..., ge=0)
    image: str | None = None
    images: List[str] = []
    description: str | None = None
    category: str | None = None
    rating: float | None = None
    reviews: List[Review] = []

    @field_validator("id", mode="before")
    @classmethod
    def id_as_str(cls, v: Any) -> str:
        return str(v)


class ProductIn(BaseModel):
    """Admin: new menu item or full update."""

    name: str = Field(..., min_length=1, max_length=150)
    price: Money = Field(..., ge=0)
    image: str | None = None
    description: str | None = None
    category: str | None = None


class ProductUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=150)
    price: Money | None = Field(None, ge=0)
    image: str | None = None
    description: str | None = None
    category: str | None = None


class PriceIn(BaseModel):
    price: Money = Field(..., ge=0)


class ImageIn(BaseModel):
    url: str = Field(..., min_length=1)


# =====================================================
# ORDERS
# =====================================================
class OrderItem(BaseModel):
    """Line of a submitted order, in the shape the remote API stores it."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: str
    qty: int = Field(..., ge=1)
    image: str | None = None
    price: Money = Field(..., ge=0)
    product: str

    @field_validator("product", mode="before")
    @classmethod
    def product_as_str(cls, v: Any) -> str:
        if isinstance(v, dict):
            v = _pick_id(v)
        return str(v)


class ShippingAddress(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    address: str = "123 Main St"
    city: str = "City"
    postal_code: str = Field("12345", alias="postalCode")
    country: str = "Country"


class OrderCreate(BaseModel):
    """Body of POST /api/orders."""

    model_config = ConfigDict(populate_by_name=True)

    order_items: List[OrderItem] = Field(..., min_length=1, alias="orderItems")
    items_price: Money = Field(..., alias="itemsPrice")
    tax_price: Money = Field(..., alias="taxPrice")
    shipping_price: Money = Field(..., alias="shippingPrice")
    total_price: Money = Field(..., alias="totalPrice")
    payment_method: str = Field(..., alias="paymentMethod")
    shipping_address: ShippingAddress = Field(..., alias="shippingAddress")


class Order(BaseModel):
    """Order as returned by the remote API. Read only on this side."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str = Field(..., validation_alias=AliasChoices("_id", "id"), serialization_alias="_id")
    user: Dict[str, Any] | str | None = None
    order_items: List[OrderItem] = Field([], alias="orderItems")
    items_price: Money = Field(Decimal("0"), alias="itemsPrice")
    tax_price: Money = Field(Decimal("0"), alias="taxPrice")
    shipping_price: Money = Field(Decimal("0"), alias="shippingPrice")
    total_price: Money = Field(Decimal("0"), alias="totalPrice")
    payment_method: str | None = Field(None, alias="paymentMethod")
    is_paid: bool = Field(False, alias="isPaid")
    is_delivered: bool = Field(False, alias="isDelivered")
    status: OrderStatus
    created_at: datetime | None = Field(None, alias="createdAt")

    @model_validator(mode="before")
    @classmethod
    def legacy_status(cls, data: Any) -> Any:
        if isinstance(data, dict):
            data = dict(data)
            delivered = data.get("isDelivered", data.get("is_delivered", False))
            data["status"] = parse_status(data.get("status"), bool(delivered))
        return data

    @field_validator("id", mode="before")
    @classmethod
    def id_as_str(cls, v: Any) -> str:
        return str(v)


class CheckoutIn(BaseModel):
    payment_method: str = Field("PayPal", min_length=1)
    shipping_address: ShippingAddress = ShippingAddress()


class StatusUpdateIn(BaseModel):
    status: OrderStatus

    @field_validator("status", mode="before")
    @classmethod
    def known_status(cls, v: Any) -> OrderStatus:
        if v is None:
            raise ValueError("Status is required")
        return parse_status(v)


class DayStats(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    day: str = Field(..., validation_alias=AliasChoices("_id", "day"))
    count: int = 0
    total_sales: Money = Field(Decimal("0"), validation_alias=AliasChoices("totalSales", "total_sales"))


class DashboardStats(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    total_orders: int = Field(0, validation_alias=AliasChoices("totalOrders", "total_orders"))
    total_delivered: int = Field(0, validation_alias=AliasChoices("totalDelivered", "total_delivered"))
    total_revenue: Money = Field(Decimal("0"), validation_alias=AliasChoices("totalRevenue", "total_revenue"))
    date_stats: List[DayStats] = Field([], validation_alias=AliasChoices("dateStats", "date_stats"))


# =====================================================
# AUTH / GATEWAY INPUT
# =====================================================
class LoginIn(BaseModel):
    email: str = Field(..., min_length=3)
    password: str = Field(..., min_length=1)


class RegisterIn(LoginIn):
    name: str | None = None

    @model_validator(mode="after")
    def default_name(self) -> "RegisterIn":
        # same default as the signup form: local part of the e-mail
        if not self.name:
            self.name = self.email.split("@")[0]
        return self


class ItemIn(BaseModel):
    """Add a menu item to the cart."""

    product_id: str = Field(..., min_length=1)
    quantity: int = Field(1, gt=0, description="Quantity (must be > 0)")


class QuantityIn(BaseModel):
    # <= 0 removes the line
    quantity: int


# =====================================================
# GATEWAY OUTPUT
# =====================================================
class CartItemOut(BaseModel):
    product_id: str
    name: str
    image: str | None = None
    unit_price: Money
    quantity: int
    line_total: Money


class CartOut(BaseModel):
    items: List[CartItemOut]
    item_count: int
    totals: OrderTotals
    display: Dict[str, str]


class SessionOut(BaseModel):
    authenticated: bool
    user: Dict[str, Any] | None = None
    role: str


class PlacedOrderOut(BaseModel):
    order_id: str
    order: Dict[str, Any]


class OrderActionOut(BaseModel):
    status: OrderStatus
    label: str


class AdminOrderOut(BaseModel):
    order: Order
    actions: List[OrderActionOut]
