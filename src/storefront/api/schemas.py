"""Pydantic request/response schemas for the storefront API.

These are external contracts, kept separate from the Protean commands.
Amounts are integers in the store currency's minor units.
"""

from datetime import datetime

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------
class LineItemSchema(BaseModel):
    product_id: int = Field(gt=0)
    quantity: int = Field(gt=0)
    price: int = Field(gt=0)


class ShippingAddressSchema(BaseModel):
    street: str | None = Field(None, max_length=255)
    ward: str | None = Field(None, max_length=100)
    district: str | None = Field(None, max_length=100)
    city: str | None = Field(None, max_length=100)
    country: str | None = Field(None, max_length=100)


class PlaceOrderRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "items": [{"product_id": 1, "quantity": 2, "price": 100}],
                    "total": 200,
                    "shipping_fee": 0,
                    "discount": 0,
                    "full_name": "Nguyen Van A",
                    "email": "a@example.com",
                    "phone": "0901234567",
                    "shipping_address": {
                        "street": "12 Le Loi",
                        "ward": "Ben Nghe",
                        "district": "District 1",
                        "city": "Ho Chi Minh City",
                        "country": "Vietnam",
                    },
                    "payment_method": "COD",
                }
            ]
        }
    }

    items: list[LineItemSchema] = Field(..., min_length=1)
    total: int | None = None
    shipping_fee: int = Field(0, ge=0)
    discount: int = Field(0, ge=0)
    full_name: str = Field(..., min_length=1, max_length=100)
    email: str | None = Field(None, max_length=254)
    phone: str | None = Field(None, max_length=20)
    shipping_address: ShippingAddressSchema | None = None
    payment_method: str | None = Field(None, max_length=50)
    notes: str | None = None


class UpdateStatusRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"status": "SHIPPED", "tracking_number": "VN123"}]}}

    status: str
    tracking_number: str | None = Field(None, max_length=255)
    notes: str | None = None


class OrderResponse(BaseModel):
    order_id: str
    customer_id: str
    status: str
    items: list[LineItemSchema]
    total: int
    shipping_fee: int
    discount: int
    tracking_number: str | None = None
    notes: str | None = None
    customer_name: str
    customer_email: str | None = None
    customer_phone: str | None = None
    shipping_address: ShippingAddressSchema | None = None
    payment_method: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class OrderListResponse(BaseModel):
    orders: list[OrderResponse]
    count: int


class LinkResponse(BaseModel):
    linked: int


# ---------------------------------------------------------------------------
# Auth
# ---------------------------------------------------------------------------
class RegisterRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [{"email": "a@example.com", "password": "s3cret-pass", "name": "Nguyen Van A"}]
        }
    }

    email: str = Field(..., max_length=254)
    password: str = Field(..., min_length=6)
    name: str = Field(..., min_length=1, max_length=100)
    phone: str | None = Field(None, max_length=20)
    address: str | None = Field(None, max_length=255)
    city: str | None = Field(None, max_length=100)


class LoginRequest(BaseModel):
    email: str = Field(..., max_length=254)
    password: str


class AdminLoginRequest(BaseModel):
    username: str
    password: str


class SessionResponse(BaseModel):
    customer_id: str
    token: str
    linked_orders: int = 0


class TokenResponse(BaseModel):
    token: str


class ActorResponse(BaseModel):
    customer_id: str
    role: str
