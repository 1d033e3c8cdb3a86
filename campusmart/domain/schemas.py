# campusmart/domain/schemas.py
from pydantic import BaseModel, Field, ConfigDict
from typing import List
from decimal import Decimal
from datetime import datetime


class ActionOut(BaseModel):
    success: bool = True
    message: str


# =====================================================
# USERS
# =====================================================
class UserCreate(BaseModel):
    """Schema dla tworzenia profilu użytkownika."""

    username: str = Field(..., min_length=1, max_length=50)
    first_name: str = Field("", max_length=100)
    last_name: str = Field("", max_length=100)


class UserRead(BaseModel):
    id: int
    username: str
    first_name: str
    last_name: str
    display_name: str

    model_config = ConfigDict(from_attributes=True)


# =====================================================
# CART
# =====================================================
class CartAddIn(BaseModel):
    user_id: int = Field(..., gt=0)
    item_id: int = Field(..., gt=0)
    quantity: int = Field(1, gt=0, description="Ilość (domyślnie 1)")


class CartUpdateIn(BaseModel):
    user_id: int = Field(..., gt=0)
    item_id: int = Field(..., gt=0)
    quantity: int = Field(..., description="0 lub mniej usuwa pozycję")


class CartRemoveIn(BaseModel):
    user_id: int = Field(..., gt=0)
    item_id: int = Field(..., gt=0)


class CartLineOut(BaseModel):
    cart_id: int
    user_id: int
    item_id: int
    quantity: int
    added_at: datetime
    item_name: str
    item_price: Decimal
    item_photo: str | None = None
    item_category: str
    seller_id: int
    seller_username: str


class CartOut(BaseModel):
    success: bool = True
    cart_items: List[CartLineOut]
    total_items: int
    total_amount: Decimal


class CartClearOut(ActionOut):
    removed: int


# =====================================================
# ORDERS
# =====================================================
class PlaceOrderIn(BaseModel):
    """Zamówienie z wybranych pozycji koszyka (cart_id)."""

    user_id: int = Field(..., gt=0)
    selected_items: List[int] = Field(..., min_length=1, description="ID pozycji koszyka")
    delivery_address: str = ""
    notes: str = ""


class PlacedOrderOut(BaseModel):
    order_id: int
    seller_id: int
    seller_name: str | None = None
    total_amount: Decimal


class PlaceOrderOut(BaseModel):
    success: bool = True
    message: str
    orders: List[PlacedOrderOut]


class ConfirmItemIn(BaseModel):
    item_id: int = Field(..., gt=0)
    quantity: int = Field(..., gt=0)
    price_at_time: Decimal | None = None


class ConfirmOrderIn(BaseModel):
    buyer_id: int = Field(..., gt=0)
    seller_id: int = Field(..., gt=0)
    items: List[ConfirmItemIn] = Field(..., min_length=1)
    delivery_address: str = ""
    notes: str = ""
    total_amount: Decimal | None = None


class ConfirmOrderOut(BaseModel):
    success: bool = True
    message: str
    order_id: int
    total_amount: Decimal


class OrderSummaryOut(BaseModel):
    order_id: int
    buyer_id: int
    seller_id: int
    total_amount: Decimal
    status: str
    delivery_address: str | None = None
    notes: str | None = None
    order_date: datetime
    buyer_username: str | None = None
    buyer_name: str | None = None
    seller_username: str | None = None
    seller_name: str | None = None


class OrderListOut(BaseModel):
    success: bool = True
    orders: List[OrderSummaryOut]


class OrderLineOut(BaseModel):
    item_id: int
    quantity: int
    price_at_time: Decimal
    item_name: str | None = None
    item_category: str | None = None
    item_photo: str | None = None


class OrderDetailOut(OrderSummaryOut):
    items: List[OrderLineOut]


class OrderDetailEnvelope(BaseModel):
    success: bool = True
    order: OrderDetailOut


class StatusUpdateIn(BaseModel):
    status: str


class UserStatusUpdateIn(BaseModel):
    order_id: int = Field(..., gt=0)
    status: str


class StatusUpdateOut(BaseModel):
    success: bool = True
    message: str
    order_id: int
    status: str
