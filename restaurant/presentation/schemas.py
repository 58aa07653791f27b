from pydantic import BaseModel, ConfigDict, Field, PlainSerializer
from pydantic.alias_generators import to_camel
from datetime import datetime
from decimal import Decimal
from typing import Annotated, List, Optional

from restaurant.domain.models import OrderStatus

# В JSON цены отдаются числом, как ожидает клиент
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class OrderItemResponse(CamelModel):
    id: int
    item_name: str
    item_price: Money
    quantity: int
    subtotal: Money


class OrderResponse(CamelModel):
    order_id: Optional[int] = None
    customer_id: int
    customer_name: str
    items: List[OrderItemResponse]
    total_price: Money
    status: OrderStatus
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_domain(cls, snapshot):
        return cls(
            order_id=snapshot.order_id,
            customer_id=snapshot.customer_id,
            customer_name=snapshot.customer_name,
            items=[
                OrderItemResponse(
                    id=item.id,
                    item_name=item.item_name,
                    item_price=item.item_price,
                    quantity=item.quantity,
                    subtotal=item.subtotal
                )
                for item in snapshot.items
            ],
            total_price=snapshot.total_price,
            status=snapshot.status,
            created_at=snapshot.created_at,
            updated_at=snapshot.updated_at
        )


class OrderStatusUpdateRequest(CamelModel):
    status: str = Field(min_length=1)
    order_id: Optional[int] = None


class CreateCustomerRequest(CamelModel):
    name: str = Field(min_length=1)


class CustomerResponse(CamelModel):
    id: int
    name: str


class CreateMenuItemRequest(CamelModel):
    name: str = Field(min_length=1)
    price: Decimal = Field(ge=0)
    category: Optional[str] = None
    description: Optional[str] = None
    active: bool = True


class MenuItemResponse(CamelModel):
    id: int
    name: str
    price: Money
    category: Optional[str] = None
    description: Optional[str] = None
    active: bool

    @classmethod
    def from_domain(cls, menu_item):
        return cls(**menu_item.model_dump())


class AddCartItemRequest(CamelModel):
    menu_item_id: int
    quantity: int = Field(default=1, ge=1)


class CartItemResponse(CamelModel):
    id: int
    item_name: str
    item_price: Money
    quantity: int
    subtotal: Money
    status: Optional[str] = None
    created_at: datetime

    @classmethod
    def from_domain(cls, cart_item):
        return cls(
            id=cart_item.id,
            item_name=cart_item.item_name,
            item_price=cart_item.item_price,
            quantity=cart_item.quantity,
            subtotal=cart_item.subtotal,
            status=cart_item.status,
            created_at=cart_item.created_at
        )


class ErrorResponse(BaseModel):
    detail: str
