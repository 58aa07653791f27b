from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import List, Optional
from pydantic import BaseModel


CART_STATUS = "Cart"


class OrderStatus(str, Enum):
    PENDING = "Pending"
    IN_PROGRESS = "In Progress"
    FINISH = "Finish"
    CANCELLED = "Cancelled"


TRACKED_STATUSES = (
    OrderStatus.PENDING,
    OrderStatus.IN_PROGRESS,
    OrderStatus.CANCELLED,
    OrderStatus.FINISH,
)
TERMINAL_STATUSES = (OrderStatus.FINISH, OrderStatus.CANCELLED)

_FORWARD_TRANSITIONS = {
    OrderStatus.PENDING: {OrderStatus.IN_PROGRESS},
    OrderStatus.IN_PROGRESS: {OrderStatus.FINISH},
}


def parse_status(value) -> Optional[OrderStatus]:
    """Строка -> OrderStatus, None для неизвестных значений"""
    if value is None:
        return None
    try:
        return OrderStatus(value)
    except ValueError:
        return None


def is_valid_transition(current, new) -> bool:
    """Бизнес-правило перехода статусов заказа.

    Pending -> In Progress -> Finish, любой незавершенный статус -> Cancelled.
    Finish и Cancelled терминальные.
    """
    current = parse_status(current)
    new = parse_status(new)
    if current is None or new is None:
        return False
    if current in TERMINAL_STATUSES:
        return False
    if new == OrderStatus.CANCELLED:
        return True
    return new in _FORWARD_TRANSITIONS.get(current, set())


class Customer(BaseModel):
    id: int
    name: str


class MenuItem(BaseModel):
    """Value Object — позиция меню"""
    id: int
    name: str
    price: Decimal
    category: Optional[str] = None
    description: Optional[str] = None
    active: bool = True


class CartItem(BaseModel):
    """Domain Entity — позиция в корзине клиента"""
    id: int
    customer_id: int
    order_id: Optional[int] = None
    item_name: str
    item_price: Decimal
    quantity: int
    status: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    @property
    def subtotal(self) -> Decimal:
        return self.item_price * self.quantity

    def is_in_cart(self) -> bool:
        """Бизнес-правило: позиция еще не привязана к заказу"""
        return self.order_id is None and self.status in (None, "", CART_STATUS, OrderStatus.PENDING.value)


class Order(BaseModel):
    """Domain Entity — заказ, агрегат над позициями корзины"""
    id: int
    customer_id: int
    status: OrderStatus
    created_at: datetime
    updated_at: datetime

    def can_transition_to(self, new_status) -> bool:
        return is_valid_transition(self.status, new_status)


class OrderItemSnapshot(BaseModel):
    id: int
    item_name: str
    item_price: Decimal
    quantity: int
    subtotal: Decimal


class OrderSnapshot(BaseModel):
    """Проекция заказа для отображения клиенту и персоналу"""
    order_id: Optional[int] = None
    customer_id: int
    customer_name: str
    items: List[OrderItemSnapshot]
    total_price: Decimal
    status: OrderStatus
    created_at: datetime
    updated_at: datetime

    @classmethod
    def build(cls, customer: Customer, items: List[CartItem], status: OrderStatus,
              order_id: Optional[int] = None) -> "OrderSnapshot":
        now = datetime.now(timezone.utc)
        return cls(
            order_id=order_id,
            customer_id=customer.id,
            customer_name=customer.name,
            items=[
                OrderItemSnapshot(
                    id=item.id,
                    item_name=item.item_name,
                    item_price=item.item_price,
                    quantity=item.quantity,
                    subtotal=item.subtotal
                )
                for item in items
            ],
            total_price=sum((item.subtotal for item in items), Decimal("0")),
            status=status,
            created_at=min((item.created_at for item in items), default=now),
            updated_at=max((item.updated_at for item in items), default=now)
        )

    @classmethod
    def empty(cls, customer: Customer) -> "OrderSnapshot":
        """Пустой заказ-заглушка, в БД не сохраняется"""
        return cls.build(customer, [], OrderStatus.PENDING)
