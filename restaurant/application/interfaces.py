from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Optional, List, Dict, Iterable
from restaurant.domain.models import Customer, MenuItem, CartItem, Order, OrderStatus


class CustomerRepository(ABC):
    @abstractmethod
    async def get_by_id(self, customer_id: int) -> Optional[Customer]:
        pass

    @abstractmethod
    async def get_many(self, customer_ids: Iterable[int]) -> Dict[int, Customer]:
        pass

    @abstractmethod
    async def create(self, name: str) -> Customer:
        pass


class MenuItemRepository(ABC):
    @abstractmethod
    async def get_by_id(self, menu_item_id: int) -> Optional[MenuItem]:
        pass

    @abstractmethod
    async def list_active(self) -> List[MenuItem]:
        pass

    @abstractmethod
    async def create(self, name: str, price: Decimal, category: Optional[str],
                     description: Optional[str], active: bool = True) -> MenuItem:
        pass

    @abstractmethod
    async def update(self, menu_item: MenuItem) -> None:
        pass

    @abstractmethod
    async def delete(self, menu_item_id: int) -> None:
        pass


class CartItemRepository(ABC):
    @abstractmethod
    async def create(self, customer_id: int, item_name: str, item_price: Decimal, quantity: int) -> CartItem:
        pass

    @abstractmethod
    async def list_by_customer(self, customer_id: int) -> List[CartItem]:
        pass

    @abstractmethod
    async def list_by_orders(self, order_ids: Iterable[int]) -> List[CartItem]:
        pass

    @abstractmethod
    async def attach_to_order(self, item_ids: List[int], order_id: int, status: OrderStatus) -> None:
        pass

    @abstractmethod
    async def update_status_by_order(self, order_id: int, status: OrderStatus) -> None:
        pass


class OrderRepository(ABC):
    @abstractmethod
    async def get_by_id(self, order_id: int) -> Optional[Order]:
        pass

    @abstractmethod
    async def create(self, customer_id: int, status: OrderStatus) -> Order:
        pass

    @abstractmethod
    async def list_by_customer(self, customer_id: int, statuses: Iterable[OrderStatus]) -> List[Order]:
        pass

    @abstractmethod
    async def list_by_status(self, status: OrderStatus) -> List[Order]:
        pass

    @abstractmethod
    async def count_customers_by_status(self, status: OrderStatus) -> int:
        pass

    @abstractmethod
    async def update_status(self, order_id: int, status: OrderStatus) -> None:
        pass

    @abstractmethod
    async def touch(self, order_id: int) -> None:
        pass


class UnitOfWork(ABC):
    @property
    @abstractmethod
    def customers(self) -> CustomerRepository:
        pass

    @property
    @abstractmethod
    def menu_items(self) -> MenuItemRepository:
        pass

    @property
    @abstractmethod
    def cart_items(self) -> CartItemRepository:
        pass

    @property
    @abstractmethod
    def orders(self) -> OrderRepository:
        pass

    @abstractmethod
    async def __call__(self):
        pass

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass
