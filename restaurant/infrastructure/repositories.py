from decimal import Decimal
from typing import Optional, List, Dict, Iterable
from datetime import datetime, timezone
from sqlalchemy import select, insert, update, delete, func
from sqlalchemy.ext.asyncio import AsyncSession

from restaurant.domain.models import Customer, MenuItem, CartItem, Order, OrderStatus, CART_STATUS
from restaurant.infrastructure.db_schema import customers_tbl, menu_items_tbl, cart_items_tbl, orders_tbl
from restaurant.application.interfaces import (
    CustomerRepository, MenuItemRepository, CartItemRepository, OrderRepository
)


def _utc(value: datetime) -> datetime:
    # SQLite отдает naive datetime даже для DateTime(timezone=True)
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class SQLAlchemyCustomerRepository(CustomerRepository):
    def __init__(self, session: AsyncSession):
        self._session = session

    async def get_by_id(self, customer_id: int) -> Optional[Customer]:
        result = await self._session.execute(
            select(customers_tbl).where(customers_tbl.c.id == customer_id)
        )
        row = result.fetchone()
        return self._to_domain(row) if row else None

    async def get_many(self, customer_ids: Iterable[int]) -> Dict[int, Customer]:
        ids = set(customer_ids)
        if not ids:
            return {}
        result = await self._session.execute(
            select(customers_tbl).where(customers_tbl.c.id.in_(ids))
        )
        return {row.id: self._to_domain(row) for row in result.fetchall()}

    async def create(self, name: str) -> Customer:
        result = await self._session.execute(insert(customers_tbl).values(name=name))
        return Customer(id=result.inserted_primary_key[0], name=name)

    def _to_domain(self, row) -> Customer:
        return Customer(id=row.id, name=row.name)


class SQLAlchemyMenuItemRepository(MenuItemRepository):
    def __init__(self, session: AsyncSession):
        self._session = session

    async def get_by_id(self, menu_item_id: int) -> Optional[MenuItem]:
        result = await self._session.execute(
            select(menu_items_tbl).where(menu_items_tbl.c.id == menu_item_id)
        )
        row = result.fetchone()
        return self._to_domain(row) if row else None

    async def list_active(self) -> List[MenuItem]:
        result = await self._session.execute(
            select(menu_items_tbl)
            .where(menu_items_tbl.c.active.is_(True))
            .order_by(menu_items_tbl.c.category, menu_items_tbl.c.name)
        )
        return [self._to_domain(row) for row in result.fetchall()]

    async def create(self, name: str, price: Decimal, category: Optional[str],
                     description: Optional[str], active: bool = True) -> MenuItem:
        result = await self._session.execute(
            insert(menu_items_tbl).values(
                name=name,
                price=price,
                category=category,
                description=description,
                active=active
            )
        )
        return MenuItem(
            id=result.inserted_primary_key[0],
            name=name,
            price=price,
            category=category,
            description=description,
            active=active
        )

    async def update(self, menu_item: MenuItem) -> None:
        stmt = (
            update(menu_items_tbl)
            .where(menu_items_tbl.c.id == menu_item.id)
            .values(
                name=menu_item.name,
                price=menu_item.price,
                category=menu_item.category,
                description=menu_item.description,
                active=menu_item.active
            )
        )
        await self._session.execute(stmt)

    async def delete(self, menu_item_id: int) -> None:
        await self._session.execute(
            delete(menu_items_tbl).where(menu_items_tbl.c.id == menu_item_id)
        )

    def _to_domain(self, row) -> MenuItem:
        return MenuItem(
            id=row.id,
            name=row.name,
            price=row.price,
            category=row.category,
            description=row.description,
            active=row.active
        )


class SQLAlchemyCartItemRepository(CartItemRepository):
    def __init__(self, session: AsyncSession):
        self._session = session

    async def create(self, customer_id: int, item_name: str, item_price: Decimal, quantity: int) -> CartItem:
        now = datetime.now(timezone.utc)
        result = await self._session.execute(
            insert(cart_items_tbl).values(
                customer_id=customer_id,
                item_name=item_name,
                item_price=item_price,
                quantity=quantity,
                status=CART_STATUS,
                created_at=now,
                updated_at=now
            )
        )
        return CartItem(
            id=result.inserted_primary_key[0],
            customer_id=customer_id,
            item_name=item_name,
            item_price=item_price,
            quantity=quantity,
            status=CART_STATUS,
            created_at=now,
            updated_at=now
        )

    async def list_by_customer(self, customer_id: int) -> List[CartItem]:
        result = await self._session.execute(
            select(cart_items_tbl)
            .where(cart_items_tbl.c.customer_id == customer_id)
            .order_by(cart_items_tbl.c.id)
        )
        return [self._to_domain(row) for row in result.fetchall()]

    async def list_by_orders(self, order_ids: Iterable[int]) -> List[CartItem]:
        ids = set(order_ids)
        if not ids:
            return []
        result = await self._session.execute(
            select(cart_items_tbl)
            .where(cart_items_tbl.c.order_id.in_(ids))
            .order_by(cart_items_tbl.c.id)
        )
        return [self._to_domain(row) for row in result.fetchall()]

    async def attach_to_order(self, item_ids: List[int], order_id: int, status: OrderStatus) -> None:
        if not item_ids:
            return
        stmt = (
            update(cart_items_tbl)
            .where(cart_items_tbl.c.id.in_(item_ids))
            .values(
                order_id=order_id,
                status=status.value,
                updated_at=datetime.now(timezone.utc)
            )
        )
        await self._session.execute(stmt)

    async def update_status_by_order(self, order_id: int, status: OrderStatus) -> None:
        stmt = (
            update(cart_items_tbl)
            .where(cart_items_tbl.c.order_id == order_id)
            .values(
                status=status.value,
                updated_at=datetime.now(timezone.utc)
            )
        )
        await self._session.execute(stmt)

    def _to_domain(self, row) -> CartItem:
        """Трансформация DB → Domain"""
        return CartItem(
            id=row.id,
            customer_id=row.customer_id,
            order_id=row.order_id,
            item_name=row.item_name,
            item_price=row.item_price,
            quantity=row.quantity,
            status=row.status,
            created_at=_utc(row.created_at),
            updated_at=_utc(row.updated_at)
        )


class SQLAlchemyOrderRepository(OrderRepository):
    def __init__(self, session: AsyncSession):
        self._session = session

    async def get_by_id(self, order_id: int) -> Optional[Order]:
        result = await self._session.execute(
            select(orders_tbl).where(orders_tbl.c.id == order_id)
        )
        row = result.fetchone()
        return self._to_domain(row) if row else None

    async def create(self, customer_id: int, status: OrderStatus) -> Order:
        now = datetime.now(timezone.utc)
        result = await self._session.execute(
            insert(orders_tbl).values(
                customer_id=customer_id,
                status=status,
                created_at=now,
                updated_at=now
            )
        )
        return Order(
            id=result.inserted_primary_key[0],
            customer_id=customer_id,
            status=status,
            created_at=now,
            updated_at=now
        )

    async def list_by_customer(self, customer_id: int, statuses: Iterable[OrderStatus]) -> List[Order]:
        """Заказы клиента, самые свежие первыми"""
        result = await self._session.execute(
            select(orders_tbl)
            .where(
                orders_tbl.c.customer_id == customer_id,
                orders_tbl.c.status.in_(list(statuses))
            )
            .order_by(orders_tbl.c.updated_at.desc(), orders_tbl.c.id.desc())
        )
        return [self._to_domain(row) for row in result.fetchall()]

    async def list_by_status(self, status: OrderStatus) -> List[Order]:
        result = await self._session.execute(
            select(orders_tbl)
            .where(orders_tbl.c.status == status)
            .order_by(orders_tbl.c.created_at.asc(), orders_tbl.c.id.asc())
        )
        return [self._to_domain(row) for row in result.fetchall()]

    async def count_customers_by_status(self, status: OrderStatus) -> int:
        result = await self._session.execute(
            select(func.count(orders_tbl.c.customer_id.distinct()))
            .where(orders_tbl.c.status == status)
        )
        return result.scalar_one()

    async def update_status(self, order_id: int, status: OrderStatus) -> None:
        stmt = (
            update(orders_tbl)
            .where(orders_tbl.c.id == order_id)
            .values(
                status=status,
                updated_at=datetime.now(timezone.utc)
            )
        )
        await self._session.execute(stmt)

    async def touch(self, order_id: int) -> None:
        stmt = (
            update(orders_tbl)
            .where(orders_tbl.c.id == order_id)
            .values(updated_at=datetime.now(timezone.utc))
        )
        await self._session.execute(stmt)

    def _to_domain(self, row) -> Order:
        """Трансформация DB → Domain"""
        return Order(
            id=row.id,
            customer_id=row.customer_id,
            status=OrderStatus(row.status),
            created_at=_utc(row.created_at),
            updated_at=_utc(row.updated_at)
        )
