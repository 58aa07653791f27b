from sqlalchemy import (
    Table, Column, String, Integer, Numeric, Boolean, Enum, DateTime, ForeignKey, MetaData
)
from sqlalchemy.sql import func

from restaurant.domain.models import OrderStatus

metadata = MetaData()


customers_tbl = Table(
    "customers",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String, nullable=False),
    Column("created_at", DateTime(timezone=True), server_default=func.now())
)


menu_items_tbl = Table(
    "menu_items",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String, nullable=False),
    Column("price", Numeric(10, 2), nullable=False),
    Column("category", String, nullable=True),
    Column("description", String, nullable=True),
    Column("active", Boolean, nullable=False, default=True)
)


orders_tbl = Table(
    "orders",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("customer_id", Integer, ForeignKey("customers.id"), nullable=False, index=True),
    Column(
        "status",
        Enum(
            OrderStatus,
            name="order_status",
            native_enum=False,
            values_callable=lambda statuses: [s.value for s in statuses]
        ),
        nullable=False,
        default=OrderStatus.PENDING,
        index=True
    ),
    Column("created_at", DateTime(timezone=True), server_default=func.now()),
    Column("updated_at", DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
)


cart_items_tbl = Table(
    "cart_items",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("customer_id", Integer, ForeignKey("customers.id"), nullable=False, index=True),
    Column("order_id", Integer, ForeignKey("orders.id"), nullable=True, index=True),
    Column("item_name", String, nullable=False),
    Column("item_price", Numeric(10, 2), nullable=False),
    Column("quantity", Integer, nullable=False),
    # None / "Cart" до оформления, далее совпадает со статусом заказа
    Column("status", String(20), nullable=True),
    Column("created_at", DateTime(timezone=True), server_default=func.now()),
    Column("updated_at", DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
)
