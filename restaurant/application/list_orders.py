import logging
from collections import defaultdict
from typing import List

from restaurant.domain.models import OrderSnapshot
from restaurant.application.guards import require_status
from restaurant.application.interfaces import UnitOfWork

logger = logging.getLogger(__name__)


class ListOrdersByStatusUseCase:
    """Заказы всех клиентов в заданном статусе, по одному снимку на клиента"""

    def __init__(self, unit_of_work: UnitOfWork):
        self._uow = unit_of_work

    async def __call__(self, status: str) -> List[OrderSnapshot]:
        order_status = require_status(status)

        async with self._uow() as uow:
            orders = await uow.orders.list_by_status(order_status)
            if not orders:
                return []
            items = await uow.cart_items.list_by_orders(order.id for order in orders)
            customers = await uow.customers.get_many(order.customer_id for order in orders)

        items_by_order = defaultdict(list)
        for item in items:
            items_by_order[item.order_id].append(item)

        # orders отсортированы по created_at, порядок групп сохраняется
        orders_by_customer = defaultdict(list)
        for order in orders:
            orders_by_customer[order.customer_id].append(order)

        snapshots = []
        for customer_id, customer_orders in orders_by_customer.items():
            customer_items = [item for order in customer_orders for item in items_by_order[order.id]]
            latest = max(customer_orders, key=lambda o: (o.updated_at, o.id))
            snapshots.append(
                OrderSnapshot.build(customers[customer_id], customer_items, order_status, latest.id)
            )

        logger.info(f"Заказов в статусе {order_status.value}: {len(snapshots)}")
        return snapshots


class CountOrdersByStatusUseCase:
    """Количество клиентов (не позиций) с заказом в заданном статусе"""

    def __init__(self, unit_of_work: UnitOfWork):
        self._uow = unit_of_work

    async def __call__(self, status: str) -> int:
        order_status = require_status(status)
        async with self._uow() as uow:
            return await uow.orders.count_customers_by_status(order_status)
