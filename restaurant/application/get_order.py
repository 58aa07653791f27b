from restaurant.domain.models import OrderSnapshot, TRACKED_STATUSES
from restaurant.application.guards import require_customer
from restaurant.application.interfaces import UnitOfWork


class GetLatestOrderUseCase:
    """Последний заказ клиента, или пустая заглушка со статусом Pending"""

    def __init__(self, unit_of_work: UnitOfWork):
        self._uow = unit_of_work

    async def __call__(self, customer_id: int) -> OrderSnapshot:
        async with self._uow() as uow:
            customer = await require_customer(uow, customer_id)
            orders = await uow.orders.list_by_customer(customer.id, TRACKED_STATUSES)
            if not orders:
                return OrderSnapshot.empty(customer)

            latest = orders[0]
            items = await uow.cart_items.list_by_orders([latest.id])
            return OrderSnapshot.build(customer, items, latest.status, latest.id)
