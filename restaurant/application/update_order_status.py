import logging
from typing import Optional
from pydantic import BaseModel

from restaurant.domain.models import OrderSnapshot, OrderStatus, TRACKED_STATUSES, parse_status
from restaurant.domain.exceptions import (
    InvalidArgumentError, InvalidStatusTransitionError, OrderNotFoundError
)
from restaurant.application.guards import require_customer
from restaurant.application.interfaces import UnitOfWork

logger = logging.getLogger(__name__)

ACTIVE_STATUSES = (OrderStatus.PENDING, OrderStatus.IN_PROGRESS)


class UpdateOrderStatusDTO(BaseModel):
    customer_id: int
    new_status: str
    order_id: Optional[int] = None


class UpdateOrderStatusUseCase:
    def __init__(self, unit_of_work: UnitOfWork):
        self._uow = unit_of_work

    async def __call__(self, dto: UpdateOrderStatusDTO) -> OrderSnapshot:
        logger.info(f"Смена статуса заказа клиента {dto.customer_id} на {dto.new_status}")

        new_status = parse_status(dto.new_status)
        if new_status is None:
            raise InvalidArgumentError(f"Недопустимый статус: {dto.new_status}")

        async with self._uow() as uow:
            customer = await require_customer(uow, dto.customer_id)
            order = await self._find_target_order(uow, customer.id, dto.order_id)

            if not order.can_transition_to(new_status):
                logger.warning(
                    f"Заказ {order.id}: переход {order.status.value} -> {new_status.value} отклонен"
                )
                raise InvalidStatusTransitionError(order.status.value, new_status.value)

            # Статус меняется только у позиций этого заказа
            await uow.orders.update_status(order.id, new_status)
            await uow.cart_items.update_status_by_order(order.id, new_status)
            items = await uow.cart_items.list_by_orders([order.id])
            await uow.commit()

        logger.info(f"Заказ {order.id} отмечен {new_status.value}")
        return OrderSnapshot.build(customer, items, new_status, order.id)

    async def _find_target_order(self, uow, customer_id: int, order_id: Optional[int]):
        if order_id is not None:
            order = await uow.orders.get_by_id(order_id)
            if not order or order.customer_id != customer_id:
                raise OrderNotFoundError(f"Заказ {order_id} клиента {customer_id} не найден")
            return order

        # Без order_id: самый старый активный заказ (очередь кухни)
        active = await uow.orders.list_by_customer(customer_id, ACTIVE_STATUSES)
        if active:
            return min(active, key=lambda o: (o.created_at, o.id))

        # Иначе последний завершенный, переход из него будет отклонен
        orders = await uow.orders.list_by_customer(customer_id, TRACKED_STATUSES)
        if not orders:
            raise OrderNotFoundError(f"У клиента {customer_id} нет заказов")
        return orders[0]
