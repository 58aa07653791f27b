import logging

from restaurant.domain.models import OrderSnapshot, OrderStatus
from restaurant.domain.exceptions import EmptyCartError
from restaurant.application.guards import require_customer
from restaurant.application.interfaces import UnitOfWork


logger = logging.getLogger(__name__)


class PlaceOrderUseCase:
    def __init__(self, unit_of_work: UnitOfWork):
        self._uow = unit_of_work

    async def __call__(self, customer_id: int) -> OrderSnapshot:
        logger.info(f"Оформление заказа для клиента {customer_id}")

        async with self._uow() as uow:
            customer = await require_customer(uow, customer_id)

            # 1. Текущий Pending заказ переиспользуется (идемпотентность)
            pending = await uow.orders.list_by_customer(customer.id, [OrderStatus.PENDING])
            order = pending[0] if pending else None

            # 2. Позиции корзины, которые войдут в заказ
            items = await uow.cart_items.list_by_customer(customer.id)
            to_attach = [item for item in items if item.is_in_cart()]
            already_ordered = [item for item in items if order and item.order_id == order.id]
            if not to_attach and not already_ordered:
                raise EmptyCartError(customer.id)

            # 3. Создание заказа и привязка позиций
            if order is None:
                order = await uow.orders.create(customer.id, OrderStatus.PENDING)
                logger.info(f"Создан заказ {order.id} для клиента {customer.id}")
            elif to_attach:
                await uow.orders.touch(order.id)
                logger.info(f"В заказ {order.id} добавлено позиций: {len(to_attach)}")
            else:
                logger.info(f"Заказ {order.id} уже оформлен, новых позиций нет")

            await uow.cart_items.attach_to_order([item.id for item in to_attach], order.id, OrderStatus.PENDING)
            order_items = await uow.cart_items.list_by_orders([order.id])
            await uow.commit()

        return OrderSnapshot.build(customer, order_items, OrderStatus.PENDING, order.id)
