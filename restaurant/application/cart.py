import logging
from typing import List
from pydantic import BaseModel

from restaurant.domain.models import CartItem
from restaurant.domain.exceptions import MenuItemNotFoundError, InvalidArgumentError
from restaurant.application.guards import require_customer
from restaurant.application.interfaces import UnitOfWork

logger = logging.getLogger(__name__)


class AddCartItemDTO(BaseModel):
    customer_id: int
    menu_item_id: int
    quantity: int = 1


class AddCartItemUseCase:
    def __init__(self, unit_of_work: UnitOfWork):
        self._uow = unit_of_work

    async def __call__(self, dto: AddCartItemDTO) -> CartItem:
        if dto.quantity < 1:
            raise InvalidArgumentError(f"Количество должно быть положительным: {dto.quantity}")

        async with self._uow() as uow:
            customer = await require_customer(uow, dto.customer_id)
            menu_item = await uow.menu_items.get_by_id(dto.menu_item_id)
            if not menu_item or not menu_item.active:
                raise MenuItemNotFoundError(f"Позиция меню {dto.menu_item_id} не найдена")

            cart_item = await uow.cart_items.create(
                customer_id=customer.id,
                item_name=menu_item.name,
                item_price=menu_item.price,
                quantity=dto.quantity
            )
            await uow.commit()

        logger.info(f"Клиент {customer.id} добавил в корзину {menu_item.name} x{dto.quantity}")
        return cart_item


class GetCartUseCase:
    def __init__(self, unit_of_work: UnitOfWork):
        self._uow = unit_of_work

    async def __call__(self, customer_id: int) -> List[CartItem]:
        async with self._uow() as uow:
            customer = await require_customer(uow, customer_id)
            items = await uow.cart_items.list_by_customer(customer.id)
            return [item for item in items if item.is_in_cart()]
