import logging
from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel

from restaurant.domain.models import MenuItem
from restaurant.domain.exceptions import InvalidArgumentError, MenuItemNotFoundError
from restaurant.application.interfaces import UnitOfWork

logger = logging.getLogger(__name__)


class CreateMenuItemDTO(BaseModel):
    name: str
    price: Decimal
    category: Optional[str] = None
    description: Optional[str] = None
    active: bool = True


class CreateMenuItemUseCase:
    def __init__(self, unit_of_work: UnitOfWork):
        self._uow = unit_of_work

    async def __call__(self, dto: CreateMenuItemDTO) -> MenuItem:
        if dto.price < 0:
            raise InvalidArgumentError(f"Цена не может быть отрицательной: {dto.price}")
        async with self._uow() as uow:
            menu_item = await uow.menu_items.create(
                name=dto.name,
                price=dto.price,
                category=dto.category,
                description=dto.description,
                active=dto.active
            )
            await uow.commit()
        logger.info(f"Добавлена позиция меню {menu_item.id}: {menu_item.name}")
        return menu_item


class ListMenuUseCase:
    def __init__(self, unit_of_work: UnitOfWork):
        self._uow = unit_of_work

    async def __call__(self) -> List[MenuItem]:
        async with self._uow() as uow:
            return await uow.menu_items.list_active()


class UpdateMenuItemUseCase:
    def __init__(self, unit_of_work: UnitOfWork):
        self._uow = unit_of_work

    async def __call__(self, menu_item_id: int, dto: CreateMenuItemDTO) -> MenuItem:
        if dto.price < 0:
            raise InvalidArgumentError(f"Цена не может быть отрицательной: {dto.price}")
        async with self._uow() as uow:
            existing = await uow.menu_items.get_by_id(menu_item_id)
            if not existing:
                raise MenuItemNotFoundError(f"Позиция меню {menu_item_id} не найдена")
            menu_item = MenuItem(id=existing.id, **dto.model_dump())
            await uow.menu_items.update(menu_item)
            await uow.commit()
        logger.info(f"Обновлена позиция меню {menu_item.id}")
        return menu_item


class DeleteMenuItemUseCase:
    """Удаление позиции меню; позиции корзин хранят копию названия и цены"""

    def __init__(self, unit_of_work: UnitOfWork):
        self._uow = unit_of_work

    async def __call__(self, menu_item_id: int) -> None:
        async with self._uow() as uow:
            if not await uow.menu_items.get_by_id(menu_item_id):
                raise MenuItemNotFoundError(f"Позиция меню {menu_item_id} не найдена")
            await uow.menu_items.delete(menu_item_id)
            await uow.commit()
        logger.info(f"Удалена позиция меню {menu_item_id}")
