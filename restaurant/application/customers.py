import logging

from restaurant.domain.models import Customer
from restaurant.domain.exceptions import InvalidArgumentError
from restaurant.application.interfaces import UnitOfWork

logger = logging.getLogger(__name__)


class RegisterCustomerUseCase:
    def __init__(self, unit_of_work: UnitOfWork):
        self._uow = unit_of_work

    async def __call__(self, name: str) -> Customer:
        if not name or not name.strip():
            raise InvalidArgumentError("Имя клиента не может быть пустым")
        async with self._uow() as uow:
            customer = await uow.customers.create(name.strip())
            await uow.commit()
        logger.info(f"Зарегистрирован клиент {customer.id}")
        return customer
