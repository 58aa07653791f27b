from restaurant.domain.models import Customer, OrderStatus, TRACKED_STATUSES, parse_status
from restaurant.domain.exceptions import CustomerNotFoundError, InvalidArgumentError


async def require_customer(uow, customer_id: int) -> Customer:
    customer = await uow.customers.get_by_id(customer_id)
    if not customer:
        raise CustomerNotFoundError(f"Клиент {customer_id} не найден")
    return customer


def require_status(value) -> OrderStatus:
    """Один из четырех отслеживаемых статусов, иначе InvalidArgumentError"""
    status = parse_status(value)
    if status is None or status not in TRACKED_STATUSES:
        raise InvalidArgumentError(f"Недопустимый статус: {value}")
    return status
