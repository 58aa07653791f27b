class DomainException(Exception):
    pass


class NotFoundError(DomainException):
    pass


class CustomerNotFoundError(NotFoundError):
    pass


class MenuItemNotFoundError(NotFoundError):
    pass


class OrderNotFoundError(NotFoundError):
    pass


class InvalidArgumentError(DomainException):
    pass


class InvalidStatusTransitionError(InvalidArgumentError):
    def __init__(self, current, new):
        self.current = current
        self.new = new
        super().__init__(f"Недопустимый переход статуса: {current} -> {new}")


class InvalidStateError(DomainException):
    pass


class EmptyCartError(InvalidStateError):
    def __init__(self, customer_id: int):
        self.customer_id = customer_id
        super().__init__(f"Корзина пуста. Невозможно оформить заказ для клиента {customer_id}")
