from typing import List
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from restaurant.database import get_db
from restaurant.presentation.schemas import (
    OrderResponse, OrderStatusUpdateRequest, CreateCustomerRequest,
    CustomerResponse, CreateMenuItemRequest, MenuItemResponse, AddCartItemRequest,
    CartItemResponse, ErrorResponse
)
from restaurant.application.place_order import PlaceOrderUseCase
from restaurant.application.get_order import GetLatestOrderUseCase
from restaurant.application.update_order_status import UpdateOrderStatusUseCase, UpdateOrderStatusDTO
from restaurant.application.list_orders import ListOrdersByStatusUseCase, CountOrdersByStatusUseCase
from restaurant.application.cart import AddCartItemUseCase, AddCartItemDTO, GetCartUseCase
from restaurant.application.menu import (
    CreateMenuItemUseCase, CreateMenuItemDTO, ListMenuUseCase, UpdateMenuItemUseCase, DeleteMenuItemUseCase
)
from restaurant.application.customers import RegisterCustomerUseCase
from restaurant.domain.exceptions import NotFoundError, InvalidArgumentError, InvalidStateError
from restaurant.infrastructure.unit_of_work import UnitOfWork

router = APIRouter()


# Фабрики для создания use cases
def get_unit_of_work(db: AsyncSession = Depends(get_db)):
    return UnitOfWork(lambda: db)


def get_place_order_use_case(uow: UnitOfWork = Depends(get_unit_of_work)):
    return PlaceOrderUseCase(uow)


def get_latest_order_use_case(uow: UnitOfWork = Depends(get_unit_of_work)):
    return GetLatestOrderUseCase(uow)


def get_update_status_use_case(uow: UnitOfWork = Depends(get_unit_of_work)):
    return UpdateOrderStatusUseCase(uow)


def get_list_orders_use_case(uow: UnitOfWork = Depends(get_unit_of_work)):
    return ListOrdersByStatusUseCase(uow)


def get_count_orders_use_case(uow: UnitOfWork = Depends(get_unit_of_work)):
    return CountOrdersByStatusUseCase(uow)


def get_add_cart_item_use_case(uow: UnitOfWork = Depends(get_unit_of_work)):
    return AddCartItemUseCase(uow)


def get_cart_use_case(uow: UnitOfWork = Depends(get_unit_of_work)):
    return GetCartUseCase(uow)


def get_create_menu_item_use_case(uow: UnitOfWork = Depends(get_unit_of_work)):
    return CreateMenuItemUseCase(uow)


def get_list_menu_use_case(uow: UnitOfWork = Depends(get_unit_of_work)):
    return ListMenuUseCase(uow)


def get_update_menu_item_use_case(uow: UnitOfWork = Depends(get_unit_of_work)):
    return UpdateMenuItemUseCase(uow)


def get_delete_menu_item_use_case(uow: UnitOfWork = Depends(get_unit_of_work)):
    return DeleteMenuItemUseCase(uow)


def get_register_customer_use_case(uow: UnitOfWork = Depends(get_unit_of_work)):
    return RegisterCustomerUseCase(uow)


@router.post(
    "/orders/customers/{customer_id}/place",
    response_model=OrderResponse,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
    status_code=status.HTTP_201_CREATED
)
async def place_order(
    customer_id: int,
    use_case: PlaceOrderUseCase = Depends(get_place_order_use_case)
):
    """Оформить заказ из корзины клиента"""
    try:
        snapshot = await use_case(customer_id)
        return OrderResponse.from_domain(snapshot)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except InvalidStateError as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.get(
    "/orders/customers/{customer_id}/pending-orders",
    response_model=OrderResponse,
    responses={404: {"model": ErrorResponse}}
)
async def get_latest_order(
    customer_id: int,
    use_case: GetLatestOrderUseCase = Depends(get_latest_order_use_case)
):
    """Последний заказ клиента (опрашивается клиентом каждые 8 секунд)"""
    try:
        snapshot = await use_case(customer_id)
        return OrderResponse.from_domain(snapshot)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.put(
    "/orders/customers/{customer_id}/status",
    response_model=OrderResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}}
)
async def update_order_status(
    customer_id: int,
    request: OrderStatusUpdateRequest,
    use_case: UpdateOrderStatusUseCase = Depends(get_update_status_use_case)
):
    """Сменить статус заказа клиента (сотрудник/менеджер)"""
    try:
        dto = UpdateOrderStatusDTO(
            customer_id=customer_id,
            new_status=request.status,
            order_id=request.order_id
        )
        snapshot = await use_case(dto)
        return OrderResponse.from_domain(snapshot)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except InvalidArgumentError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get(
    "/orders",
    response_model=List[OrderResponse],
    responses={400: {"model": ErrorResponse}}
)
async def list_orders_by_status(
    order_status: str = Query(..., alias="status"),
    use_case: ListOrdersByStatusUseCase = Depends(get_list_orders_use_case)
):
    """Заказы всех клиентов в статусе (для персонала)"""
    try:
        snapshots = await use_case(order_status)
        return [OrderResponse.from_domain(snapshot) for snapshot in snapshots]
    except InvalidArgumentError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get(
    "/orders/count",
    response_model=int,
    responses={400: {"model": ErrorResponse}}
)
async def count_orders_by_status(
    order_status: str = Query(..., alias="status"),
    use_case: CountOrdersByStatusUseCase = Depends(get_count_orders_use_case)
):
    """Количество заказов в статусе, для бейджа уведомлений"""
    try:
        return await use_case(order_status)
    except InvalidArgumentError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post(
    "/customers",
    response_model=CustomerResponse,
    responses={400: {"model": ErrorResponse}},
    status_code=status.HTTP_201_CREATED
)
async def register_customer(
    request: CreateCustomerRequest,
    use_case: RegisterCustomerUseCase = Depends(get_register_customer_use_case)
):
    try:
        customer = await use_case(request.name)
        return CustomerResponse(id=customer.id, name=customer.name)
    except InvalidArgumentError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/menu", response_model=List[MenuItemResponse])
async def list_menu(use_case: ListMenuUseCase = Depends(get_list_menu_use_case)):
    """Активные позиции меню"""
    menu_items = await use_case()
    return [MenuItemResponse.from_domain(menu_item) for menu_item in menu_items]


@router.post(
    "/menu",
    response_model=MenuItemResponse,
    responses={400: {"model": ErrorResponse}},
    status_code=status.HTTP_201_CREATED
)
async def create_menu_item(
    request: CreateMenuItemRequest,
    use_case: CreateMenuItemUseCase = Depends(get_create_menu_item_use_case)
):
    try:
        dto = CreateMenuItemDTO(**request.model_dump())
        menu_item = await use_case(dto)
        return MenuItemResponse.from_domain(menu_item)
    except InvalidArgumentError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.put(
    "/menu/{menu_item_id}",
    response_model=MenuItemResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}}
)
async def update_menu_item(
    menu_item_id: int,
    request: CreateMenuItemRequest,
    use_case: UpdateMenuItemUseCase = Depends(get_update_menu_item_use_case)
):
    """Изменить позицию меню; active=false скрывает ее из меню"""
    try:
        dto = CreateMenuItemDTO(**request.model_dump())
        menu_item = await use_case(menu_item_id, dto)
        return MenuItemResponse.from_domain(menu_item)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except InvalidArgumentError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.delete(
    "/menu/{menu_item_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse}}
)
async def delete_menu_item(
    menu_item_id: int,
    use_case: DeleteMenuItemUseCase = Depends(get_delete_menu_item_use_case)
):
    try:
        await use_case(menu_item_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post(
    "/carts/{customer_id}/items",
    response_model=CartItemResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
    status_code=status.HTTP_201_CREATED
)
async def add_cart_item(
    customer_id: int,
    request: AddCartItemRequest,
    use_case: AddCartItemUseCase = Depends(get_add_cart_item_use_case)
):
    """Добавить позицию меню в корзину"""
    try:
        dto = AddCartItemDTO(
            customer_id=customer_id,
            menu_item_id=request.menu_item_id,
            quantity=request.quantity
        )
        cart_item = await use_case(dto)
        return CartItemResponse.from_domain(cart_item)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except InvalidArgumentError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get(
    "/carts/{customer_id}",
    response_model=List[CartItemResponse],
    responses={404: {"model": ErrorResponse}}
)
async def get_cart(
    customer_id: int,
    use_case: GetCartUseCase = Depends(get_cart_use_case)
):
    """Позиции, еще не вошедшие в заказ"""
    try:
        cart_items = await use_case(customer_id)
        return [CartItemResponse.from_domain(cart_item) for cart_item in cart_items]
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
