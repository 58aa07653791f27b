from contextlib import asynccontextmanager
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from restaurant.infrastructure.repositories import (
    SQLAlchemyCustomerRepository,
    SQLAlchemyMenuItemRepository,
    SQLAlchemyCartItemRepository,
    SQLAlchemyOrderRepository
)


class UnitOfWork:
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    @asynccontextmanager
    async def __call__(self):
        async with self._session_factory() as session:
            try:
                yield _UnitOfWorkImpl(session)
                # Если commit не вызван — rollback
                await session.rollback()
            except Exception:
                await session.rollback()
                raise


class _UnitOfWorkImpl:
    def __init__(self, session: AsyncSession):
        self._session = session
        self.customers = SQLAlchemyCustomerRepository(session)
        self.menu_items = SQLAlchemyMenuItemRepository(session)
        self.cart_items = SQLAlchemyCartItemRepository(session)
        self.orders = SQLAlchemyOrderRepository(session)

    async def commit(self):
        await self._session.commit()

    async def rollback(self):
        await self._session.rollback()
