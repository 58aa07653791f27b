from decimal import Decimal

import httpx
import pytest
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from restaurant.database import get_db
from restaurant.infrastructure.db_schema import metadata
from restaurant.infrastructure.unit_of_work import UnitOfWork
from restaurant.main import app


@pytest.fixture
async def session_factory():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)
    yield async_sessionmaker(engine, expire_on_commit=False)
    await engine.dispose()


@pytest.fixture
def uow(session_factory):
    return UnitOfWork(session_factory)


@pytest.fixture
async def client(session_factory):
    async def override_get_db():
        async with session_factory() as db:
            yield db

    app.dependency_overrides[get_db] = override_get_db
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def seed(uow):
    """Создание клиентов и корзин напрямую через репозитории"""

    class Seeder:
        async def customer(self, name="Alice"):
            async with uow() as u:
                customer = await u.customers.create(name)
                await u.commit()
            return customer

        async def menu_item(self, name="Pad Thai", price="120.00", active=True):
            async with uow() as u:
                menu_item = await u.menu_items.create(name, Decimal(price), "Main", None, active)
                await u.commit()
            return menu_item

        async def cart_item(self, customer, name="Pad Thai", price="120.00", quantity=1):
            async with uow() as u:
                item = await u.cart_items.create(customer.id, name, Decimal(price), quantity)
                await u.commit()
            return item

    return Seeder()
