# restaurant/main.py
from fastapi import FastAPI
from contextlib import asynccontextmanager
from restaurant.presentation.api import router
from restaurant.database import engine
from restaurant.infrastructure.db_schema import metadata
from restaurant.config import settings
import logging

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Управление жизненным циклом приложения"""
    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)
    logger.info("Таблицы созданы")

    yield

    logger.info("Приложение останавливается...")
    await engine.dispose()


app = FastAPI(
    title="Restaurant Order Service",
    description="Сервис заказов ресторана",
    version="1.0.0",
    lifespan=lifespan
)

app.include_router(router, prefix="/api")


@app.get("/")
async def root():
    return {"message": "Restaurant Order Service работает"}


@app.get("/health")
async def health():
    return {"status": "healthy"}
