import os
from dotenv import load_dotenv

load_dotenv()


class Settings:
    # Database
    POSTGRES_CONNECTION_STRING: str = os.getenv(
        "POSTGRES_CONNECTION_STRING", "sqlite+aiosqlite:///./restaurant.db"
    )

    # API
    SERVICE_URL: str = os.getenv("SERVICE_URL", "http://localhost:8000")

    # Polling
    ORDER_POLL_INTERVAL_SECONDS: float = float(os.getenv("ORDER_POLL_INTERVAL_SECONDS", "8"))

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    @property
    def DATABASE_URL(self) -> str:
        """Асинхронный URL для приложения"""
        return self.POSTGRES_CONNECTION_STRING.replace("postgres://", "postgresql+asyncpg://")

    @property
    def SYNC_DATABASE_URL(self) -> str:
        """Синхронный URL для Alembic"""
        return (
            self.POSTGRES_CONNECTION_STRING
            .replace("postgres://", "postgresql://")
            .replace("postgresql+asyncpg://", "postgresql://")
            .replace("sqlite+aiosqlite://", "sqlite://")
        )


settings = Settings()
