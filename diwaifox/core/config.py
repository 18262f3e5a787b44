"""Настройки приложения, читаются из окружения и .env файла."""

from typing import Dict, List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Конфигурация сервиса.
    Все значения можно переопределить переменными окружения с тем же именем.
    """
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    APP_NAME: str = "Diwai Fox Taxi Service API"
    APP_VERSION: str = "1.0.0"

    # Токены
    JWT_SECRET: str = "your-secret-key-change-in-production"
    JWT_ALGORITHM: str = "HS256"
    BCRYPT_ROUNDS: int = 10

    # Хранилище: без DATABASE_URL данные живут только в памяти процесса
    DATABASE_URL: Optional[str] = None
    DATABASE_ECHO: bool = False
    DATABASE_AUTO_CREATE: bool = True

    # Администратор по умолчанию
    SEED_ADMIN: bool = True
    ADMIN_EMAIL: str = "admin@diwaifox.com"
    ADMIN_PASSWORD: str = "admin123"
    ADMIN_NAME: str = "Admin"
    ADMIN_PHONE: str = "+675-1234-5678"

    CORS_ORIGINS: List[str] = ["*"]

    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - [%(request_id)s] %(message)s"

    # Тарифы
    BASE_FARE: float = 5.0
    PER_KM_RATES: Dict[str, float] = {"sedan": 2.0, "suv": 3.0}
    DEFAULT_PER_KM_RATE: float = 1.5
    MIN_DISTANCE_KM: float = 2.0
    MAX_DISTANCE_KM: float = 22.0
    MIN_ETA_MIN: int = 5
    MAX_ETA_MIN: int = 20

    @property
    def uses_database(self) -> bool:
        return bool(self.DATABASE_URL)


settings = Settings()
