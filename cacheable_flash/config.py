import os
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

# Имя env-файла определяем ДО класса
app_mode = os.getenv("APP_MODE", "dev")  # берем из системы или ставим 'dev'
env_file_name = f".env.{app_mode}"


class Settings(BaseSettings):
    # Основное
    PROJECT_NAME: str = "CacheableFlash"
    VERSION: str = "0.1.0"
    ENVIRONMENT: str = "development"

    # Кука с флешем (ее читает JS на закешированной странице, поэтому НЕ httponly)
    FLASH_COOKIE_NAME: str = "flash"
    FLASH_COOKIE_PATH: str = "/"
    FLASH_COOKIE_MAX_AGE: Optional[int] = None  # None = сессионная кука
    FLASH_COOKIE_SAMESITE: str = "lax"

    # Стэкинг: что делать, если под одним ключом уже есть сообщение.
    # False = новое значение перезаписывает старое.
    FLASH_STACKING: bool = False
    # br, array, p, ul, ol (игнорируется, если FLASH_STACKING = False)
    FLASH_APPEND_AS: str = "br"

    # True = числа уходят в куку строкой ("5"), как это делал Rails
    FLASH_STRINGIFY_NUMBERS: bool = False

    # Логи
    LOG_DIR: str = "logs"
    LOG_LEVEL: str = "INFO"

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() == "production"

    model_config = SettingsConfigDict(
        env_file=env_file_name,
        env_file_encoding='utf-8',
        extra='ignore'
    )

# Создаем экземпляр для импорта в другие модули
settings = Settings()
