import logging
import os
from typing import Optional

from cacheable_flash.config import settings

logger = logging.getLogger("CacheableFlash")

def setup_logging(log_dir: Optional[str] = None):
    """
    Настройка основного конфига: файл + консоль.
    Вызывает приложение (main.py), а не сама библиотека при импорте.
    """
    log_dir = log_dir or settings.LOG_DIR
    # Создаем папку для логов, если её нет
    if not os.path.exists(log_dir):
        os.makedirs(log_dir)

    # Хозяин уже настроил логирование (uvicorn, pytest), не мешаем
    if logging.getLogger().handlers:
        return

    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
        format='%(asctime)s - [%(levelname)s] - %(message)s',
        handlers=[
            logging.FileHandler(os.path.join(log_dir, "access.log"), encoding='utf-8'),
            logging.StreamHandler()
        ]
    )

def log_action(source: str, action: str, details: str):
    """
    Логирует обычные события: старт приложения, запись флеша в куку.
    """
    logger.info(f"🔹 SOURCE: {source} | ⚡ ACTION: {action} | 📝 DETAILS: {details}")

def log_warning(context: str, message: str):
    """Что-то пошло не так, но мы справились сами (например, битая кука)."""
    logger.warning(f"⚠️ WARNING in {context}: {message}")

def log_error(context: str, message: str):
    """
    Отдельный метод для записи ошибок сервера.
    """
    logger.error(f"❌ ERROR in {context}: {message}")
