from contextlib import asynccontextmanager

from fastapi import FastAPI

# Подгружаем настройки ПЕРВЫМИ
from cacheable_flash.config import settings

from cacheable_flash.api import pages
from cacheable_flash.logger import log_action, log_error, setup_logging
from cacheable_flash.middleware import CacheableFlashMiddleware

# Логи настраивает приложение, а не библиотека
setup_logging()

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Управление жизненным циклом приложения"""
    try:
        log_action(
            "SYSTEM",
            "STARTUP",
            f"Кука: {settings.FLASH_COOKIE_NAME}, стэкинг: {settings.FLASH_STACKING} ({settings.FLASH_APPEND_AS})",
        )
    except Exception as e:
        log_error("STARTUP", str(e))
    yield

app = FastAPI(title=settings.PROJECT_NAME, version=settings.VERSION, lifespan=lifespan)

# Флеш пишется в куку после КАЖДОГО роута
app.add_middleware(CacheableFlashMiddleware)

# --- РОУТЕРЫ ---
app.include_router(pages.router, tags=["Pages"])
