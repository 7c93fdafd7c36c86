from typing import Any
from urllib.parse import unquote

from fastapi import Request

from cacheable_flash.config import settings
from cacheable_flash.cookie import load_flash_cookie


class FlashNotConfiguredError(RuntimeError):
    """Флеш пытаются использовать, а CacheableFlashMiddleware не подключен."""


def get_flash(request: Request) -> dict:
    """Флеш текущего запроса (его создает middleware перед вызовом роута)."""
    store = getattr(request.state, "flash", None)
    if store is None:
        raise FlashNotConfiguredError(
            "Нет request.state.flash: добавь app.add_middleware(CacheableFlashMiddleware)"
        )
    return store

def flash(request: Request, message: Any, category: str = "notice"):
    """
    Кладет сообщение во флеш. В куку оно попадет после ответа.
    Категории: 'notice', 'errors', 'alert' или любая своя.
    """
    store = get_flash(request)
    stacking = getattr(request.state, "flash_stacking", settings.FLASH_STACKING)
    if stacking and category in store:
        previous = store[category]
        if not isinstance(previous, list):
            previous = [previous]
        store[category] = previous + [message]
    else:
        store[category] = message

def get_flashed_messages(request: Request) -> dict:
    """Читает флеш из пришедшей куки (для страниц, которые не кешируются)."""
    raw = request.cookies.get(settings.FLASH_COOKIE_NAME)
    if not raw:
        return {}
    return load_flash_cookie(unquote(raw))
