"""
Помощники для тестов: достать флеш-куку из ответа TestClient и раскодировать.

    response = client.post("/notices", data={"message": "Готово"})
    assert flash_cookie(client)["notice"] == "Готово"
"""
from typing import Any, Optional
from urllib.parse import unquote

from cacheable_flash.config import settings
from cacheable_flash.cookie import load_flash_cookie


def decode_flash_cookie(wire_value: Optional[str]) -> dict:
    """Значение куки как оно пришло по HTTP -> словарь флеша."""
    if not wire_value:
        return {}
    return load_flash_cookie(unquote(wire_value))


def flash_cookie(source: Any, cookie_name: Optional[str] = None) -> dict:
    """Флеш-кука из ответа или клиента httpx (у обоих есть .cookies)."""
    name = cookie_name or settings.FLASH_COOKIE_NAME
    return decode_flash_cookie(source.cookies.get(name))
