"""
Запись флеша в куку.

Страница целиком лежит в кеше, поэтому серверный флеш из сессии туда не попадет.
Вместо этого после каждого запроса складываем флеш в куку `flash` (JSON),
а скрипт на странице уже сам ее читает и показывает.
"""
import json
import math
import numbers
from typing import Any, MutableMapping, Optional, Union

from markupsafe import escape

from cacheable_flash.config import settings
from cacheable_flash.logger import log_warning
from cacheable_flash.utils.stacking import AppendAs, JoinStrategy, as_items, stack_values


def coerce_flash_value(value: Any, stringify_numbers: Optional[bool] = None) -> Any:
    """
    Приводит одно значение флеша к виду, пригодному для куки.

    - числа: остаются числом (или строкой, если stringify_numbers)
    - Markup и все, у кого есть __html__: как есть, без экранирования
    - обычная строка: экранируется (<em> -> &lt;em&gt;)
    - все остальное (dict, list, bool, None): без изменений
    """
    if stringify_numbers is None:
        stringify_numbers = settings.FLASH_STRINGIFY_NUMBERS

    # bool в Python тоже число, но в куке он должен остаться true/false
    if isinstance(value, numbers.Number) and not isinstance(value, bool):
        if stringify_numbers:
            return str(value)
        if isinstance(value, int):
            return value
        if isinstance(value, float) and math.isfinite(value):
            return value
        # Decimal, Fraction, inf, nan: в JSON числом их не записать
        return str(value)

    if hasattr(value, "__html__"):
        return str(value.__html__())

    if isinstance(value, str):
        return str(escape(value))

    return value


def load_flash_cookie(raw: Optional[str]) -> dict:
    """Разбирает старую куку. Битая, пустая или не-объект = пустой словарь, без ошибок."""
    if not raw:
        return {}
    try:
        data = json.loads(raw)
    except (ValueError, RecursionError) as e:
        # RecursionError: слишком глубокая вложенность вроде "[[[[..."
        log_warning("FLASH_COOKIE", f"Не удалось разобрать куку, начинаем с пустого флеша: {e}")
        return {}
    if not isinstance(data, dict):
        log_warning("FLASH_COOKIE", f"В куке не объект, а {type(data).__name__}, начинаем с пустого флеша")
        return {}
    return data


def dump_flash_cookie(cookie_hash: dict) -> str:
    """
    Компактный JSON ({"a":"b"}) с заменой '+' на '%2B'.
    Иначе при раскодировании на клиенте плюс превратится в пробел.
    """
    encoded = json.dumps(cookie_hash, separators=(",", ":"), default=str)
    return encoded.replace("+", "%2B")


def write_flash_to_cookie(
    flash: MutableMapping[str, Any],
    cookies: MutableMapping[str, str],
    *,
    cookie_name: Optional[str] = None,
    stacking: Optional[bool] = None,
    append_as: Union[AppendAs, str, JoinStrategy, None] = None,
    stringify_numbers: Optional[bool] = None,
) -> MutableMapping[str, str]:
    """
    Сливает флеш текущего запроса с тем, что уже лежит в куке, и очищает флеш.

    Новые значения перезаписывают старые с тем же ключом. С включенным
    стэкингом они склеиваются по стратегии append_as.
    Возвращает тот же cookies, уже с обновленной кукой.
    """
    name = cookie_name or settings.FLASH_COOKIE_NAME
    if stacking is None:
        stacking = settings.FLASH_STACKING
    if append_as is None:
        append_as = settings.FLASH_APPEND_AS

    cookie_hash = load_flash_cookie(cookies.get(name))

    for key, value in flash.items():
        key = str(key)
        if stacking:
            items = [coerce_flash_value(v, stringify_numbers) for v in as_items(value)]
            cookie_hash[key] = stack_values(cookie_hash.get(key), items, append_as)
        else:
            cookie_hash[key] = coerce_flash_value(value, stringify_numbers)

    cookies[name] = dump_flash_cookie(cookie_hash)
    flash.clear()
    return cookies
