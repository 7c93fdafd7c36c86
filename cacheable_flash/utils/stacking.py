from enum import Enum
from typing import Any, Callable, List, Union


class AppendAs(str, Enum):
    """Как склеивать несколько сообщений под одним ключом."""
    BR = "br"
    ARRAY = "array"
    P = "p"
    UL = "ul"
    OL = "ol"


JoinStrategy = Callable[[List[Any]], Any]

_STRATEGIES = {
    AppendAs.BR: lambda items: "<br/>".join(str(x) for x in items),
    AppendAs.ARRAY: lambda items: list(items),
    AppendAs.P: lambda items: "".join(f"<p>{x}</p>" for x in items),
    AppendAs.UL: lambda items: "<ul>" + "".join(f"<li>{x}</li>" for x in items) + "</ul>",
    AppendAs.OL: lambda items: "<ol>" + "".join(f"<li>{x}</li>" for x in items) + "</ol>",
}

_MARKUP_STRATEGIES = tuple(_STRATEGIES[a] for a in (AppendAs.BR, AppendAs.P, AppendAs.UL, AppendAs.OL))


def resolve_strategy(append_as: Union[AppendAs, str, JoinStrategy]) -> JoinStrategy:
    """
    Превращает настройку append_as в функцию list -> значение.
    Принимает член AppendAs, его строковое имя или свою функцию.
    """
    if callable(append_as) and not isinstance(append_as, str):
        return append_as
    try:
        return _STRATEGIES[AppendAs(append_as)]
    except ValueError:
        allowed = ", ".join(a.value for a in AppendAs)
        raise ValueError(f"Неизвестная стратегия append_as={append_as!r} (можно: {allowed})") from None


def as_items(value: Any) -> List[Any]:
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return [v for v in value if v is not None]
    return [value]


def stack_values(existing: Any, new: Any, append_as: Union[AppendAs, str, JoinStrategy] = AppendAs.BR) -> Any:
    """
    Склеивает старое значение из куки с новым по выбранной стратегии.

    Одно значение (склеивать нечего) возвращается как есть: числа и
    вложенные структуры не превращаются в строку.
    """
    strategy = resolve_strategy(append_as)
    items = as_items(existing) + as_items(new)
    if not items:
        return None
    if len(items) == 1:
        return items[0]
    # dict и list в HTML не склеить, побеждает новое значение
    if strategy in _MARKUP_STRATEGIES and any(isinstance(x, (dict, list)) for x in items):
        return items[-1]
    return strategy(items)
