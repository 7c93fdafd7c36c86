from typing import Optional, Union
from urllib.parse import quote, unquote

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.types import ASGIApp

from cacheable_flash.config import settings
from cacheable_flash.cookie import write_flash_to_cookie
from cacheable_flash.logger import log_action
from cacheable_flash.utils.stacking import AppendAs, JoinStrategy, resolve_strategy


class CacheableFlashMiddleware(BaseHTTPMiddleware):
    """
    Обертка вокруг каждого роута: до него заводит пустой флеш,
    после него пишет флеш в куку ответа.

        app.add_middleware(CacheableFlashMiddleware)
        app.add_middleware(CacheableFlashMiddleware, stacking=True, append_as="ul")
    """

    def __init__(
        self,
        app: ASGIApp,
        cookie_name: Optional[str] = None,
        stacking: Optional[bool] = None,
        append_as: Union[AppendAs, str, JoinStrategy, None] = None,
        stringify_numbers: Optional[bool] = None,
    ):
        super().__init__(app)
        self.cookie_name = cookie_name or settings.FLASH_COOKIE_NAME
        self.stacking = settings.FLASH_STACKING if stacking is None else stacking
        self.append_as = settings.FLASH_APPEND_AS if append_as is None else append_as
        self.stringify_numbers = stringify_numbers
        # Кривую стратегию ловим сразу при старте, а не на первом запросе
        if self.stacking:
            resolve_strategy(self.append_as)

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request.state.flash = {}
        request.state.flash_stacking = self.stacking

        response = await call_next(request)

        flash = request.state.flash
        written_keys = ", ".join(str(k) for k in flash)

        # На проводе кука целиком в percent-encoding, иначе Starlette возьмет ее в кавычки
        jar = {}
        raw = request.cookies.get(self.cookie_name)
        if raw is not None:
            jar[self.cookie_name] = unquote(raw)

        write_flash_to_cookie(
            flash,
            jar,
            cookie_name=self.cookie_name,
            stacking=self.stacking,
            append_as=self.append_as,
            stringify_numbers=self.stringify_numbers,
        )

        response.set_cookie(
            key=self.cookie_name,
            value=quote(jar[self.cookie_name], safe=""),
            max_age=settings.FLASH_COOKIE_MAX_AGE,
            path=settings.FLASH_COOKIE_PATH,
            samesite=settings.FLASH_COOKIE_SAMESITE,
            secure=settings.is_production,
            httponly=False,
        )

        if written_keys:
            log_action(request.url.path, "FLASH_TO_COOKIE", f"Ключи: {written_keys}")
        return response
