import pytest
from fastapi import FastAPI, Request
from fastapi.testclient import TestClient
from markupsafe import Markup

from cacheable_flash.middleware import CacheableFlashMiddleware
from cacheable_flash.utils.flash import flash, get_flash


def build_app(**options) -> FastAPI:
    """Маленькое приложение с middleware и роутами, которые кладут во флеш разное."""
    app = FastAPI()
    app.add_middleware(CacheableFlashMiddleware, **options)
    # request.state каждого запроса, чтобы после ответа проверить, что флеш пуст
    app.state.seen = []

    @app.get("/plain")
    async def plain():
        return {"ok": True}

    @app.get("/flash")
    async def set_flash(request: Request):
        flash(request, "This is a Notice", "notice")
        flash(request, 5, "quantity")
        return {"ok": True}

    @app.get("/plus")
    async def plus(request: Request):
        flash(request, "Life, Love + Liberty", "notice")
        return {"ok": True}

    @app.get("/twice")
    async def twice(request: Request):
        flash(request, "first", "notice")
        flash(request, "second", "notice")
        return {"ok": True}

    @app.get("/markup")
    async def markup(request: Request):
        app.state.seen.append(request.state)
        flash(request, Markup("<em>x</em>"), "alert")
        flash(request, "<em>y</em>", "notice")
        return {"ok": True}

    @app.get("/size")
    async def size(request: Request):
        return {"size": len(get_flash(request))}

    @app.get("/boom")
    async def boom(request: Request):
        flash(request, "never written", "notice")
        raise RuntimeError("boom")

    return app


@pytest.fixture
def app() -> FastAPI:
    return build_app()


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)


@pytest.fixture
def demo_client() -> TestClient:
    from cacheable_flash.main import app as demo_app
    return TestClient(demo_app)
