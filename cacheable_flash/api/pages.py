from fastapi import APIRouter, Form, Request
from fastapi.responses import HTMLResponse, JSONResponse, RedirectResponse

from cacheable_flash.config import settings
from cacheable_flash.utils.flash import flash, get_flashed_messages

router = APIRouter()

# Страница одинаковая для всех, поэтому ее можно целиком положить в кеш.
# Сообщения рисует скрипт из куки, в HTML их нет.
INDEX_HTML = """<!doctype html>
<html>
<head><title>{title}</title></head>
<body>
  <div id="flash"></div>
  <script>
    (function () {{
      var match = document.cookie.match(/(?:^|; ){cookie}=([^;]*)/);
      if (!match) return;
      var raw = decodeURIComponent(match[1]).replace(/%2B/g, "+");
      var data = JSON.parse(raw);
      var box = document.getElementById("flash");
      Object.keys(data).forEach(function (key) {{
        box.insertAdjacentHTML("beforeend", '<p class="' + key + '">' + data[key] + "</p>");
      }});
      document.cookie = "{cookie}=; path=/; max-age=0";
    }})();
  </script>
</body>
</html>
"""

@router.get("/", response_class=HTMLResponse)
async def index():
    """ ГЛАВНАЯ: кешируемая страница без флеша в теле """
    html = INDEX_HTML.format(title=settings.PROJECT_NAME, cookie=settings.FLASH_COOKIE_NAME)
    return HTMLResponse(html, headers={"Cache-Control": "public, max-age=60"})

@router.post("/notices")
async def create_notice(request: Request, message: str = Form(...)):
    flash(request, message.strip(), "notice")
    return RedirectResponse("/", status_code=303)

@router.post("/errors")
async def create_error(request: Request, message: str = Form(...)):
    flash(request, message.strip(), "errors")
    return RedirectResponse("/", status_code=303)

@router.get("/messages")
async def messages(request: Request):
    """То, что пришло в куке (для страниц, которые не кешируются)."""
    return JSONResponse(get_flashed_messages(request))
