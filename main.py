"""API HTTP y UI de formulario para extraer PDP_BFF_DATA de productos de Shopee.

Ambos frentes usan el mismo `PdpScrapper.scrape`.
"""

import html
import json
import logging
import os
from datetime import datetime, timezone
from functools import lru_cache
from typing import Any

from fastapi import Depends, FastAPI, Form, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.openapi.utils import get_openapi
from fastapi.responses import HTMLResponse, JSONResponse
from pydantic import BaseModel, Field

from scraper.config import DEFAULT_PORT
from scraper.scraping.PdpScraper import PdpScrapper


logger = logging.getLogger(__name__)

URL_REQUIRED = "URL is required"


# =================================================================
# FASTAPI CONFIGURATION
# =================================================================
def custom_openapi():
    """Personaliza el esquema OpenAPI y elimina respuestas de validación.

    Returns:
        dict: Esquema OpenAPI modificado.
    """
    if app.openapi_schema:
        return app.openapi_schema
    openapi_schema = get_openapi(
        title="Shopee Scraper API",
        version="1.0.0",
        description=(
            "Extrae PDP_BFF_DATA de una página de producto de Shopee "
            "a través de un proxy residencial."
        ),
        routes=app.routes,
    )

    schemas = openapi_schema.get("components", {}).get("schemas", {})
    schemas.pop("HTTPValidationError", None)
    schemas.pop("ValidationError", None)

    for path in openapi_schema["paths"].values():
        for method in path.values():
            method.pop("servers", None)
            if "responses" in method:
                method["responses"].pop("422", None)

    app.openapi_schema = openapi_schema
    return app.openapi_schema


app = FastAPI(docs_url="/api/docs", redoc_url=None)
app.openapi = custom_openapi
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type"],
)


@lru_cache(maxsize=1)
def get_scraper() -> PdpScrapper:
    return PdpScrapper()


class ScrapeRequest(BaseModel):
    url: str | None = Field(None, description="The URL of the Shopee product to scrape")


class ApiResponse(BaseModel):
    success: bool
    data: Any = None
    error: str | None = None
    timestamp: str


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _api_response(status_code: int, success: bool, data: Any = None, error: str | None = None):
    body = ApiResponse(success=success, data=data, error=error, timestamp=_now())
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


async def read_url(request: Request) -> str | None:
    """Lee `url` del body JSON sin validarlo con pydantic.

    Args:
        request (Request): Request entrante.

    Returns:
        str | None: La URL, o None si el body falta, no es un objeto o `url` no es
            un string no vacío.

    Raises:
        ValueError: Si el body no es JSON válido.
    """
    if not await request.body():
        return None
    payload = await request.json()
    if not isinstance(payload, dict):
        return None
    url = payload.get("url")
    if not isinstance(url, str) or not url:
        return None
    return url


SCRAPE_BODY = {
    "requestBody": {
        "content": {"application/json": {"schema": ScrapeRequest.model_json_schema()}},
        "required": True,
    }
}


# =================================================================
# HTML UI
# =================================================================
PAGE_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>Shopee Scraper</title>
    <style>
        * {{ box-sizing: border-box; margin: 0; padding: 0; }}
        body {{ font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif; display: flex; height: 100vh; background: #f8f9fa; }}
        .panel {{ padding: 25px; height: 100%; overflow-y: auto; }}
        .left-panel {{ width: 35%; background: #ffffff; border-right: 1px solid #e0e0e0; }}
        .right-panel {{ width: 65%; background: #fafafa; }}
        h1 {{ color: #ee4d2d; margin-bottom: 10px; font-size: 1.8rem; }}
        h2 {{ color: #212121; margin: 20px 0 15px; font-size: 1.4rem; }}
        form {{ display: flex; flex-direction: column; gap: 15px; }}
        input {{ padding: 12px 15px; border: 1px solid #e0e0e0; border-radius: 8px; font-size: 1rem; }}
        button {{ padding: 12px 20px; background: #ee4d2d; color: white; border: none; border-radius: 8px; font-size: 1rem; cursor: pointer; }}
        #result {{ white-space: pre-wrap; background: #ffffff; padding: 20px; border-radius: 8px; min-height: 75vh; font-family: monospace; font-size: 14px; }}
        .error {{ color: #d32f2f; margin-top: 15px; padding: 10px; background: #ffebee; border-radius: 6px; }}
        .error:empty {{ display: none; }}
    </style>
</head>
<body>
    <div class="panel left-panel">
        <h1>Shopee Scraper</h1>
        <p>Enter a Shopee product URL to extract PDP_BFF_DATA.</p>
        <form method="post" action="/">
            <label for="url">Shopee Product URL:</label>
            <input type="url" id="url" name="url" value="{url}" placeholder="https://shopee.tw/product/..." required>
            <button type="submit">Scrape Product Data</button>
            <div class="error" id="error">{error}</div>
        </form>
    </div>
    <div class="panel right-panel">
        <h2>Extracted PDP_BFF_DATA</h2>
        <pre id="result">{result}</pre>
    </div>
</body>
</html>
"""


def render_page(url: str = "", result: str = "", error: str = "") -> str:
    """Renderiza la UI escapando todos los valores insertados.

    Args:
        url (str): URL a mantener en el input.
        result (str): JSON formateado a mostrar.
        error (str): Mensaje para la región de error.

    Returns:
        str: Documento HTML.
    """
    return PAGE_TEMPLATE.format(
        url=html.escape(url, quote=True),
        result=html.escape(result),
        error=html.escape(error),
    )


# =================================================================
# ENDPOINTS
# =================================================================
@app.get("/", include_in_schema=False, response_class=HTMLResponse)
async def index():
    """Sirve el formulario vacío."""
    return HTMLResponse(render_page())


@app.post("/", include_in_schema=False, response_class=HTMLResponse)
async def submit_form(url: str = Form(""), scraper: PdpScrapper = Depends(get_scraper)):
    """Procesa el formulario y muestra el payload o el error.

    Args:
        url (str): URL enviada desde el formulario.
        scraper (PdpScrapper): Scraper compartido.

    Returns:
        HTMLResponse: Página con el resultado.
    """
    url = url.strip()
    if not url:
        return HTMLResponse(render_page(error=URL_REQUIRED), status_code=400)

    result = await scraper.scrape(url)
    if not result.success:
        return HTMLResponse(render_page(url=url, error=result.error), status_code=500)

    pretty = json.dumps(result.data, indent=2, ensure_ascii=False)
    return HTMLResponse(render_page(url=url, result=pretty))


@app.post("/scrape", tags=["Scraping"], openapi_extra=SCRAPE_BODY)
async def scrape_endpoint(request: Request, scraper: PdpScrapper = Depends(get_scraper)):
    """Devuelve PDP_BFF_DATA crudo, o `{"error": ...}` con 400/500.

    Un body que no es JSON válido responde 500 con `Scraping failed: ...`.

    Args:
        request (Request): Request con el body JSON `{"url": ...}`.
        scraper (PdpScrapper): Scraper compartido.

    Returns:
        JSONResponse: Payload o error.
    """
    try:
        url = await read_url(request)
    except ValueError as exc:
        logger.error("Body inválido en /scrape: %s", exc)
        return JSONResponse(status_code=500, content={"error": f"Scraping failed: {exc}"})
    if not url:
        return JSONResponse(status_code=400, content={"error": URL_REQUIRED})

    result = await scraper.scrape(url)
    if not result.success:
        return JSONResponse(status_code=500, content={"error": result.error})
    return JSONResponse(content=result.data)


@app.post("/api/scrape", tags=["API"], response_model=ApiResponse, openapi_extra=SCRAPE_BODY)
async def api_scrape(request: Request, scraper: PdpScrapper = Depends(get_scraper)):
    """Scrapea la URL y responde con el sobre `{success, data|error, timestamp}`.

    Args:
        request (Request): Request con el body JSON `{"url": ...}`.
        scraper (PdpScrapper): Scraper compartido.

    Returns:
        JSONResponse: 200 con data, 400 si falta la URL, 500 si el body no es JSON
            válido o falla el scraping.
    """
    try:
        url = await read_url(request)
    except ValueError as exc:
        logger.error("Body inválido en /api/scrape: %s", exc)
        return _api_response(500, success=False, error=f"Scraping failed: {exc}")
    if not url:
        return _api_response(400, success=False, error=URL_REQUIRED)

    logger.info("Scrape solicitado: %s", url)
    result = await scraper.scrape(url)
    if not result.success:
        return _api_response(500, success=False, error=result.error)
    return _api_response(200, success=True, data=result.data)


@app.get("/api/health", tags=["API"], response_model=ApiResponse)
async def health():
    """Chequeo de vida del servicio."""
    return _api_response(200, success=True, data={"status": "healthy", "timestamp": _now()})


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(level=logging.INFO)
    uvicorn.run(app, host="0.0.0.0", port=int(os.getenv("PORT", str(DEFAULT_PORT))))
