"""Repositorio de scraping: proxy, disfraz de navegador, descarga y extracción del PDP."""

import logging
from typing import Any, Callable

import httpx

from scraper.config import DEFAULT_TIMEOUT_S, ScraperConfig
from scraper.scraping.errors import FetchError, ProxyVerificationError
from scraper.scraping.extractor import extract_pdp_data
from scraper.scraping.models import (
    DisguiseProfile,
    ErrorKind,
    ExtractedPayload,
    FetchResult,
    ProxyIdentity,
)
from scraper.scraping.proxy_session import (
    TransportFactory,
    acquire_verified_proxy,
    proxy_transport,
)
from scraper.utils.DebugSink import DebugSink
from scraper.utils.RequestDisguise import build_disguise


logger = logging.getLogger(__name__)

TEST_URL = "https://shopee.tw/product/178926468/21448123549"


async def fetch_page(
    target_url: str,
    proxy: ProxyIdentity,
    disguise: DisguiseProfile,
    timeout_s: float = DEFAULT_TIMEOUT_S,
    transport_factory: TransportFactory | None = None,
) -> FetchResult:
    """Descarga la página de producto a través del proxy con el perfil de navegador.

    Un único GET, sin reintentos. Los redirects los sigue el cliente con sus
    límites por defecto.

    Args:
        target_url (str): URL del producto.
        proxy (ProxyIdentity): Identidad de salida verificada.
        disguise (DisguiseProfile): Headers y cookies a enviar.
        timeout_s (float): Timeout del request en segundos.
        transport_factory (TransportFactory | None): Crea el transporte del request;
            por defecto uno que enruta por el proxy.

    Returns:
        FetchResult: Status, content-type y body decodificado.

    Raises:
        FetchError: Si falla la red, expira el timeout, el status no es 2xx
            o el body no se puede descomprimir (httpx.DecodingError).
    """
    timeout = httpx.Timeout(timeout_s)

    try:
        parsed = httpx.URL(target_url)
        if parsed.scheme not in ("http", "https") or not parsed.host:
            raise FetchError(f"Invalid URL: {target_url}")
        transport = (transport_factory or proxy_transport)(proxy)
        async with httpx.AsyncClient(
            transport=transport,
            timeout=timeout,
            follow_redirects=True,
        ) as client:
            logger.info("Solicitando %s vía proxy...", target_url)
            response = await client.get(target_url, headers=disguise.as_headers())
            response.raise_for_status()
            body = response.text
    except httpx.ConnectTimeout as exc:
        logger.error("Connect timeout al solicitar %s: %s", target_url, exc)
        raise FetchError(f"Connect timeout: {_describe(exc)}") from exc
    except httpx.ReadTimeout as exc:
        logger.error("Read timeout al solicitar %s: %s", target_url, exc)
        raise FetchError(f"Read timeout: {_describe(exc)}") from exc
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        logger.error("Error de red al solicitar %s: %s", target_url, exc)
        raise FetchError(_describe(exc)) from exc

    content_type = response.headers.get("content-type")
    logger.info("Estado de la respuesta: %s", response.status_code)
    logger.info("Tipo de respuesta: %s", content_type)

    return FetchResult(
        status_code=response.status_code,
        content_type=content_type,
        raw_body=body,
    )


def _save_debug(sink: DebugSink | None, action: Callable[[DebugSink], Any]) -> None:
    if sink is None:
        return
    try:
        action(sink)
    except Exception:
        logger.exception("No se pudo guardar el artefacto de debug")


async def scrape_one(
    url: str,
    config: ScraperConfig,
    sink: DebugSink | None = None,
    transport_factory: TransportFactory | None = None,
    user_agent_source: Callable[[], str] | None = None,
) -> ExtractedPayload:
    """Scrapea una URL de producto y devuelve siempre un resultado normalizado.

    Orden: proxy verificado -> perfil de navegador -> descarga -> extracción.
    Cualquier error de las etapas de red termina en
    `error="Scraping failed: <mensaje>"`; nunca propaga excepciones.

    Args:
        url (str): URL del producto.
        config (ScraperConfig): Configuración del intento.
        sink (DebugSink | None): Destino opcional para HTML y payload.
        transport_factory (TransportFactory | None): Crea un transporte nuevo por
            cada llamada de red (verificación y descarga). Por defecto se enruta por el proxy.
        user_agent_source (Callable[[], str] | None): Fuente de user-agents.

    Returns:
        ExtractedPayload: `data` con PDP_BFF_DATA o `error` con el motivo.
    """
    try:
        disguise = build_disguise(config, user_agent_source)
        proxy = await acquire_verified_proxy(
            config,
            transport_factory=transport_factory,
            user_agent_source=user_agent_source,
        )

        logger.info("Haciendo request a Shopee con proxy %s...", proxy.username)
        page = await fetch_page(
            url,
            proxy,
            disguise,
            timeout_s=config.timeout_s,
            transport_factory=transport_factory,
        )
    except ProxyVerificationError as exc:
        return _failed(exc, ErrorKind.PROXY)
    except FetchError as exc:
        return _failed(exc, ErrorKind.FETCH)
    except Exception as exc:  # salvaguarda: el llamador siempre recibe un resultado
        logger.exception("Error inesperado scrapeando %s", url)
        return _failed(exc, ErrorKind.INTERNAL)

    _save_debug(sink, lambda s: s.save_html(url, page.raw_body))

    result = extract_pdp_data(page.raw_body)
    if result.success:
        _save_debug(sink, lambda s: s.save_result(url, result.data))
        logger.info("Scrape ok: %s", url)
    return result


def _describe(exc: Exception) -> str:
    return str(exc) or exc.__class__.__name__


def _failed(exc: Exception, kind: ErrorKind) -> ExtractedPayload:
    message = _describe(exc)
    logger.error("Error: %s", message)
    return ExtractedPayload.fail(f"Scraping failed: {message}", kind)


if __name__ == "__main__":
    import asyncio
    import json

    logging.basicConfig(level=logging.INFO)

    async def main():
        result = await scrape_one(TEST_URL, ScraperConfig.from_env())
        print(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))

    asyncio.run(main())
