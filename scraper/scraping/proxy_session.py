"""Adquisición y verificación de una sesión de proxy residencial."""

import logging
import uuid
from typing import Callable

import httpx

from scraper.config import ScraperConfig
from scraper.scraping.errors import ProxyVerificationError
from scraper.scraping.models import ProxyIdentity
from scraper.utils.RequestDisguise import random_user_agent


logger = logging.getLogger(__name__)

SESSION_TOKEN_LENGTH = 10

TransportFactory = Callable[[ProxyIdentity], httpx.AsyncBaseTransport]


def proxy_transport(proxy: ProxyIdentity) -> httpx.AsyncBaseTransport:
    """Transporte httpx que enruta por el proxy de la identidad.

    AsyncClient cierra su transporte al salir, así que cada llamada de red
    necesita uno nuevo.
    """
    return httpx.AsyncHTTPTransport(proxy=proxy.url)


def new_session_token() -> str:
    """Genera el token de sesión que fija la IP de salida en el gateway.

    Returns:
        str: UUID sin guiones truncado a 10 caracteres.
    """
    return uuid.uuid4().hex[:SESSION_TOKEN_LENGTH]


def build_proxy_identity(config: ScraperConfig) -> ProxyIdentity:
    """Compone las credenciales del proxy para un intento nuevo.

    Args:
        config (ScraperConfig): Configuración con host, puerto y credenciales.

    Returns:
        ProxyIdentity: Identidad con usuario `<prefijo><token>`.

    Raises:
        ProxyVerificationError: Si faltan credenciales del proxy.
    """
    if not config.has_proxy_credentials:
        raise ProxyVerificationError("Falta configurar PROXY_HOST/PROXY_USER_PREFIX/PROXY_PASS")
    return ProxyIdentity(
        host=config.proxy_host,
        port=config.proxy_port,
        username=f"{config.proxy_username_prefix}{new_session_token()}",
        password=config.proxy_password,
    )


async def acquire_verified_proxy(
    config: ScraperConfig,
    transport_factory: TransportFactory | None = None,
    user_agent_source: Callable[[], str] | None = None,
) -> ProxyIdentity:
    """Crea una identidad de proxy y confirma que conecta y autentica.

    Hace un único GET al endpoint de eco de IP a través del proxy. No reintenta:
    la política de reintentos es del llamador.

    Args:
        config (ScraperConfig): Configuración del proxy y timeout.
        transport_factory (TransportFactory | None): Crea el transporte de la verificación;
            por defecto uno que enruta por el proxy.
        user_agent_source (Callable[[], str] | None): Fuente del user-agent de la verificación;
            por defecto fake-useragent.

    Returns:
        ProxyIdentity: Identidad verificada.

    Raises:
        ProxyVerificationError: Si la verificación no puede completarse.
    """
    proxy = build_proxy_identity(config)
    user_agent_source = user_agent_source or random_user_agent
    timeout = httpx.Timeout(config.timeout_s)

    try:
        transport = (transport_factory or proxy_transport)(proxy)
        async with httpx.AsyncClient(transport=transport, timeout=timeout) as client:
            response = await client.get(
                config.ip_check_url,
                headers={"User-Agent": user_agent_source()},
            )
            response.raise_for_status()
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        message = str(exc) or exc.__class__.__name__
        logger.error("Falló la verificación del proxy %s: %s", proxy.username, message)
        raise ProxyVerificationError(f"Failed to verify proxy: {message}") from exc

    logger.info("Respuesta de verificación del proxy: %s", response.text[:500])
    return proxy
