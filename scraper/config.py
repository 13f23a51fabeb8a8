"""Configuración del scraper: credenciales del proxy, timeouts y headers de navegador."""

import os
from dataclasses import dataclass, field

from dotenv import load_dotenv


load_dotenv()

DEFAULT_TIMEOUT_S = 30.0
DEFAULT_PORT = 3000
PROXY_HOST = "gw-ap.scrapeless.io"
PROXY_PORT = 8789
IP_CHECK_URL = "https://api.ipapi.is/"
SCRIPT_TAG_TYPE = "text/mfe-initial-data"

# Headers de un Chrome 114 en macOS navegando directo a la página.
BROWSER_HEADERS = {
    "Accept": (
        "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,"
        "image/apng,*/*;q=0.8,application/signed-exchange;v=b3;q=0.9"
    ),
    "Accept-Language": "en-US,en;q=0.9,zh-TW;q=0.8,zh;q=0.7",
    "Accept-Encoding": "gzip, deflate, br",
    "Connection": "keep-alive",
    "Upgrade-Insecure-Requests": "1",
    "Sec-Fetch-Dest": "document",
    "Sec-Fetch-Mode": "navigate",
    "Sec-Fetch-Site": "none",
    "Sec-Fetch-User": "?1",
    "Cache-Control": "max-age=0",
    "sec-ch-ua": '"Not.A/Brand";v="8", "Chromium";v="114", "Google Chrome";v="114"',
    "sec-ch-ua-mobile": "?0",
    "sec-ch-ua-platform": '"macOS"',
}


@dataclass(frozen=True)
class ScraperConfig:
    """Parámetros de un intento de scraping.

    Attributes:
        proxy_host (str): Host del gateway de proxies residenciales.
        proxy_port (int): Puerto del gateway.
        proxy_username_prefix (str): Prefijo fijo del usuario; se le concatena el token de sesión.
        proxy_password (str): Password del proxy.
        ip_check_url (str): Endpoint que devuelve la IP de salida, usado para verificar el proxy.
        timeout_s (float): Timeout por llamada de red, en segundos.
        browser_headers (dict): Headers fijos que acompañan cada request a la página.
        debug_dir (str | None): Directorio para artefactos de debug, si se quieren guardar.
    """

    proxy_host: str = PROXY_HOST
    proxy_port: int = PROXY_PORT
    proxy_username_prefix: str = ""
    proxy_password: str = ""
    ip_check_url: str = IP_CHECK_URL
    timeout_s: float = DEFAULT_TIMEOUT_S
    browser_headers: dict = field(default_factory=lambda: dict(BROWSER_HEADERS))
    debug_dir: str | None = None

    @property
    def has_proxy_credentials(self) -> bool:
        return bool(self.proxy_host and self.proxy_username_prefix and self.proxy_password)

    @classmethod
    def from_env(cls) -> "ScraperConfig":
        """Construye la configuración desde variables de entorno (y `.env`).

        Returns:
            ScraperConfig: Configuración con los valores del entorno o los defaults.

        Raises:
            ValueError: Si PROXY_PORT o SCRAPE_TIMEOUT_S no son numéricos.
        """
        return cls(
            proxy_host=os.getenv("PROXY_HOST", PROXY_HOST),
            proxy_port=int(os.getenv("PROXY_PORT", str(PROXY_PORT))),
            proxy_username_prefix=os.getenv("PROXY_USER_PREFIX", ""),
            proxy_password=os.getenv("PROXY_PASS", ""),
            ip_check_url=os.getenv("IP_CHECK_URL", IP_CHECK_URL),
            timeout_s=float(os.getenv("SCRAPE_TIMEOUT_S", str(DEFAULT_TIMEOUT_S))),
            debug_dir=os.getenv("DEBUG_DIR") or None,
        )
