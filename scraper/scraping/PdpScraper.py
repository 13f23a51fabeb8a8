"""Wrapper simple para scraping de un PDP de Shopee con configuración compartida."""

from scraper.config import ScraperConfig
from scraper.scraping.models import ExtractedPayload
from scraper.scraping.proxy_session import TransportFactory
from scraper.scraping.scraping_repository import scrape_one
from scraper.utils.DebugSink import DebugSink, FileDebugSink


class PdpScrapper:
    """Scraper de PDP. Cada llamada usa su propio proxy y perfil de navegador."""

    def __init__(
        self,
        config: ScraperConfig | None = None,
        sink: DebugSink | None = None,
        transport_factory: TransportFactory | None = None,
    ):
        """Inicializa el scraper.

        Args:
            config (ScraperConfig | None): Configuración; por defecto desde el entorno.
            sink (DebugSink | None): Destino de artefactos de debug. Si no se pasa y
                la configuración define `debug_dir`, se usa un FileDebugSink.
            transport_factory (TransportFactory | None): Crea los transportes httpx;
                por defecto enrutan por el proxy.
        """
        self.config = config or ScraperConfig.from_env()
        if sink is None and self.config.debug_dir:
            sink = FileDebugSink(self.config.debug_dir)
        self.sink = sink
        self.transport_factory = transport_factory

    async def scrape(self, url: str) -> ExtractedPayload:
        """Scrapea una URL y devuelve PDP_BFF_DATA o el error normalizado.

        Args:
            url (str): URL del producto.

        Returns:
            ExtractedPayload: Resultado con `data` o `error`, nunca lanza.
        """
        return await scrape_one(
            url,
            self.config,
            sink=self.sink,
            transport_factory=self.transport_factory,
        )
