"""Errores de las etapas de red del scraping."""


class ScrapeError(Exception):
    """Error base de un intento de scraping."""


class ProxyVerificationError(ScrapeError):
    """El proxy no respondió, rechazó la autenticación o la verificación expiró."""


class FetchError(ScrapeError):
    """Falló la descarga de la página: red, timeout, status no 2xx o body ilegible."""
