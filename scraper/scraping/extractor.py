"""Extracción de PDP_BFF_DATA desde el data island del HTML de Shopee."""

import json
import logging

from bs4 import BeautifulSoup

from scraper.config import SCRIPT_TAG_TYPE
from scraper.scraping.models import ErrorKind, ExtractedPayload


logger = logging.getLogger(__name__)

PDP_DATA_PATH = ("initialState", "DOMAIN_PDP", "data", "PDP_BFF_DATA")

SCRIPT_NOT_FOUND = "Target script tag not found"
SCRIPT_EMPTY = "Script content is empty"
PDP_DATA_NOT_FOUND = "PDP_BFF_DATA not found in the parsed JSON"


def _fail(error: str) -> ExtractedPayload:
    logger.warning("Extracción fallida: %s", error)
    return ExtractedPayload.fail(error, ErrorKind.EXTRACTION)


def find_initial_data(html: str) -> str | None:
    """Devuelve el texto del script `text/mfe-initial-data`, o None si no existe.

    Args:
        html (str): HTML de la página de producto.

    Returns:
        str | None: Contenido crudo del primer script que coincide.
    """
    soup = BeautifulSoup(html, "lxml")
    script = soup.select_one(f'script[type="{SCRIPT_TAG_TYPE}"]')
    if script is None:
        return None
    return script.get_text()


def strip_statement_terminator(content: str) -> str:
    """Quita un único `;` al final del texto; el JSON viene embebido como sentencia JS."""
    if content.endswith(";"):
        content = content[:-1]
    return content


def dig(value, path: tuple[str, ...]):
    """Recorre `path` sobre objetos JSON anidados.

    Args:
        value: JSON ya parseado.
        path (tuple[str, ...]): Claves a recorrer en orden.

    Returns:
        El valor final, o None si falta un segmento o un intermedio no es objeto.
    """
    for key in path:
        if not isinstance(value, dict) or key not in value:
            return None
        value = value[key]
    return value


def is_missing(value) -> bool:
    """Indica si el valor final cuenta como ausente.

    `null`, `false`, `0`, `NaN` y `""` se consideran ausentes; objetos y listas,
    aunque estén vacíos, no.
    """
    if isinstance(value, (dict, list)):
        return False
    if isinstance(value, float) and value != value:
        return True
    return not value


def extract_pdp_data(html: str) -> ExtractedPayload:
    """Parsea el HTML y devuelve PDP_BFF_DATA. Nunca lanza excepciones.

    Pasos, cortando en el primer fallo:
    1) Busca `<script type="text/mfe-initial-data">`.
    2) Verifica que tenga contenido.
    3) Quita el `;` final y parsea el JSON.
    4) Navega `initialState.DOMAIN_PDP.data.PDP_BFF_DATA`.

    El esquema interno de PDP_BFF_DATA es de Shopee; no se valida.

    Args:
        html (str): HTML de la página de producto.

    Returns:
        ExtractedPayload: `data` con el payload, o `error` con el motivo.
    """
    content = find_initial_data(html)
    if content is None:
        return _fail(SCRIPT_NOT_FOUND)
    if not content:
        return _fail(SCRIPT_EMPTY)

    try:
        parsed = json.loads(strip_statement_terminator(content))
    except (ValueError, RecursionError) as exc:
        return _fail(f"Failed to parse JSON: {exc}")

    pdp_data = dig(parsed, PDP_DATA_PATH)
    if is_missing(pdp_data):
        return _fail(PDP_DATA_NOT_FOUND)

    return ExtractedPayload.ok(pdp_data)
