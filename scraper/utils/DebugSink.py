"""Destinos opcionales para artefactos de debug (HTML crudo y JSON extraído)."""

import json
import logging
import os
from typing import Any, Protocol


logger = logging.getLogger(__name__)

HTML_FILENAME = "debug.html"
RESULT_FILENAME = "results.json"


class DebugSink(Protocol):
    def save_html(self, url: str, html: str) -> None: ...

    def save_result(self, url: str, data: Any) -> None: ...


class FileDebugSink:
    """Guarda el último HTML descargado y el último payload en un directorio."""

    def __init__(self, directory: str):
        """Inicializa el sink.

        Args:
            directory (str): Directorio de salida; se crea si no existe.
        """
        self.directory = directory

    def _path(self, filename: str) -> str:
        os.makedirs(self.directory, exist_ok=True)
        return os.path.join(self.directory, filename)

    def save_html(self, url: str, html: str) -> None:
        path = self._path(HTML_FILENAME)
        with open(path, "w", encoding="utf-8") as f:
            f.write(html)
        logger.info("HTML de %s guardado en: %s", url, path)

    def save_result(self, url: str, data: Any) -> None:
        path = self._path(RESULT_FILENAME)
        with open(path, "w", encoding="utf-8") as f:
            f.write(json.dumps(data, indent=2, ensure_ascii=False))
        logger.info("Resultado de %s guardado en: %s", url, path)
