"""Modelos de datos de un intento de scraping."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorKind(Enum):
    """Etapa del pipeline en la que falló el intento."""

    PROXY = "proxy"
    FETCH = "fetch"
    EXTRACTION = "extraction"
    INTERNAL = "internal"


@dataclass(frozen=True)
class ProxyIdentity:
    """Identidad de salida de un único intento. No se reutiliza ni se persiste."""

    host: str
    port: int
    username: str
    password: str = field(repr=False)

    @property
    def url(self) -> str:
        return f"http://{self.username}:{self.password}@{self.host}:{self.port}"


@dataclass(frozen=True)
class DisguiseProfile:
    """Headers, cookies y user-agent que hacen pasar el request por un navegador."""

    user_agent: str
    cookie_header: str
    standard_headers: dict
    session_id: str = ""
    tracking_id: str = ""

    def as_headers(self) -> dict:
        """Devuelve todos los headers a enviar, incluidos User-Agent y Cookie.

        Returns:
            dict: Headers listos para el cliente HTTP.
        """
        headers = {"User-Agent": self.user_agent}
        headers.update(self.standard_headers)
        headers["Cookie"] = self.cookie_header
        return headers


@dataclass(frozen=True)
class FetchResult:
    status_code: int
    content_type: str | None
    raw_body: str


@dataclass(frozen=True)
class ExtractedPayload:
    """Resultado normalizado: `data` o `error`, nunca ambos.

    Attributes:
        data (Any): Valor de PDP_BFF_DATA si el intento fue exitoso.
        error (str | None): Motivo del fallo.
        error_kind (ErrorKind | None): Etapa que falló; presente si y solo si hay `error`.
    """

    data: Any = None
    error: str | None = None
    error_kind: ErrorKind | None = None

    def __post_init__(self):
        if (self.data is None) == (self.error is None):
            raise ValueError("ExtractedPayload requiere exactamente uno de data/error")
        if (self.error is None) != (self.error_kind is None):
            raise ValueError("error_kind debe acompañar a error")

    @classmethod
    def ok(cls, data: Any) -> "ExtractedPayload":
        return cls(data=data)

    @classmethod
    def fail(cls, error: str, kind: ErrorKind) -> "ExtractedPayload":
        return cls(error=error, error_kind=kind)

    @property
    def success(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict:
        return {"data": self.data, "error": self.error}
