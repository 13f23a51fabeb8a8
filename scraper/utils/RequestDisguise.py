"""Generador de perfiles de navegador (headers, cookies y user-agent) por intento."""

import uuid
from functools import lru_cache
from typing import Callable

from fake_useragent import UserAgent

from scraper.config import ScraperConfig
from scraper.scraping.models import DisguiseProfile


@lru_cache(maxsize=1)
def _user_agents() -> UserAgent:
    return UserAgent()


def random_user_agent() -> str:
    """Devuelve un user-agent de navegador real elegido al azar."""
    return _user_agents().random


def build_shopee_cookies(session_id: str, tracking_id: str) -> str:
    """Arma el header Cookie imitando la sesión de un visitante de Shopee.

    Shopee reemite las mismas cookies al renovar la sesión, así que varias
    claves aparecen repetidas con valores distintos. El orden y las
    repeticiones se mantienen tal cual.

    Args:
        session_id (str): Valor de SPC_SI.
        tracking_id (str): Valor de SPC_T_ID.

    Returns:
        str: Pares `clave=valor` separados por "; ".
    """
    cookies = [
        f"SPC_SI={session_id}",
        f"SPC_T_ID={tracking_id}",
        f"SPC_T_IV={uuid.uuid4()}",
        f"SPC_F={uuid.uuid4()}",
        "SPC_U=-",
        "SPC_EC=-",
        f"SPC_CD_ID={uuid.uuid4()}",
        f"SPC_R_T_ID={uuid.uuid4()}",
        f"SPC_R_T_IV={uuid.uuid4()}",
        f"SPC_T_IV={uuid.uuid4()}",
        f"SPC_SI={session_id}",
        f"SPC_T_ID={tracking_id}",
        f"SPC_T_IV={uuid.uuid4()}",
        f"SPC_F={uuid.uuid4()}",
        "SPC_U=-",
        "SPC_EC=-",
        f"SPC_CD_ID={uuid.uuid4()}",
        f"SPC_R_T_ID={uuid.uuid4()}",
        f"SPC_R_T_IV={uuid.uuid4()}",
    ]
    return "; ".join(cookies)


def build_disguise(
    config: ScraperConfig,
    user_agent_source: Callable[[], str] | None = None,
) -> DisguiseProfile:
    """Genera un perfil de navegador nuevo. No hace llamadas de red.

    Args:
        config (ScraperConfig): Aporta los headers fijos del navegador.
        user_agent_source (Callable[[], str] | None): Fuente de user-agents;
            por defecto fake-useragent.

    Returns:
        DisguiseProfile: Perfil con identificadores aleatorios propios.
    """
    user_agent_source = user_agent_source or random_user_agent
    session_id = str(uuid.uuid4())
    tracking_id = str(uuid.uuid4())

    return DisguiseProfile(
        user_agent=user_agent_source(),
        cookie_header=build_shopee_cookies(session_id, tracking_id),
        standard_headers=dict(config.browser_headers),
        session_id=session_id,
        tracking_id=tracking_id,
    )
