import json

import httpx
import pytest

from scraper.config import ScraperConfig


IP_CHECK_HOST = "api.ipapi.is"


def build_product_html(payload) -> str:
    """Página mínima con el data island de Shopee."""
    state = {"initialState": {"DOMAIN_PDP": {"data": {"PDP_BFF_DATA": payload}}}}
    return (
        "<html><head><title>Shopee</title></head><body>"
        f'<script type="text/mfe-initial-data">{json.dumps(state)};</script>'
        "</body></html>"
    )


@pytest.fixture
def product_html():
    return build_product_html


@pytest.fixture
def config():
    return ScraperConfig(
        proxy_host="proxy.test",
        proxy_port=8789,
        proxy_username_prefix="acct-proxy-country_TW-s_",
        proxy_password="secret",
        timeout_s=5.0,
    )


@pytest.fixture
def make_transport():
    """Construye un MockTransport que responde al chequeo de IP y a la página.

    Guarda los requests recibidos en `transport.requests`.
    """

    def _make(page_handler=None, ip_check_handler=None):
        requests = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            if request.url.host == IP_CHECK_HOST:
                if ip_check_handler is not None:
                    return ip_check_handler(request)
                return httpx.Response(200, json={"ip": "203.0.113.7"})
            if page_handler is not None:
                return page_handler(request)
            return httpx.Response(
                200,
                text=build_product_html({"item_id": 21448123549}),
                headers={"content-type": "text/html; charset=utf-8"},
            )

        transport = httpx.MockTransport(handler)
        transport.requests = requests
        return transport

    return _make
