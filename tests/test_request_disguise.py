from itertools import count

from scraper.config import BROWSER_HEADERS, ScraperConfig
from scraper.utils.RequestDisguise import (
    build_disguise,
    build_shopee_cookies,
    random_user_agent,
)


EXPECTED_COOKIE_KEYS = [
    "SPC_SI",
    "SPC_T_ID",
    "SPC_T_IV",
    "SPC_F",
    "SPC_U",
    "SPC_EC",
    "SPC_CD_ID",
    "SPC_R_T_ID",
    "SPC_R_T_IV",
    "SPC_T_IV",
    "SPC_SI",
    "SPC_T_ID",
    "SPC_T_IV",
    "SPC_F",
    "SPC_U",
    "SPC_EC",
    "SPC_CD_ID",
    "SPC_R_T_ID",
    "SPC_R_T_IV",
]


def _pairs(cookie_header: str) -> list[tuple[str, str]]:
    return [tuple(part.split("=", 1)) for part in cookie_header.split("; ")]


def test_cookie_header_keeps_duplicates_in_order():
    pairs = _pairs(build_shopee_cookies("sid", "tid"))
    assert [key for key, _ in pairs] == EXPECTED_COOKIE_KEYS


def test_cookie_header_uses_session_and_tracking_ids():
    values = {}
    for key, value in _pairs(build_shopee_cookies("sid", "tid")):
        values.setdefault(key, []).append(value)
    assert values["SPC_SI"] == ["sid", "sid"]
    assert values["SPC_T_ID"] == ["tid", "tid"]
    assert values["SPC_U"] == ["-", "-"]
    assert values["SPC_EC"] == ["-", "-"]
    assert len(set(values["SPC_T_IV"])) == 3


def test_build_disguise_headers(config):
    disguise = build_disguise(config, user_agent_source=lambda: "UA/1.0")
    headers = disguise.as_headers()

    assert headers["User-Agent"] == "UA/1.0"
    assert headers["Cookie"] == disguise.cookie_header
    for name, value in BROWSER_HEADERS.items():
        assert headers[name] == value
    assert f"SPC_SI={disguise.session_id}" in disguise.cookie_header
    assert f"SPC_T_ID={disguise.tracking_id}" in disguise.cookie_header


def test_each_disguise_is_fresh(config):
    counter = count()

    def source():
        return f"UA/{next(counter)}"

    first = build_disguise(config, user_agent_source=source)
    second = build_disguise(config, user_agent_source=source)

    assert first.cookie_header != second.cookie_header
    assert first.user_agent != second.user_agent
    assert first.session_id != second.session_id
    assert first.tracking_id != second.tracking_id


def test_standard_headers_come_from_config():
    custom = ScraperConfig(browser_headers={"Accept-Language": "zh-TW"})
    disguise = build_disguise(custom, user_agent_source=lambda: "UA")
    assert disguise.standard_headers == {"Accept-Language": "zh-TW"}


def test_default_user_agent_source():
    user_agent = random_user_agent()
    assert isinstance(user_agent, str)
    assert user_agent.startswith("Mozilla/")


def test_build_disguise_with_default_user_agent(config):
    disguise = build_disguise(config)
    assert disguise.user_agent
