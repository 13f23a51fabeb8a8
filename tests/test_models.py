import pytest

from scraper.scraping.models import DisguiseProfile, ErrorKind, ExtractedPayload, FetchResult


def test_ok_payload():
    payload = ExtractedPayload.ok({"x": 1})
    assert payload.success
    assert payload.error is None
    assert payload.error_kind is None


def test_failed_payload():
    payload = ExtractedPayload.fail("Script content is empty", ErrorKind.EXTRACTION)
    assert not payload.success
    assert payload.data is None
    assert payload.to_dict() == {"data": None, "error": "Script content is empty"}


@pytest.mark.parametrize(
    "kwargs",
    [
        {},
        {"data": {"x": 1}, "error": "boom", "error_kind": ErrorKind.FETCH},
        {"error": "boom"},
        {"data": {"x": 1}, "error_kind": ErrorKind.FETCH},
    ],
)
def test_payload_invariant(kwargs):
    with pytest.raises(ValueError):
        ExtractedPayload(**kwargs)


def test_disguise_headers_order():
    disguise = DisguiseProfile(
        user_agent="UA",
        cookie_header="SPC_U=-",
        standard_headers={"Accept": "text/html"},
    )
    assert list(disguise.as_headers()) == ["User-Agent", "Accept", "Cookie"]


def test_fetch_result_is_immutable():
    result = FetchResult(status_code=200, content_type="text/html", raw_body="")
    with pytest.raises(AttributeError):
        result.status_code = 500
