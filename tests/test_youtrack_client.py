import pytest

from youtrack_app.core.errors import ConfigurationError, YouTrackAPIError
from youtrack_app.core.youtrack_client import YouTrackAPI, normalize_base_url


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("example.youtrack.cloud", "https://example.youtrack.cloud/api"),
        ("https://example.youtrack.cloud/", "https://example.youtrack.cloud/api"),
        ("http://tracker.local/youtrack", "http://tracker.local/youtrack/api"),
        ("HTTPS://example.youtrack.cloud/api", "HTTPS://example.youtrack.cloud/api"),
        ("  example.youtrack.cloud/api/  ", "https://example.youtrack.cloud/api"),
    ],
)
def test_normalize_base_url(raw, expected):
    assert normalize_base_url(raw) == expected


@pytest.mark.parametrize("raw", [None, "", "   "])
def test_normalize_base_url_rejects_empty(raw):
    with pytest.raises(ValueError):
        normalize_base_url(raw)


def test_missing_token_fails_fast():
    with pytest.raises(ConfigurationError):
        YouTrackAPI("example.youtrack.cloud", "")


def test_build_url():
    api = YouTrackAPI("example.youtrack.cloud", "tok")
    assert api.build_url("issues") == "https://example.youtrack.cloud/api/issues"
    assert api.build_url("/admin/projects") == "https://example.youtrack.cloud/api/admin/projects"
    assert api.build_url("https://other.host/api/x") == "https://other.host/api/x"
    with pytest.raises(ValueError):
        api.build_url("")


def test_request_headers_and_params(fake_session, fake_response):
    session = fake_session(lambda m, u, p: fake_response(payload={"ok": True}))
    api = YouTrackAPI("example.youtrack.cloud", "tok", session=session, timeout=5)
    out = api.request(
        "/issues",
        headers={"Accept": "text/plain"},
        search_params={"fields": "id", "query": None, "empty": "", "$top": 10},
    )
    assert out == {"ok": True}
    call = session.calls[0]
    assert call["method"] == "GET"
    assert call["url"] == "https://example.youtrack.cloud/api/issues"
    assert call["params"] == {"fields": "id", "$top": "10"}
    assert call["headers"]["Authorization"] == "Bearer tok"
    assert call["headers"]["Content-Type"] == "application/json"
    # caller-supplied headers win
    assert call["headers"]["Accept"] == "text/plain"
    assert call["timeout"] == 5


def test_request_no_content(fake_session, fake_response):
    session = fake_session(lambda m, u, p: fake_response(status_code=204, reason="No Content"))
    api = YouTrackAPI("example.youtrack.cloud", "tok", session=session)
    assert api.request("/issues/1", method="DELETE") is None


def test_request_error_carries_details(fake_session, fake_response):
    session = fake_session(
        lambda m, u, p: fake_response(status_code=401, reason="Unauthorized", text='{"error":"bad token"}')
    )
    api = YouTrackAPI("example.youtrack.cloud", "tok", session=session)
    with pytest.raises(YouTrackAPIError) as excinfo:
        api.request("/admin/projects")
    err = excinfo.value
    assert err.status == 401
    assert err.path == "/api/admin/projects"
    message = str(err)
    assert "401 Unauthorized" in message
    assert "/api/admin/projects" in message
    assert "bad token" in message


def test_request_invalid_json(fake_session, fake_response):
    session = fake_session(lambda m, u, p: fake_response(text="<html>oops</html>"))
    api = YouTrackAPI("example.youtrack.cloud", "tok", session=session)
    with pytest.raises(YouTrackAPIError):
        api.request("/issues")


def test_pagination_short_page_stops(make_paged_session):
    items = [{"id": str(i)} for i in range(250)]
    session = make_paged_session({"/issues": items})
    api = YouTrackAPI("example.youtrack.cloud", "tok", session=session)
    out = api.get_all_issues(query="project: {DEMO}")
    assert [i["id"] for i in out] == [str(i) for i in range(250)]
    assert [c["params"]["$skip"] for c in session.calls] == ["0", "200"]
    assert all(c["params"]["query"] == "project: {DEMO}" for c in session.calls)


def test_pagination_exact_page_size_makes_one_extra_request(make_paged_session):
    items = [{"id": str(i)} for i in range(400)]
    session = make_paged_session({"/issues": items})
    api = YouTrackAPI("example.youtrack.cloud", "tok", session=session)
    out = api.get_all_issues()
    assert len(out) == 400
    assert len({i["id"] for i in out}) == 400
    assert [c["params"]["$skip"] for c in session.calls] == ["0", "200", "400"]


def test_pagination_stops_on_non_list(fake_session, fake_response):
    session = fake_session(lambda m, u, p: fake_response(payload={"unexpected": "shape"}))
    api = YouTrackAPI("example.youtrack.cloud", "tok", session=session)
    assert api.get_all_projects() == []
    assert len(session.calls) == 1
    assert session.calls[0]["params"]["fields"] == "id,name,shortName"


def test_request_error_keeps_full_body(fake_session, fake_response):
    long_body = "x" * 500 + "END"
    session = fake_session(lambda m, u, p: fake_response(status_code=500, reason="Server Error", text=long_body))
    api = YouTrackAPI("example.youtrack.cloud", "tok", session=session)
    with pytest.raises(YouTrackAPIError) as excinfo:
        api.request("/issues")
    assert excinfo.value.body == long_body
    assert str(excinfo.value).endswith("END")
