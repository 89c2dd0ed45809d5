from __future__ import annotations


def _add_failing_route(client):
    def boom():
        raise RuntimeError("kaboom")

    client.app.add_api_route("/boom", boom, methods=["GET"])


def test_development_shows_error_detail(make_client):
    client = make_client(APP_ENV="development")
    _add_failing_route(client)
    r = client.get("/boom", follow_redirects=False)
    assert r.status_code == 500
    assert "RuntimeError: kaboom" in r.text
    assert r.headers.get("X-Frame-Options") == "DENY"


def test_production_redirects_to_error_page(make_client):
    client = make_client(APP_ENV="production")
    _add_failing_route(client)
    r = client.get("/boom", follow_redirects=False)
    assert r.status_code == 303
    assert r.headers["location"].startswith("/Home/Error")

    page = client.get(r.headers["location"])
    assert page.status_code == 200
    assert "An error occurred while processing your request." in page.text
    assert "kaboom" not in page.text


def test_error_redirect_keeps_security_headers(make_client):
    client = make_client(APP_ENV="production")
    _add_failing_route(client)
    r = client.get("/boom", follow_redirects=False)
    assert r.status_code == 303
    assert r.headers.get("X-Frame-Options") == "DENY"
    assert r.headers.get("X-Content-Type-Options") == "nosniff"
    assert r.headers.get("Referrer-Policy") == "strict-origin-when-cross-origin"
    assert r.headers.get("X-Request-ID")


def test_error_page_shows_failing_request_id(make_client):
    client = make_client(APP_ENV="production")
    _add_failing_route(client)
    r = client.get("/boom", headers={"X-Request-ID": "req-failed-42"}, follow_redirects=False)
    assert r.headers["X-Request-ID"] == "req-failed-42"
    assert r.headers["location"] == "/Home/Error?rid=req-failed-42"

    page = client.get(r.headers["location"])
    assert "req-failed-42" in page.text
    assert page.headers["X-Request-ID"] != "req-failed-42"
