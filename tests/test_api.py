"""Tests for API endpoints."""

import logging
import re
import pytest
from httpx import AsyncClient, ASGITransport

from config import Config
from web_app import create_app

GENERATED_CODE = re.compile(r'[0-9A-Za-z]{8}')


async def shorten(client, long_url, custom_code=None, client_id=None):
    body = {"longUrl": long_url}
    if custom_code is not None:
        body["customShortCode"] = custom_code
    headers = {"X-Client-Id": client_id} if client_id else None
    return await client.post("/api/urls", json=body, headers=headers)


@pytest.mark.asyncio
class TestCreateEndpoint:
    """Test POST /api/urls."""

    async def test_shorten_url(self, client, sample_urls):
        """Scenario A over HTTP: an 8-char code, camelCase response."""
        response = await shorten(client, sample_urls[0])

        assert response.status_code == 200
        data = response.json()
        assert GENERATED_CODE.fullmatch(data["shortCode"])
        assert data["longUrl"] == sample_urls[0]
        assert data["shortUrl"] == f"http://testserver/r/{data['shortCode']}"
        assert "createdAtUtc" in data

    async def test_shorten_idempotent(self, client, store, sample_urls):
        """The same owner and URL return the same code."""
        first = await shorten(client, sample_urls[0])
        second = await shorten(client, sample_urls[0])

        assert first.json()["shortCode"] == second.json()["shortCode"]
        assert await store.count() == 1

    async def test_shorten_with_custom_code(self, client, sample_urls):
        """Custom codes are honoured."""
        response = await shorten(client, sample_urls[0], custom_code="My_Code")

        assert response.status_code == 200
        assert response.json()["shortCode"] == "My_Code"

    async def test_shorten_duplicate_custom_code(self, client, sample_urls):
        """Scenario B over HTTP: a taken custom code is a 400."""
        await shorten(client, sample_urls[0], custom_code="My_Code", client_id="u1")

        response = await shorten(client, sample_urls[1], custom_code="My_Code", client_id="u2")

        assert response.status_code == 400
        assert "already exists" in response.json()["error"]

    async def test_shorten_invalid_custom_code(self, client, sample_urls):
        """Malformed custom codes are a 400."""
        response = await shorten(client, sample_urls[0], custom_code="a b")

        assert response.status_code == 400
        assert "4-32" in response.json()["error"]

    async def test_shorten_invalid_url(self, client):
        """Non-http URLs are a 400."""
        response = await shorten(client, "not-a-url")

        assert response.status_code == 400
        assert "Invalid URL" in response.json()["error"]

    async def test_shorten_missing_body_field(self, client):
        """A body without longUrl is a 400, not a 422."""
        response = await client.post("/api/urls", json={"customShortCode": "abcd"})

        assert response.status_code == 400
        assert response.json()["error"] == "Invalid request body"

    async def test_shorten_snake_case_accepted(self, client, sample_urls):
        """Field names are also accepted in snake_case."""
        response = await client.post("/api/urls", json={"long_url": sample_urls[0]})

        assert response.status_code == 200

    async def test_forwarded_base_url(self, client, sample_urls):
        """Short URLs use proxy headers when present."""
        response = await client.post(
            "/api/urls",
            json={"longUrl": sample_urls[0]},
            headers={"X-Forwarded-Proto": "https", "X-Forwarded-Host": "sho.rt"},
        )

        data = response.json()
        assert data["shortUrl"] == f"https://sho.rt/r/{data['shortCode']}"


@pytest.mark.asyncio
class TestClientIdentity:
    """Test X-Client-Id handling."""

    async def test_missing_header(self, anonymous_client, sample_urls):
        """Requests without a client id are rejected with 401."""
        response = await shorten(anonymous_client, sample_urls[0])

        assert response.status_code == 401
        assert "X-Client-Id" in response.json()["error"]

    @pytest.mark.parametrize("client_id", ["   ", "x" * 65])
    async def test_invalid_header(self, anonymous_client, client_id):
        """Blank and over-long client ids are rejected."""
        response = await anonymous_client.get("/api/urls", headers={"X-Client-Id": client_id})

        assert response.status_code == 401

    async def test_header_trimmed(self, anonymous_client, sample_urls):
        """Surrounding whitespace is not part of the identity."""
        await shorten(anonymous_client, sample_urls[0], client_id="  u7  ")

        response = await anonymous_client.get("/api/urls", headers={"X-Client-Id": "u7"})

        assert len(response.json()) == 1

    async def test_max_length_header_accepted(self, anonymous_client, sample_urls):
        """A 64-character id is valid."""
        response = await shorten(anonymous_client, sample_urls[0], client_id="x" * 64)

        assert response.status_code == 200

    async def test_all_api_routes_require_header(self, anonymous_client):
        """Every /api/urls route checks identity before anything else."""
        for method, path in [
            ("GET", "/api/urls"),
            ("GET", "/api/urls/abcd1234"),
            ("GET", "/api/urls/abcd1234/stats"),
            ("DELETE", "/api/urls/abcd1234"),
        ]:
            response = await anonymous_client.request(method, path)
            assert response.status_code == 401, f"{method} {path}"


@pytest.mark.asyncio
class TestResolveAndRedirect:
    """Test GET /api/urls/{code} and GET /r/{code}."""

    async def test_resolve(self, client, sample_urls):
        """Resolution returns shortCode and longUrl."""
        code = (await shorten(client, sample_urls[0])).json()["shortCode"]

        response = await client.get(f"/api/urls/{code}")

        assert response.status_code == 200
        assert response.json() == {"shortCode": code, "longUrl": sample_urls[0]}

    async def test_resolve_not_found(self, client):
        """Unknown codes are a 404."""
        response = await client.get("/api/urls/nonexistent")

        assert response.status_code == 404
        assert "not found" in response.json()["error"]

    async def test_resolve_other_owner(self, client, sample_urls):
        """Any client may resolve any code."""
        code = (await shorten(client, sample_urls[0])).json()["shortCode"]

        response = await client.get(f"/api/urls/{code}", headers={"X-Client-Id": "u2"})

        assert response.status_code == 200

    async def test_redirect(self, client, anonymous_client, sample_urls):
        """/r/{code} redirects with 302 and needs no client id."""
        code = (await shorten(client, sample_urls[0])).json()["shortCode"]

        response = await anonymous_client.get(f"/r/{code}", follow_redirects=False)

        assert response.status_code == 302
        assert response.headers["location"] == sample_urls[0]

    async def test_redirect_not_found(self, anonymous_client):
        """Unknown codes are a 404 on the redirect route too."""
        response = await anonymous_client.get("/r/nonexistent", follow_redirects=False)

        assert response.status_code == 404

    async def test_clicks_counted_across_routes(self, client, sample_urls):
        """Both the API resolve and the redirect count clicks."""
        code = (await shorten(client, sample_urls[0])).json()["shortCode"]

        await client.get(f"/api/urls/{code}")
        await client.get(f"/r/{code}", follow_redirects=False)

        stats = (await client.get(f"/api/urls/{code}/stats")).json()
        assert stats["clicks"] == 2
        assert stats["lastAccessedAtUtc"] is not None


@pytest.mark.asyncio
class TestStatsEndpoint:
    """Test GET /api/urls/{code}/stats."""

    async def test_stats(self, client, sample_urls):
        """Stats carry all fields in camelCase."""
        code = (await shorten(client, sample_urls[0])).json()["shortCode"]

        response = await client.get(f"/api/urls/{code}/stats")

        assert response.status_code == 200
        data = response.json()
        assert data["shortCode"] == code
        assert data["longUrl"] == sample_urls[0]
        assert data["clicks"] == 0
        assert data["lastAccessedAtUtc"] is None
        assert "createdAtUtc" in data

    async def test_stats_other_owner(self, client, sample_urls):
        """Stats are readable by other clients."""
        code = (await shorten(client, sample_urls[0])).json()["shortCode"]

        response = await client.get(f"/api/urls/{code}/stats", headers={"X-Client-Id": "u2"})

        assert response.status_code == 200

    async def test_stats_not_found(self, client):
        """Unknown codes are a 404."""
        response = await client.get("/api/urls/nonexistent/stats")

        assert response.status_code == 404


@pytest.mark.asyncio
class TestListAndDelete:
    """Test GET /api/urls and DELETE /api/urls/{code}."""

    async def test_list(self, client, sample_urls):
        """The list holds only the caller's URLs."""
        for url in sample_urls:
            await shorten(client, url)
        await shorten(client, "https://example.com/other", client_id="u2")

        response = await client.get("/api/urls")

        assert response.status_code == 200
        data = response.json()
        assert {item["longUrl"] for item in data} == set(sample_urls)
        assert all(item["shortUrl"] == f"http://testserver/r/{item['shortCode']}" for item in data)
        assert all(item["clicks"] == 0 for item in data)

    async def test_list_empty(self, client):
        """A new client has no URLs."""
        response = await client.get("/api/urls")

        assert response.status_code == 200
        assert response.json() == []

    async def test_delete(self, client, sample_urls):
        """Scenario C over HTTP."""
        code = (await shorten(client, sample_urls[0])).json()["shortCode"]

        foreign = await client.delete(f"/api/urls/{code}", headers={"X-Client-Id": "u2"})
        assert foreign.status_code == 404
        assert (await client.get(f"/api/urls/{code}")).status_code == 200

        own = await client.delete(f"/api/urls/{code}")
        assert own.status_code == 204
        assert own.content == b""
        assert (await client.get(f"/api/urls/{code}")).status_code == 404

    async def test_delete_not_found(self, client):
        """Deleting an unknown code is a 404."""
        response = await client.delete("/api/urls/nonexistent")

        assert response.status_code == 404


@pytest.mark.asyncio
class TestPlumbing:
    """Test health, error handling and CORS."""

    async def test_health_check(self, anonymous_client):
        """Health needs no client id."""
        response = await anonymous_client.get("/api/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["store"] == "healthy"

    async def test_unexpected_error_is_opaque(self, app, client, service, monkeypatch):
        """Unhandled errors become a generic 500."""

        async def explode(*args, **kwargs):
            raise RuntimeError("secret internals")

        monkeypatch.setattr(service, "list_urls", explode)

        response = await client.get("/api/urls")

        assert response.status_code == 500
        assert response.json() == {"error": "Unexpected error"}
        assert "secret" not in response.text

        # The app keeps serving afterwards
        assert (await client.get("/api/health")).status_code == 200

    async def test_unexpected_error_keeps_cors_headers(self, client, service, monkeypatch):
        """Browsers can read the opaque 500 from an allowed origin."""

        async def explode(*args, **kwargs):
            raise RuntimeError("secret internals")

        monkeypatch.setattr(service, "list_urls", explode)

        response = await client.get("/api/urls", headers={"Origin": "http://localhost:5173"})

        assert response.status_code == 500
        assert response.headers["access-control-allow-origin"] == "http://localhost:5173"

    async def test_request_log_uses_forwarded_for(self, anonymous_client, caplog):
        """The request log names the client behind a proxy."""
        with caplog.at_level(logging.INFO, logger="tinyurl"):
            await anonymous_client.get("/api/health", headers={"X-Forwarded-For": "203.0.113.9, 10.0.0.1"})

        assert any("from 203.0.113.9" in r.getMessage() for r in caplog.records)

    async def test_cors_preflight(self, anonymous_client):
        """Configured origins pass CORS preflight."""
        response = await anonymous_client.options(
            "/api/urls",
            headers={
                "Origin": "http://localhost:5173",
                "Access-Control-Request-Method": "POST",
                "Access-Control-Request-Headers": "X-Client-Id, Content-Type",
            },
        )

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "http://localhost:5173"

    async def test_custom_header_name(self, store, service, sample_urls):
        """The identity header name is configurable."""
        app = create_app(
            store_instance=store,
            service_instance=service,
            config=Config(client_id_header="X-Owner"),
        )

        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as ac:
            ok = await ac.post("/api/urls", json={"longUrl": sample_urls[0]}, headers={"X-Owner": "u1"})
            rejected = await ac.post("/api/urls", json={"longUrl": sample_urls[0]}, headers={"X-Client-Id": "u1"})

        assert ok.status_code == 200
        assert rejected.status_code == 401
        assert "X-Owner" in rejected.json()["error"]
