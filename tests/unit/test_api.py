"""Tests for the HTTP API."""

import pytest
from fastapi.testclient import TestClient

from campus_api.api import create_app
from campus_api.config import DEPARTMENT_URLS, Settings

from tests.pages import BUS_A1_URL, STAFF_LIST_URL

AUTH = {"Authorization": "Bearer s3cret"}
FRONTEND = "https://kampus.example.com"


@pytest.fixture
def client(settings, scrapers):
    with TestClient(create_app(settings=settings, scrapers=scrapers)) as client:
        yield client


class TestAuth:

    def test_health_needs_no_token(self, client):
        """/health answers without a token."""
        response = client.get("/health")
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "ok"
        assert body["env"] == "test"
        assert "timestamp" in body

    def test_health_ignores_bad_token(self, client):
        """A wrong token does not break /health."""
        assert client.get("/health", headers={"Authorization": "Bearer nope"}).status_code == 200

    @pytest.mark.parametrize("path", ["/", "/yemek", "/academic-staff/bilgisayarMuhendisligi", "/duyuru/clear-cache"])
    def test_missing_token(self, client, path: str):
        """Gated routes answer 401 without a token."""
        response = client.get(path)
        assert response.status_code == 401
        assert response.json() == {"detail": "Unauthorized"}

    @pytest.mark.parametrize("header", ["Bearer wrong", "s3cret", "bearer s3cret"])
    def test_token_compared_verbatim(self, client, header: str):
        """Only the exact `Bearer <token>` header is accepted."""
        assert client.get("/", headers={"Authorization": header}).status_code == 401

    def test_valid_token(self, client):
        """The configured token opens gated routes."""
        response = client.get("/", headers=AUTH)
        assert response.status_code == 200
        assert response.json()["status"] == "running"

    def test_unconfigured_token_fails_closed(self, scrapers):
        """Without API_TOKEN gated routes answer 500, /health still works."""
        app = create_app(settings=Settings(app_env="test"), scrapers=scrapers)
        with TestClient(app) as client:
            assert client.get("/yemek", headers=AUTH).status_code == 500
            assert client.get("/health").status_code == 200


class TestCors:

    def test_preflight_skips_token_check(self, client):
        """Browser preflights carry no token and still succeed."""
        response = client.options("/yemek", headers={
            "Origin": FRONTEND,
            "Access-Control-Request-Method": "GET",
            "Access-Control-Request-Headers": "Authorization",
        })
        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "*"

    def test_responses_carry_allow_origin(self, client):
        """Regular and rejected responses both expose the CORS header."""
        ok = client.get("/", headers={**AUTH, "Origin": FRONTEND})
        rejected = client.get("/", headers={"Origin": FRONTEND})
        assert ok.headers["access-control-allow-origin"] == "*"
        assert rejected.status_code == 401
        assert rejected.headers["access-control-allow-origin"] == "*"

    def test_configured_origins(self, scrapers):
        """CORS_ORIGINS limits which origins are allowed."""
        settings = Settings(api_token="s3cret", cors_origins=f"{FRONTEND}, https://admin.example.com")
        with TestClient(create_app(settings=settings, scrapers=scrapers)) as client:
            allowed = client.get("/", headers={**AUTH, "Origin": FRONTEND})
            other = client.get("/", headers={**AUTH, "Origin": "https://evil.example.com"})
        assert allowed.headers["access-control-allow-origin"] == FRONTEND
        assert "access-control-allow-origin" not in other.headers


class TestResources:

    def test_academic_staff(self, client):
        """Staff come back in source order with every field."""
        response = client.get("/academic-staff/bilgisayarMuhendisligi", headers=AUTH)
        assert response.status_code == 200
        staff = response.json()
        assert [m["name"] for m in staff] == ["Dr. Ali Veli", "Dr. Ayşe Kaya"]
        assert set(staff[0]) == {"name", "title", "branch", "email", "phone", "detail_page_url"}

    def test_unknown_department_is_404(self, client):
        """Unknown departments are a 404 naming the department."""
        response = client.get("/academic-staff/astroloji", headers=AUTH)
        assert response.status_code == 404
        assert "astroloji" in response.json()["detail"]

    def test_announcements(self, client):
        """Announcements are capped at the last ten."""
        response = client.get("/announcement/bilgisayarMuhendisligi", headers=AUTH)
        assert response.status_code == 200
        assert len(response.json()) == 10

    def test_bus_schedules(self, client):
        """All routes are keyed by slug; single routes list departures."""
        all_routes = client.get("/bus-schedule", headers=AUTH).json()
        assert set(all_routes) == {"a1-universite-hatti", "a-2-universite-hatti"}

        a1 = client.get("/bus-schedule/a1", headers=AUTH).json()
        assert a1[0] == {"center_departure": "07:00", "university_departure": "07:30"}

    def test_menu(self, client):
        """The menu starts from today with parsed calories."""
        menus = client.get("/yemek", headers=AUTH).json()
        assert menus[0]["day"] == "Bugün"
        assert menus[0]["menu"][0] == {"name": "Mercimek Çorbası", "calories": 120}

    @pytest.mark.parametrize("path,count", [
        ("/duyuru/uni", 2),
        ("/duyuru/news", 2),
        ("/duyuru/events", 3),
    ])
    def test_home_page_blocks(self, client, path: str, count: int):
        """Home page blocks return every parsed item."""
        response = client.get(path, headers=AUTH)
        assert response.status_code == 200
        assert len(response.json()) == count

    def test_departments(self, client):
        """Department keys are listed in table order."""
        assert client.get("/departments", headers=AUTH).json() == list(DEPARTMENT_URLS)

    def test_repeat_request_served_from_cache(self, client, site):
        """A second request within TTL does not hit upstream."""
        first = client.get("/academic-staff/bilgisayarMuhendisligi", headers=AUTH)
        second = client.get("/academic-staff/bilgisayarMuhendisligi", headers=AUTH)
        assert first.content == second.content
        assert site.hits[STAFF_LIST_URL] == 1


class TestClearCache:

    @pytest.mark.parametrize("path", [
        "/academic-staff/clear-cache",
        "/announcement/clear-cache",
        "/bus-schedule/clear-cache",
        "/yemek/clear-cache",
        "/duyuru/clear-cache",
    ])
    def test_returns_success(self, client, path: str):
        """Clear-cache routes answer {success, message}."""
        response = client.get(path, headers=AUTH)
        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert "cleared" in body["message"]

    def test_next_request_refetches(self, client, site):
        """After clearing, the next request goes upstream again."""
        client.get("/bus-schedule/a1", headers=AUTH)
        client.get("/bus-schedule/clear-cache", headers=AUTH)
        client.get("/bus-schedule/a1", headers=AUTH)
        assert site.hits[BUS_A1_URL] == 2
