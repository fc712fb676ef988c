# tests/test_routes.py
from decimal import Decimal
import pytest
from fastapi.testclient import TestClient
from app import crud, services
from app.api.routes import get_config
from app.db import get_db
from app.main import app
from app.schemas import ListingCreate, ListingOut, PropertyCreate
from app.sitemap import SitemapFetchError


@pytest.fixture
def client(db, config):
    app.dependency_overrides[get_db] = lambda: db
    app.dependency_overrides[get_config] = lambda: config
    yield TestClient(app)
    app.dependency_overrides.clear()


def _listing(url, category="Profissionais & Empresas"):
    return ListingCreate(
        url=url,
        title="Prestador Serviços: Ana",
        display_title="Ana",
        contact_number="(24) 8812-3456",
        tags=["#diarista"],
        category=category,
    )


def test_health(client):
    assert client.get("/api/health").json() == {"status": "ok"}


def test_list_listings_with_category(client, db):
    crud.create_listing(db, _listing("https://example.test/a/").model_dump())
    crud.create_listing(db, _listing("https://example.test/b/", category="Outros").model_dump())

    body = client.get("/api/listings").json()
    assert body["success"] is True
    assert len(body["items"]) == 2

    body = client.get("/api/listings", params={"category": "Outros"}).json()
    assert [i["url"] for i in body["items"]] == ["https://example.test/b/"]
    item = body["items"][0]
    assert item["displayTitle"] == "Ana"
    assert item["contactDisplay"] == "(24) 9 8812-3456"
    assert item["contactLink"] == "https://wa.me/+5524988123456"
    assert isinstance(item["lastUpdated"], str)


def test_list_properties(client, db):
    crud.create_property(db, PropertyCreate(
        url="https://example.test/imovel/casa/", title="Casa", price=Decimal("2500")).model_dump())
    body = client.get("/api/properties").json()
    assert body["success"] is True
    assert body["items"][0]["transactionKind"] == "FOR_SALE"
    assert Decimal(str(body["items"][0]["price"])) == Decimal("2500")


def test_refresh_listings_returns_touched_records(client, monkeypatch):
    async def fake_scrape(cfg):
        return [_listing("https://example.test/a/"), _listing("https://example.test/b/")]

    monkeypatch.setattr(services, "scrape_listings", fake_scrape)
    body = client.post("/api/listings/refresh").json()
    assert body["success"] is True
    assert [i["url"] for i in body["items"]] == ["https://example.test/a/", "https://example.test/b/"]


def test_refresh_sitemap_failure_is_structured(client, db, monkeypatch):
    async def broken(cfg):
        raise SitemapFetchError("Failed to fetch sitemap https://example.test/property-sitemap.xml: 503")

    monkeypatch.setattr(services, "scrape_properties", broken)
    resp = client.post("/api/properties/refresh")
    assert resp.status_code == 500
    body = resp.json()
    assert body["success"] is False
    assert body["items"] == []
    assert "sitemap" in body["error"]
    assert crud.list_properties(db) == []


def test_refresh_unexpected_error_hides_details(client, monkeypatch):
    async def broken(cfg):
        raise ValueError("secret internals")

    monkeypatch.setattr(services, "scrape_listings", broken)
    resp = client.post("/api/listings/refresh")
    assert resp.status_code == 500
    assert resp.json()["error"] == "Failed to refresh listings"


def test_contact_fallback_follows_configuration(monkeypatch):
    monkeypatch.setenv("DEFAULT_CONTACT_NUMBER", "(21) 3333-4444")
    out = ListingOut(
        id=1,
        url="https://example.test/a/",
        title="Ana",
        display_title="Ana",
        category="Profissionais & Empresas",
        contact_number=None,
    )
    assert out.contact_display == "(21) 3333-4444"
    assert out.contact_link == "https://wa.me/+5521933334444"
