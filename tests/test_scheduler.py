# tests/test_scheduler.py
from sqlalchemy.orm import sessionmaker
from app import scheduler, services
from app.sitemap import SitemapFetchError


def test_job_is_registered():
    assert scheduler.scheduler.get_job("refresh_all") is not None


def test_refresh_all_survives_failing_pipeline(engine, monkeypatch):
    calls = []

    async def broken(db, config):
        calls.append("listings")
        raise SitemapFetchError("Failed to fetch sitemap: 503")

    async def working(db, config):
        calls.append("properties")
        return []

    monkeypatch.setattr(services, "refresh_listings", broken)
    monkeypatch.setattr(services, "refresh_properties", working)
    monkeypatch.setattr(scheduler, "SessionLocal", sessionmaker(bind=engine))

    scheduler.refresh_all()

    assert calls == ["listings", "properties"]
