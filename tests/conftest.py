# tests/conftest.py
import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ["SCHEDULER_ENABLED"] = "0"

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from app.db import Base
from app.config import SiteConfig
import app.models  # noqa: F401


@pytest.fixture
def engine():
    eng = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=eng)
    yield eng
    eng.dispose()


@pytest.fixture
def db(engine):
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    yield session
    session.close()


@pytest.fixture
def config():
    return SiteConfig(
        site_origin="https://example.test",
        listings_sitemap_url="https://example.test/post-sitemap.xml",
        properties_sitemap_url="https://example.test/property-sitemap.xml",
        batch_delay=0,
    )
