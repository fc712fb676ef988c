# app/services.py
from typing import Callable, List, Sequence
from fastapi.concurrency import run_in_threadpool
from sqlalchemy.orm import Session
from pydantic import BaseModel
from . import crud
from .config import SiteConfig
from .scrape import scrape_listings, scrape_properties
from .utils import logger

def reconcile(
    db: Session,
    records: Sequence[BaseModel],
    find_by_url: Callable,
    create: Callable,
    update: Callable,
) -> List:
    """Create-or-update each record by url; returns the rows touched.

    A store error on one record is logged and that record is skipped.
    """
    stored = []
    for record in records:
        data = record.model_dump()
        try:
            existing = find_by_url(db, record.url)
            if existing:
                obj = update(db, existing.id, data)
                if obj is None:
                    logger.warning("Record %s vanished before update", record.url)
                    continue
            else:
                obj = create(db, data)
            stored.append(obj)
        except Exception as e:
            db.rollback()
            logger.exception("Failed to save %s: %s", record.url, e)
    return stored

def reconcile_listings(db: Session, records) -> List:
    return reconcile(db, records, crud.get_listing_by_url, crud.create_listing, crud.update_listing)

def reconcile_properties(db: Session, records) -> List:
    return reconcile(db, records, crud.get_property_by_url, crud.create_property, crud.update_property)

async def refresh_listings(db: Session, config: SiteConfig) -> List:
    records = await scrape_listings(config)
    stored = await run_in_threadpool(reconcile_listings, db, records)
    logger.info("Successfully processed %d listings", len(stored))
    return stored

async def refresh_properties(db: Session, config: SiteConfig) -> List:
    records = await scrape_properties(config)
    stored = await run_in_threadpool(reconcile_properties, db, records)
    logger.info("Successfully processed %d properties", len(stored))
    return stored
