# app/scheduler.py
import asyncio
import os
from apscheduler.schedulers.background import BackgroundScheduler
from . import services
from .config import load_config
from .db import SessionLocal
from .utils import logger

REFRESH_INTERVAL_HOURS = float(os.getenv("REFRESH_INTERVAL_HOURS", "1"))

def refresh_all():
    """Run both refresh cycles; one failing pipeline does not block the other."""
    config = load_config()
    for name, refresh in (("listings", services.refresh_listings),
                          ("properties", services.refresh_properties)):
        db = SessionLocal()
        try:
            stored = asyncio.run(refresh(db, config))
            logger.info("Scheduled %s refresh stored %d records", name, len(stored))
        except Exception as e:
            logger.exception("Scheduled %s refresh failed: %s", name, e)
        finally:
            db.close()

scheduler = BackgroundScheduler()
scheduler.add_job(refresh_all, 'interval', hours=REFRESH_INTERVAL_HOURS, id="refresh_all")

def start():
    if not scheduler.running:
        scheduler.start()
        logger.info("Scheduler started")
