# app/crud.py
"""Store operations for `Listing` and `Property` entities.

Lookups by natural key (`url`), plain create and update-by-id. Every create
and update stamps `last_updated`; the scraping code never sets it. Upsert
decisions live in `app.services`, not here.
"""
from datetime import datetime, timezone
from sqlalchemy.orm import Session
from typing import Dict, Any, List, Optional
from .models import Listing, Property

# columns a caller may never overwrite
PROTECTED = ("id", "url", "created_at")

def _now():
    return datetime.now(timezone.utc)

def _create(db: Session, model, data: Dict[str, Any]):
    obj = model(**data)
    obj.last_updated = _now()
    db.add(obj)
    db.commit()
    db.refresh(obj)
    return obj

def _update(db: Session, model, obj_id: int, updates: Dict[str, Any]):
    obj = db.get(model, obj_id)
    if not obj:
        return None
    for k, v in updates.items():
        if k in PROTECTED or not hasattr(model, k):
            continue
        setattr(obj, k, v)
    obj.last_updated = _now()
    db.commit()
    db.refresh(obj)
    return obj

# Listings

def list_listings(db: Session, category: Optional[str] = None) -> List[Listing]:
    q = db.query(Listing)
    if category:
        q = q.filter(Listing.category == category)
    return q.order_by(Listing.id).all()

def get_listing_by_url(db: Session, url: str) -> Optional[Listing]:
    return db.query(Listing).filter(Listing.url == url).first()

def create_listing(db: Session, data: Dict[str, Any]) -> Listing:
    return _create(db, Listing, data)

def update_listing(db: Session, listing_id: int, updates: Dict[str, Any]) -> Optional[Listing]:
    return _update(db, Listing, listing_id, updates)

# Properties

def list_properties(db: Session) -> List[Property]:
    return db.query(Property).order_by(Property.id).all()

def get_property_by_url(db: Session, url: str) -> Optional[Property]:
    return db.query(Property).filter(Property.url == url).first()

def create_property(db: Session, data: Dict[str, Any]) -> Property:
    return _create(db, Property, data)

def update_property(db: Session, property_id: int, updates: Dict[str, Any]) -> Optional[Property]:
    return _update(db, Property, property_id, updates)
