# app/api/routes.py
from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session
from typing import Optional
from .. import crud, schemas, services
from ..config import SiteConfig, load_config
from ..db import get_db
from ..sitemap import SitemapFetchError
from ..utils import logger

router = APIRouter(prefix="/api")

def get_config() -> SiteConfig:
    return load_config()

def _failure(envelope, message: str) -> JSONResponse:
    body = envelope(success=False, items=[], error=message)
    return JSONResponse(status_code=500, content=body.model_dump(mode="json", by_alias=True))

@router.get("/health")
def health():
    return {"status": "ok"}

@router.get("/listings", response_model=schemas.ListingResponse)
def listings(category: Optional[str] = Query(None), db: Session = Depends(get_db)):
    try:
        items = crud.list_listings(db, category=category)
    except Exception as e:
        logger.exception("Failed to fetch listings: %s", e)
        return _failure(schemas.ListingResponse, "Failed to fetch listings")
    return schemas.ListingResponse(
        success=True, items=[schemas.ListingOut.model_validate(o) for o in items])


@router.get("/properties", response_model=schemas.PropertyResponse)
def properties(db: Session = Depends(get_db)):
    try:
        items = crud.list_properties(db)
    except Exception as e:
        logger.exception("Failed to fetch properties: %s", e)
        return _failure(schemas.PropertyResponse, "Failed to fetch properties")
    return schemas.PropertyResponse(
        success=True, items=[schemas.PropertyOut.model_validate(o) for o in items])


@router.post("/listings/refresh", response_model=schemas.ListingResponse)
async def refresh_listings(db: Session = Depends(get_db), config: SiteConfig = Depends(get_config)):
    logger.info("Starting listings refresh...")
    try:
        stored = await services.refresh_listings(db, config)
    except SitemapFetchError as e:
        return _failure(schemas.ListingResponse, str(e))
    except Exception as e:
        logger.exception("Listings refresh failed: %s", e)
        return _failure(schemas.ListingResponse, "Failed to refresh listings")
    return schemas.ListingResponse(
        success=True, items=[schemas.ListingOut.model_validate(o) for o in stored])


@router.post("/properties/refresh", response_model=schemas.PropertyResponse)
async def refresh_properties(db: Session = Depends(get_db), config: SiteConfig = Depends(get_config)):
    logger.info("Starting properties refresh...")
    try:
        stored = await services.refresh_properties(db, config)
    except SitemapFetchError as e:
        return _failure(schemas.PropertyResponse, str(e))
    except Exception as e:
        logger.exception("Properties refresh failed: %s", e)
        return _failure(schemas.PropertyResponse, "Failed to refresh properties")
    return schemas.PropertyResponse(
        success=True, items=[schemas.PropertyOut.model_validate(o) for o in stored])
