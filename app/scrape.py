# app/scrape.py
"""Page extraction and batched scraping for the listings and properties feeds.

Usage:
  listings = await scrape_listings(load_config())
  properties = await scrape_properties(load_config())

A page that fails to download or parse is logged and skipped; only a sitemap
failure (SitemapFetchError) stops a run.
"""
import asyncio
from contextlib import asynccontextmanager
from typing import Awaitable, Callable, List, Optional, Sequence, TypeVar
import httpx
from bs4 import BeautifulSoup

from . import heuristics
from .config import SiteConfig
from .schemas import ListingCreate, PropertyCreate
from .sitemap import fetch_sitemap
from .utils import logger

# try to detect available parser; prefer lxml if installed
try:
    import lxml  # type: ignore  # noqa: F401
    _bs_parser = "lxml"
except ImportError:
    _bs_parser = "html.parser"

T = TypeVar("T")

def new_client(config: SiteConfig) -> httpx.AsyncClient:
    """AsyncClient carrying the bot user agent and the per-request timeout."""
    return httpx.AsyncClient(
        timeout=config.request_timeout,
        headers={
            "User-Agent": config.user_agent,
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
        },
        follow_redirects=True,
    )

@asynccontextmanager
async def _client_scope(client: Optional[httpx.AsyncClient], config: SiteConfig):
    if client is not None:
        yield client
        return
    async with new_client(config) as owned:
        yield owned

async def fetch_page(client: httpx.AsyncClient, url: str, timeout: Optional[float] = None) -> BeautifulSoup:
    # the client timeout applies per phase; this one caps the whole download
    resp = await asyncio.wait_for(client.get(url), timeout)
    resp.raise_for_status()
    soup = BeautifulSoup(resp.text, _bs_parser)
    # keep only visible text for the pattern scans
    for tag in soup(["script", "style", "noscript"]):
        tag.decompose()
    return soup

async def extract_listing(client: httpx.AsyncClient, url: str, config: SiteConfig) -> Optional[ListingCreate]:
    try:
        soup = await fetch_page(client, url, config.request_timeout)
        title = heuristics.extract_title(soup)
        return ListingCreate(
            url=url,
            title=title,
            display_title=heuristics.strip_title_prefix(title, config.title_prefix),
            image_url=heuristics.extract_image_url(
                soup, heuristics.LISTING_IMAGE_STRATEGIES, config.site_origin),
            contact_number=heuristics.extract_contact_number(soup, config.default_contact_number),
            tags=heuristics.extract_hashtags(soup),
            category=config.listing_category,
        )
    except Exception as e:
        logger.exception("Failed to scrape listing %s: %s", url, e)
        return None

async def extract_property(client: httpx.AsyncClient, url: str, config: SiteConfig) -> Optional[PropertyCreate]:
    try:
        soup = await fetch_page(client, url, config.request_timeout)
        price = heuristics.extract_price(soup)
        return PropertyCreate(
            url=url,
            title=heuristics.extract_title(soup),
            image_url=heuristics.extract_image_url(
                soup, heuristics.PROPERTY_IMAGE_STRATEGIES, config.site_origin),
            price=price,
            transaction_kind=heuristics.classify_transaction(price),
        )
    except Exception as e:
        logger.exception("Failed to scrape property %s: %s", url, e)
        return None

async def run_batches(
    urls: Sequence[str],
    worker: Callable[[str], Awaitable[Optional[T]]],
    batch_size: int = 3,
    delay: float = 1.0,
) -> List[T]:
    """Run `worker` over `urls` in sequential groups of `batch_size`.

    Members of a group run concurrently; the next group starts after the
    whole group finished and `delay` seconds passed (no pause after the last).
    """
    results: List[T] = []
    for start in range(0, len(urls), batch_size):
        batch = urls[start:start + batch_size]
        outcomes = await asyncio.gather(*(worker(u) for u in batch), return_exceptions=True)
        for url, outcome in zip(batch, outcomes):
            if isinstance(outcome, BaseException):
                logger.error("Worker failed on %s: %s", url, outcome)
            elif outcome is not None:
                results.append(outcome)
        if start + batch_size < len(urls):
            await asyncio.sleep(delay)
    return results

async def scrape_listings(config: SiteConfig, client: Optional[httpx.AsyncClient] = None) -> List[ListingCreate]:
    async with _client_scope(client, config) as c:
        urls = await fetch_sitemap(
            c, config.listings_sitemap_url, config.category_marker, timeout=config.request_timeout)
        logger.info("Found %d listing urls to scrape", len(urls))
        listings = await run_batches(
            urls, lambda u: extract_listing(c, u, config), config.batch_size, config.batch_delay)
    logger.info("Scraped %d of %d listings", len(listings), len(urls))
    return listings

async def scrape_properties(config: SiteConfig, client: Optional[httpx.AsyncClient] = None) -> List[PropertyCreate]:
    async with _client_scope(client, config) as c:
        urls = await fetch_sitemap(c, config.properties_sitemap_url, timeout=config.request_timeout)
        logger.info("Found %d property urls to scrape", len(urls))
        properties = await run_batches(
            urls, lambda u: extract_property(c, u, config), config.batch_size, config.batch_delay)
    logger.info("Scraped %d of %d properties", len(properties), len(urls))
    return properties
