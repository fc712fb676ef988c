# app/sitemap.py
"""Sitemap discovery: fetch an XML sitemap and list its page URLs."""
import asyncio
from typing import List, Optional
import httpx
from lxml import etree
from .utils import logger

# namespace-agnostic so both plain and sitemaps.org documents parse
LOC_XPATH = "/*[local-name()='urlset']/*[local-name()='url']/*[local-name()='loc']"


class SitemapFetchError(RuntimeError):
    """The sitemap could not be fetched or parsed; the refresh cycle stops."""


def parse_sitemap(content: bytes, path_filter: Optional[str] = None) -> List[str]:
    root = etree.fromstring(content)
    urls = []
    seen = set()
    for loc in root.xpath(LOC_XPATH):
        url = (loc.text or "").strip()
        if not url:
            continue
        if path_filter and path_filter not in url:
            continue
        if url in seen:
            continue
        seen.add(url)
        urls.append(url)
    return urls


async def fetch_sitemap(
    client: httpx.AsyncClient,
    url: str,
    path_filter: Optional[str] = None,
    timeout: Optional[float] = None,
) -> List[str]:
    """GET `url` and return its `urlset/url/loc` entries in document order.

    With `path_filter`, only URLs containing that substring are kept; a URL
    listed twice is returned once. `timeout` bounds the whole request.
    Raises SitemapFetchError on network errors, timeouts, HTTP error statuses
    and malformed XML.
    """
    try:
        resp = await asyncio.wait_for(client.get(url), timeout)
        resp.raise_for_status()
        urls = parse_sitemap(resp.content, path_filter)
    except asyncio.TimeoutError as e:
        logger.error("Sitemap %s timed out after %ss", url, timeout)
        raise SitemapFetchError(f"Failed to fetch sitemap {url}: timed out") from e
    except (httpx.HTTPError, etree.XMLSyntaxError) as e:
        logger.error("Failed to fetch sitemap %s: %s", url, e)
        raise SitemapFetchError(f"Failed to fetch sitemap {url}: {e}") from e
    logger.info("Sitemap %s listed %d urls", url, len(urls))
    return urls
