# app/config.py
"""Scraper configuration loaded from the environment (.env supported).

Every value has a default matching the live site so the service runs with no
configuration at all. Pass a `SiteConfig` explicitly to the scraping and
refresh functions; tests build their own with `dataclasses.replace`.
"""
import os
from dataclasses import dataclass
from dotenv import load_dotenv

load_dotenv()

SITE_ORIGIN = "https://www.manecogomes.com.br"


@dataclass(frozen=True)
class SiteConfig:
    site_origin: str = SITE_ORIGIN
    listings_sitemap_url: str = SITE_ORIGIN + "/post-sitemap.xml"
    properties_sitemap_url: str = SITE_ORIGIN + "/property-sitemap.xml"
    # only sitemap entries under this path are service-provider posts
    category_marker: str = "prestador-servicos"
    listing_category: str = "Profissionais & Empresas"
    title_prefix: str = "Prestador Serviços"
    default_contact_number: str = "(24) 9 8841 8058"
    user_agent: str = "Mozilla/5.0 (compatible; LED-Panel-Bot/1.0)"
    request_timeout: float = 10.0
    batch_size: int = 3
    batch_delay: float = 1.0


def load_config() -> SiteConfig:
    origin = os.getenv("SITE_ORIGIN", SITE_ORIGIN).rstrip("/")
    defaults = SiteConfig()
    return SiteConfig(
        site_origin=origin,
        listings_sitemap_url=os.getenv("LISTINGS_SITEMAP_URL", origin + "/post-sitemap.xml"),
        properties_sitemap_url=os.getenv("PROPERTIES_SITEMAP_URL", origin + "/property-sitemap.xml"),
        category_marker=os.getenv("LISTINGS_CATEGORY_MARKER", defaults.category_marker),
        listing_category=os.getenv("LISTINGS_CATEGORY", defaults.listing_category),
        title_prefix=os.getenv("LISTINGS_TITLE_PREFIX", defaults.title_prefix),
        default_contact_number=os.getenv("DEFAULT_CONTACT_NUMBER", defaults.default_contact_number),
        user_agent=os.getenv("SCRAPER_USER_AGENT", defaults.user_agent),
        request_timeout=float(os.getenv("SCRAPER_TIMEOUT", defaults.request_timeout)),
        batch_size=int(os.getenv("SCRAPER_BATCH_SIZE", defaults.batch_size)),
        batch_delay=float(os.getenv("SCRAPER_BATCH_DELAY", defaults.batch_delay)),
    )
