# app/heuristics.py
"""Field extraction heuristics for scraped pages.

Every function here is pure: it takes a parsed BeautifulSoup document (or a
text blob) and returns a value or None. Fallback chains are tuples of
strategies tried in order; the first non-empty result wins.
"""
import re
from decimal import Decimal
from functools import partial
from typing import Callable, List, Optional, Sequence
from urllib.parse import urljoin
from bs4 import BeautifulSoup

from .schemas import TransactionKind

# Title

def _squash(text: str) -> str:
    return " ".join(text.split())

def extract_title(soup: BeautifulSoup) -> str:
    h1 = soup.find("h1")
    title = _squash(h1.get_text(" ")) if h1 else ""
    if not title and soup.title:
        title = _squash(soup.title.get_text(" "))
    return title

def strip_title_prefix(title: str, prefix: str) -> str:
    """Remove a leading "<prefix>:" label, ignoring case and spacing."""
    words = [re.escape(w) for w in prefix.split()]
    if not words:
        return title.strip()
    pattern = r"^\s*" + r"\s+".join(words) + r"\s*:\s*"
    return re.sub(pattern, "", title, count=1, flags=re.IGNORECASE).strip()

# Images

LAZY_ATTRS = ("data-lazy-src", "data-src", "src")
IMAGE_SKIP_TOKENS = (
    "logo", "icon", "placeholder", "avatar",
    "-80-80", "150x150", "50x50", "100x100",
    "-pb.png", "CDR-",
)

def _image_source(img) -> Optional[str]:
    for attr in LAZY_ATTRS:
        value = img.get(attr)
        if value and value.strip():
            return value.strip()
    return None

def is_excluded_image(src: str) -> bool:
    return src.startswith("data:") or any(tok in src for tok in IMAGE_SKIP_TOKENS)

def featured_image(soup: BeautifulSoup, css_class: str) -> Optional[str]:
    for img in soup.find_all("img", class_=css_class):
        src = _image_source(img)
        if src and not src.startswith("data:") and "placeholder" not in src:
            return src
    return None

def first_content_image(soup: BeautifulSoup) -> Optional[str]:
    for img in soup.find_all("img"):
        src = _image_source(img)
        if src and not is_excluded_image(src):
            return src
    return None

LISTING_IMAGE_STRATEGIES = (
    partial(featured_image, css_class="wp-post-image"),
    first_content_image,
)
PROPERTY_IMAGE_STRATEGIES = (
    partial(featured_image, css_class="property-featured-image"),
    partial(featured_image, css_class="wp-post-image"),
    first_content_image,
)

def first_match(strategies: Sequence[Callable], soup: BeautifulSoup):
    for strategy in strategies:
        result = strategy(soup)
        if result:
            return result
    return None

def extract_image_url(soup: BeautifulSoup, strategies: Sequence[Callable], origin: str) -> Optional[str]:
    src = first_match(strategies, soup)
    if src and src.startswith("/"):
        src = urljoin(origin + "/", src)
    return src

# Contact number

DEFAULT_AREA_CODE = "24"
_PHONE = r"[:\s]*(?:\+?55)?[\s-]?(\(?(?:24|21)\)?)[\s-]?9?\s*(\d{4}[\s-]?\d{4})"
CONTACT_PATTERNS = tuple(
    re.compile(label + _PHONE, re.IGNORECASE)
    for label in ("WhatsApp", "Whats", "telefone", "contato")
) + (re.compile(r"(\(?(?:24|21)\)?)[\s-]?9\s*(\d{4}[\s-]?\d{4})"),)
CONTENT_SELECTORS = ("article", ".entry-content", ".post-content")

def content_text(soup: BeautifulSoup) -> str:
    for selector in CONTENT_SELECTORS:
        node = soup.select_one(selector)
        if node:
            text = node.get_text(" ")
            if text.strip():
                return text
    return soup.get_text(" ")

def match_contact_number(text: str, patterns=CONTACT_PATTERNS) -> Optional[str]:
    for pattern in patterns:
        m = pattern.search(text)
        if not m:
            continue
        area = re.sub(r"[()]", "", m.group(1) or "") or DEFAULT_AREA_CODE
        number = re.sub(r"[\s-]", "", m.group(2) or "")
        if number:
            return f"({area}) {number[:4]}-{number[4:]}"
    return None

def extract_contact_number(soup: BeautifulSoup, fallback: str) -> str:
    return match_contact_number(content_text(soup)) or fallback

# Hashtags

_QUOTES = "\"'“”‘’"
HASHTAGS_FIELD = re.compile(
    rf"[{_QUOTES}]hashtags[{_QUOTES}]?\s*:\s*[{_QUOTES}]([^{_QUOTES}]+)[{_QUOTES}]",
    re.IGNORECASE,
)
HASHTAG = re.compile(r"#[a-zA-ZÀ-ÿ][a-zA-ZÀ-ÿ0-9\s]*")
HEX_COLOR = re.compile(r"^#(?:[0-9A-Fa-f]{3}|[0-9A-Fa-f]{6})$")
MAX_TAGS = 3

def parse_hashtags(text: str) -> List[str]:
    match = HASHTAGS_FIELD.search(text)
    if not match:
        return []
    tags: List[str] = []
    for token in HASHTAG.findall(match.group(1)):
        tag = token.strip()
        if len(tag) < 3 or HEX_COLOR.match(tag) or tag in tags:
            continue
        tags.append(tag)
        if len(tags) == MAX_TAGS:
            break
    return tags

def extract_hashtags(soup: BeautifulSoup) -> List[str]:
    for p in soup.find_all("p"):
        text = p.get_text()
        if "hashtags" in text.lower():
            return parse_hashtags(text)
    return []

# Price and transaction kind

_AMOUNT = r"(\d+(?:\.\d{3})*(?:,\d{2})?)"
PRICE_PATTERNS = (
    re.compile(r"R\$\s*" + _AMOUNT),
    re.compile(r"valor[:\s]*R\$\s*" + _AMOUNT, re.IGNORECASE),
    re.compile(r"preço[:\s]*R\$\s*" + _AMOUNT, re.IGNORECASE),
)
RENT_CEILING = Decimal("90000")

def parse_amount(raw: str) -> Decimal:
    # Brazilian notation: "1.500.000,00"
    return Decimal(raw.replace(".", "").replace(",", "."))

def match_price(text: str) -> Decimal:
    """Largest currency amount in `text`, or 0 when there is none."""
    best = Decimal("0")
    for pattern in PRICE_PATTERNS:
        for m in pattern.finditer(text):
            value = parse_amount(m.group(1))
            if value > best:
                best = value
    return best

def extract_price(soup: BeautifulSoup) -> Decimal:
    return match_price(soup.get_text(" "))

def classify_transaction(price) -> TransactionKind:
    if 0 < price <= RENT_CEILING:
        return TransactionKind.FOR_RENT
    return TransactionKind.FOR_SALE
