# tests/test_sitemap.py
import asyncio
import httpx
import pytest
from app.sitemap import SitemapFetchError, fetch_sitemap, parse_sitemap

SITEMAP = b"""<?xml version="1.0" encoding="UTF-8"?>
<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">
  <url><loc>https://example.test/prestador-servicos/ana/</loc></url>
  <url><loc>https://example.test/blog/novidades/</loc></url>
  <url><loc> https://example.test/prestador-servicos/joao/ </loc><lastmod>2024-01-01</lastmod></url>
  <url><loc></loc></url>
  <url><loc>https://example.test/prestador-servicos/maria/</loc></url>
</urlset>
"""


def _client(handler):
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


def test_parse_keeps_document_order():
    assert parse_sitemap(SITEMAP) == [
        "https://example.test/prestador-servicos/ana/",
        "https://example.test/blog/novidades/",
        "https://example.test/prestador-servicos/joao/",
        "https://example.test/prestador-servicos/maria/",
    ]


def test_parse_with_path_filter():
    assert parse_sitemap(SITEMAP, "prestador-servicos") == [
        "https://example.test/prestador-servicos/ana/",
        "https://example.test/prestador-servicos/joao/",
        "https://example.test/prestador-servicos/maria/",
    ]


def test_parse_without_namespace():
    doc = b"<urlset><url><loc>https://example.test/a</loc></url></urlset>"
    assert parse_sitemap(doc) == ["https://example.test/a"]


def test_parse_other_root_is_empty():
    doc = b"<sitemapindex><sitemap><loc>https://example.test/s.xml</loc></sitemap></sitemapindex>"
    assert parse_sitemap(doc) == []


def test_fetch_sends_user_agent():
    seen = {}

    def handler(request):
        seen["ua"] = request.headers.get("user-agent")
        return httpx.Response(200, content=SITEMAP)

    async def run():
        async with httpx.AsyncClient(
            transport=httpx.MockTransport(handler), headers={"User-Agent": "LED-Panel-Bot"}
        ) as client:
            return await fetch_sitemap(client, "https://example.test/post-sitemap.xml", "prestador-servicos")

    urls = asyncio.run(run())
    assert len(urls) == 3
    assert seen["ua"] == "LED-Panel-Bot"


def _malformed(request):
    return httpx.Response(200, content=b"<urlset><url><loc>broken")


def _unavailable(request):
    return httpx.Response(503, content=b"down")


def _timeout(request):
    raise httpx.ReadTimeout("timed out", request=request)


@pytest.mark.parametrize("handler", [_malformed, _unavailable, _timeout])
def test_fetch_failures_raise(handler):
    async def run():
        async with _client(handler) as client:
            return await fetch_sitemap(client, "https://example.test/post-sitemap.xml")

    with pytest.raises(SitemapFetchError):
        asyncio.run(run())


def test_parse_drops_repeated_urls():
    doc = (b"<urlset>"
           b"<url><loc>https://example.test/a</loc></url>"
           b"<url><loc>https://example.test/b</loc></url>"
           b"<url><loc>https://example.test/a</loc></url>"
           b"</urlset>")
    assert parse_sitemap(doc) == ["https://example.test/a", "https://example.test/b"]


def test_fetch_whole_request_timeout():
    async def slow(request):
        await asyncio.sleep(1)
        return httpx.Response(200, content=SITEMAP)

    async def run():
        async with _client(slow) as client:
            return await fetch_sitemap(client, "https://example.test/post-sitemap.xml", timeout=0.05)

    with pytest.raises(SitemapFetchError):
        asyncio.run(run())
