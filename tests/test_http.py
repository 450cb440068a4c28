import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer

from promo_crawler.adapters.bnb import BathAndBodyWorksAdapter
from promo_crawler.config import CrawlConfig
from promo_crawler.engines.simple_engine import SimpleCrawlEngine
from promo_crawler.errors import FetchError
from promo_crawler.utils.http import create_session, fetch_text

from conftest import landing_page, listing_page, product_card


def _site() -> web.Application:
    async def landing(request):
        return web.Response(text=landing_page("/velas", "/roto", "https://www.facebook.com/bbw"),
                            content_type="text/html")

    async def velas(request):
        cards = product_card(name="Candle", discount="2x1") + product_card(name="Mini", category="Mini")
        return web.Response(text=listing_page(cards), content_type="text/html")

    async def roto(request):
        raise web.HTTPInternalServerError()

    async def echo_agent(request):
        return web.Response(text=request.headers.get("User-Agent", ""))

    app = web.Application()
    app.router.add_get("/", landing)
    app.router.add_get("/velas", velas)
    app.router.add_get("/roto", roto)
    app.router.add_get("/agent", echo_agent)
    return app


@pytest.mark.asyncio
async def test_fetch_text_returns_body():
    async with TestServer(_site()) as server:
        session = create_session()
        try:
            body = await fetch_text(session, f"http://{server.host}:{server.port}/velas")
        finally:
            await session.close()
    assert "product-item" in body


@pytest.mark.asyncio
async def test_fetch_text_sends_user_agent():
    async with TestServer(_site()) as server:
        session = create_session()
        try:
            body = await fetch_text(session, f"http://{server.host}:{server.port}/agent", user_agent="promo/1")
        finally:
            await session.close()
    assert body == "promo/1"


@pytest.mark.asyncio
async def test_fetch_text_raises_on_http_error():
    async with TestServer(_site()) as server:
        session = create_session()
        try:
            with pytest.raises(FetchError) as info:
                await fetch_text(session, f"http://{server.host}:{server.port}/roto")
        finally:
            await session.close()
    assert info.value.status == 500


@pytest.mark.asyncio
async def test_fetch_text_raises_on_connection_error():
    session = create_session()
    try:
        with pytest.raises(FetchError):
            await fetch_text(session, "http://127.0.0.1:9/unreachable", timeout=2)
    finally:
        await session.close()


@pytest.mark.asyncio
async def test_engine_crawls_live_site():
    async with TestServer(_site()) as server:
        root = f"http://{server.host}:{server.port}"
        engine = SimpleCrawlEngine(CrawlConfig(root_url=root), adapter=BathAndBodyWorksAdapter())
        report = await engine.crawl()

    assert report.link_count == 2
    assert report.failed_links == [f"{root}/roto"]
    assert [(r.name, r.discount_label) for r in report.records] == [("Candle", "2x1"), ("Mini", "")]
