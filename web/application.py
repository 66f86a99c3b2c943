import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse
from fastapi.staticfiles import StaticFiles

from catalog import CatalogBuilder
from config import settings
from web.cards import render_card
from web.page import assemble_page

logger = logging.getLogger(__name__)


async def render_catalog(builder: CatalogBuilder, page_count: int = None) -> str:
    """Scrape the storefront and return the finished catalog document."""
    page_count = settings.page_count if page_count is None else page_count
    result = await builder.build(page_count)
    if result.failed_pages:
        logger.warning(f"Catalog built without pages {result.failed_pages}")

    cards = [render_card(product) for product in result]
    return assemble_page(cards, len(result))


def create_app(builder: Optional[CatalogBuilder] = None, static_dir: str = None) -> FastAPI:
    """Create the catalog web application."""
    app = FastAPI(title=settings.shop_name, docs_url=None, redoc_url=None, openapi_url=None)
    app.state.catalog_builder = builder or CatalogBuilder()

    @app.get("/productos", response_class=HTMLResponse)
    async def productos(request: Request) -> HTMLResponse:
        logger.info("Building catalog for /productos")
        html = await render_catalog(request.app.state.catalog_builder)
        return HTMLResponse(html)

    # Registered once, after the routes so /productos wins
    app.mount("/", StaticFiles(directory=static_dir or settings.static_dir), name="static")

    return app
