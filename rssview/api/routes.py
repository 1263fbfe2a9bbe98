"""
FastAPI application and route table for rssview
"""
from typing import Optional

from fastapi import FastAPI, Query, Request
from fastapi.responses import HTMLResponse

from rssview.api import static_assets
from rssview.api.errors import register_error_handlers
from rssview.api.static_assets import StaticAssets
from rssview.config import Settings
from rssview.ingestion.normalizer import normalize_items
from rssview.ingestion.rss_connector import RSSConnector
from rssview.logging_config import setup_logging
from rssview.models.entities import FeedRequest
from rssview.services.render_service import RenderService


def rss_feed(request: Request, url: str = Query(..., description="Feed URL")):
    """Fetch, parse, normalize and render the feed at url"""
    # sync handler: the blocking fetch runs in the threadpool
    feed_request = FeedRequest(url=url)
    connector: RSSConnector = request.app.state.connector
    renderer: RenderService = request.app.state.renderer

    entries = connector.fetch_entries(feed_request.url)
    items = normalize_items(entries)
    return HTMLResponse(renderer.render(items))


ROUTES = [
    ("/", static_assets.index),
    ("/favicon.ico", static_assets.favicon),
    ("/favicon.svg", static_assets.favicon),
    ("/robots.txt", static_assets.robots_txt),
    ("/rss.stpl", rss_feed),
    ("/rss.tera", rss_feed),
]


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the application; templates and static files are read here, once."""
    settings = settings or Settings.from_env()
    setup_logging(settings.log_level)

    app = FastAPI(
        title="rssview",
        description="Render any RSS feed as an HTML list",
        version="0.1.0",
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.settings = settings
    app.state.assets = StaticAssets.load(settings.templates_dir, settings.static_dir)
    app.state.renderer = RenderService(settings.templates_dir)
    app.state.connector = RSSConnector(timeout=settings.fetch_timeout)

    for path, endpoint in ROUTES:
        app.add_api_route(path, endpoint, methods=["GET"], include_in_schema=False)

    register_error_handlers(app)
    return app


app = create_app()
