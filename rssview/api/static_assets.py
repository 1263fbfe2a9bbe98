"""
Static resources served as-is: index page, favicon, robots.txt.
"""
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from fastapi import Request
from fastapi.responses import HTMLResponse, Response

from rssview.errors import NotFoundError

logger = logging.getLogger(__name__)

ERROR_PLACEHOLDER = "<!--COMMENT_TO_REPLACE-->"

# Used as the error shell when index.html is missing from the bundle
FALLBACK_INDEX = (
    "<!DOCTYPE html>\n<html><head><meta charset=\"utf-8\"><title>rssview</title></head>"
    f"<body>{ERROR_PLACEHOLDER}</body></html>\n"
)


def _read_bytes(path: Path) -> Optional[bytes]:
    if not path.is_file():
        logger.warning(f"Static resource missing: {path}")
        return None
    return path.read_bytes()


@dataclass(frozen=True)
class StaticAssets:
    index_html: Optional[str]
    favicon_svg: Optional[bytes]
    robots_txt: Optional[bytes]

    @classmethod
    def load(cls, templates_dir: Path, static_dir: Path) -> "StaticAssets":
        index = _read_bytes(templates_dir / "index.html")
        return cls(
            index_html=index.decode("utf-8") if index is not None else None,
            favicon_svg=_read_bytes(static_dir / "favicon.svg"),
            robots_txt=_read_bytes(static_dir / "robots.txt"),
        )

    @property
    def error_shell(self) -> str:
        return self.index_html if self.index_html is not None else FALLBACK_INDEX


def _assets(request: Request) -> StaticAssets:
    return request.app.state.assets


async def index(request: Request):
    """Home page"""
    page = _assets(request).index_html
    if page is None:
        raise NotFoundError(request.url.path)
    return HTMLResponse(page)


async def favicon(request: Request):
    """Favicon, served for both .ico and .svg paths"""
    icon = _assets(request).favicon_svg
    if icon is None:
        raise NotFoundError(request.url.path)
    return Response(content=icon, media_type="image/svg+xml")


async def robots_txt(request: Request):
    """robots.txt"""
    robots = _assets(request).robots_txt
    if robots is None:
        raise NotFoundError(request.url.path)
    return Response(content=robots, media_type="text/plain; charset=utf-8")
