"""
Render service: Jinja2 environment and the feed item template.
"""
import logging
from pathlib import Path
from typing import List, Union

from jinja2 import Environment, FileSystemLoader, TemplateError, select_autoescape

from rssview.errors import RenderError
from rssview.models.entities import NormalizedItem

logger = logging.getLogger(__name__)

RSS_TEMPLATE = "rss.html"


class RenderService:
    """
    Holds the compiled feed template.

    The template is loaded in the constructor so syntax errors surface at
    startup; afterwards the object is only read.
    """

    def __init__(self, templates_dir: Union[str, Path], template_name: str = RSS_TEMPLATE):
        self.env = Environment(
            loader=FileSystemLoader(str(templates_dir)),
            autoescape=select_autoescape(["html", "xml"]),
        )
        self.template = self.env.get_template(template_name)
        logger.info(f"Loaded template {template_name} from {templates_dir}")

    def render(self, items: List[NormalizedItem]) -> str:
        """Render items into an HTML document."""
        try:
            return self.template.render(items=items)
        except TemplateError as e:
            raise RenderError(str(e)) from e
