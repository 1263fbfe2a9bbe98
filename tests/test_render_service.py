import pytest
from jinja2 import TemplateSyntaxError

from rssview.config import DEFAULT_FRONTEND_DIR
from rssview.errors import RenderError
from rssview.models.entities import NormalizedItem
from rssview.services.render_service import RenderService


@pytest.fixture(scope="module")
def renderer():
    return RenderService(DEFAULT_FRONTEND_DIR / "templates")


def test_render_items(renderer):
    html = renderer.render([
        NormalizedItem(title="First", link="https://example.com/1", pub_date="2003-06-10 04:00"),
        NormalizedItem(title="Second", link="https://example.com/2", pub_date=""),
    ])
    assert html.count('<li class="item">') == 2
    assert html.index("First") < html.index("Second")
    assert 'href="https://example.com/1"' in html
    assert "2003-06-10 04:00" in html


def test_render_empty_list_is_complete_document(renderer):
    html = renderer.render([])
    assert html.lstrip().startswith("<!DOCTYPE html>")
    assert html.rstrip().endswith("</html>")
    assert '<li class="item">' not in html
    assert '<ul class="items">' in html and "</ul>" in html


def test_render_escapes_feed_content(renderer):
    html = renderer.render([
        NormalizedItem(title="<script>alert(1)</script>", link='https://e.com/?a=1&b="2"'),
    ])
    assert "<script>" not in html
    assert "&lt;script&gt;alert(1)&lt;/script&gt;" in html
    assert "https://e.com/?a=1&amp;b=&#34;2&#34;" in html


def test_template_errors_surface_at_load(tmp_path):
    (tmp_path / "rss.html").write_text("{% for item in items %}")
    with pytest.raises(TemplateSyntaxError):
        RenderService(tmp_path)


def test_render_failure_becomes_render_error(tmp_path):
    (tmp_path / "rss.html").write_text("{{ items.missing.deeper }}")
    service = RenderService(tmp_path)
    with pytest.raises(RenderError) as info:
        service.render([])
    assert info.value.status_code == 500
