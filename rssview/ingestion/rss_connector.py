"""
RSS connector.
Fetches a feed over HTTP, hands the body to feedparser, and reads the
date and link elements straight from the XML so they are not merged with
look-alike elements.
Nothing is cached or persisted.
"""
import io
import logging
import xml.etree.ElementTree as ET
from typing import Dict, List, Optional

import feedparser
import requests

from rssview.errors import FetchError, ParseError
from rssview.models.entities import RawFeedItem

logger = logging.getLogger(__name__)

# bozo reasons feedparser reports without the document being broken
_INFORMATIONAL_BOZO = (
    feedparser.CharacterEncodingOverride,
    feedparser.NonXMLContentType,
)

DC_NS = "http://purl.org/dc/elements/1.1/"
ATOM_NS = "http://www.w3.org/2005/Atom"
RSS1_NS = "http://purl.org/rss/1.0/"
RSS090_NS = "http://my.netscape.com/rdf/simple/0.9/"

_RSS_ITEM_TAGS = {"item", f"{{{RSS1_NS}}}item", f"{{{RSS090_NS}}}item"}
_RSS_LINK_TAGS = {"link", f"{{{RSS1_NS}}}link", f"{{{RSS090_NS}}}link"}
_ATOM_ENTRY_TAG = f"{{{ATOM_NS}}}entry"
_DC_DATE_TAG = f"{{{DC_NS}}}date"


def fetch_feed(url: str, timeout: Optional[float] = None) -> bytes:
    """
    Issue a single GET and return the raw body.

    Any status code is accepted; only transport failures raise FetchError.
    """
    try:
        response = requests.get(url, timeout=timeout)
    except (requests.RequestException, ValueError) as e:
        # urllib3 reports some malformed hosts as LocationParseError, a ValueError
        raise FetchError(str(e)) from e

    logger.debug(f"GET {url} -> {response.status_code} ({len(response.content)} bytes)")
    return response.content


def _element_text(element: ET.Element) -> str:
    return (element.text or "").strip()


def _scan_item(element: ET.Element) -> Dict:
    fields = {"atom": element.tag == _ATOM_ENTRY_TAG, "pub_date": None, "has_link": False, "dc_dates": []}
    for child in element:
        if child.tag == _DC_DATE_TAG:
            fields["dc_dates"].append(_element_text(child))
        elif fields["atom"]:
            if child.tag == f"{{{ATOM_NS}}}published" and fields["pub_date"] is None:
                fields["pub_date"] = _element_text(child)
        elif child.tag == "pubDate" and fields["pub_date"] is None:
            fields["pub_date"] = _element_text(child)
        elif child.tag in _RSS_LINK_TAGS:
            fields["has_link"] = True
    return fields


def scan_items(content: bytes) -> Optional[List[Dict]]:
    """
    Walk the items of a feed document in order.

    Returns None when the document cannot be read as XML here.
    """
    try:
        root = ET.fromstring(content)
    except (ET.ParseError, ValueError, LookupError) as e:
        logger.debug(f"XML scan unavailable, using feedparser fields only: {e}")
        return None
    return [
        _scan_item(element)
        for element in root.iter()
        if element.tag in _RSS_ITEM_TAGS or element.tag == _ATOM_ENTRY_TAG
    ]


def _raw_item(entry: feedparser.FeedParserDict, scanned: Optional[Dict]) -> RawFeedItem:
    link = entry.get("link")
    if scanned is None:
        # feedparser copies a permalink <guid> into link; that is not a link element
        if entry.get("guidislink"):
            link = None
        updated = entry.get("updated")
        return RawFeedItem(
            title=entry.get("title"),
            link=link,
            pub_date=entry.get("published"),
            dc_dates=[updated] if updated else [],
        )

    if not scanned["atom"] and not scanned["has_link"]:
        link = None
    return RawFeedItem(
        title=entry.get("title"),
        link=link,
        pub_date=scanned["pub_date"],
        dc_dates=scanned["dc_dates"],
    )


def parse_feed(content: bytes) -> List[RawFeedItem]:
    """Parse feed bytes into raw items, in document order."""
    # Wrapped in a stream so feedparser never treats the body as a URL or path.
    # Titles are kept as written; escaping happens in the template.
    parsed = feedparser.parse(
        io.BytesIO(content),
        sanitize_html=False,
        resolve_relative_uris=False,
    )

    if parsed.bozo:
        exc = parsed.get("bozo_exception")
        if not isinstance(exc, _INFORMATIONAL_BOZO):
            raise ParseError(str(exc) or exc.__class__.__name__)

    if not parsed.get("version"):
        raise ParseError("document is not a recognized RSS or Atom feed")

    entries = list(parsed.entries)
    scanned = scan_items(content)
    if scanned is not None and len(scanned) != len(entries):
        logger.warning(f"XML scan found {len(scanned)} items, feedparser {len(entries)}; using feedparser fields")
        scanned = None

    if scanned is None:
        return [_raw_item(entry, None) for entry in entries]
    return [_raw_item(entry, fields) for entry, fields in zip(entries, scanned)]


class RSSConnector:
    """Fetch + parse for a single feed URL"""

    def __init__(self, timeout: Optional[float] = None):
        self.timeout = timeout

    def fetch(self, url: str) -> bytes:
        return fetch_feed(url, timeout=self.timeout)

    def parse(self, content: bytes) -> List[RawFeedItem]:
        return parse_feed(content)

    def fetch_entries(self, url: str) -> List[RawFeedItem]:
        """Fetch the feed at url and return its raw items."""
        logger.info(f"Fetching feed {url}")
        entries = self.parse(self.fetch(url))
        logger.info(f"Parsed {len(entries)} entries from {url}")
        return entries
