"""
Normalization of raw feed items into template-ready items.
"""
import re
from datetime import datetime
from email.utils import parsedate_to_datetime
from typing import Iterable, List, Optional

from rssview.models.entities import NormalizedItem, RawFeedItem

DATE_FORMAT = "%Y-%m-%d %H:%M"

_RFC2822_RE = re.compile(
    r"^(?:(?:Mon|Tue|Wed|Thu|Fri|Sat|Sun),\s*)?"
    r"\d{1,2}\s+(?:Jan|Feb|Mar|Apr|May|Jun|Jul|Aug|Sep|Oct|Nov|Dec)\s+\d{2,4}\s+"
    r"\d{2}:\d{2}(?::\d{2})?\s+"
    r"(?:[+-]\d{4}|UT|GMT|[ECMP][SD]T|[A-IK-Z])$",
    re.IGNORECASE,
)

_RFC3339_RE = re.compile(
    r"^(\d{4}-\d{2}-\d{2})[Tt ](\d{2}:\d{2}):(\d{2})(\.\d+)?([Zz]|[+-]\d{2}:\d{2})$"
)


def parse_rfc2822(text: str) -> Optional[datetime]:
    """Parse an RFC 2822 date ("Tue, 10 Jun 2003 04:00:00 GMT")."""
    text = text.strip()
    # email.utils also takes loose forms such as "Jun 10 2003 04:00:00"
    if not _RFC2822_RE.match(text):
        return None
    try:
        return parsedate_to_datetime(text)
    except (TypeError, ValueError, IndexError):
        return None


def parse_rfc3339(text: str) -> Optional[datetime]:
    """Parse an RFC 3339 timestamp; an explicit offset is required."""
    match = _RFC3339_RE.match(text.strip())
    if not match:
        return None
    day, hour_minute, second, fraction, offset = match.groups()
    if offset in ("Z", "z"):
        offset = "+00:00"
    # leap second: datetime has no second 60
    if second == "60":
        second = "59"
    # fromisoformat wants microseconds, so pad or truncate to six digits
    fraction = fraction[:7].ljust(7, "0") if fraction else ""
    try:
        return datetime.fromisoformat(f"{day}T{hour_minute}:{second}{fraction}{offset}")
    except ValueError:
        return None


def format_date(source: str) -> str:
    """
    Format a date source string as YYYY-MM-DD HH:MM.

    RFC 2822 is tried first, then RFC 3339. The time is kept in the offset
    it was written in. Unparseable input is returned unchanged.
    """
    if not source:
        return ""
    parsed = parse_rfc2822(source) or parse_rfc3339(source)
    if parsed is None:
        return source
    return parsed.strftime(DATE_FORMAT)


def extract_date_source(raw: RawFeedItem) -> str:
    """
    Pick the date text for an item.

    The standard publication date (<pubDate>) wins; otherwise the first
    Dublin Core <dc:date>.
    """
    if raw.pub_date:
        return raw.pub_date
    if raw.dc_dates:
        return raw.dc_dates[0]
    return ""


def extract_date_string(raw: RawFeedItem) -> str:
    return format_date(extract_date_source(raw))


def normalize_item(raw: RawFeedItem) -> NormalizedItem:
    """Convert one raw item to a NormalizedItem."""
    return NormalizedItem(
        title=raw.title or "",
        link=raw.link or "",
        pub_date=extract_date_string(raw),
    )


def normalize_items(raws: Iterable[RawFeedItem]) -> List[NormalizedItem]:
    return [normalize_item(raw) for raw in raws]
