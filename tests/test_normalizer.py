import pytest

from rssview.ingestion.normalizer import (
    extract_date_string,
    format_date,
    normalize_item,
    normalize_items,
    parse_rfc2822,
    parse_rfc3339,
)
from rssview.ingestion.rss_connector import parse_feed
from rssview.models.entities import NormalizedItem, RawFeedItem


FEED = b"""<?xml version="1.0" encoding="utf-8"?>
<rss version="2.0" xmlns:dc="http://purl.org/dc/elements/1.1/">
  <channel>
    <title>Sample</title>
    <link>https://example.com/</link>
    <description>Sample feed</description>
    <item>
      <title>First</title>
      <link>https://example.com/1</link>
      <pubDate>Tue, 10 Jun 2003 04:00:00 GMT</pubDate>
    </item>
    <item>
      <title>Second</title>
      <link>https://example.com/2</link>
      <dc:date>2021-01-05T10:15:00Z</dc:date>
    </item>
    <item>
      <title>Third</title>
      <link>https://example.com/3</link>
      <pubDate>Wed, 11 Jun 2003 08:30:00 GMT</pubDate>
      <dc:date>2021-01-05T10:15:00Z</dc:date>
    </item>
    <item>
      <link>https://example.com/4</link>
      <pubDate>not-a-date</pubDate>
    </item>
    <item>
      <title>No link, no date</title>
    </item>
  </channel>
</rss>
"""


@pytest.fixture(scope="module")
def items():
    return normalize_items(parse_feed(FEED))


def test_item_count_and_order_follow_the_feed(items):
    assert len(items) == 5
    assert [i.title for i in items[:3]] == ["First", "Second", "Third"]
    assert [i.link for i in items[:4]] == [
        "https://example.com/1",
        "https://example.com/2",
        "https://example.com/3",
        "https://example.com/4",
    ]


def test_rfc2822_pub_date(items):
    assert items[0].pub_date == "2003-06-10 04:00"


def test_dublin_core_date_used_without_pub_date(items):
    assert items[1].pub_date == "2021-01-05 10:15"


def test_pub_date_wins_over_dublin_core(items):
    assert items[2].pub_date == "2003-06-11 08:30"


def test_unparseable_date_is_passed_through(items):
    assert items[3].title == ""
    assert items[3].pub_date == "not-a-date"


def test_absent_fields_become_empty_strings(items):
    assert items[4] == NormalizedItem(title="No link, no date", link="", pub_date="")


def test_normalized_item_is_immutable():
    item = NormalizedItem(title="a", link="b", pub_date="c")
    with pytest.raises(Exception):
        item.title = "changed"


def test_normalize_item_from_plain_mapping():
    item = normalize_item(RawFeedItem(title="T", link="L", pub_date="Tue, 10 Jun 2003 04:00:00 GMT"))
    assert item == NormalizedItem(title="T", link="L", pub_date="2003-06-10 04:00")


def test_empty_pub_date_falls_back_to_dublin_core():
    raw = RawFeedItem(pub_date="", dc_dates=["2021-01-05T10:15:00Z"])
    assert extract_date_string(raw) == "2021-01-05 10:15"


def test_no_date_source_gives_empty_string():
    assert extract_date_string(RawFeedItem()) == ""
    assert format_date("") == ""


@pytest.mark.parametrize(
    "source, expected",
    [
        ("Tue, 10 Jun 2003 04:00:00 GMT", "2003-06-10 04:00"),
        ("10 Jun 2003 04:00:00 +0200", "2003-06-10 04:00"),
        ("Tue, 10 Jun 2003 23:59:59 -0700", "2003-06-10 23:59"),
        ("2003-06-10T04:00:00Z", "2003-06-10 04:00"),
        ("2003-06-10T04:00:00.123456789+05:30", "2003-06-10 04:00"),
        ("2003-06-10 16:45:00-03:00", "2003-06-10 16:45"),
        ("2003-06-10", "2003-06-10"),
        ("  ", "  "),
    ],
)
def test_format_date(source, expected):
    assert format_date(source) == expected


def test_rfc3339_requires_offset():
    assert parse_rfc3339("2003-06-10T04:00:00") is None
    assert parse_rfc3339("2003-06-10T04:00:00Z").utcoffset().total_seconds() == 0


def test_rfc2822_rejects_iso_text():
    assert parse_rfc2822("2021-01-05T10:15:00Z") is None
    assert parse_rfc2822("not-a-date") is None


def _single_item(item_xml: str) -> NormalizedItem:
    feed = (
        '<rss version="2.0" xmlns:dc="http://purl.org/dc/elements/1.1/"'
        ' xmlns:dcterms="http://purl.org/dc/terms/">'
        f"<channel><title>t</title><item>{item_xml}</item></channel></rss>"
    )
    items = normalize_items(parse_feed(feed.encode("utf-8")))
    assert len(items) == 1
    return items[0]


def test_first_of_several_dublin_core_dates_is_used():
    item = _single_item(
        "<title>x</title>"
        "<dc:date>2021-01-05T10:15:00Z</dc:date>"
        "<dc:date>2022-02-02T02:02:00Z</dc:date>"
    )
    assert item.pub_date == "2021-01-05 10:15"


def test_dcterms_elements_are_not_date_sources():
    item = _single_item(
        "<title>x</title>"
        "<dcterms:issued>2020-01-01T00:00:00Z</dcterms:issued>"
        "<dcterms:modified>2019-01-01T00:00:00Z</dcterms:modified>"
        "<dc:date>2021-01-05T10:15:00Z</dc:date>"
    )
    assert item.pub_date == "2021-01-05 10:15"


def test_guid_is_not_used_as_link():
    item = _single_item("<title>x</title><guid>abc-123</guid>")
    assert item.link == ""


def test_link_element_wins_alongside_guid():
    item = _single_item("<title>x</title><link>https://example.com/x</link><guid>abc-123</guid>")
    assert item.link == "https://example.com/x"


def test_html_looking_title_is_kept_verbatim():
    item = _single_item(
        "<title>&lt;p style=\"color:red\"&gt;Hi&lt;/p&gt; &lt;img src=\"x\" onerror=\"y\"&gt;</title>"
    )
    assert item.title == '<p style="color:red">Hi</p> <img src="x" onerror="y">'


@pytest.mark.parametrize(
    "source",
    [
        "Jun 10 2003 04:00:00",
        "Tuesday, 10 Jun 2003 04:00:00 GMT",
        "Tue, 10 Jun 2003 04:00:00",
    ],
)
def test_loose_rfc2822_lookalikes_pass_through(source):
    assert format_date(source) == source


def test_leap_second_is_parsed():
    assert format_date("2003-06-10T23:59:60Z") == "2003-06-10 23:59"
