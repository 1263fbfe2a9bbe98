"""
Data models for rssview
"""
from typing import List, Optional

from pydantic import BaseModel, Field


class FeedRequest(BaseModel):
    """Feed endpoint query: the feed URL exactly as the caller sent it"""
    url: str = Field(..., description="Feed URL, percent-decoded, not validated")


class RawFeedItem(BaseModel):
    """One feed item as the document wrote it"""
    title: Optional[str] = None
    link: Optional[str] = None
    pub_date: Optional[str] = Field(default=None, description="Text of <pubDate> (or Atom <published>)")
    dc_dates: List[str] = Field(default_factory=list, description="Texts of <dc:date>, document order")


class NormalizedItem(BaseModel):
    """One feed item flattened for the template"""
    title: str = Field(default="", description="Item title, empty if absent")
    link: str = Field(default="", description="Item link, empty if absent")
    pub_date: str = Field(default="", description="YYYY-MM-DD HH:MM, raw source text, or empty")

    class Config:
        frozen = True


ItemList = List[NormalizedItem]
