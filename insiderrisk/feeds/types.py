"""
Feed builder types and constants
"""
import logging
import math
import re
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional, Union
from xml.sax.saxutils import escape

logger = logging.getLogger(__name__)

JSON_FEED_VERSION = "https://jsonfeed.org/version/1.1"
SITEMAP_NS = "http://www.sitemaps.org/schemas/sitemap/0.9"
ATOM_NS = "http://www.w3.org/2005/Atom"

RSS_CONTENT_TYPE = "application/rss+xml; charset=utf-8"
ATOM_CONTENT_TYPE = "application/atom+xml; charset=utf-8"
JSON_FEED_CONTENT_TYPE = "application/feed+json; charset=utf-8"
SITEMAP_CONTENT_TYPE = "application/xml; charset=utf-8"

FEED_CACHE_HEADERS = {"Cache-Control": "public, max-age=3600, s-maxage=3600"}

CHANGEFREQ_VALUES = ('always', 'hourly', 'daily', 'weekly', 'monthly', 'yearly', 'never')

# code points XML 1.0 does not allow, even as character references
_XML_INVALID_CHARS = re.compile("[\x00-\x08\x0b\x0c\x0e-\x1f\ufffe\uffff]")
_ATTR_ENTITIES = {'"': '&quot;', "'": '&#39;'}


def xml_text(value: Optional[str]) -> str:
    """Escape text for an XML element or attribute, dropping invalid characters."""
    return escape(_XML_INVALID_CHARS.sub('', value or ''), _ATTR_ENTITIES)


class UpstreamFetchError(Exception):
    """The content collaborator failed or returned unusable records."""


def clamp_priority(value: float) -> float:
    """Clamp a sitemap priority into [0.0, 1.0]."""
    if math.isnan(value):
        raise ValueError("Sitemap priority is not a number")
    if value < 0.0:
        logger.warning(f"Sitemap priority {value} below 0.0, clamping")
        return 0.0
    if value > 1.0:
        logger.warning(f"Sitemap priority {value} above 1.0, clamping")
        return 1.0
    return value


@dataclass
class SitemapEntry:
    """One <url> element. ``loc`` may be a site path or an absolute URL."""
    loc: str
    changefreq: str
    priority: Union[float, str]
    lastmod: Optional[date] = None

    def __post_init__(self):
        if self.changefreq not in CHANGEFREQ_VALUES:
            raise ValueError(f"Invalid changefreq: {self.changefreq}")
        self.priority = clamp_priority(float(self.priority))

    def priority_text(self) -> str:
        # plain decimal, never exponent notation: 1e-05 is written 0.00001
        return format(Decimal(repr(self.priority)), 'f')
