"""
Syndication feeds and sitemaps for research articles and playbooks.
"""
from insiderrisk.feeds.builder import ALL_CONTENT, FeedBuilder
from insiderrisk.feeds.types import (
    ATOM_CONTENT_TYPE,
    FEED_CACHE_HEADERS,
    JSON_FEED_CONTENT_TYPE,
    RSS_CONTENT_TYPE,
    SITEMAP_CONTENT_TYPE,
    SitemapEntry,
    UpstreamFetchError,
)

__all__ = [
    'ALL_CONTENT',
    'FeedBuilder',
    'ATOM_CONTENT_TYPE',
    'FEED_CACHE_HEADERS',
    'JSON_FEED_CONTENT_TYPE',
    'RSS_CONTENT_TYPE',
    'SITEMAP_CONTENT_TYPE',
    'SitemapEntry',
    'UpstreamFetchError',
]
