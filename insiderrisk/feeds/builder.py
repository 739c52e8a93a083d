"""
Feed Builder

Fetches content from the content collaborator and renders syndication
feeds and sitemaps. Every public method returns a valid document: when
the collaborator fails or the render breaks, the error is logged and a
fallback document of the same format is returned instead.
"""
import logging
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional, Sequence

from insiderrisk.config import SiteConfig
from insiderrisk.content.types import CONTENT_KINDS, FeedItem
from insiderrisk.feeds import fallback
from insiderrisk.feeds.render import (
    render_atom,
    render_json_feed,
    render_rss,
    render_sitemap,
    render_sitemap_index,
)
from insiderrisk.feeds.types import SitemapEntry, UpstreamFetchError

logger = logging.getLogger(__name__)

ContentSource = Callable[[str], Sequence[FeedItem]]
Clock = Callable[[], datetime]

ALL_CONTENT = 'all'

SECTION_FEEDS = {
    ALL_CONTENT: {
        'section': '',
        'description': None,
        'link': '/',
        'self_path': '/rss.xml',
    },
    'research': {
        'section': 'Research',
        'description': 'Latest research and insights on insider threats and security',
        'link': '/research',
        'self_path': '/research/feed.xml',
    },
    'playbooks': {
        'section': 'Playbooks',
        'description': 'Security playbooks and best practices for insider threat management',
        'link': '/playbooks',
        'self_path': '/playbooks/rss.xml',
    },
}

STATIC_PAGES = [
    ('/', 'weekly', 1.0),
    ('/assessment', 'monthly', 0.9),
    ('/benchmarks', 'weekly', 0.8),
    ('/playbooks', 'weekly', 0.8),
    ('/research', 'weekly', 0.8),
    ('/glossary', 'weekly', 0.7),
    ('/about', 'monthly', 0.6),
    ('/contact', 'monthly', 0.5),
    ('/privacy', 'yearly', 0.3),
    ('/terms', 'yearly', 0.3),
]

SECTION_SITEMAPS = ['/sitemaps/base.xml', '/sitemaps/research.xml', '/sitemaps/playbooks.xml']

FEATURED_PRIORITY = 0.9
ITEM_PRIORITY = 0.7


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def item_sitemap_entry(item: FeedItem) -> SitemapEntry:
    return SitemapEntry(
        loc=item.path,
        changefreq='monthly',
        priority=FEATURED_PRIORITY if item.featured else ITEM_PRIORITY,
        lastmod=item.published_at.date(),
    )


def static_sitemap_entries() -> List[SitemapEntry]:
    return [SitemapEntry(loc=loc, changefreq=freq, priority=priority) for loc, freq, priority in STATIC_PAGES]


class FeedBuilder:
    """Builds RSS, Atom, JSON Feed and sitemap documents for the site."""

    def __init__(self, config: SiteConfig, list_content: ContentSource, clock: Optional[Clock] = None):
        self.config = config
        self._list_content = list_content
        self._clock = clock or _utcnow

    def fetch(self, kind: str, limit: int) -> List[FeedItem]:
        """
        Ask the content collaborator for items of ``kind``.

        Order is kept exactly as supplied; only the first ``limit`` items
        are used.

        Raises:
            UpstreamFetchError: the collaborator raised or returned records
                that are not FeedItems
        """
        try:
            records = self._list_content(kind)
        except Exception as e:
            raise UpstreamFetchError(f"Content fetch failed for '{kind}': {e}") from e

        if records is None:
            raise UpstreamFetchError(f"Content fetch for '{kind}' returned nothing")

        try:
            items = list(records)
        except TypeError as e:
            raise UpstreamFetchError(f"Content for '{kind}' is not a sequence") from e

        for item in items:
            if not isinstance(item, FeedItem):
                raise UpstreamFetchError(f"Malformed content record for '{kind}': {item!r}")
            if not item.title or not item.slug or not isinstance(item.published_at, datetime):
                raise UpstreamFetchError(f"Incomplete content record for '{kind}': {item.slug!r}")

        return items[:limit]

    def rss(self, kind: str = ALL_CONTENT) -> str:
        section = SECTION_FEEDS.get(kind)
        if section is None:
            raise ValueError(f"Unknown feed section: {kind}")
        title = f"{self.config.site_name} - {section['section']}" if section['section'] else None

        try:
            items = self.fetch(kind, self.config.feed_item_limit)
            return render_rss(
                items,
                self.config,
                self._clock(),
                title=title,
                description=section['description'],
                link=section['link'],
                self_path=section['self_path'],
            )
        except Exception as e:
            logger.error(f"Error generating RSS feed ({kind}): {e}")
            return fallback.empty_rss(self.config, section=section['section'], now=self._clock())

    def atom(self) -> str:
        try:
            items = self.fetch(ALL_CONTENT, self.config.feed_item_limit)
            return render_atom(items, self.config, self._clock())
        except Exception as e:
            logger.error(f"Error generating Atom feed: {e}")
            return fallback.empty_atom(self.config, now=self._clock())

    def json_feed(self) -> Dict[str, Any]:
        try:
            items = self.fetch(ALL_CONTENT, self.config.feed_item_limit)
            return render_json_feed(items, self.config)
        except Exception as e:
            logger.error(f"Error generating JSON feed: {e}")
            return fallback.empty_json_feed(self.config)

    def sitemap(self) -> str:
        """Static pages followed by every research article and playbook."""
        try:
            entries = static_sitemap_entries()
            for kind in CONTENT_KINDS:
                entries += [item_sitemap_entry(item) for item in self.fetch(kind, self.config.sitemap_item_limit)]
            return render_sitemap(entries, self.config)
        except Exception as e:
            logger.error(f"Error generating sitemap: {e}")
            return fallback.minimal_sitemap(self.config)

    def base_sitemap(self) -> str:
        return render_sitemap(static_sitemap_entries(), self.config)

    def section_sitemap(self, kind: str) -> str:
        if kind not in CONTENT_KINDS:
            raise ValueError(f"Unknown sitemap section: {kind}")
        try:
            entries = [SitemapEntry(loc=f"/{kind}", changefreq='weekly', priority=0.8)]
            entries += [item_sitemap_entry(item) for item in self.fetch(kind, self.config.sitemap_item_limit)]
            return render_sitemap(entries, self.config)
        except Exception as e:
            logger.error(f"Error generating {kind} sitemap: {e}")
            return fallback.minimal_section_sitemap(self.config, kind)

    def sitemap_index(self) -> str:
        return render_sitemap_index(SECTION_SITEMAPS, self.config, self._clock().date())
