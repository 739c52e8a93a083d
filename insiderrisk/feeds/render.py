"""
Feed renderers

Pure functions from content records to RSS 2.0, Atom 1.0, JSON Feed 1.1
and sitemap documents. Items are written in the order given.
"""
from datetime import date, datetime, timezone
from email.utils import format_datetime
from typing import Any, Dict, Iterable, List, Optional, Sequence

from insiderrisk.config import SiteConfig
from insiderrisk.content.markdown import markdown_to_html
from insiderrisk.content.types import FeedItem
from insiderrisk.feeds.types import (
    ATOM_NS,
    JSON_FEED_VERSION,
    SITEMAP_NS,
    SitemapEntry,
    xml_text,
)


def _utc(dt: datetime) -> datetime:
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def rfc822(dt: datetime) -> str:
    """RFC-822 date as used by RSS, e.g. 'Sun, 18 Oct 2026 09:30:00 GMT'."""
    return format_datetime(_utc(dt), usegmt=True)


def iso8601(dt: datetime) -> str:
    """ISO-8601 UTC timestamp with millisecond precision and a Z suffix."""
    return _utc(dt).isoformat(timespec='milliseconds').replace('+00:00', 'Z')


def _authors(item: FeedItem, config: SiteConfig) -> List[str]:
    return list(item.authors) or [config.default_author]


def _rss_item(item: FeedItem, config: SiteConfig) -> str:
    url = xml_text(config.absolute_url(item.path))
    categories = [item.category] + list(item.tags)
    lines = [
        "    <item>",
        f"      <title>{xml_text(item.title)}</title>",
        f"      <description>{xml_text(item.description)}</description>",
        f"      <link>{url}</link>",
        f'      <guid isPermaLink="true">{url}</guid>',
        f"      <pubDate>{rfc822(item.published_at)}</pubDate>",
    ]
    lines += [f"      <category>{xml_text(c)}</category>" for c in categories]
    lines += [f"      <author>{xml_text(a)}</author>" for a in _authors(item, config)]
    lines.append("    </item>")
    return "\n".join(lines)


def render_rss(
    items: Sequence[FeedItem],
    config: SiteConfig,
    now: datetime,
    title: Optional[str] = None,
    description: Optional[str] = None,
    link: str = "/",
    self_path: str = "/rss.xml",
) -> str:
    """Render an RSS 2.0 channel."""
    rss_items = "\n".join(_rss_item(item, config) for item in items)
    body = f"\n{rss_items}" if rss_items else ""

    return f"""<?xml version="1.0" encoding="UTF-8" ?>
<rss version="2.0" xmlns:atom="{ATOM_NS}">
  <channel>
    <title>{xml_text(title or config.site_name)}</title>
    <description>{xml_text(description or config.description)}</description>
    <link>{xml_text(config.absolute_url(link))}</link>
    <atom:link href="{xml_text(config.absolute_url(self_path))}" rel="self" type="application/rss+xml" />
    <language>{config.language}</language>
    <lastBuildDate>{rfc822(now)}</lastBuildDate>
    <ttl>{config.feed_ttl_minutes}</ttl>{body}
  </channel>
</rss>"""


def _atom_entry(item: FeedItem, config: SiteConfig) -> str:
    lines = [
        "  <entry>",
        f'    <title type="text">{xml_text(item.title)}</title>',
        f'    <link href="{xml_text(config.absolute_url(item.path))}" />',
        f"    <id>{xml_text(config.absolute_url(item.item_id))}</id>",
        f"    <updated>{iso8601(item.published_at)}</updated>",
        f"    <published>{iso8601(item.published_at)}</published>",
        f'    <summary type="text">{xml_text(item.description)}</summary>',
        f'    <category term="{xml_text(item.category)}" />',
    ]
    lines += [f'    <category term="{xml_text(tag)}" />' for tag in item.tags]
    lines += [f"    <author><name>{xml_text(a)}</name></author>" for a in _authors(item, config)]
    lines.append("  </entry>")
    return "\n".join(lines)


def render_atom(items: Sequence[FeedItem], config: SiteConfig, now: datetime, self_path: str = "/atom.xml") -> str:
    """Render an Atom 1.0 feed."""
    entries = "\n".join(_atom_entry(item, config) for item in items)
    body = f"\n{entries}" if entries else ""

    return f"""<?xml version="1.0" encoding="UTF-8"?>
<feed xmlns="{ATOM_NS}">
  <title>{xml_text(config.site_name)}</title>
  <subtitle>{xml_text(config.description)}</subtitle>
  <link href="{xml_text(config.absolute_url(self_path))}" rel="self" />
  <link href="{xml_text(config.site_url)}" />
  <id>{xml_text(config.site_url)}/</id>
  <updated>{iso8601(now)}</updated>
  <author>
    <name>{xml_text(config.creator)}</name>
    <email>{xml_text(config.contact_email)}</email>
  </author>{body}
</feed>"""


def _json_feed_item(item: FeedItem, config: SiteConfig) -> Dict[str, Any]:
    return {
        'id': item.item_id,
        'title': item.title,
        'content_text': item.description or '',
        'content_html': markdown_to_html(item.description),
        'url': config.absolute_url(item.path),
        'date_published': iso8601(item.published_at),
        'tags': list(item.tags),
        'authors': [{'name': a} for a in _authors(item, config)],
    }


def render_json_feed(items: Sequence[FeedItem], config: SiteConfig, feed_path: str = "/feed.json") -> Dict[str, Any]:
    """Render a JSON Feed 1.1 document as a dict."""
    return {
        'version': JSON_FEED_VERSION,
        'title': config.site_name,
        'description': config.description,
        'home_page_url': config.site_url,
        'feed_url': config.absolute_url(feed_path),
        'language': config.language,
        'authors': [{'name': config.creator, 'url': config.site_url}],
        'items': [_json_feed_item(item, config) for item in items],
    }


def render_sitemap(entries: Iterable[SitemapEntry], config: SiteConfig) -> str:
    """Render a sitemap <urlset>. Priority and changefreq are copied as given."""
    xml_entries = ""
    for e in entries:
        lastmod_tag = f"\n    <lastmod>{e.lastmod.isoformat()}</lastmod>" if e.lastmod else ""
        xml_entries += f"""
  <url>
    <loc>{xml_text(config.absolute_url(e.loc))}</loc>
    <changefreq>{e.changefreq}</changefreq>
    <priority>{e.priority_text()}</priority>{lastmod_tag}
  </url>"""

    return f"""<?xml version="1.0" encoding="UTF-8"?>
<urlset xmlns="{SITEMAP_NS}">{xml_entries}
</urlset>"""


def render_sitemap_index(paths: Iterable[str], config: SiteConfig, lastmod: date) -> str:
    """Render a <sitemapindex> pointing at the per-section sitemaps."""
    xml_entries = ""
    for path in paths:
        xml_entries += f"""
  <sitemap>
    <loc>{xml_text(config.absolute_url(path))}</loc>
    <lastmod>{lastmod.isoformat()}</lastmod>
  </sitemap>"""

    return f"""<?xml version="1.0" encoding="UTF-8"?>
<sitemapindex xmlns="{SITEMAP_NS}">{xml_entries}
</sitemapindex>"""
