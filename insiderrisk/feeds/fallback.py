"""
Fallback feed documents

Minimal, schema-valid documents served whenever a feed cannot be built
from content. Deliberately independent of the renderers in render.py.
"""
from datetime import datetime, timezone
from email.utils import format_datetime
from typing import Any, Dict, Optional

from insiderrisk.config import SiteConfig
from insiderrisk.feeds.types import JSON_FEED_VERSION, xml_text


def _now(now: Optional[datetime]) -> datetime:
    return (now or datetime.now(timezone.utc)).astimezone(timezone.utc)


def empty_rss(config: SiteConfig, section: str = "", now: Optional[datetime] = None) -> str:
    title = f"{config.site_name} - {section}" if section else config.site_name
    return f"""<?xml version="1.0" encoding="UTF-8" ?>
<rss version="2.0" xmlns:atom="http://www.w3.org/2005/Atom">
  <channel>
    <title>{xml_text(title)}</title>
    <description>{xml_text(config.description)}</description>
    <link>{xml_text(config.site_url)}</link>
    <atom:link href="{xml_text(config.site_url)}/rss.xml" rel="self" type="application/rss+xml" />
    <language>{config.language}</language>
    <lastBuildDate>{format_datetime(_now(now), usegmt=True)}</lastBuildDate>
    <ttl>{config.feed_ttl_minutes}</ttl>
  </channel>
</rss>"""


def empty_atom(config: SiteConfig, now: Optional[datetime] = None) -> str:
    updated = _now(now).isoformat(timespec='milliseconds').replace('+00:00', 'Z')
    return f"""<?xml version="1.0" encoding="UTF-8"?>
<feed xmlns="http://www.w3.org/2005/Atom">
  <title>{xml_text(config.site_name)}</title>
  <subtitle>{xml_text(config.description)}</subtitle>
  <link href="{xml_text(config.site_url)}/atom.xml" rel="self" />
  <link href="{xml_text(config.site_url)}" />
  <id>{xml_text(config.site_url)}/</id>
  <updated>{updated}</updated>
  <author>
    <name>{xml_text(config.creator)}</name>
    <email>{xml_text(config.contact_email)}</email>
  </author>
</feed>"""


def empty_json_feed(config: SiteConfig) -> Dict[str, Any]:
    return {
        'version': JSON_FEED_VERSION,
        'title': config.site_name,
        'description': config.description,
        'home_page_url': config.site_url,
        'feed_url': f"{config.site_url}/feed.json",
        'language': config.language,
        'authors': [{'name': config.creator, 'url': config.site_url}],
        'items': [],
    }


def minimal_sitemap(config: SiteConfig) -> str:
    site = xml_text(config.site_url)
    return f"""<?xml version="1.0" encoding="UTF-8"?>
<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">
  <url>
    <loc>{site}</loc>
    <changefreq>daily</changefreq>
    <priority>1.0</priority>
  </url>
  <url>
    <loc>{site}/assessment</loc>
    <changefreq>monthly</changefreq>
    <priority>0.9</priority>
  </url>
  <url>
    <loc>{site}/benchmarks</loc>
    <changefreq>weekly</changefreq>
    <priority>0.8</priority>
  </url>
</urlset>"""


def minimal_section_sitemap(config: SiteConfig, kind: str) -> str:
    return f"""<?xml version="1.0" encoding="UTF-8"?>
<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">
  <url>
    <loc>{xml_text(config.site_url)}/{xml_text(kind)}</loc>
    <changefreq>weekly</changefreq>
    <priority>0.8</priority>
  </url>
</urlset>"""
