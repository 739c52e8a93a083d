"""
Feed and sitemap routes

Serves syndication feeds and sitemaps:
- /rss.xml, /api/rss - combined RSS 2.0 feed
- /research/feed.xml, /playbooks/rss.xml - section RSS feeds
- /atom.xml, /api/atom - Atom 1.0 feed
- /feed.json, /api/feed - JSON Feed 1.1
- /sitemap.xml, /sitemap-index.xml, /sitemaps/*.xml - XML sitemaps
- /robots.txt

Every route answers 200 with a valid document; the feed builder falls back
to a minimal document when content cannot be loaded.
"""
import logging
from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse, PlainTextResponse, Response

from insiderrisk.api.deps import get_config, get_feed_builder
from insiderrisk.config import SiteConfig
from insiderrisk.content.types import CONTENT_KINDS
from insiderrisk.feeds import (
    ALL_CONTENT,
    ATOM_CONTENT_TYPE,
    FEED_CACHE_HEADERS,
    JSON_FEED_CONTENT_TYPE,
    RSS_CONTENT_TYPE,
    SITEMAP_CONTENT_TYPE,
    FeedBuilder,
)
from insiderrisk.seo.robots import render_robots

logger = logging.getLogger(__name__)

router = APIRouter(tags=["feeds"])


def _xml(content: str, media_type: str) -> Response:
    return Response(content=content, media_type=media_type, headers=FEED_CACHE_HEADERS)


@router.get("/rss.xml", response_class=Response)
@router.get("/api/rss", response_class=Response, include_in_schema=False)
async def rss_feed(builder: FeedBuilder = Depends(get_feed_builder)):
    """Combined research and playbook RSS feed, newest first."""
    return _xml(builder.rss(ALL_CONTENT), RSS_CONTENT_TYPE)


@router.get("/research/feed.xml", response_class=Response)
async def research_feed(builder: FeedBuilder = Depends(get_feed_builder)):
    return _xml(builder.rss('research'), RSS_CONTENT_TYPE)


@router.get("/playbooks/rss.xml", response_class=Response)
async def playbooks_feed(builder: FeedBuilder = Depends(get_feed_builder)):
    return _xml(builder.rss('playbooks'), RSS_CONTENT_TYPE)


@router.get("/atom.xml", response_class=Response)
@router.get("/api/atom", response_class=Response, include_in_schema=False)
async def atom_feed(builder: FeedBuilder = Depends(get_feed_builder)):
    return _xml(builder.atom(), ATOM_CONTENT_TYPE)


@router.get("/feed.json")
@router.get("/api/feed", include_in_schema=False)
async def json_feed(builder: FeedBuilder = Depends(get_feed_builder)):
    return JSONResponse(content=builder.json_feed(), media_type=JSON_FEED_CONTENT_TYPE, headers=FEED_CACHE_HEADERS)


@router.get("/sitemap.xml", response_class=Response)
@router.get("/api/sitemap", response_class=Response, include_in_schema=False)
async def sitemap_xml(builder: FeedBuilder = Depends(get_feed_builder)):
    """Static pages plus every published research article and playbook."""
    return _xml(builder.sitemap(), SITEMAP_CONTENT_TYPE)


@router.get("/sitemap-index.xml", response_class=Response)
async def sitemap_index(builder: FeedBuilder = Depends(get_feed_builder)):
    return _xml(builder.sitemap_index(), SITEMAP_CONTENT_TYPE)


@router.get("/sitemaps/{section}.xml", response_class=Response)
async def section_sitemap(section: str, builder: FeedBuilder = Depends(get_feed_builder)):
    if section == 'base':
        return _xml(builder.base_sitemap(), SITEMAP_CONTENT_TYPE)
    if section not in CONTENT_KINDS:
        raise HTTPException(status_code=404, detail="Sitemap not found")
    return _xml(builder.section_sitemap(section), SITEMAP_CONTENT_TYPE)


@router.get("/robots.txt", response_class=PlainTextResponse)
async def robots_txt(config: SiteConfig = Depends(get_config)):
    return PlainTextResponse(content=render_robots(config), headers={"Cache-Control": "public, max-age=86400"})
