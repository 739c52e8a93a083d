"""
IndexNow client

Notifies Bing, Yandex and other IndexNow search engines when site content
changes. Submissions never raise: failures are logged and reported as False.
"""
import logging
import time
from typing import List, Optional
from urllib.parse import urlparse

import requests

from insiderrisk.config import SiteConfig

logger = logging.getLogger(__name__)

MAX_URLS_PER_SUBMISSION = 10000
SUCCESS_STATUS_CODES = (200, 202)

CORE_PAGES = [
    '/',
    '/assessment',
    '/benchmarks',
    '/matrix',
    '/research',
    '/playbooks',
    '/glossary',
    '/about',
    '/contact',
]

FEED_AND_SITEMAP_URLS = [
    '/sitemap.xml',
    '/sitemap-index.xml',
    '/research/feed.xml',
    '/rss.xml',
    '/atom.xml',
    '/feed.json',
]


def _check_ready(config: SiteConfig) -> bool:
    if not config.indexnow_enabled:
        logger.info("IndexNow disabled (INDEXNOW_ENABLED=false), skipping submission")
        return False
    if not config.indexnow_key:
        logger.warning("IndexNow enabled but INDEXNOW_KEY is not set, skipping submission")
        return False
    return True


def _headers(config: SiteConfig, json_body: bool = False) -> dict:
    headers = {'User-Agent': config.user_agent}
    if json_body:
        headers['Content-Type'] = 'application/json; charset=utf-8'
    return headers


def submit_url(url: str, config: SiteConfig, session: Optional[requests.Session] = None) -> bool:
    """Submit a single URL to the primary IndexNow endpoint."""
    if not _check_ready(config):
        return False

    http = session or requests
    absolute_url = config.absolute_url(url)
    endpoint = config.indexnow_endpoints[0]
    start = time.monotonic()

    try:
        response = http.get(
            endpoint,
            params={'url': absolute_url, 'key': config.indexnow_key},
            headers=_headers(config),
            timeout=config.indexnow_timeout,
        )
    except requests.RequestException as e:
        logger.error(f"IndexNow submission error for {absolute_url}: {e}")
        return False

    elapsed_ms = int((time.monotonic() - start) * 1000)
    if response.status_code in SUCCESS_STATUS_CODES:
        logger.info(f"IndexNow: submitted {absolute_url} to {endpoint} ({elapsed_ms}ms)")
        return True

    logger.warning(f"IndexNow submission failed for {absolute_url}: {response.status_code} {response.reason}")
    return False


def submit_urls(urls: List[str], config: SiteConfig, session: Optional[requests.Session] = None) -> bool:
    """Submit a batch of URLs (at most 10,000) in one POST."""
    if not urls:
        return True
    if not _check_ready(config):
        return False

    http = session or requests
    absolute_urls = [config.absolute_url(u) for u in urls][:MAX_URLS_PER_SUBMISSION]
    endpoint = config.indexnow_endpoints[0]
    payload = {
        'host': urlparse(config.site_url).hostname,
        'key': config.indexnow_key,
        'urlList': absolute_urls,
    }
    start = time.monotonic()

    try:
        response = http.post(
            endpoint,
            json=payload,
            headers=_headers(config, json_body=True),
            timeout=config.indexnow_timeout,
        )
    except requests.RequestException as e:
        logger.error(f"IndexNow bulk submission error: {e}")
        return False

    elapsed_ms = int((time.monotonic() - start) * 1000)
    if response.status_code in SUCCESS_STATUS_CODES:
        logger.info(f"IndexNow: submitted {len(absolute_urls)} URLs to {endpoint} ({elapsed_ms}ms)")
        return True

    logger.warning(f"IndexNow bulk submission failed: {response.status_code} {response.reason}")
    return False


def notify_new_research_article(slug: str, config: SiteConfig) -> bool:
    return submit_urls([f"/research/{slug}", '/research'], config)


def notify_content_update(paths: List[str], config: SiteConfig) -> bool:
    return submit_urls(paths, config)


def submit_core_pages(config: SiteConfig) -> bool:
    success = submit_urls(CORE_PAGES, config)
    if success:
        logger.info("IndexNow: completed bulk submission of core pages")
    return success


def submit_sitemaps(config: SiteConfig) -> bool:
    success = submit_urls(FEED_AND_SITEMAP_URLS, config)
    if success:
        logger.info("IndexNow: submitted sitemaps and feeds for re-indexing")
    return success
