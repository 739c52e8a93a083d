"""
Site configuration

Read once from the environment at the process edge and passed explicitly
into the codec, feed builder and IndexNow client.
"""
import os
from dataclasses import dataclass, field
from typing import List, Optional

DEFAULT_SITE_URL = "https://insiderisk.io"

DEFAULT_DESCRIPTION = (
    "Measure and improve your organization's insider risk posture with our "
    "comprehensive assessment tool. Get actionable insights across 5 critical "
    "pillars of insider threat management."
)

INDEXNOW_ENDPOINTS = [
    "https://www.bing.com/IndexNow",
    "https://yandex.com/IndexNow",
]


def _env_bool(name: str, default: str = 'false') -> bool:
    return os.environ.get(name, default).lower() == 'true'


@dataclass
class SiteConfig:
    """Site-wide settings shared by the feed builder and the SEO helpers."""
    site_url: str = DEFAULT_SITE_URL
    site_name: str = "Insider Risk Index"
    description: str = DEFAULT_DESCRIPTION
    creator: str = "Insider Risk Index"
    default_author: str = "Insider Risk Index Team"
    contact_email: str = "hello@insiderisk.io"
    language: str = "en-US"
    environment: str = "development"
    feed_ttl_minutes: int = 60
    feed_item_limit: int = 50
    sitemap_item_limit: int = 1000
    indexnow_enabled: bool = False
    indexnow_key: Optional[str] = None
    indexnow_endpoints: List[str] = field(default_factory=lambda: list(INDEXNOW_ENDPOINTS))
    indexnow_timeout: float = 10.0
    user_agent: str = "InsiderRiskIndex/1.0 (+https://insiderisk.io/)"

    def __post_init__(self):
        self.site_url = self.site_url.strip().rstrip('/')

    @property
    def is_production(self) -> bool:
        return self.environment == 'production'

    def absolute_url(self, path: str) -> str:
        if path.startswith('http://') or path.startswith('https://'):
            return path
        if not path.startswith('/'):
            path = '/' + path
        if path == '/':
            return self.site_url
        return f"{self.site_url}{path}"


def load_config() -> SiteConfig:
    """Build a SiteConfig from environment variables."""
    return SiteConfig(
        site_url=os.environ.get('SITE_URL', DEFAULT_SITE_URL),
        site_name=os.environ.get('SITE_NAME', 'Insider Risk Index'),
        contact_email=os.environ.get('CONTACT_EMAIL', 'hello@insiderisk.io'),
        environment=os.environ.get('APP_ENV', 'development'),
        feed_item_limit=int(os.environ.get('FEED_ITEM_LIMIT', 50)),
        sitemap_item_limit=int(os.environ.get('SITEMAP_ITEM_LIMIT', 1000)),
        indexnow_enabled=_env_bool('INDEXNOW_ENABLED'),
        indexnow_key=os.environ.get('INDEXNOW_KEY') or None,
        indexnow_timeout=float(os.environ.get('INDEXNOW_TIMEOUT', 10)),
    )
