"""
robots.txt content
"""
from datetime import date
from typing import Optional

from insiderrisk.config import SiteConfig

AI_CRAWLERS = ['GPTBot', 'ChatGPT-User']


def render_robots(config: SiteConfig, today: Optional[date] = None) -> str:
    """Allow crawling in production, block everything elsewhere."""
    if not config.is_production:
        return """User-agent: *
Disallow: /

# Development environment - not indexed
"""

    today = today or date.today()
    site = config.site_url

    ai_rules = ""
    for agent in AI_CRAWLERS:
        ai_rules += f"""
User-agent: {agent}
Allow: /research/
Allow: /playbooks/
Allow: /benchmarks/
Disallow: /assessment/
Disallow: /api/
"""

    return f"""# {config.site_name} Robots.txt
# Last updated: {today.isoformat()}

User-agent: *
Allow: /
Crawl-delay: 5

# Disallow API endpoints except PDF generation
Disallow: /api/
Allow: /api/pdf/

# Disallow private areas
Disallow: /admin/
Disallow: /assessment/results/

# Feeds
Allow: /rss.xml
Allow: /atom.xml
Allow: /feed.json
{ai_rules}
# Sitemaps
Sitemap: {site}/sitemap.xml
Sitemap: {site}/sitemap-index.xml
Sitemap: {site}/sitemaps/base.xml
Sitemap: {site}/sitemaps/research.xml
Sitemap: {site}/sitemaps/playbooks.xml

# Contact
# {config.contact_email}
"""
