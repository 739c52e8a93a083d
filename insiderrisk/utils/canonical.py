"""
Canonical URL Builder Utility

Ensures pages and feeds output consistent canonical URLs with:
- Host: the configured site URL (no trailing slash)
- Path: current request path, never with a trailing slash
- Query: strips tracking params (utm_*, gclid, fbclid)
"""
from urllib.parse import urlencode, parse_qs

from insiderrisk.config import DEFAULT_SITE_URL

TRACKING_PARAMS = {
    'utm_source', 'utm_medium', 'utm_campaign', 'utm_term', 'utm_content',
    'gclid', 'fbclid', 'ref', 'source'
}


def strip_tracking_params(query_string: str) -> str:
    """Return the query string without tracking parameters ("" when nothing is left)."""
    if not query_string:
        return ""
    params = parse_qs(query_string, keep_blank_values=False)
    filtered = {
        k: v for k, v in params.items()
        if k.lower() not in TRACKING_PARAMS and not k.lower().startswith('utm_')
    }
    if not filtered:
        return ""
    clean_params = {k: v[0] if len(v) == 1 else v for k, v in filtered.items()}
    return urlencode(clean_params, doseq=True)


def build_canonical_url(path: str, query_string: str = None, host: str = DEFAULT_SITE_URL) -> str:
    """
    Build a canonical URL for the given path.

    Args:
        path: The request path (e.g., "/research/insider-threat-trends-2025")
        query_string: Optional query string to filter
        host: Site origin, e.g. SiteConfig.site_url

    Returns:
        Canonical URL starting with the site origin
    """
    if not path:
        path = "/"

    if not path.startswith("/"):
        path = "/" + path

    if path != "/" and path.endswith("/"):
        path = path.rstrip("/")

    query = strip_tracking_params(query_string)
    if query:
        query = "?" + query

    return f"{host.rstrip('/')}{path}{query}"
