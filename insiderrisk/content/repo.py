"""
Content Repository Layer

READ ONLY access to published research articles and playbooks, mapped to
FeedItem snapshots newest first.
"""
import logging
from typing import Dict, List

from insiderrisk.content.types import CONTENT_KINDS, FeedItem
from insiderrisk.db.db import execute_query

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 1000

RESEARCH_SQL = """
SELECT slug, title, abstract AS description, authors, tags, featured,
       "publishedAt" AS published_at
FROM "Research"
WHERE "publishedAt" IS NOT NULL
ORDER BY "publishedAt" DESC
LIMIT %s
"""

PLAYBOOKS_SQL = """
SELECT slug, title, description, tags,
       "updatedAt" AS published_at
FROM "Playbook"
WHERE published = TRUE
ORDER BY "updatedAt" DESC
LIMIT %s
"""


def _row_to_item(row: Dict, kind: str) -> FeedItem:
    return FeedItem(
        title=row['title'],
        slug=row['slug'],
        description=row.get('description') or '',
        published_at=row['published_at'],
        authors=list(row.get('authors') or []),
        tags=list(row.get('tags') or []),
        kind=kind,
        featured=bool(row.get('featured')),
    )


def list_research(limit: int = DEFAULT_LIMIT) -> List[FeedItem]:
    rows = execute_query(RESEARCH_SQL, (limit,))
    return [_row_to_item(row, 'research') for row in rows]


def list_playbooks(limit: int = DEFAULT_LIMIT) -> List[FeedItem]:
    rows = execute_query(PLAYBOOKS_SQL, (limit,))
    return [_row_to_item(row, 'playbooks') for row in rows]


def list_content(kind: str, limit: int = DEFAULT_LIMIT) -> List[FeedItem]:
    """
    List published content of one kind, newest first.

    ``kind`` is 'research', 'playbooks' or 'all'; 'all' merges both kinds
    by publication date.
    """
    if kind == 'research':
        return list_research(limit)
    if kind == 'playbooks':
        return list_playbooks(limit)
    if kind == 'all':
        items = list_research(limit) + list_playbooks(limit)
        items.sort(key=lambda item: item.published_at, reverse=True)
        logger.debug(f"Merged {len(items)} content items across {CONTENT_KINDS}")
        return items[:limit]
    raise ValueError(f"Unknown content kind: {kind}")
