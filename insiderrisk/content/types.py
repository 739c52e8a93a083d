"""
Content record types
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

CONTENT_KINDS = ('research', 'playbooks')

CATEGORY_LABELS = {
    'research': 'Research',
    'playbooks': 'Playbook',
}


@dataclass(frozen=True)
class FeedItem:
    """Read-only snapshot of a published research article or playbook."""
    title: str
    slug: str
    description: str
    published_at: datetime
    authors: List[str] = field(default_factory=list)
    tags: List[str] = field(default_factory=list)
    kind: str = 'research'
    featured: bool = False

    @property
    def author(self) -> Optional[str]:
        return self.authors[0] if self.authors else None

    @property
    def path(self) -> str:
        return f"/{self.kind}/{self.slug}"

    @property
    def category(self) -> str:
        return CATEGORY_LABELS.get(self.kind, self.kind.title())

    @property
    def item_id(self) -> str:
        # Atom / JSON Feed ids, e.g. "research-insider-threat-costs"
        prefix = 'playbook' if self.kind == 'playbooks' else self.kind
        return f"{prefix}-{self.slug}"
