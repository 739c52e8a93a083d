"""
Shareable assessment types

Wire keys are camelCase so tokens stay compatible with links generated by
the browser client.
"""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from numbers import Real
from typing import Any, Dict, Optional

from insiderrisk.share.errors import ValidationError

DEFAULT_ORGANIZATION_NAME = "Organization"
DEFAULT_INDUSTRY = "Unknown"
DEFAULT_EMPLOYEE_COUNT = "Unknown"

REQUIRED_FIELDS = ('answers', 'organizationData')
ORGANIZATION_FIELDS = {
    'organizationName': 'organization_name',
    'industry': 'industry',
    'employeeCount': 'employee_count',
}


@dataclass
class OrganizationData:
    organization_name: str
    industry: str
    employee_count: str

    def to_dict(self) -> Dict[str, str]:
        return {
            'organizationName': self.organization_name,
            'industry': self.industry,
            'employeeCount': self.employee_count,
        }

    @classmethod
    def from_dict(cls, raw: Any) -> 'OrganizationData':
        if not isinstance(raw, dict):
            raise ValidationError("organizationData must be an object")
        values = {}
        for wire_key, attr in ORGANIZATION_FIELDS.items():
            value = raw.get(wire_key)
            if not isinstance(value, str):
                raise ValidationError(f"organizationData.{wire_key} must be a string")
            values[attr] = value
        return cls(**values)


@dataclass
class ShareableAssessmentData:
    """Answers plus organization context carried inside a share link.

    Unknown top-level keys found while decoding are kept in ``extra`` and
    written back on encode.
    """
    answers: Dict[str, float]
    organization_data: OrganizationData
    completed_at: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        data = dict(self.extra)
        data['answers'] = dict(self.answers)
        data['organizationData'] = self.organization_data.to_dict()
        if self.completed_at is not None:
            data['completedAt'] = self.completed_at
        return data

    @classmethod
    def from_dict(cls, raw: Any) -> 'ShareableAssessmentData':
        if not isinstance(raw, dict):
            raise ValidationError("Share payload must be an object")

        for key in REQUIRED_FIELDS:
            if raw.get(key) is None:
                raise ValidationError(f"Share payload is missing '{key}'")

        answers = raw['answers']
        if not isinstance(answers, dict):
            raise ValidationError("answers must be an object")
        for question_id, value in answers.items():
            if isinstance(value, bool) or not isinstance(value, Real):
                raise ValidationError(f"Answer for '{question_id}' is not numeric")

        completed_at = raw.get('completedAt')
        if completed_at is not None and not isinstance(completed_at, str):
            raise ValidationError("completedAt must be a string")

        extra = {k: v for k, v in raw.items() if k not in ('answers', 'organizationData', 'completedAt')}

        return cls(
            answers=dict(answers),
            organization_data=OrganizationData.from_dict(raw['organizationData']),
            completed_at=completed_at,
            extra=extra,
        )


def create_shareable_data(
    answers: Dict[str, float],
    organization_name: str,
    industry: str,
    employee_count: str,
    completed_at: Optional[datetime] = None,
) -> ShareableAssessmentData:
    """Build share data from the current assessment state, filling blanks."""
    if completed_at is None:
        completed_at = datetime.now(timezone.utc)
    return ShareableAssessmentData(
        answers=dict(answers),
        organization_data=OrganizationData(
            organization_name=organization_name or DEFAULT_ORGANIZATION_NAME,
            industry=industry or DEFAULT_INDUSTRY,
            employee_count=employee_count or DEFAULT_EMPLOYEE_COUNT,
        ),
        completed_at=completed_at.isoformat(timespec='milliseconds').replace('+00:00', 'Z'),
    )
