"""
Shareable assessment links

Encodes a completed assessment into a URL token so results can be reopened
without server-side storage.
"""
from insiderrisk.share.codec import decode, encode, generate_shareable_url
from insiderrisk.share.errors import (
    DecodingError,
    EncodingError,
    ShareCodecError,
    ValidationError,
)
from insiderrisk.share.types import (
    OrganizationData,
    ShareableAssessmentData,
    create_shareable_data,
)

__all__ = [
    'decode',
    'encode',
    'generate_shareable_url',
    'DecodingError',
    'EncodingError',
    'ShareCodecError',
    'ValidationError',
    'OrganizationData',
    'ShareableAssessmentData',
    'create_shareable_data',
]
