"""
Shareable assessment codec

Packs ShareableAssessmentData into a URL-safe token for the
``/results/share?data=`` link and unpacks it again. Tokens are base64 of
the UTF-8 JSON payload with ``+``/``/`` swapped for ``-``/``_`` and the
``=`` padding removed.

Tokens are obfuscated, not signed or encrypted. Anyone holding a link can
read and alter its contents, so a decoded token must never be treated as
proof of who completed the assessment.
"""
import base64
import binascii
import json
import logging
from typing import Optional
from urllib.parse import urlencode

from insiderrisk.share.errors import DecodingError, EncodingError
from insiderrisk.share.types import ShareableAssessmentData

logger = logging.getLogger(__name__)

SHARE_PATH = "/results/share"
SHARE_PARAM = "data"


def encode(data: ShareableAssessmentData) -> str:
    """Serialize assessment data into a URL-safe token."""
    try:
        json_text = json.dumps(
            data.to_dict(),
            ensure_ascii=False,
            separators=(',', ':'),
            allow_nan=False,
        )
    except (TypeError, ValueError) as e:
        logger.error(f"Error encoding assessment data: {e}")
        raise EncodingError("Failed to encode assessment data") from e

    token = base64.urlsafe_b64encode(json_text.encode('utf-8')).decode('ascii')
    return token.rstrip('=')


def decode(token: str) -> ShareableAssessmentData:
    """
    Rebuild assessment data from a token produced by encode().

    Raises:
        DecodingError: token is not valid base64, UTF-8 or JSON
        ValidationError: payload is missing answers or organization data
    """
    if not isinstance(token, str) or not token.strip():
        raise DecodingError("Share token is empty")

    padded = token.strip()
    padded += '=' * (-len(padded) % 4)

    try:
        raw_bytes = base64.b64decode(padded, altchars=b'-_', validate=True)
        json_text = raw_bytes.decode('utf-8')
        payload = json.loads(json_text)
    except (binascii.Error, ValueError) as e:
        # UnicodeDecodeError and JSONDecodeError are both ValueErrors
        logger.warning(f"Error decoding assessment data: {e}")
        raise DecodingError("Failed to decode assessment data") from e

    return ShareableAssessmentData.from_dict(payload)


def generate_shareable_url(data: ShareableAssessmentData, base_url: Optional[str] = None) -> str:
    """Build the public share link for an assessment."""
    token = encode(data)
    base = (base_url or '').rstrip('/')
    return f"{base}{SHARE_PATH}?{urlencode({SHARE_PARAM: token})}"
