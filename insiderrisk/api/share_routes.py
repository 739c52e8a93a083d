"""
Shareable results API

POST /api/share builds a share link for a completed assessment.
GET /api/share?data=<token> reopens one.
"""
import logging
from typing import Dict, Optional, Union

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from pydantic import BaseModel, field_validator

from insiderrisk.api.deps import get_config
from insiderrisk.config import SiteConfig
from insiderrisk.share import (
    DecodingError,
    EncodingError,
    ValidationError,
    create_shareable_data,
    decode,
    encode,
    generate_shareable_url,
)
from insiderrisk.share.codec import SHARE_PATH
from insiderrisk.utils.canonical import build_canonical_url

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/share", tags=["share"])

INVALID_LINK_DETAIL = "This share link is invalid or has expired"


class ShareRequest(BaseModel):
    answers: Dict[str, Union[int, float]]
    organization_name: str = ""
    industry: str = ""
    employee_count: str = ""

    @field_validator('answers')
    @classmethod
    def validate_answers(cls, v):
        if len(v) > 500:
            raise ValueError('Too many answers')
        return v


@router.post("")
async def create_share_link(body: ShareRequest, config: SiteConfig = Depends(get_config)):
    data = create_shareable_data(
        body.answers,
        body.organization_name,
        body.industry,
        body.employee_count,
    )
    try:
        token = encode(data)
    except EncodingError as e:
        logger.error(f"Failed to create share link: {e}")
        raise HTTPException(status_code=400, detail="Assessment data could not be shared")

    return {
        'success': True,
        'token': token,
        'url': generate_shareable_url(data, config.site_url),
    }


@router.get("")
async def open_share_link(
    request: Request,
    data: Optional[str] = Query(None, description="Share token from the results link"),
    config: SiteConfig = Depends(get_config),
):
    if not data:
        raise HTTPException(status_code=400, detail="No assessment data found in URL")

    try:
        shared = decode(data)
    except ValidationError as e:
        logger.info(f"Share link payload incomplete: {e}")
        raise HTTPException(status_code=400, detail=INVALID_LINK_DETAIL)
    except DecodingError as e:
        logger.info(f"Share link could not be decoded: {e}")
        raise HTTPException(status_code=400, detail=INVALID_LINK_DETAIL)

    logger.info(f"Opened shared assessment: answers={len(shared.answers)}, completed_at={shared.completed_at}")

    return {
        'success': True,
        'data': shared.to_dict(),
        'canonical_url': build_canonical_url(SHARE_PATH, str(request.url.query), host=config.site_url),
    }
