import logging
import time
from collections import defaultdict
from typing import List, Union

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel

from insiderrisk.api.deps import get_config
from insiderrisk.config import SiteConfig
from insiderrisk.seo.indexnow import submit_core_pages, submit_url, submit_urls

logger = logging.getLogger(__name__)

router = APIRouter(tags=["indexnow"])

RATE_LIMIT_WINDOW = 3600  # seconds
RATE_LIMIT_MAX_REQUESTS = 100
_request_counts = defaultdict(list)  # IP -> list of timestamps


class IndexNowRequest(BaseModel):
    urls: Union[str, List[str], None] = None
    type: str = "single"


def check_rate_limit(fingerprint: str) -> bool:
    now = time.time()
    recent = [t for t in _request_counts[fingerprint] if now - t < RATE_LIMIT_WINDOW]
    if len(recent) >= RATE_LIMIT_MAX_REQUESTS:
        _request_counts[fingerprint] = recent
        return False
    recent.append(now)
    _request_counts[fingerprint] = recent
    return True


def get_client_ip(request: Request) -> str:
    forwarded = request.headers.get('x-forwarded-for', '')
    if forwarded:
        return forwarded.split(',')[0].strip()
    return request.headers.get('x-real-ip') or (request.client.host if request.client else 'unknown')


@router.post("/api/indexnow")
async def submit_to_indexnow(body: IndexNowRequest, request: Request, config: SiteConfig = Depends(get_config)):
    if not config.indexnow_enabled:
        raise HTTPException(status_code=503, detail="IndexNow is disabled")

    if not check_rate_limit(get_client_ip(request)):
        raise HTTPException(status_code=429, detail="Rate limit exceeded")

    if body.type == 'bulk' and isinstance(body.urls, list):
        if not submit_urls(body.urls, config):
            raise HTTPException(status_code=502, detail="Failed to submit URLs to IndexNow")
        return {
            'success': True,
            'message': f"Successfully submitted {len(body.urls)} URLs to IndexNow",
            'urls': len(body.urls),
        }

    if body.type == 'single' and isinstance(body.urls, str):
        if not submit_url(body.urls, config):
            raise HTTPException(status_code=502, detail="Failed to submit URL to IndexNow")
        return {'success': True, 'message': "Successfully submitted URL to IndexNow", 'url': body.urls}

    if body.type == 'core':
        if not submit_core_pages(config):
            raise HTTPException(status_code=502, detail="Failed to submit core pages to IndexNow")
        return {'success': True, 'message': "Submitted core pages to IndexNow"}

    raise HTTPException(status_code=400, detail="Invalid request: expected 'single' with a URL or 'bulk' with a URL list")


@router.get("/{key}.txt", response_class=PlainTextResponse, include_in_schema=False)
async def indexnow_key_file(key: str, config: SiteConfig = Depends(get_config)):
    """Key verification file IndexNow fetches to confirm site ownership."""
    if not config.indexnow_key or key != config.indexnow_key:
        raise HTTPException(status_code=404, detail="Not found")
    return PlainTextResponse(content=config.indexnow_key)
