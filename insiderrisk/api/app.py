import os
import logging
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import RedirectResponse
from starlette.middleware.base import BaseHTTPMiddleware

from insiderrisk.api.feed_routes import router as feed_router
from insiderrisk.api.share_routes import router as share_router
from insiderrisk.api.indexnow_routes import router as indexnow_router

logging.basicConfig(
    level=os.environ.get('LOG_LEVEL', 'INFO'),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Insider Risk Index API",
    description="Shareable assessment links, syndication feeds, sitemaps and IndexNow",
    version="0.1.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class TrailingSlashRedirectMiddleware(BaseHTTPMiddleware):
    """Redirect trailing slash URLs to non-trailing slash for SEO canonicalization."""

    async def dispatch(self, request: Request, call_next):
        path = request.url.path
        if path != "/" and path.endswith("/"):
            new_path = path.rstrip("/")
            if request.url.query:
                new_url = f"{new_path}?{request.url.query}"
            else:
                new_url = new_path
            return RedirectResponse(url=new_url, status_code=301)
        return await call_next(request)


app.add_middleware(TrailingSlashRedirectMiddleware)


@app.get("/health", include_in_schema=False)
async def health():
    return {"status": "ok"}


# feed routes first: /robots.txt must win over the IndexNow /{key}.txt route
app.include_router(feed_router)
app.include_router(share_router)
app.include_router(indexnow_router)
