"""
FastAPI application entry point.

Local API for novelty checks and feed inspection.
Optional API key authentication.
"""

from fastapi import Depends, FastAPI

from postfeed import __version__

from .dependencies.auth import require_api_key
from .routers import dedup, posts

tags_metadata = [
    {
        "name": "dedup",
        "description": "Novelty evaluation - check a candidate post against recent posts",
    },
    {
        "name": "posts",
        "description": "Feed inspection - list recent posts",
    },
]

app = FastAPI(
    title="Postfeed API",
    description="""
## Postfeed API

Novelty guard and feed access for the daily AI + UX post generator.

### Authentication
When `API_AUTH_ENABLED` is on, all endpoints except `/health` require an
`X-API-Key` header matching the `API_KEY` environment variable.

### Usage
```bash
uvicorn postfeed.api.main:app --host 127.0.0.1 --port 8000
```
    """,
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_tags=tags_metadata,
)


@app.get("/health")
async def health_check():
    """Health check endpoint. Not authenticated."""
    return {"status": "ok", "version": __version__}


auth_dependency = [Depends(require_api_key)]

app.include_router(
    dedup.router, prefix="/dedup", tags=["dedup"], dependencies=auth_dependency
)
app.include_router(
    posts.router, prefix="/posts", tags=["posts"], dependencies=auth_dependency
)


def run() -> None:
    """Start the API server with uvicorn."""
    import os

    import uvicorn

    uvicorn.run(
        "postfeed.api.main:app",
        host=os.getenv("API_HOST", "127.0.0.1"),
        port=int(os.getenv("API_PORT", "8000")),
    )
