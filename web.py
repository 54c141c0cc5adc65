"""
Web panel for the suggestion bot.

Serves the static stats page from public/ and the JSON endpoints it polls.
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, Optional

from fastapi import FastAPI, HTTPException
from fastapi.staticfiles import StaticFiles

from branches.suggestions.errors import StoreError
from branches.suggestions.models import SuggestionStatus
from branches.suggestions.store import SuggestionStore
from constants import DEFAULT_BRAND_COLOR, DEFAULT_SITE_TITLE

logger = logging.getLogger(__name__)

PUBLIC_DIR = Path(__file__).parent / "public"


async def collect_stats(store: SuggestionStore) -> Dict[str, int]:
    """Aggregate counts shown on the panel. An empty store yields zeros."""
    return {
        "total": await store.count_all(),
        "pending": await store.count_by_status(SuggestionStatus.PENDING),
        "approved": await store.count_by_status(SuggestionStatus.APPROVED),
    }


def create_app(
    store: SuggestionStore,
    site_title: str = DEFAULT_SITE_TITLE,
    brand_color: str = DEFAULT_BRAND_COLOR,
    logo_url: str = "",
    static_dir: Optional[Path] = PUBLIC_DIR,
) -> FastAPI:
    """
    Build the web panel application.

    Args:
        store: Store the stats are read from
        site_title: Title shown on the page
        brand_color: Accent color for the page
        logo_url: Optional logo shown on the page
        static_dir: Directory with index.html and app.js, None to skip static files

    Returns:
        FastAPI application
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await store.initialize()
        yield

    app = FastAPI(title=site_title, description="Suggestion stats panel", version="1.0.0", lifespan=lifespan)

    @app.get("/api/stats")
    async def get_stats() -> Dict[str, int]:
        try:
            return await collect_stats(store)
        except StoreError as e:
            logger.error(f"Failed to collect stats: {e}")
            raise HTTPException(status_code=503, detail="Stats are temporarily unavailable")

    @app.get("/site-info")
    async def get_site_info() -> Dict[str, str]:
        return {"siteTitle": site_title, "brandColor": brand_color, "logoUrl": logo_url}

    @app.get("/health")
    async def health() -> Dict[str, str]:
        return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}

    # Mounted last so the API routes take precedence
    if static_dir is not None:
        app.mount("/", StaticFiles(directory=static_dir, html=True), name="public")

    return app
