"""
Shoplist Backend: Landing Page and Asset Routes
================================================

What:  GET / returns the bundled landing page (views/index.html); any other GET
       not claimed by an API route is looked up under the static root
       (public/ by default).
How:   Both directories come from the app's settings, so tests can point them
       elsewhere. This router must be included last: the asset route matches
       every GET path, and routes registered after it would never be reached.
       Unknown assets raise NotFoundError, so they get the JSON error envelope.
"""

import logging
from pathlib import Path

from fastapi import APIRouter, Request
from fastapi.responses import FileResponse

from shoplist.exceptions import NotFoundError, ValidationError

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Pages"])


@router.get("/", include_in_schema=False)
async def index(request: Request) -> FileResponse:
    page = Path(request.app.state.settings.views_root) / "index.html"
    if not page.is_file():
        logger.error("Landing page missing at %s", page)
        raise NotFoundError(resource="page", resource_id="index.html")
    return FileResponse(path=str(page), media_type="text/html")


@router.get("/{asset_path:path}", include_in_schema=False)
async def static_asset(asset_path: str, request: Request) -> FileResponse:
    """Serve a file from the static root, refusing paths that escape it."""
    static_root = Path(request.app.state.settings.static_root).resolve()
    target = (static_root / asset_path).resolve()

    if not target.is_relative_to(static_root):
        logger.warning("Rejected asset path outside static root: %s", asset_path)
        raise ValidationError(message="Invalid asset path", field="asset_path")

    if not target.is_file():
        raise NotFoundError(resource="file", resource_id=asset_path)

    return FileResponse(path=str(target))
