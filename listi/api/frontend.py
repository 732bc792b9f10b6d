"""
Static frontend fallback.

Any GET that no API route claims is answered from the frontend bundle:
existing files are served as-is, everything else gets ``index.html`` so the
client-side router can take over.
"""

import logging
from pathlib import Path

from fastapi import APIRouter, Depends, status
from fastapi.responses import FileResponse, HTMLResponse, PlainTextResponse

from listi.api.dependencies import get_app_settings
from listi.config.settings import Settings

logger = logging.getLogger(__name__)

ENTRY_DOCUMENT = "index.html"

router = APIRouter()


def resolve_static_file(static_dir: Path, path: str) -> Path | None:
    """Return the bundle file named by ``path``, or None if absent or outside the bundle."""
    if not path:
        return None
    root = static_dir.resolve()
    candidate = (root / path).resolve()
    if not candidate.is_relative_to(root) or not candidate.is_file():
        return None
    return candidate


@router.get("/{full_path:path}", include_in_schema=False, response_model=None)
def frontend(
    full_path: str, settings: Settings = Depends(get_app_settings)
) -> FileResponse | HTMLResponse | PlainTextResponse:
    static_dir = Path(settings.static_dir)

    asset = resolve_static_file(static_dir, full_path)
    if asset is not None:
        return FileResponse(asset)

    entry = static_dir / ENTRY_DOCUMENT
    try:
        content = entry.read_bytes()
    except OSError:
        logger.exception("Failed to read frontend entry document %s", entry)
        return PlainTextResponse(
            "error loading frontend", status_code=status.HTTP_500_INTERNAL_SERVER_ERROR
        )
    return HTMLResponse(content)
