"""Root HTML pages and the content-negotiated 404."""

from pathlib import Path

from fastapi import APIRouter, Request
from fastapi.responses import FileResponse, JSONResponse, PlainTextResponse, Response

VIEWS_DIR = Path(__file__).resolve().parent.parent / "views"

_MEDIA_TYPES = {
    "html": "text/html",
    "json": "application/json",
    "txt": "text/plain",
}

router = APIRouter(tags=["root"])


@router.get("/", include_in_schema=False)
@router.get("/index", include_in_schema=False)
@router.get("/index.html", include_in_schema=False)
async def index():
    return FileResponse(VIEWS_DIR / "index.html", media_type="text/html")


def _media_ranges(accept_header: str) -> list[tuple[str, float]]:
    ranges = []
    for part in accept_header.split(","):
        media, _, params = part.strip().partition(";")
        q = 1.0
        for param in params.split(";"):
            key, _, value = param.strip().partition("=")
            if key.strip() == "q":
                try:
                    q = float(value)
                except ValueError:
                    q = 0.0
        if media:
            ranges.append((media.strip().lower(), q))
    return ranges


def accepts(accept_header: str | None, kind: str) -> bool:
    """Whether ``kind`` ("html", "json" or "txt") is acceptable to the client.

    A missing Accept header accepts everything.
    """
    if not accept_header:
        return True
    want_type, want_subtype = _MEDIA_TYPES[kind].split("/")
    for media, q in _media_ranges(accept_header):
        if q <= 0:
            continue
        range_type, _, range_subtype = media.partition("/")
        if range_type in ("*", want_type) and range_subtype in ("*", want_subtype):
            return True
    return False


def not_found_response(request: Request) -> Response:
    """404 as HTML, JSON or text, in that order of preference."""
    accept = request.headers.get("accept")
    if accepts(accept, "html"):
        return FileResponse(VIEWS_DIR / "404.html", status_code=404, media_type="text/html")
    if accepts(accept, "json"):
        return JSONResponse({"message": "404 Not Found"}, status_code=404)
    return PlainTextResponse("404 Not Found", status_code=404)
