"""FastAPI routes for GIF Finder."""
import io
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from fastapi import Depends, HTTPException, Request
from fastapi.responses import FileResponse, HTMLResponse, RedirectResponse, Response
from markupsafe import escape
from PIL import Image as PILImage

from models import GifFile
from scanner import GifIndex
from templating import (
    GIF_FILENAME,
    GIF_SIZE,
    NUM_GIF_FILES,
    NUM_RESULTS,
    RESULT_NUMBER,
    RESULTS,
    WORDS,
    PageTemplates,
    templateify,
)
from utils import describe_client, filename_from_path, resolve_under_root

logger = logging.getLogger(__name__)

# One week
CACHE_CONTROL = "public, max-age=604800"


@dataclass(frozen=True)
class SearchContext:
    """Everything a request needs; built once before the server starts."""
    index: GifIndex
    templates: PageTemplates
    src_dir: Path
    prefix_match: bool = False


def get_context(request: Request) -> SearchContext:
    return request.app.state.context


def parse_query(q: Optional[str]) -> list[str]:
    """Split a comma-separated query into trimmed, lowercase, non-empty words."""
    if not q:
        return []
    words = []
    for qword in q.split(","):
        qword = qword.strip()
        if qword:
            words.append(qword.lower())
    return words


def render_entry(ctx: SearchContext, gif: GifFile, number: int) -> str:
    return templateify(ctx.templates.entry, {
        GIF_FILENAME: gif.filename,
        RESULT_NUMBER: str(number),
        GIF_SIZE: f"{gif.size_kb} KB",
    })


def render_results(ctx: SearchContext, q: str, gifs: list[GifFile]) -> str:
    entries = [render_entry(ctx, gif, i + 1) for i, gif in enumerate(gifs)]
    return templateify(ctx.templates.results, {
        NUM_GIF_FILES: str(ctx.index.total),
        WORDS: str(escape(q)),
        NUM_RESULTS: str(len(gifs)),
        RESULTS: "\n".join(entries),
    })


def render_search(ctx: SearchContext) -> str:
    return templateify(ctx.templates.search, {NUM_GIF_FILES: str(ctx.index.total)})


def index():
    """Root route redirects to search."""
    return RedirectResponse("/search")


def search(
    request: Request,
    q: Optional[str] = None,
    ctx: SearchContext = Depends(get_context),
):
    """GET /search?q=cat,dog,mouse"""
    words = parse_query(q)
    if not words:
        return HTMLResponse(render_search(ctx))

    gifs = ctx.index.search(words, prefix=ctx.prefix_match)
    logger.info(
        "search: %s produced %d results - %s", words, len(gifs), describe_client(request)
    )
    return HTMLResponse(render_results(ctx, q, gifs))


def files(request: Request, ctx: SearchContext = Depends(get_context)):
    """Serve the original GIF file."""
    fname = filename_from_path(request.url.path)
    logger.info("file: %s - %s", fname, describe_client(request))
    real = resolve_under_root(ctx.src_dir, ctx.src_dir / fname)
    if not real.is_file():
        raise HTTPException(404, f"File missing on disk: {fname}")
    return FileResponse(real, headers={"Cache-Control": CACHE_CONTROL})


def thumbs(request: Request, ctx: SearchContext = Depends(get_context)):
    """Serve the first frame of a GIF re-encoded as JPEG."""
    fname = filename_from_path(request.url.path)
    logger.info("thumb: %s - %s", fname, describe_client(request))
    real = resolve_under_root(ctx.src_dir, ctx.src_dir / fname)

    try:
        f = real.open("rb")
    except OSError as e:
        raise HTTPException(404, f"Cannot open {fname}: {e}") from e

    with f:
        try:
            with PILImage.open(f, formats=["GIF"]) as im:
                im.seek(0)
                rgb = im.convert("RGB")
        except (OSError, EOFError, ValueError) as e:
            raise HTTPException(500, f"Cannot decode {fname}: {e}") from e

    buf = io.BytesIO()
    rgb.save(buf, format="JPEG")
    return Response(
        content=buf.getvalue(),
        media_type="image/jpeg",
        headers={"Cache-Control": CACHE_CONTROL},
    )
