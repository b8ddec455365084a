"""
GIF Finder – keyword search over a folder of GIFs (FastAPI + Pillow)

Quick start
-----------
1) python -m venv .venv && source .venv/bin/activate  # or .venv\\Scripts\\activate on Windows
2) pip install -e .
3) python app.py --write-templates  # writes templates/entry.html, results.html, search.html
4) python app.py --src path/to/gifs --port 8000
5) Open http://localhost:8000/search?q=cat,dog

Notes
-----
• The index is built once at startup from filenames: "black-cat_funny.gif" is found by black, cat or funny.
• Only names matching [a-zA-Z0-9-_]+.gif can be fetched from /files/ and /thumbs/.
• Thumbnails are the first frame re-encoded as JPEG on every request; nothing is cached.
"""

import logging
import sys
from typing import Optional, Sequence

from fastapi import FastAPI, Request
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from config import ServerConfig, parse_args
from routes import SearchContext, files, index, search, thumbs
from scanner import build_index
from templates_static import ensure_assets
from templating import load_templates
from utils import describe_client

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> Response:
    """Log the failure locally; the client only sees the status code."""
    logger.warning(
        "%s %s -> %d: %s - %s",
        request.method,
        request.url.path,
        exc.status_code,
        exc.detail,
        describe_client(request),
    )
    return Response(status_code=exc.status_code, headers=exc.headers)


def create_context(config: ServerConfig) -> SearchContext:
    """Load templates and build the index. Raises OSError on either failure."""
    templates = load_templates(config.templates_dir)
    src_dir = config.src.resolve()
    return SearchContext(
        index=build_index(src_dir),
        templates=templates,
        src_dir=src_dir,
        prefix_match=config.prefix_match,
    )


def create_app(context: SearchContext) -> FastAPI:
    """Create the FastAPI app serving a fully built context."""
    app = FastAPI(title="GIF Finder", docs_url=None, redoc_url=None, openapi_url=None)
    app.state.context = context

    app.add_middleware(GZipMiddleware, minimum_size=1000)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)

    # Routes
    app.get("/", include_in_schema=False)(index)
    app.get("/search")(search)
    app.get("/files/{filename:path}")(files)
    app.get("/thumbs/{filename:path}")(thumbs)
    return app


def configure_logging(config: ServerConfig) -> None:
    logging.basicConfig(level=config.log_level, format=LOG_FORMAT)
    if config.access_log:
        handler = logging.FileHandler(config.access_log, encoding="utf-8")
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logging.getLogger("uvicorn.access").addHandler(handler)


def main(argv: Optional[Sequence[str]] = None) -> int:
    config, write_templates = parse_args(argv)
    configure_logging(config)

    if write_templates:
        for p in ensure_assets(config.templates_dir):
            logger.info("Wrote %s", p)
        return 0

    try:
        context = create_context(config)
    except OSError as e:
        logger.critical("Startup failed: %s", e)
        return 1

    app = create_app(context)
    logger.info("Listening on %s:%d", config.host, config.port)
    import uvicorn

    uvicorn.run(app, host=config.host, port=config.port, log_config=None)
    return 0


if __name__ == "__main__":
    sys.exit(main())
