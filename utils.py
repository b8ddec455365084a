"""Utility functions."""
import re
from pathlib import Path

from fastapi import HTTPException, Request

FILENAME_RE = re.compile(r"^[a-zA-Z0-9\-_]+\.gif$")


def filename_from_path(url_path: str) -> str:
    """Extract the GIF filename from a `/<prefix>/<filename>` URL path."""
    segments = url_path.split("/")
    if len(segments) != 3:
        raise HTTPException(status_code=404, detail="Bad number of path segments")
    if not FILENAME_RE.fullmatch(segments[2]):
        raise HTTPException(status_code=404, detail="Bad filename")
    return segments[2]


def resolve_under_root(root: Path, candidate: Path) -> Path:
    """Resolve a path ensuring it's under the root directory."""
    real = candidate.resolve()
    if root not in real.parents and real != root:
        raise HTTPException(status_code=404, detail="Path is outside root")
    return real


def describe_client(request: Request) -> str:
    """Remote address and user agent, for log lines."""
    host = request.client.host if request.client else "-"
    return f"{host} {request.headers.get('user-agent', '-')}"
