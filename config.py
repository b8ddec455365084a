"""Command-line configuration for GIF Finder."""
import argparse
from pathlib import Path
from typing import Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_PORT = 8000
DEFAULT_HOST = "0.0.0.0"
DEFAULT_TEMPLATES_DIR = Path("templates")


class ServerConfig(BaseModel):
    """Startup settings; fixed for the lifetime of the process."""
    model_config = ConfigDict(frozen=True)

    src: Path = Field(description="Directory of GIF files to index")
    port: int = Field(default=DEFAULT_PORT, ge=0, le=65535)
    host: str = DEFAULT_HOST
    templates_dir: Path = DEFAULT_TEMPLATES_DIR
    prefix_match: bool = False
    log_level: str = "INFO"
    access_log: Optional[Path] = None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Search a directory of GIFs by filename keywords."
    )
    parser.add_argument("-s", "--src", type=Path, default=None, help="Source GIF directory (required to serve)")
    parser.add_argument("-p", "--port", type=int, default=DEFAULT_PORT, help=f"Port to listen on (default {DEFAULT_PORT})")
    parser.add_argument("--host", default=DEFAULT_HOST, help=f"Interface to bind (default {DEFAULT_HOST})")
    parser.add_argument("--templates", dest="templates_dir", type=Path, default=DEFAULT_TEMPLATES_DIR, help="Directory holding entry.html, results.html and search.html")
    parser.add_argument("--prefix-match", action="store_true", help="Match query words against the start of indexed words")
    parser.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    parser.add_argument("--access-log", type=Path, default=None, help="Append HTTP access log lines to this file")
    parser.add_argument("--write-templates", action="store_true", help="Write the default templates into --templates and exit")
    return parser


def parse_args(argv: Optional[Sequence[str]] = None) -> tuple[ServerConfig, bool]:
    """Parse argv into a validated config plus the --write-templates flag."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.src is None and not args.write_templates:
        parser.error("the following arguments are required: -s/--src")
    if not 0 <= args.port <= 65535:
        parser.error(f"invalid port: {args.port}")
    config = ServerConfig(
        src=args.src or Path("."),
        port=args.port,
        host=args.host,
        templates_dir=args.templates_dir,
        prefix_match=args.prefix_match,
        log_level=args.log_level,
        access_log=args.access_log,
    )
    return config, args.write_templates
