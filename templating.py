"""Literal `$TOKEN` substitution for the HTML page templates."""
import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

logger = logging.getLogger(__name__)

# Placeholder tokens
GIF_FILENAME = "$GIF_FILENAME"
GIF_SIZE = "$GIF_SIZE"
RESULT_NUMBER = "$RESULT_NUMBER"
NUM_RESULTS = "$NUM_RESULTS"
WORDS = "$WORDS"
NUM_GIF_FILES = "$NUM_GIF_FILES"
RESULTS = "$RESULTS"

ENTRY_TEMPLATE = "entry.html"
RESULTS_TEMPLATE = "results.html"
SEARCH_TEMPLATE = "search.html"


def templateify(html: str, data: Mapping[str, str]) -> str:
    """Replace every occurrence of each token in data with its value.

    One pass over html; longer tokens win over tokens they contain
    ($NUM_RESULTS before $RESULTS) and replaced text is not rescanned.
    """
    if not data:
        return html
    tokens = sorted(data, key=len, reverse=True)
    pattern = re.compile("|".join(re.escape(t) for t in tokens))
    return pattern.sub(lambda m: data[m.group(0)], html)


@dataclass(frozen=True)
class PageTemplates:
    entry: str
    results: str
    search: str


def load_templates(templates_dir: Path) -> PageTemplates:
    """Read the three page templates. Any missing file raises OSError."""
    def read(name: str) -> str:
        return (templates_dir / name).read_text(encoding="utf-8")

    templates = PageTemplates(
        entry=read(ENTRY_TEMPLATE),
        results=read(RESULTS_TEMPLATE),
        search=read(SEARCH_TEMPLATE),
    )
    logger.debug("Loaded templates from %s", templates_dir)
    return templates
