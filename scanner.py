"""Directory scanning and the in-memory word index."""
import logging
import re
from pathlib import Path
from types import MappingProxyType
from typing import Iterable, Mapping, Optional

from models import GifFile

logger = logging.getLogger(__name__)

GIF_SUFFIX = ".gif"
WORD_SPLIT_RE = re.compile(r"[-_]")


def tokenize(filename: str) -> list[str]:
    """Split a filename (minus `.gif`) into lowercase words."""
    stem = filename[: -len(GIF_SUFFIX)] if filename.endswith(GIF_SUFFIX) else filename
    return [word.lower() for word in WORD_SPLIT_RE.split(stem) if word]


def iter_source_files(root: Path) -> Iterable[Path]:
    """Iterate over the regular files directly inside root, sorted by name."""
    # Subdirectories (e.g. a `thumbs` folder) are not indexed
    for p in sorted(root.iterdir(), key=lambda p: p.name):
        if p.is_file():
            yield p


class GifIndex:
    """Read-only inverted index from word to filenames, plus file sizes."""

    def __init__(
        self,
        words: Mapping[str, tuple[str, ...]],
        files: Mapping[str, GifFile],
    ):
        self._words = MappingProxyType(dict(words))
        self._files = MappingProxyType(dict(files))

    @property
    def words(self) -> Mapping[str, tuple[str, ...]]:
        return self._words

    @property
    def total(self) -> int:
        """Number of indexed files."""
        return len(self._files)

    def get_file(self, filename: str) -> Optional[GifFile]:
        return self._files.get(filename)

    def lookup(self, word: str, prefix: bool = False) -> list[str]:
        """Filenames indexed under word, or under any word starting with it."""
        if not prefix:
            return list(self._words.get(word, ()))
        found: list[str] = []
        for indexed_word, filenames in self._words.items():
            if indexed_word.startswith(word):
                found.extend(filenames)
        return found

    def search(self, words: Iterable[str], prefix: bool = False) -> list[GifFile]:
        """Union of the lookups for every word, deduplicated in first-seen order."""
        seen: dict[str, GifFile] = {}
        for word in words:
            for filename in self.lookup(word, prefix=prefix):
                if filename not in seen:
                    seen[filename] = self._files[filename]
        return list(seen.values())


def build_index(root_dir: Path) -> GifIndex:
    """Index every file in root_dir by its filename words.

    Raises OSError when the directory cannot be listed; there is no
    partial index.
    """
    root_dir = root_dir.resolve()
    if not root_dir.is_dir():
        raise NotADirectoryError(f"Invalid source directory: {root_dir}")

    words: dict[str, list[str]] = {}
    files: dict[str, GifFile] = {}
    for file in iter_source_files(root_dir):
        name = file.name
        for word in tokenize(name):
            entries = words.setdefault(word, [])
            # "cat-cat.gif" is listed once under "cat"
            if not entries or entries[-1] != name:
                entries.append(name)
        files[name] = GifFile(filename=name, size=file.stat().st_size)

    logger.info("Indexed %d files from %s", len(files), root_dir)
    return GifIndex({w: tuple(names) for w, names in words.items()}, files)
