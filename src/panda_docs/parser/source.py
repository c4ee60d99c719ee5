"""Read and parse documents relative to a project root."""

import copy
import logging
import posixpath
from pathlib import Path
from typing import Any

from panda_docs.errors import DocumentNotFoundError
from panda_docs.parser.repair import parse_json

logger = logging.getLogger(__name__)


def normalize_path(path: str) -> str:
    """Normalize a document path to a root-relative POSIX path.

    ``./a/../b.json`` becomes ``b.json``; leading separators are stripped.
    """
    path = path.replace("\\", "/")
    normalized = posixpath.normpath(path) if path else ""
    if normalized == ".":
        return ""
    return normalized.lstrip("/")


class DocumentSource:
    """Reads documents below a project root.

    Parsed documents are cached by path for the lifetime of the source, so a
    source should live for a single pass over the tree.
    """

    def __init__(self, root: Path | str = "."):
        self.root = Path(root)
        self._cache: dict[str, Any] = {}

    def exists(self, path: str) -> bool:
        return (self.root / normalize_path(path)).is_file()

    def read_text(self, path: str) -> str:
        path = normalize_path(path)
        try:
            return (self.root / path).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise DocumentNotFoundError(path, str(e)) from e

    def load(self, path: str) -> Any:
        """Return the parsed document at ``path``.

        Raises DocumentNotFoundError or DocumentParseError. Callers get their
        own copy and may mutate it freely.
        """
        path = normalize_path(path)
        if path not in self._cache:
            logger.debug("Loading %s", path)
            self._cache[path] = parse_json(self.read_text(path), path)
        return copy.deepcopy(self._cache[path])
