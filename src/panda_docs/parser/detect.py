"""Detect and discover API documents under a project root."""

import os
from collections.abc import Iterator
from pathlib import Path, PurePosixPath

from panda_docs.errors import DocumentNotFoundError

SETTINGS_FILE = "_settings.json"
DATA_DIR = "_data"
DOCUMENT_SUFFIX = ".json"


def is_api_document(path: str) -> bool:
    """Tell whether a root-relative path is an API document.

    Settings and anything stored under a ``_data`` directory are data
    sources for references, not documents.
    """
    if not path.endswith(DOCUMENT_SUFFIX) or path.endswith(SETTINGS_FILE):
        return False
    parts = PurePosixPath(path).parts
    return DATA_DIR not in parts[:-1]


def discover_documents(root: Path | str) -> Iterator[str]:
    """Yield root-relative POSIX paths of API documents, in walk order.

    Directories and files are visited in sorted order so that discovery
    order is stable between runs. Hidden directories are skipped.
    """
    root = Path(root)
    if not root.is_dir():
        raise DocumentNotFoundError(str(root), "not a directory")

    def _raise(error: OSError) -> None:
        raise DocumentNotFoundError(error.filename or str(root), error.strerror or str(error))

    for dirpath, dirnames, filenames in os.walk(root, onerror=_raise):
        dirnames[:] = sorted(d for d in dirnames if not d.startswith("."))
        rel_dir = Path(dirpath).relative_to(root).as_posix()
        for filename in sorted(filenames):
            path = filename if rel_dir == "." else f"{rel_dir}/{filename}"
            if is_api_document(path):
                yield path
