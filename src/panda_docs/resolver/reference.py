"""Reference pointer resolution.

A reference pointer names a file and, optionally, a node inside it::

    ./_data/user.json:models.user     # _data next to the including document
    /_data/user.json:models.user      # _data at the project root
    common/user.json                  # any other path is root-relative

The file part may contain ``$NAME`` variables, replaced from the including
document's ``define`` object before resolution.
"""

import logging
import posixpath
import re
from pathlib import PurePosixPath
from typing import Any, NamedTuple

from panda_docs.errors import PandaDocsError
from panda_docs.parser.detect import DATA_DIR
from panda_docs.parser.repair import to_text
from panda_docs.parser.source import DocumentSource, normalize_path

logger = logging.getLogger(__name__)

VARIABLE_PATTERN = re.compile(r"\$(\w+)")


class ReferenceTarget(NamedTuple):
    """Outcome of resolving a pointer.

    ``path`` is empty when the file could not be read or parsed; ``value`` is
    None when either the file or the addressed node is missing.
    """

    path: str
    value: Any


def substitute_variables(pointer: str, doc_root: Any) -> str:
    """Replace ``$NAME`` tokens with values from the document's ``define``.

    Unknown names are left untouched.
    """
    defined = doc_root.get("define") if isinstance(doc_root, dict) else None
    if "$" not in pointer or not isinstance(defined, dict):
        return pointer

    def _replace(match: re.Match) -> str:
        name = match.group(1)
        if name not in defined:
            return match.group(0)
        return to_text(defined[name])

    return VARIABLE_PATTERN.sub(_replace, pointer)


def split_pointer(pointer: str) -> tuple[str, str | None]:
    """Split ``file:dotted.path`` into its file spec and optional node path."""
    file_spec, sep, node_path = pointer.partition(":")
    return file_spec, (node_path if sep else None)


def document_dir(doc_path: str) -> str:
    """Directory that owns the document's relative ``_data`` folder.

    Files stored inside a ``_data`` folder share it with the documents next
    to that folder.
    """
    parts = PurePosixPath(doc_path).parts[:-1]
    if DATA_DIR in parts:
        parts = parts[: parts.index(DATA_DIR)]
    return "/".join(parts)


def resolve_reference_path(file_spec: str, doc_path: str) -> str:
    """Map a pointer's file spec to a root-relative path."""
    if file_spec.startswith(f"./{DATA_DIR}"):
        path = posixpath.join(document_dir(doc_path), file_spec[2:])
    elif file_spec.startswith(f"/{DATA_DIR}"):
        path = file_spec.lstrip("/")
    else:
        path = file_spec
    return normalize_path(path)


def select_node(data: Any, node_path: str | None) -> Any:
    """Descend into ``data`` along a dotted path; None if a step is missing."""
    if not node_path:
        return data
    node = data
    for segment in node_path.split("."):
        if isinstance(node, dict) and segment in node:
            node = node[segment]
        elif isinstance(node, list) and segment.isdigit() and int(segment) < len(node):
            node = node[int(segment)]
        else:
            return None
    return node


def load_reference(pointer: str, doc_path: str, source: DocumentSource) -> ReferenceTarget:
    """Resolve ``pointer`` as seen from the document at ``doc_path``."""
    file_spec, node_path = split_pointer(pointer)
    path = resolve_reference_path(file_spec, doc_path)
    try:
        data = source.load(path)
    except PandaDocsError as e:
        logger.warning("Unresolvable reference '%s' in %s: %s", pointer, doc_path, e)
        return ReferenceTarget("", None)

    value = select_node(data, node_path)
    if value is None:
        logger.warning("Reference '%s' in %s: no value at '%s'", pointer, doc_path, node_path)
    return ReferenceTarget(path, value)
