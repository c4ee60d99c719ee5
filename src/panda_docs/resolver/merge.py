"""Recursive ``$ref`` merging.

``merge_value`` walks a document value and replaces every object carrying a
``$ref`` with the referenced fragment, overlaid with the object's own fields:

    {"$ref": "./_data/user.json:user", "$exclude": ["password"], "id": 7}

loads ``user`` from ``_data/user.json``, drops its ``password`` field and
sets ``id`` to 7. Fields declared next to ``$ref`` always win.

Arrays describe the shape of one repeated item, so only their first element
is kept. Every merge also returns the files it read, which the dependency
index uses to find documents affected by a change to a shared file.
"""

import logging
from typing import Any

from panda_docs.parser.source import DocumentSource
from panda_docs.resolver.reference import load_reference, split_pointer, substitute_variables

logger = logging.getLogger(__name__)

REF_KEY = "$ref"
EXCLUDE_KEY = "$exclude"
MAX_REFERENCE_DEPTH = 32

# (file path, node path) pairs currently being expanded
Chain = tuple[tuple[str, str], ...]


def merge_value(
    value: Any,
    doc_root: Any,
    doc_path: str,
    source: DocumentSource,
    chain: Chain = (),
) -> tuple[list[str], Any]:
    """Resolve every reference inside ``value``.

    Returns the files the result depends on (an unresolvable reference
    contributes an empty string) and the merged value.
    """
    if isinstance(value, dict):
        return _merge_object(value, doc_root, doc_path, source, chain)

    if isinstance(value, list):
        if not value:
            logger.warning("Empty array value in %s", doc_path)
            return [], value
        deps, item = merge_value(value[0], doc_root, doc_path, source, chain)
        return deps, [item]

    return [], value


def load_fragment(ref: Any, doc_root: Any, doc_path: str, source: DocumentSource) -> tuple[str, str, dict | None]:
    """Load the object a ``$ref`` points to, without merging it.

    Returns the file path (empty when unreadable), the node path inside that
    file, and the object, or None when the reference yields no usable object.
    """
    if not isinstance(ref, str):
        logger.warning("%s in %s is not a string: %r", REF_KEY, doc_path, ref)
        return "", "", None

    pointer = substitute_variables(ref, doc_root)
    target = load_reference(pointer, doc_path, source)
    if target.value is not None and not isinstance(target.value, dict):
        logger.warning("File value error '%s' got %r", pointer, target.value)
        return target.path, "", None
    return target.path, split_pointer(pointer)[1] or "", target.value


def resolve_fragment(
    ref: Any,
    doc_root: Any,
    doc_path: str,
    source: DocumentSource,
    chain: Chain = (),
) -> tuple[list[str], dict]:
    """Load and fully merge the object a ``$ref`` points to.

    Falls back to an empty object whenever the reference cannot be used.
    """
    path, node_path, fragment = load_fragment(ref, doc_root, doc_path, source)
    deps = [path]
    if fragment is None:
        return deps, {}

    key = (path, node_path)
    if key in chain or len(chain) >= MAX_REFERENCE_DEPTH:
        logger.warning("Reference cycle at '%s' in %s, not expanding", ref, doc_path)
        return deps, {}

    # The fragment's own references are relative to the file it lives in.
    nested_deps, merged = merge_value(fragment, source.load(path), path, source, chain + (key,))
    return deps + nested_deps, merged


def _merge_object(
    value: dict,
    doc_root: Any,
    doc_path: str,
    source: DocumentSource,
    chain: Chain,
) -> tuple[list[str], dict]:
    if REF_KEY in value:
        deps, result = resolve_fragment(value[REF_KEY], doc_root, doc_path, source, chain)
        if EXCLUDE_KEY in value:
            _apply_excludes(result, value[EXCLUDE_KEY], doc_path)
    else:
        deps, result = [], {}

    for key, field in value.items():
        if key in (REF_KEY, EXCLUDE_KEY):
            continue
        field_deps, result[key] = merge_value(field, doc_root, doc_path, source, chain)
        deps.extend(field_deps)

    return deps, result


def _apply_excludes(base: dict, excludes: Any, doc_path: str) -> None:
    if not isinstance(excludes, list):
        logger.warning("%s in %s is not an array: %r", EXCLUDE_KEY, doc_path, excludes)
        return
    for name in excludes:
        if not isinstance(name, str):
            logger.warning("%s entry in %s is not a string: %r", EXCLUDE_KEY, doc_path, name)
            continue
        _remove_field(base, name.split("."))


def _remove_field(node: Any, parts: list[str]) -> None:
    """Remove a dotted field path; arrays apply the rest of the path per item."""
    if isinstance(node, list):
        for item in node:
            _remove_field(item, parts)
    elif isinstance(node, dict):
        if len(parts) == 1:
            node.pop(parts[0], None)
        elif parts[0] in node:
            _remove_field(node[parts[0]], parts[1:])
