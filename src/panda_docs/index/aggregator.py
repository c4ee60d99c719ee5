"""Build a DocumentSummary and its endpoints from one API document."""

import logging
from typing import Any, NamedTuple

from panda_docs.errors import MalformedDocumentError
from panda_docs.parser.base import DocumentSummary, Endpoint
from panda_docs.parser.repair import to_text
from panda_docs.parser.source import DocumentSource
from panda_docs.resolver.fields import resolve_bool, resolve_string
from panda_docs.resolver.merge import REF_KEY, load_fragment, merge_value

logger = logging.getLogger(__name__)

MERGED_FIELDS = ("body", "query", "response")


class AggregatedDocument(NamedTuple):
    summary: DocumentSummary
    dependencies: set[str]


def aggregate_document(doc_path: str, source: DocumentSource, global_value: Any = None) -> AggregatedDocument:
    """Parse ``doc_path`` and resolve every endpoint it declares.

    Raises DocumentNotFoundError, DocumentParseError or MalformedDocumentError;
    reference problems inside the document are only logged.
    """
    doc = source.load(doc_path)
    if not isinstance(doc, dict):
        raise MalformedDocumentError(doc_path, "top level is not an object")

    name = to_text(doc["name"]) if "name" in doc else doc_path
    desc = to_text(doc.get("desc", ""))

    order = doc.get("order", 0)
    if isinstance(order, bool) or not isinstance(order, int):
        raise MalformedDocumentError(doc_path, f"order is not an integer: {to_text(order)}")

    entries = doc.get("api", [])
    if not isinstance(entries, list):
        logger.warning("'api' in %s is not an array, ignoring it", doc_path)
        entries = []

    dependencies: set[str] = set()
    apis = []
    for entry in entries:
        if not isinstance(entry, dict):
            logger.warning("Skipping api entry in %s that is not an object: %s", doc_path, to_text(entry))
            continue
        deps, endpoint = build_endpoint(entry, doc, doc_path, source, global_value)
        dependencies.update(deps)
        apis.append(endpoint)

    dependencies.discard("")
    dependencies.discard(doc_path)

    summary = DocumentSummary(name=name, desc=desc, order=order, filename=doc_path, apis=apis)
    return AggregatedDocument(summary, dependencies)


def build_endpoint(
    entry: dict,
    doc: dict,
    doc_path: str,
    source: DocumentSource,
    global_value: Any = None,
) -> tuple[list[str], Endpoint]:
    """Resolve one ``api`` entry into an Endpoint plus the files it used.

    An entry-level ``$ref`` supplies any field the entry leaves out. Bodies
    taken from it are merged in the context of the file they live in.
    """
    deps: list[str] = []
    ref_data: dict = {}
    ref_path, ref_root = doc_path, doc
    if REF_KEY in entry:
        ref_path, _, fragment = load_fragment(entry[REF_KEY], doc, doc_path, source)
        deps.append(ref_path)
        if fragment is not None:
            ref_data, ref_root = fragment, source.load(ref_path)

    merged = {}
    for field in MERGED_FIELDS:
        if field in entry:
            field_deps, merged[field] = merge_value(entry[field], doc, doc_path, source)
        else:
            field_deps, merged[field] = merge_value(ref_data.get(field), ref_root, ref_path, source)
        deps.extend(field_deps)

    endpoint = Endpoint(
        name=resolve_string("name", doc_path, entry, ref_data, global_value),
        desc=resolve_string("desc", "", entry, ref_data, global_value),
        url=resolve_string("url", "", entry, ref_data, global_value),
        method=resolve_string("method", "GET", entry, ref_data, global_value),
        auth=resolve_bool("auth", False, entry, ref_data, global_value),
        body_mode=resolve_string("body_mode", "json", entry, ref_data, global_value),
        test_data=entry["test_data"] if "test_data" in entry else ref_data.get("test_data"),
        **merged,
    )
    return deps, endpoint
