"""The composed view of a project: document tree, endpoint table, dependencies."""

import logging
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor
from functools import partial
from pathlib import Path

from panda_docs.errors import PandaDocsError
from panda_docs.index.aggregator import AggregatedDocument, aggregate_document
from panda_docs.index.dependency import DependencyIndex
from panda_docs.parser.base import DocumentSummary, Endpoint, ProjectSettings
from panda_docs.parser.detect import SETTINGS_FILE, discover_documents, is_api_document
from panda_docs.parser.source import DocumentSource, normalize_path
from panda_docs.settings import load_settings

logger = logging.getLogger(__name__)


class ApiIndex:
    """Indices over every API document under a project root.

    ``docs`` keeps documents in discovery order and ``endpoints`` maps
    url -> method -> Endpoint. Both hold the same Endpoint objects. When two
    documents declare the same url and method, the one discovered later wins.
    """

    def __init__(self, root: Path | str, settings: ProjectSettings):
        self.root = Path(root)
        self.settings = settings
        self.docs: dict[str, DocumentSummary] = {}
        self.endpoints: dict[str, dict[str, Endpoint]] = {}
        self.dependencies = DependencyIndex()

    @classmethod
    def load(cls, root: Path | str = ".", workers: int = 1) -> "ApiIndex":
        """Run a full pass over ``root``."""
        index = cls(root, load_settings(root))
        paths = list(discover_documents(root))
        logger.info("Found %d api documents under %s", len(paths), root)
        index._aggregate(paths, workers)
        index._rebuild_endpoint_table()
        return index

    def ordered_documents(self) -> list[DocumentSummary]:
        """Documents sorted by their ``order``, ties kept in discovery order."""
        return sorted(self.docs.values(), key=lambda doc: doc.order)

    def lookup(self, url: str, method: str = "GET") -> Endpoint | None:
        methods = self.endpoints.get(url, {})
        if method in methods:
            return methods[method]
        for name, endpoint in methods.items():
            if name.upper() == method.upper():
                return endpoint
        return None

    def affected_documents(self, changed_path: str) -> set[str]:
        """Documents that must be re-aggregated when ``changed_path`` changes."""
        path = normalize_path(changed_path)
        affected = self.dependencies.dependents(path)
        if is_api_document(path):
            affected.add(path)
        return affected

    def refresh(self, changed_paths: Iterable[str], workers: int = 1) -> set[str]:
        """Re-aggregate only the documents affected by ``changed_paths``.

        A change to the settings file reloads the settings and every document.
        Returns the paths that were re-run.
        """
        changed = {normalize_path(p) for p in changed_paths}
        if SETTINGS_FILE in changed:
            self.settings = load_settings(self.root)
            affected = set(self.docs) | set(discover_documents(self.root))
        else:
            affected = set()
            for path in changed:
                affected |= self.affected_documents(path)

        existing = [p for p in self.docs if p in affected]
        added = sorted(affected - set(self.docs))
        self._aggregate(existing + added, workers)

        # Keep the document tree in discovery order so later documents still win.
        position = {path: i for i, path in enumerate(discover_documents(self.root))}
        self.docs = dict(sorted(self.docs.items(), key=lambda item: position.get(item[0], len(position))))
        self._rebuild_endpoint_table()
        return affected

    def endpoints_to_dict(self) -> dict[str, dict[str, dict]]:
        return {
            url: {method: endpoint.model_dump() for method, endpoint in methods.items()}
            for url, methods in self.endpoints.items()
        }

    def _aggregate(self, paths: list[str], workers: int) -> None:
        source = DocumentSource(self.root)
        aggregate = partial(self._aggregate_one, source=source)
        if workers > 1:
            with ThreadPoolExecutor(max_workers=workers) as executor:
                results = list(executor.map(aggregate, paths))
        else:
            results = [aggregate(path) for path in paths]

        # Results are merged on this thread only.
        for path, result in zip(paths, results):
            if result is None:
                self.docs.pop(path, None)
                continue
            self.docs[path] = result.summary
            self.dependencies.add_all(result.dependencies, path)

    def _aggregate_one(self, path: str, source: DocumentSource) -> AggregatedDocument | None:
        if not source.exists(path):
            logger.info("Document %s no longer exists", path)
            return None
        try:
            result = aggregate_document(path, source, self.settings.global_value)
        except PandaDocsError as e:
            logger.warning("Skipping %s: %s", path, e)
            return None
        logger.debug("Loaded %s with %d endpoints", path, len(result.summary.apis))
        return result

    def _rebuild_endpoint_table(self) -> None:
        table: dict[str, dict[str, Endpoint]] = {}
        for summary in self.docs.values():
            for endpoint in summary.apis:
                table.setdefault(endpoint.url, {})[endpoint.method] = endpoint
        self.endpoints = table
