"""Reverse index from referenced files to the documents that use them."""

from collections.abc import Iterable, Iterator, Mapping


class DependencyIndex(Mapping):
    """Maps a source file path to the set of documents that reference it.

    Entries only accumulate: a (file, document) pair, once added, stays for
    the lifetime of the index. Empty paths and self references are ignored.
    """

    def __init__(self):
        self._data: dict[str, set[str]] = {}

    def add(self, source_path: str, document: str) -> None:
        if not source_path or source_path == document:
            return
        self._data.setdefault(source_path, set()).add(document)

    def add_all(self, source_paths: Iterable[str], document: str) -> None:
        for source_path in source_paths:
            self.add(source_path, document)

    def dependents(self, source_path: str) -> set[str]:
        """Documents whose output depends on ``source_path``."""
        return set(self._data.get(source_path, ()))

    def to_dict(self) -> dict[str, list[str]]:
        return {path: sorted(docs) for path, docs in sorted(self._data.items())}

    def __getitem__(self, source_path: str) -> frozenset[str]:
        return frozenset(self._data[source_path])

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"DependencyIndex({self.to_dict()!r})"
