import pytest

from panda_docs.errors import DocumentNotFoundError
from panda_docs.parser.detect import discover_documents, is_api_document
from panda_docs.parser.source import DocumentSource, normalize_path


class TestIsApiDocument:
    def test_accepts_json_documents(self):
        assert is_api_document("users.json")
        assert is_api_document("v1/orders.json")

    def test_rejects_other_extensions(self):
        assert not is_api_document("README.md")
        assert not is_api_document("users.yaml")

    def test_rejects_settings_file(self):
        assert not is_api_document("_settings.json")

    def test_rejects_shared_data_files(self):
        assert not is_api_document("_data/shared.json")
        assert not is_api_document("v1/_data/user.json")

    def test_data_directory_must_be_a_whole_segment(self):
        assert is_api_document("my_data/user.json")


class TestDiscoverDocuments:
    def test_walks_tree_in_sorted_order(self, project):
        root = project({
            "b.json": {},
            "a.json": {},
            "sub/c.json": {},
            "_data/shared.json": {},
            "_settings.json": {},
            "notes.txt": "x",
            ".git/config.json": {},
        })
        assert list(discover_documents(root)) == ["a.json", "b.json", "sub/c.json"]

    def test_missing_root_raises(self, tmp_path):
        with pytest.raises(DocumentNotFoundError):
            list(discover_documents(tmp_path / "missing"))


class TestDocumentSource:
    def test_normalize_path(self):
        assert normalize_path("./a/b.json") == "a/b.json"
        assert normalize_path("/_data/x.json") == "_data/x.json"
        assert normalize_path("a/../_data/x.json") == "_data/x.json"

    def test_load_returns_independent_copies(self, project):
        source = DocumentSource(project({"a.json": {"x": {"y": 1}}}))
        first = source.load("a.json")
        first["x"]["y"] = 2
        assert source.load("./a.json") == {"x": {"y": 1}}

    def test_read_missing_file_raises(self, tmp_path):
        source = DocumentSource(tmp_path)
        assert not source.exists("nope.json")
        with pytest.raises(DocumentNotFoundError):
            source.read_text("nope.json")
