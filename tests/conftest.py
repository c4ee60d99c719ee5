import json
from pathlib import Path

import pytest


def write_tree(root: Path, files: dict) -> Path:
    """Write ``{relative_path: content}`` below root; dicts are dumped as JSON."""
    for rel_path, content in files.items():
        path = root / rel_path
        path.parent.mkdir(parents=True, exist_ok=True)
        if not isinstance(content, str):
            content = json.dumps(content)
        path.write_text(content, encoding="utf-8")
    return root


@pytest.fixture
def project(tmp_path):
    def _make(files: dict) -> Path:
        return write_tree(tmp_path, files)
    return _make
