"""Pre-parse repair and JSON parsing of document text.

Hand-written documents often contain multi-line string values, which strict
JSON rejects. ``repair_json`` escapes those literal newlines before the text
reaches ``json.loads``.
"""

import json
import re
from typing import Any

from panda_docs.errors import DocumentParseError

# Every quoted string, scanned left to right so matches stay aligned with
# the real string boundaries.
_STRING = re.compile(r'"((?:[^"\\]|\\.)*)"')


def repair_json(text: str) -> str:
    """Escape literal newlines embedded in quoted strings."""

    def _escape(match: re.Match) -> str:
        content = match.group(1)
        if "\n" not in content:
            return match.group(0)
        content = content.replace("\r\n", "\n").replace("\n", "\\n")
        return f'"{content}"'

    return _STRING.sub(_escape, text)


def parse_json(text: str, path: str = "<string>") -> Any:
    """Repair and parse document text into plain Python values."""
    try:
        return json.loads(repair_json(text))
    except json.JSONDecodeError as e:
        raise DocumentParseError(path, f"{e.msg} (line {e.lineno})") from e


def to_text(value: Any) -> str:
    """Render a value the way it would appear in a compact JSON document."""
    if isinstance(value, str):
        return value
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"))
