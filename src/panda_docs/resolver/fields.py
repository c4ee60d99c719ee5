"""Scalar endpoint fields resolved by precedence.

Every field is looked up in the endpoint entry itself, then in the fragment
its ``$ref`` points to, then in the ``api`` section of the global settings.
A miss at every level returns the caller's default; nothing here raises.
"""

import logging
from collections.abc import Iterator
from typing import Any

from panda_docs.parser.repair import to_text

logger = logging.getLogger(__name__)

_MISSING = object()


def _candidates(key: str, local: Any, ref_fragment: Any, global_value: Any) -> Iterator[Any]:
    global_api = global_value.get("api") if isinstance(global_value, dict) else None
    for source in (local, ref_fragment, global_api):
        if isinstance(source, dict):
            value = source.get(key, _MISSING)
            if value is not _MISSING:
                yield value


def resolve_string(key: str, default: str, local: Any, ref_fragment: Any, global_value: Any) -> str:
    """Return the first value found for ``key``, stringified if needed."""
    for value in _candidates(key, local, ref_fragment, global_value):
        return to_text(value)
    return default


def resolve_bool(key: str, default: bool, local: Any, ref_fragment: Any, global_value: Any) -> bool:
    """Return the first boolean found for ``key``.

    A value of any other type is reported and skipped in favour of the next
    source.
    """
    for value in _candidates(key, local, ref_fragment, global_value):
        if isinstance(value, bool):
            return value
        logger.warning("%s value is not a bool: %s", key, to_text(value))
    return default
