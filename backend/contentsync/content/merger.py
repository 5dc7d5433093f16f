# contentsync/content/merger.py
"""
Fill structural gaps in a stored content document from the schema
defaults.

Rules:
- A missing (or null) stored value takes the default.
- Mappings merge key by key, recursively. Keys the defaults do not
  know about are carried through untouched.
- Lists are replaced, never merged: a non-empty stored list is used
  verbatim, an empty or missing one falls back to the default list.
- A stored value whose type does not match the default is passed
  through as-is. The merger guarantees structure, not types.

The stored document is never persisted in merged form; merging
happens on every read.
"""
import copy
import logging
from typing import Any, Mapping, Optional

logger = logging.getLogger(__name__)


def merge(stored: Optional[Mapping[str, Any]], defaults: Mapping[str, Any]) -> dict:
    """Return a complete document built from `stored` and `defaults`.

    The result never shares structure with either argument.
    """
    if not stored:
        return copy.deepcopy(dict(defaults))

    if not isinstance(stored, Mapping):
        logger.warning(
            "Stored document is a %s, not a mapping; using defaults",
            type(stored).__name__,
        )
        return copy.deepcopy(dict(defaults))

    return _merge_mapping(stored, defaults)


def _merge_mapping(stored: Mapping[str, Any], defaults: Mapping[str, Any]) -> dict:
    merged = {key: _merge_value(stored.get(key), value) for key, value in defaults.items()}

    for key, value in stored.items():
        if key not in merged:
            merged[key] = copy.deepcopy(value)

    return merged


def _merge_value(stored: Any, default: Any) -> Any:
    if stored is None:
        return copy.deepcopy(default)

    if isinstance(default, Mapping):
        if isinstance(stored, Mapping):
            return _merge_mapping(stored, default)
        return copy.deepcopy(stored)

    if isinstance(default, list):
        if isinstance(stored, list) and not stored:
            return copy.deepcopy(default)
        return copy.deepcopy(stored)

    return copy.deepcopy(stored)
