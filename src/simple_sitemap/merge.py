"""Explicit, order-specified merging of sitemap records.

Records are plain ``dict`` objects.  :func:`merge_entries` layers a
higher-precedence record over a lower-precedence one:

- ``None`` values in the overlay never replace a value
- nested mappings merge recursively with the same rules
- lists concatenate, overlay items first, then collapse items that share
  an identity key (``images`` by ``loc``, ``videos`` by
  ``content_loc``, ``alternatives`` by ``hreflang``); the overlay item
  wins field conflicts
- any other value in the overlay replaces the base value

:func:`merge_on_key` folds a sequence of records into one record per key,
later records winning, in first-seen order.
"""

from collections.abc import Iterable, Mapping
from typing import Any

# Identity field for items of known list-valued entry fields
ARRAY_ITEM_KEYS: dict[str, str] = {
    "images": "loc",
    "videos": "content_loc",
    "alternatives": "hreflang",
}


def _merge_list(key: str, overlay: list[Any], base: list[Any]) -> list[Any]:
    combined = [*overlay, *base]
    item_key = ARRAY_ITEM_KEYS.get(key)
    if item_key is None:
        return combined

    merged: dict[Any, Any] = {}
    loose: list[tuple[int, Any]] = []
    order: list[Any] = []
    for position, item in enumerate(combined):
        if not isinstance(item, Mapping) or item.get(item_key) is None:
            loose.append((position, item))
            continue
        identity = item[item_key]
        if identity in merged:
            # Earlier items come from the overlay and take precedence
            merged[identity] = merge_entries(item, merged[identity])
        else:
            merged[identity] = dict(item)
            order.append(identity)
    return [merged[identity] for identity in order] + [item for _, item in loose]


def merge_entries(base: Mapping[str, Any], overlay: Mapping[str, Any]) -> dict[str, Any]:
    """Return a new record with *overlay* layered over *base*."""
    result = dict(base)
    for key, value in overlay.items():
        if value is None:
            continue
        current = result.get(key)
        if isinstance(value, list) and isinstance(current, list):
            result[key] = _merge_list(key, value, current)
        elif isinstance(value, Mapping) and isinstance(current, Mapping):
            result[key] = merge_entries(current, value)
        elif isinstance(value, list):
            result[key] = list(value)
        elif isinstance(value, Mapping):
            result[key] = dict(value)
        else:
            result[key] = value
    return result


def merge_on_key(records: Iterable[Mapping[str, Any]], key: str) -> list[dict[str, Any]]:
    """Collapse records sharing ``record[key]``; later records win."""
    merged: dict[Any, dict[str, Any]] = {}
    for record in records:
        identity = record[key]
        if identity in merged:
            merged[identity] = merge_entries(merged[identity], record)
        else:
            merged[identity] = merge_entries({}, record)
    return list(merged.values())
