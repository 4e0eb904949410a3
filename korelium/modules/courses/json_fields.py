"""Helpers for list-valued columns stored as JSON text (tags, what_youll_learn)."""

from __future__ import annotations

import json
from typing import Any, Optional

from korelium.core.logging import get_logger

logger = get_logger(__name__)


def parse_json_list(value: Any, field: str = "value") -> list[str]:
    """Decode a stored JSON array, falling back to [] on anything unexpected.

    Never raises: a malformed row must not break a listing.
    """
    if value is None or value == "":
        return []
    if isinstance(value, (list, tuple)):
        return [str(item) for item in value]
    try:
        decoded = json.loads(value)
    except (TypeError, ValueError):
        logger.warning("failed to parse json list", field=field, raw=str(value)[:200])
        return []
    if not isinstance(decoded, list):
        logger.warning("json value is not a list", field=field, raw=str(value)[:200])
        return []
    return [str(item) for item in decoded]


def dump_json_list(items: Optional[list[str]]) -> Optional[str]:
    if items is None:
        return None
    return json.dumps(list(items))
