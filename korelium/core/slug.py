import re
from typing import Optional

_NON_SLUG_CHARS = re.compile(r"[^\w\s-]")
_SEPARATOR_RUNS = re.compile(r"[\s_-]+")


def slugify(value: Optional[str]) -> str:
    """Turn a display name into a URL-safe slug.

    "Web Development" -> "web-development", "C# & .NET" -> "c-net".
    Every place that builds or compares slugs goes through this function;
    a category lookup only works if both sides were produced the same way.
    """
    if not value:
        return ""
    slug = value.lower().strip()
    slug = _NON_SLUG_CHARS.sub("", slug)
    slug = _SEPARATOR_RUNS.sub("-", slug)
    return slug.strip("-")
