import math
import os
import re
from pathlib import PurePosixPath

_INVALID_SLUG_CHARS = re.compile(r"[^\w.-]", re.UNICODE)
_WHITESPACE = re.compile(r"\s+")


def calculate_reading_time(text: str) -> str:
    words = text.split()
    minutes = math.ceil(len(words) / 200) or 1
    return f"{minutes} min"


def slugify_segment(segment: str) -> str:
    """Lower-case a path segment and keep only URL-safe characters."""
    cleaned = _WHITESPACE.sub("-", segment.strip().lower())
    return _INVALID_SLUG_CHARS.sub("", cleaned)


def slug_from_path(path: str) -> str:
    """
    Derive a post slug from a document path relative to the content root.

    ``2024/Hello World.md`` becomes ``2024/hello-world`` and ``ddd/index.mdx``
    collapses to ``ddd``.
    """
    base, _ = os.path.splitext(path.replace("\\", "/"))
    parts = [p for p in PurePosixPath(base).parts if p not in ("", ".", "/")]
    if len(parts) > 1 and parts[-1].lower() == "index":
        parts = parts[:-1]
    return "/".join(s for s in (slugify_segment(p) for p in parts) if s)
