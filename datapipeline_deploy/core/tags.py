"""Parsing of `key=value[,key=value...]` tag specifications."""

from __future__ import annotations

from ..models.definition import Tag


def parse_tags(spec: str | None) -> list[Tag]:
    """
    Parse a comma-separated tag specification.

    Each pair is split on its first `=`. A pair without `=` yields a tag with
    an empty value rather than an error. Empty segments are skipped.

    Args:
        spec: Tag specification (e.g., 'env=prod,team=infra'), or None

    Returns:
        Tags in specification order
    """
    if not spec or not spec.strip():
        return []

    tags = []
    for pair in spec.split(","):
        if not pair.strip():
            continue
        key, _, value = pair.partition("=")
        tags.append(Tag(key=key.strip(), value=value.strip()))
    return tags
