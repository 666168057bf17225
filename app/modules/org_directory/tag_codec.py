"""Reversible mapping between a tag set and one indexable string.

Wire format: ``key:value`` pairs joined with ``,`` and sorted by key, e.g.
``env:prod,team:core``. Occurrences of ``%``, ``:`` and ``,`` inside keys or
values are percent-escaped (``%25``, ``%3A``, ``%2C``) so a pair never
contains a bare delimiter. Plain tags are stored exactly as before, which keeps
substring matching with ``contains(flattenedTags, "key:value")`` working.
"""

from typing import Dict, Mapping, Optional
from urllib.parse import unquote

from modules.org_directory.errors import CodecError

TAG_DELIMITER = ","
KEY_VALUE_DELIMITER = ":"

_ESCAPES = (("%", "%25"), (KEY_VALUE_DELIMITER, "%3A"), (TAG_DELIMITER, "%2C"))


def _escape(text: str) -> str:
    for raw, escaped in _ESCAPES:
        text = text.replace(raw, escaped)
    return text


def encode_pair(key: str, value: str) -> str:
    """Encode one tag as ``key:value``; also the needle used by tag queries."""
    if not isinstance(key, str) or not isinstance(value, str):
        raise CodecError(f"tag key and value must be strings: {key!r}={value!r}")
    if not key:
        raise CodecError("tag key must not be empty")
    return f"{_escape(key)}{KEY_VALUE_DELIMITER}{_escape(value)}"


def flatten(tags: Optional[Mapping[str, str]]) -> Optional[str]:
    """Encode a tag mapping.

    Returns:
        The flattened string, or None for an empty mapping so callers can
        omit the attribute entirely.
    """
    if not tags:
        return None
    return TAG_DELIMITER.join(encode_pair(k, tags[k]) for k in sorted(tags))


def unflatten(flattened: Optional[str]) -> Dict[str, str]:
    """Decode a flattened string back into a mapping.

    Raises:
        CodecError: a pair is not exactly ``key:value``, a key is empty or
            a key appears twice.
    """
    if not flattened:
        return {}

    tags: Dict[str, str] = {}
    for pair in flattened.split(TAG_DELIMITER):
        parts = pair.split(KEY_VALUE_DELIMITER)
        if len(parts) != 2 or not parts[0]:
            raise CodecError(f"malformed tag pair {pair!r} in {flattened!r}")
        key, value = unquote(parts[0]), unquote(parts[1])
        if key in tags:
            raise CodecError(f"duplicate tag key {key!r} in {flattened!r}")
        tags[key] = value
    return tags


def tags_from_aws(tag_list) -> Dict[str, str]:
    """Convert the AWS ``[{"Key": ..., "Value": ...}]`` shape to a mapping."""
    return {tag["Key"]: tag.get("Value", "") for tag in tag_list or []}
