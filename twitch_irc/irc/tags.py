"""IRCv3 tag block decoding.

Turns ``@key=value;key=value`` into a flat ``dict`` of unescaped values.
Kept side effect free so it can be unit tested easily.
"""

from __future__ import annotations

# Escaped character -> replacement ("" drops the sequence)
_ESCAPES = {
    "s": " ",
    ":": ";",
    "\\": "\\",
    "n": "",
    "r": "",
}


def unescape_tag_value(value: str) -> str:
    """Decode escape sequences in a single tag value.

    ``\\s`` becomes a space, ``\\:`` a semicolon and ``\\\\`` a backslash.
    ``\\n`` and ``\\r`` are removed. Any other escaped character stands for
    itself and a trailing lone backslash is dropped.
    """
    if "\\" not in value:
        return value
    out: list[str] = []
    escaped = False
    for ch in value:
        if escaped:
            out.append(_ESCAPES.get(ch, ch))
            escaped = False
        elif ch == "\\":
            escaped = True
        else:
            out.append(ch)
    return "".join(out)


def parse_tags(raw_tags: str) -> dict[str, str]:
    """Parse a tag block (with or without its leading ``@``).

    A tag without ``=`` maps to an empty value. Empty entries (``;;``) are
    ignored and a later duplicate key wins.
    """
    if raw_tags.startswith("@"):
        raw_tags = raw_tags[1:]
    tags: dict[str, str] = {}
    if not raw_tags:
        return tags
    for tag in raw_tags.split(";"):
        if not tag:
            continue
        if "=" in tag:
            k, v = tag.split("=", 1)
        else:
            k, v = tag, ""
        tags[k] = unescape_tag_value(v)
    return tags
