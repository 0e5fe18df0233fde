"""IRC line framing.

Splits one CRLF-stripped line into tags, source, command and parameters.
Malformed input never raises; missing parts come back empty.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .tags import parse_tags


@dataclass(frozen=True, slots=True)
class Source:
    """Origin of a line (``nick!user@host`` or a bare server name)."""

    nick: str = ""
    user: str = ""
    host: str = ""

    @property
    def username(self) -> str:
        # Server-originated lines (":tmi.twitch.tv") have no username
        return self.nick if self.user or self.host else ""


@dataclass(frozen=True, slots=True)
class FramedLine:
    raw: str
    command: str
    tags: dict[str, str] = field(default_factory=dict)
    source: Source = field(default_factory=Source)
    params: tuple[str, ...] = ()

    def param(self, index: int) -> str:
        """Return parameter ``index`` or an empty string when absent."""
        if 0 <= index < len(self.params):
            return self.params[index]
        return ""

    @property
    def channel(self) -> str:
        """First ``#channel`` parameter with the ``#`` stripped."""
        for p in self.params:
            if p.startswith("#"):
                return p[1:]
        return ""


def parse_source(prefix: str) -> Source:
    """Parse a source prefix without its leading colon."""
    nick, bang, rest = prefix.partition("!")
    if bang:
        user, _, host = rest.partition("@")
        return Source(nick=nick, user=user, host=host)
    nick, at, host = prefix.partition("@")
    if at:
        return Source(nick=nick, host=host)
    return Source(nick=prefix)


def frame_line(raw_line: str) -> FramedLine:
    """Split a raw IRC line into its syntactic parts.

    The trailing parameter (after the first `` :``) is appended to the
    parameter list even when empty, so ``PRIVMSG #c :`` yields two params.
    """
    original = raw_line
    working = raw_line
    tags: dict[str, str] = {}
    source = Source()

    if working.startswith("@"):
        tags_part, _, working = working.partition(" ")
        tags = parse_tags(tags_part)

    working = working.lstrip(" ")
    if working.startswith(":"):
        # Malformed lines may omit the command after the prefix
        prefix, _, working = working[1:].partition(" ")
        source = parse_source(prefix)

    working = working.lstrip(" ")
    if working.startswith(":"):
        middle, sep, trailing = "", True, working[1:]
    else:
        middle, sep_str, trailing = working.partition(" :")
        sep = bool(sep_str)

    parts = middle.split()
    command = parts[0] if parts else ""
    params = parts[1:]
    if sep:
        params.append(trailing)

    return FramedLine(
        raw=original,
        command=command,
        tags=tags,
        source=source,
        params=tuple(params),
    )
