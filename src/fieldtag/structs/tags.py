"""Field annotation string parsing.

An annotation string holds zero or more ``name:"value"`` pairs separated
by spaces, e.g. ``validate:"min(1) && max(10)" default:"1"``. Parsing is
permissive: the first malformed segment (missing colon, unterminated
quote, control character in a name) ends the scan and everything parsed
before it stays in effect.
"""

from __future__ import annotations

import re
from collections.abc import Iterator

from fieldtag.errors import TagSyntaxError

_DEL = "\x7f"


def iter_tags(tag: str) -> Iterator[tuple[str, str]]:
    """Yield ``(name, quoted_value)`` pairs from *tag*, left to right.

    The value keeps its surrounding quotes and escapes; see :func:`unquote`.

    Examples:
        >>> list(iter_tags('json:"id" validate:"min(1)"'))
        [('json', '"id"'), ('validate', '"min(1)"')]
        >>> list(iter_tags('a:"1" b "2" c:"3"'))
        [('a', '"1"')]
    """
    while tag:
        i = 0
        while i < len(tag) and tag[i] == " ":
            i += 1
        tag = tag[i:]
        if not tag:
            return

        # A space, a quote or a control character ends the name.
        i = 0
        while i < len(tag) and tag[i] > " " and tag[i] not in (":", '"', _DEL):
            i += 1
        if i == 0 or i + 1 >= len(tag) or tag[i] != ":" or tag[i + 1] != '"':
            return
        name = tag[:i]
        tag = tag[i + 1 :]

        i = 1
        while i < len(tag) and tag[i] != '"':
            if tag[i] == "\\":
                i += 1
            i += 1
        if i >= len(tag):
            return
        quoted = tag[: i + 1]
        tag = tag[i + 1 :]

        yield name, quoted


def parse_tags(tag: str) -> list[tuple[str, str]]:
    """Return every well-formed pair of *tag* as a list."""
    return list(iter_tags(tag))


_ESCAPE = re.compile(
    r"\\(?:(?P<simple>[abfnrtv\\\"])|x(?P<hex>[0-9A-Fa-f]{2})|(?P<oct>[0-7]{3})"
    r"|u(?P<u4>[0-9A-Fa-f]{4})|U(?P<u8>[0-9A-Fa-f]{8}))"
)
_SIMPLE = {
    "a": "\a",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "v": "\v",
    "\\": "\\",
    '"': '"',
}


def _decode_escape(m: re.Match[str], quoted: str) -> str:
    if m["simple"]:
        return _SIMPLE[m["simple"]]
    if m["hex"]:
        return chr(int(m["hex"], 16))
    if m["oct"]:
        code = int(m["oct"], 8)
        if code > 0xFF:
            raise TagSyntaxError(f"octal escape out of range in tag value {quoted!r}")
        return chr(code)
    code = int(m["u4"] or m["u8"], 16)
    if 0xD800 <= code <= 0xDFFF or code > 0x10FFFF:
        raise TagSyntaxError(f"invalid unicode escape in tag value {quoted!r}")
    return chr(code)


def unquote(quoted: str) -> str:
    r"""Unquote a double-quoted tag value.

    Accepted escapes: ``\a \b \f \n \r \t \v \\ \"``, ``\xhh``, three-digit
    octal ``\ooo`` (up to ``\377``), ``\uhhhh`` and ``\Uhhhhhhhh``. Byte
    escapes (``\x``, octal) yield the code point of the same value.

    Examples:
        >>> unquote(r'"a\x41\101é"')
        'aAAé'

    Raises:
        TagSyntaxError: *quoted* is not a valid double-quoted string.
    """
    if len(quoted) < 2 or quoted[0] != '"' or quoted[-1] != '"':
        raise TagSyntaxError(f"the tag value {quoted!r} is not double-quoted")

    body = quoted[1:-1]
    parts: list[str] = []
    pos = 0
    while pos < len(body):
        end = body.find("\\", pos)
        chunk = body[pos:] if end < 0 else body[pos:end]
        if '"' in chunk or "\n" in chunk:
            raise TagSyntaxError(f"invalid quoted tag value {quoted!r}")
        parts.append(chunk)
        if end < 0:
            break
        m = _ESCAPE.match(body, end)
        if m is None:
            raise TagSyntaxError(f"invalid escape at offset {end + 1} in tag value {quoted!r}")
        parts.append(_decode_escape(m, quoted))
        pos = m.end()
    return "".join(parts)


def lookup_tag(tag: str, key: str) -> str | None:
    """Return the unquoted value of the first *key* pair in *tag*.

    Returns None when the key is absent or its value cannot be unquoted.

    Examples:
        >>> lookup_tag('json:"user_id" validate:"required"', "json")
        'user_id'
        >>> lookup_tag('validate:"required"', "json") is None
        True
    """
    for name, quoted in iter_tags(tag):
        if name != key:
            continue
        try:
            return unquote(quoted)
        except TagSyntaxError:
            return None
    return None
