"""Parsers for the text table printed by `ks param list`.

Sample output for `ks param list --env default`::

    COMPONENT PARAM    VALUE
    ========= =====    =====
    guestbook image    "gcr.io/heptio-images/ks-guestbook-demo:0.1"
    guestbook replicas 1

The layout is owned by ks, so every assumption about it lives here.
"""

import re
import string

from ksenv.errors import ParseError

LINE_SEPARATOR = re.compile(r"\n")
HEADER_ROWS = 2

_SIMPLE_ESCAPES: dict[str, str] = {
    "a": "\a",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "v": "\v",
    "\\": "\\",
    "'": "'",
    '"': '"',
}
_HEX_WIDTHS: dict[str, int] = {"x": 2, "u": 4, "U": 8}
_OCTAL_DIGITS = frozenset("01234567")


def unquote(raw: str) -> str:
    """Decode a Go-style quoted string literal.

    Accepts double-quoted strings with escape sequences, back-quoted raw
    strings and single-quoted single characters. Raises ValueError for
    anything else.
    """
    if len(raw) < 2 or raw[0] != raw[-1]:
        raise ValueError(f"not a quoted literal: {raw!r}")
    quote, body = raw[0], raw[1:-1]

    if quote == "`":
        if "`" in body:
            raise ValueError("back-quoted literal contains a back quote")
        return body.replace("\r", "")
    if quote not in "\"'":
        raise ValueError(f"not a quoted literal: {raw!r}")
    if "\n" in body:
        raise ValueError("quoted literal contains a newline")

    chars: list[str] = []
    i = 0
    while i < len(body):
        ch = body[i]
        if ch == quote:
            raise ValueError("unescaped quote inside literal")
        if ch != "\\":
            chars.append(ch)
            i += 1
            continue
        if i + 1 >= len(body):
            raise ValueError("dangling escape")
        esc = body[i + 1]
        if esc in _SIMPLE_ESCAPES:
            # \' is only legal in rune literals, \" only in strings
            if esc in "'\"" and esc != quote:
                raise ValueError(f"invalid escape \\{esc}")
            chars.append(_SIMPLE_ESCAPES[esc])
            i += 2
        elif esc in _HEX_WIDTHS:
            width = _HEX_WIDTHS[esc]
            digits = body[i + 2 : i + 2 + width]
            if len(digits) != width or not all(d in string.hexdigits for d in digits):
                raise ValueError(f"invalid \\{esc} escape")
            code = int(digits, 16)
            if esc != "x" and (code > 0x10FFFF or 0xD800 <= code <= 0xDFFF):
                raise ValueError(f"invalid code point {digits}")
            chars.append(chr(code))
            i += 2 + width
        elif esc in _OCTAL_DIGITS:
            digits = body[i + 1 : i + 4]
            if len(digits) != 3 or not set(digits) <= _OCTAL_DIGITS:
                raise ValueError("invalid octal escape")
            code = int(digits, 8)
            if code > 0xFF:
                raise ValueError("octal escape out of range")
            chars.append(chr(code))
            i += 4
        else:
            raise ValueError(f"invalid escape \\{esc}")

    value = "".join(chars)
    if quote == "'" and len(value) != 1:
        raise ValueError("rune literal must hold exactly one character")
    return value


def _parse_row(row: str) -> tuple[str, str]:
    fields = row.split(None, 2)
    if len(fields) < 3:
        raise ParseError(f"unexpected `ks param list` row: {row.strip()!r}")
    param, remainder = fields[1], fields[2].rstrip()
    token = remainder.split()[0]
    # A quoted value may contain blanks; try the full remainder first.
    for candidate in (remainder, token):
        try:
            return param, unquote(candidate)
        except ValueError:
            continue
    return param, token


def parse_param_table(output: str) -> dict[str, str]:
    """Parse `ks param list` output into a parameter map.

    The first two lines (header and ruler) are skipped, as are blank lines.
    For every other row the second column is the parameter name and the
    third its value. Later rows win over earlier rows with the same name.
    """
    params: dict[str, str] = {}
    rows = LINE_SEPARATOR.split(output)
    for row in rows[HEADER_ROWS:]:
        if not row.strip():
            continue
        param, value = _parse_row(row)
        params[param] = value
    return params
