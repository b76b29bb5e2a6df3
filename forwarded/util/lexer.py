# Copyright 2013 by Rackspace Hosting, Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#    http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Lexer for HTTP header field values.

This module scans the two value primitives of RFC 7230, Section 3.2.6,
"token" and "quoted-string". Each scanner takes the source string and a
cursor position, and returns the value found at that position together
with the position just past it. When no value can be scanned, ``None`` is
returned along with the original position; it is up to the caller to
decide whether that is an error.
"""

from __future__ import annotations

import string
from typing import Optional, Tuple

from forwarded.util.structures import Slot
from forwarded.util.structures import StringView

__all__ = (
    'format_value',
    'is_token',
    'parse_quoted_string',
    'parse_token',
    'parse_value',
    'starts_with_ignore_case',
    'TCHAR',
)

# NOTE: RFC 7230, Section 3.2.6:
#   tchar = "!" / "#" / "$" / "%" / "&" / "'" / "*" / "+" / "-" / "." /
#           "^" / "_" / "`" / "|" / "~" / DIGIT / ALPHA
TCHAR = frozenset(string.digits + string.ascii_letters + "!#$%&'*+.^_`|~-")


def parse_token(source: str, pos: int = 0) -> Tuple[Optional[StringView], int]:
    """Scan the longest token starting at `pos`.

    Args:
        source (str): The string being scanned.
        pos (int): Index at which to begin scanning (default ``0``).

    Returns:
        tuple: A ``(value, pos)`` pair, where `value` is a
        :class:`~.StringView` of the token, or ``None`` if the character
        at `pos` is not a tchar (or `pos` is at the end of `source`).
    """
    end = pos
    length = len(source)
    while end < length and source[end] in TCHAR:
        end += 1

    if end == pos:
        return None, pos

    return StringView(source, pos, end), end


def parse_quoted_string(source: str, pos: int = 0) -> Tuple[Optional[Slot], int]:
    """Scan a quoted-string starting at `pos`.

    A backslash escapes the character that follows it; the backslash
    itself is not retained in the value.

    Args:
        source (str): The string being scanned.
        pos (int): Index of the opening ``'"'`` (default ``0``).

    Returns:
        tuple: A ``(value, pos)`` pair, where `pos` points just past the
        closing quote. The value is a :class:`~.StringView` of the text
        between the quotes when it contains no escapes, or an unescaped
        ``str`` otherwise. If `source` does not have an opening quote at
        `pos`, or the string is not terminated, ``(None, pos)`` is
        returned instead.
    """
    if source[pos : pos + 1] != '"':
        return None, pos

    length = len(source)
    chunks = None
    start = i = pos + 1

    while i < length:
        char = source[i]

        if char == '"':
            # PERF: Most quoted values do not contain any quoted-pairs, so
            #   avoid building a new string for those.
            if chunks is None:
                return StringView(source, pos + 1, i), i + 1

            chunks.append(source[start:i])
            return ''.join(chunks), i + 1

        if char == '\\':
            # NOTE: A trailing backslash escapes nothing, and so the
            #   string can not be terminated.
            if i + 1 == length:
                break

            if chunks is None:
                chunks = []
            chunks.append(source[start:i])
            chunks.append(source[i + 1])
            i += 2
            start = i
            continue

        i += 1

    return None, pos


def parse_value(source: str, pos: int = 0) -> Tuple[Optional[Slot], int]:
    """Scan either a token or a quoted-string starting at `pos`."""
    value, end = parse_token(source, pos)
    if value is not None:
        return value, end

    return parse_quoted_string(source, pos)


def is_token(value: str) -> bool:
    """Return ``True`` if `value` is a non-empty string of tchars."""
    return bool(value) and TCHAR.issuperset(value)


def format_value(value: str) -> str:
    """Render a value as a token, or else as a quoted-string.

    Args:
        value (str): The value to render.

    Returns:
        str: `value` unchanged if it is a valid token, otherwise `value`
        wrapped in double quotes, with each ``'\\'`` and ``'"'`` escaped
        by a preceding backslash.
    """
    if is_token(value):
        return value

    return '"' + value.replace('\\', '\\\\').replace('"', '\\"') + '"'


def starts_with_ignore_case(source: str, prefix: str, pos: int = 0) -> bool:
    """Check whether `source` contains `prefix` at `pos`, ignoring case.

    `prefix` is expected to be ASCII. Unlike slicing a fixed number of
    characters and comparing, this is safe for a `source` that is shorter
    than `prefix`.
    """
    return source[pos : pos + len(prefix)].lower() == prefix.lower()
