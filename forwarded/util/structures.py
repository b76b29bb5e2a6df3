# Copied from the Requests library by Kenneth Reitz et al., with
# modifications for the forwarded package.
#
# Copyright 2013 Kenneth Reitz
#
#    Licensed under the Apache License, Version 2.0 (the "License");
#    you may not use this file except in compliance with the License.
#    You may obtain a copy of the License at
#
#        http://www.apache.org/licenses/LICENSE-2.0
#
#    Unless required by applicable law or agreed to in writing, software
#    distributed under the License is distributed on an "AS IS" BASIS,
#    WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
#    See the License for the specific language governing permissions and
#    limitations under the License.

"""Data structures.

This module provides the string slot type used to store parsed header
values without copying them out of the original header, along with a
minimal case-insensitive header container. Both classes are hoisted into
the `forwarded` module for convenience::

    import forwarded

    headers = forwarded.CaseInsensitiveDict()
    headers['X-Forwarded-For'] = '192.0.2.43'

"""

from __future__ import annotations

from collections.abc import Mapping, MutableMapping
from typing import Iterator, Optional, Union

__all__ = (
    'CaseInsensitiveDict',
    'is_borrowed',
    'split_views',
    'StringView',
    'to_str',
)


class StringView:
    """A read-only view of a substring of some source string.

    Instances are produced by the parser so that a parsed header value
    can refer back to the header it came from instead of copying each
    value out of it. The text is sliced out of the source on demand via
    ``str(view)``.

    A view compares equal to any ``str`` (or other view) with the same
    text::

        >>> view = StringView('for=192.0.2.43', 4)
        >>> view == '192.0.2.43'
        True

    Args:
        source (str): The string being viewed.
        start (int): Index of the first character of the view
            (default ``0``).
        end (int): Index just past the last character of the view
            (default ``None``, meaning the end of `source`).
    """

    __slots__ = ('_source', '_start', '_end')

    def __init__(self, source: str, start: int = 0, end: Optional[int] = None) -> None:
        self._source = source
        self._start = start
        self._end = len(source) if end is None else end

    @property
    def source(self) -> str:
        """The string this view refers to."""
        return self._source

    @property
    def start(self) -> int:
        return self._start

    @property
    def end(self) -> int:
        return self._end

    def __str__(self) -> str:
        return self._source[self._start : self._end]

    def __len__(self) -> int:
        return self._end - self._start

    def __eq__(self, other: object) -> bool:
        if isinstance(other, (str, StringView)):
            return str(self) == str(other)
        return NotImplemented

    def __hash__(self) -> int:
        return hash(str(self))

    def __repr__(self) -> str:
        return '{}({!r})'.format(type(self).__name__, str(self))


# NOTE: A slot is either borrowed (a StringView into the header it was
#   parsed from) or owned (a plain str).
Slot = Union[str, StringView]


def to_str(slot: Slot) -> str:
    """Resolve a borrowed or owned slot to a ``str``."""
    if isinstance(slot, str):
        return slot
    return str(slot)


def is_borrowed(slot: Optional[Slot]) -> bool:
    return isinstance(slot, StringView)


def split_views(source: str, sep: str = ',') -> Iterator[StringView]:
    """Split a string into whitespace-trimmed views.

    Unlike ``str.split()``, no substrings are created; each segment is
    returned as a :class:`StringView` into `source`. Empty segments are
    retained, so splitting an empty string yields a single empty view.

    Args:
        source (str): The string to split.
        sep (str): The separator (default ``','``).

    Yields:
        StringView: Each trimmed segment, in order.
    """
    start = 0
    while True:
        end = source.find(sep, start)
        last = end < 0
        if last:
            end = len(source)

        seg_start, seg_end = start, end
        while seg_start < seg_end and source[seg_start].isspace():
            seg_start += 1
        while seg_end > seg_start and source[seg_end - 1].isspace():
            seg_end -= 1

        yield StringView(source, seg_start, seg_end)

        if last:
            return
        start = end + len(sep)


class CaseInsensitiveDict(MutableMapping):
    """A case-insensitive ``dict``-like object for HTTP headers.

    Implements all methods and operations of
    ``collections.abc.MutableMapping`` as well as dict's `copy`. Also
    provides `lower_items`, along with the :meth:`get_header` and
    :meth:`set_header` methods expected of a header source.

    All keys are expected to be strings. The structure remembers the
    case of the last key to be set, and ``iter(instance)``,
    ``keys()`` and ``items()`` will contain case-sensitive keys.
    However, querying and contains testing is case insensitive:

        headers = CaseInsensitiveDict()
        headers['Forwarded'] = 'for=192.0.2.43'
        headers['FORWARDED'] == 'for=192.0.2.43'  # True
        list(headers) == ['Forwarded']  # True

    A value may also be a list or tuple of strings to represent a header
    that was sent more than once.

    If the constructor, ``.update``, or equality comparison
    operations are given keys that have equal ``.lower()``s, the
    behavior is undefined.
    """

    def __init__(self, data=None, **kwargs):
        self._store = dict()
        if data is None:
            data = {}
        self.update(data, **kwargs)

    def __setitem__(self, key, value):
        # Use the lowercased key for lookups, but store the actual
        # key alongside the value.
        self._store[key.lower()] = (key, value)

    def __getitem__(self, key):
        return self._store[key.lower()][1]

    def __delitem__(self, key):
        del self._store[key.lower()]

    def __iter__(self):
        return (casedkey for casedkey, mappedvalue in self._store.values())

    def __len__(self):
        return len(self._store)

    def lower_items(self):
        """Like items(), but with all lowercase keys."""
        return ((lowerkey, keyval[1]) for (lowerkey, keyval) in self._store.items())

    def get_header(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """Return the raw value of a header, or `default` if it is missing.

        Multiple values for the same header are joined with ``', '``,
        as permitted by RFC 7230, Section 3.2.2.
        """
        value = self.get(name)
        if value is None:
            return default
        if isinstance(value, (list, tuple)):
            return ', '.join(value)
        return value

    def set_header(self, name: str, value: str) -> None:
        self[name] = value

    def __eq__(self, other):
        if isinstance(other, Mapping):
            other = CaseInsensitiveDict(other)
        else:
            return NotImplemented
        # Compare insensitively
        return dict(self.lower_items()) == dict(other.lower_items())

    # Copy is required
    def copy(self):
        return CaseInsensitiveDict(self._store.values())

    def __repr__(self):
        return '%s(%r)' % (self.__class__.__name__, dict(self.items()))
