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

"""Forwarded header model, parser and serializer.

(See also: RFC 7239, Section 4)
"""

from __future__ import annotations

from typing import Any, Iterable, List, Optional, TextIO

from forwarded.constants import FORWARDED
from forwarded.errors import FormatError
from forwarded.errors import GrammarError
from forwarded.util.lexer import format_value
from forwarded.util.lexer import parse_token
from forwarded.util.lexer import parse_value
from forwarded.util.lexer import starts_with_ignore_case
from forwarded.util.structures import is_borrowed
from forwarded.util.structures import Slot
from forwarded.util.structures import to_str

__all__ = (
    'Forwarded',
    'parse',
    'serialize',
    'to_owned',
)

_FOR_PREFIX = 'for='

# NOTE: Parameters that may appear at most once per header value. The "for"
#   parameter may be repeated, and anything else is an extension.
_SINGLETON_PARAMS = ('by', 'host', 'proto')


class Forwarded:
    """Represents a Forwarded header value.

    Instances are created by :meth:`parse`, by the functions in
    :mod:`forwarded.proxies`, or directly by the caller::

        fwd = forwarded.Forwarded().with_for('192.0.2.43').with_proto('https')
        resp.set_header('Forwarded', fwd.value())

    Values returned by the parser refer back to the header value they were
    parsed from (see also: :class:`~.StringView`). Use :meth:`to_owned` to
    get a copy that does not. Values set by the caller are always owned.

    Keyword Arguments:
        by (str): Initial value of the "by" parameter.
        forwarded_for (iterable): Initial values of the "for" parameter.
        host (str): Initial value of the "host" parameter.
        proto (str): Initial value of the "proto" parameter.
    """

    # NOTE: Use "_for" since "for" is a keyword.
    __slots__ = ('_by', '_for', '_host', '_proto')

    def __init__(
        self,
        by: Optional[str] = None,
        forwarded_for: Optional[Iterable[str]] = None,
        host: Optional[str] = None,
        proto: Optional[str] = None,
    ) -> None:
        self._by: Optional[Slot] = None if by is None else str(by)
        self._for: List[Slot] = [str(value) for value in forwarded_for or ()]
        self._host: Optional[Slot] = None if host is None else str(host)
        self._proto: Optional[Slot] = None if proto is None else str(proto)

    @classmethod
    def _from_slots(
        cls,
        by: Optional[Slot] = None,
        forwarded_for: Optional[List[Slot]] = None,
        host: Optional[Slot] = None,
        proto: Optional[Slot] = None,
    ) -> Forwarded:
        # NOTE: Unlike __init__(), keep any borrowed values as they are.
        forwarded = cls()
        forwarded._by = by
        forwarded._for = forwarded_for or []
        forwarded._host = host
        forwarded._proto = proto
        return forwarded

    @classmethod
    def parse(cls, value: str) -> Forwarded:
        """Parse the value of a Forwarded header.

        The value is parsed as specified by RFC 7239, Section 4, as
        follows:

        - An initial run of comma-separated "for" parameters is consumed
          first. Only the "for=" keys of this initial run are matched
          case-insensitively.
        - Every other parameter is matched case-sensitively. The "by",
          "host" and "proto" parameters may appear at most once.
        - Unknown (extension) parameters are checked for valid syntax,
          but their values are discarded.
        - Quoted-strings are un-escaped.
        - The contents of the parameters are NOT validated further, e.g.,
          "for" is not checked to be a valid node name.

        Args:
            value (str): Value of a Forwarded header.

        Returns:
            Forwarded: The parsed header. An empty `value` results in an
            empty instance.

        Raises:
            GrammarError: The value is malformed.
        """
        forwarded = cls()
        pos = 0
        end = len(value)

        if starts_with_ignore_case(value, _FOR_PREFIX):
            pos = forwarded._parse_for(value, pos)

        while pos < end:
            pos = forwarded._parse_forwarded_pair(value, pos)

        return forwarded

    def _parse_forwarded_pair(self, source: str, pos: int) -> int:
        key, rest = parse_token(source, pos)
        if key is None or source[rest : rest + 1] != '=':
            raise GrammarError('parse error in forwarded-pair')

        if key == 'for':
            return self._parse_for(source, pos)

        value, rest = parse_value(source, rest + 1)
        if value is None:
            raise GrammarError('parse error in forwarded-pair')

        name = str(key)
        if name in _SINGLETON_PARAMS:
            attr = '_' + name
            if getattr(self, attr) is not None:
                raise GrammarError('duplicate ' + name)
            setattr(self, attr, value)

        if source[rest : rest + 1] == ';':
            rest += 1

        return rest

    def _parse_for(self, source: str, pos: int) -> int:
        end = len(source)

        while True:
            if not starts_with_ignore_case(source, _FOR_PREFIX, pos):
                raise GrammarError('http list must start with for=')

            value, pos = parse_value(source, pos + len(_FOR_PREFIX))
            if value is None:
                raise GrammarError('for= without valid value')

            self._for.append(value)

            separator = source[pos : pos + 1]
            if separator == ',':
                pos += 1
                while pos < end and source[pos].isspace():
                    pos += 1
            elif separator == ';':
                return pos + 1
            elif not separator:
                return pos
            else:
                raise GrammarError('unexpected character after for= section')

    @property
    def by(self) -> Optional[str]:
        """The value of the "by" parameter, or ``None`` if absent.

        Identifies the user-agent facing interface of the proxy.
        """
        return None if self._by is None else to_str(self._by)

    @property
    def forwarded_for(self) -> List[str]:
        """The values of the "for" parameter, in the order they appeared.

        Identifies the node(s) making the request to the proxy. The list
        is empty if the parameter is absent.
        """
        return [to_str(value) for value in self._for]

    @property
    def host(self) -> Optional[str]:
        """The value of the "host" parameter, or ``None`` if absent.

        Provides the Host request header field as received by the proxy.
        """
        return None if self._host is None else to_str(self._host)

    @property
    def proto(self) -> Optional[str]:
        """The value of the "proto" parameter, or ``None`` if absent.

        Indicates the protocol that was used to make the request to the
        proxy.
        """
        return None if self._proto is None else to_str(self._proto)

    @property
    def is_owned(self) -> bool:
        """``True`` if no value refers back to a parsed header."""
        return not any(
            is_borrowed(slot) for slot in (self._by, self._host, self._proto, *self._for)
        )

    def set_by(self, by: str) -> None:
        self._by = str(by)

    def add_for(self, forwarded_for: str) -> None:
        self._for.append(str(forwarded_for))

    def set_host(self, host: str) -> None:
        self._host = str(host)

    def set_proto(self, proto: str) -> None:
        self._proto = str(proto)

    def with_by(self, by: str) -> Forwarded:
        self.set_by(by)
        return self

    def with_for(self, forwarded_for: str) -> Forwarded:
        self.add_for(forwarded_for)
        return self

    def with_host(self, host: str) -> Forwarded:
        self.set_host(host)
        return self

    def with_proto(self, proto: str) -> Forwarded:
        self.set_proto(proto)
        return self

    def to_owned(self) -> Forwarded:
        """Return a copy of this instance that owns all of its values.

        The copy does not refer back to the header value that this
        instance was parsed from, and it is not affected by mutations of
        this instance.
        """
        return type(self)(
            by=self.by,
            forwarded_for=self.forwarded_for,
            host=self.host,
            proto=self.proto,
        )

    def value(self) -> str:
        """Serialize this instance to a Forwarded header value.

        Parameters are rendered in the following order: "by", all "for"
        values (joined by ``', '``), "host" and "proto". Each value is
        rendered as a token when possible, or else as a quoted-string.

        Returns:
            str: The header value; an empty string if no parameter is set.
        """
        sections = []

        if self._by is not None:
            sections.append('by=' + format_value(to_str(self._by)))

        if self._for:
            sections.append(
                ', '.join('for=' + format_value(to_str(value)) for value in self._for)
            )

        if self._host is not None:
            sections.append('host=' + format_value(to_str(self._host)))

        if self._proto is not None:
            sections.append('proto=' + format_value(to_str(self._proto)))

        return ';'.join(sections)

    def write(self, stream: TextIO) -> None:
        """Write the serialized header value to a text stream.

        Args:
            stream: A file-like object opened in text mode.

        Raises:
            FormatError: The stream failed to accept the value.
        """
        try:
            stream.write(self.value())
        except (OSError, ValueError) as ex:
            raise FormatError('Unable to write the Forwarded header value.') from ex

    def apply(self, headers: Any) -> None:
        """Set the Forwarded header on a header container.

        Args:
            headers: A header container. If it provides a
                ``set_header(name, value)`` method (such as
                ``falcon.Response``), that method is used; otherwise the
                container is treated as a mutable mapping.
        """
        set_header = getattr(headers, 'set_header', None)
        if set_header is not None:
            set_header(FORWARDED, self.value())
        else:
            headers[FORWARDED] = self.value()

    def __str__(self) -> str:
        return self.value()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Forwarded):
            return NotImplemented

        return (
            self.by == other.by
            and self.forwarded_for == other.forwarded_for
            and self.host == other.host
            and self.proto == other.proto
        )

    def __repr__(self) -> str:
        return '{}(by={!r}, forwarded_for={!r}, host={!r}, proto={!r})'.format(
            type(self).__name__, self.by, self.forwarded_for, self.host, self.proto
        )


def parse(value: str) -> Forwarded:
    """Parse a Forwarded header value (see also :meth:`Forwarded.parse`)."""
    return Forwarded.parse(value)


def serialize(forwarded: Forwarded) -> str:
    return forwarded.value()


def to_owned(forwarded: Forwarded) -> Forwarded:
    return forwarded.to_owned()
