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

"""Extract forwarding information from a set of request headers.

The functions in this module accept a header source, which is either an
object with a ``get_header(name)`` method (such as ``falcon.Request``),
or any mapping of header names to values. Header names are looked up
case-insensitively in both cases.

Whichever headers the information is taken from, the result is
normalized to a :class:`~.Forwarded` instance, as recommended by
RFC 7239, Section 7.4::

    fwd = forwarded.parse_headers(req)
    if fwd is not None:
        client = fwd.forwarded_for[0] if fwd.forwarded_for else None
"""

from __future__ import annotations

import ipaddress
from typing import Any, Optional

import forwarded
from forwarded.constants import FORWARDED
from forwarded.constants import X_FORWARDED_BY
from forwarded.constants import X_FORWARDED_FOR
from forwarded.constants import X_FORWARDED_PROTO
from forwarded.model import Forwarded
from forwarded.util.structures import CaseInsensitiveDict
from forwarded.util.structures import Slot
from forwarded.util.structures import split_views
from forwarded.util.structures import StringView

__all__ = (
    'ForwardedOptions',
    'parse_forwarded_header',
    'parse_headers',
    'parse_x_forwarded_headers',
)


class ForwardedOptions:
    """Defines a set of configurable options for extracting forwarding info.

    An instance of this class may be passed to :func:`parse_headers` and
    :func:`parse_x_forwarded_headers`. When no options are passed, the
    defaults documented below apply.

    Attributes:
        legacy_fallback (bool): Set to ``False`` to ignore the historical
            X-Forwarded-* headers when the Forwarded header is absent
            (default ``True``).
        x_forwarded_for_header (str): Name of the header that lists the
            client addresses (default ``'X-Forwarded-For'``).
        x_forwarded_by_header (str): Name of the header that identifies
            the proxy interface (default ``'X-Forwarded-By'``).
        x_forwarded_proto_header (str): Name of the header that carries
            the original protocol (default ``'X-Forwarded-Proto'``).
    """

    __slots__ = (
        'legacy_fallback',
        'x_forwarded_for_header',
        'x_forwarded_by_header',
        'x_forwarded_proto_header',
    )

    legacy_fallback: bool
    x_forwarded_for_header: str
    x_forwarded_by_header: str
    x_forwarded_proto_header: str

    def __init__(self) -> None:
        self.legacy_fallback = True
        self.x_forwarded_for_header = X_FORWARDED_FOR
        self.x_forwarded_by_header = X_FORWARDED_BY
        self.x_forwarded_proto_header = X_FORWARDED_PROTO


_DEFAULT_OPTIONS = ForwardedOptions()


def _header_source(headers: Any) -> Any:
    if hasattr(headers, 'get_header'):
        return headers

    return CaseInsensitiveDict(headers)


def _bracket_ipv6(segment: StringView) -> Slot:
    # PERF: Skip the (relatively expensive) address parsing for anything
    #   that could not possibly be an IPv6 literal.
    if ':' not in str(segment):
        return segment

    try:
        address = ipaddress.ip_address(str(segment))
    except ValueError:
        # NOTE: Not an address, e.g., a "host:port" pair or an obfuscated
        #   identifier; pass it through as-is.
        return segment

    if address.version != 6:
        return segment

    # NOTE: RFC 7239, Section 6 requires IPv6 addresses to be enclosed in
    #   square brackets.
    bracketed = '[{}]'.format(address)
    forwarded._logger.debug('Bracketed IPv6 address %r as %r', str(segment), bracketed)
    return bracketed


def parse_forwarded_header(headers: Any) -> Optional[Forwarded]:
    """Parse the standardized Forwarded header, if present.

    The X-Forwarded-* headers are not consulted.

    Args:
        headers: The header source.

    Returns:
        Forwarded: The parsed header, or ``None`` if the Forwarded header
        is missing.

    Raises:
        GrammarError: The Forwarded header is malformed.
    """
    value = _header_source(headers).get_header(FORWARDED)
    if value is None:
        return None

    return Forwarded.parse(value)


def parse_x_forwarded_headers(
    headers: Any, options: Optional[ForwardedOptions] = None
) -> Optional[Forwarded]:
    """Build a Forwarded instance from the historical X-Forwarded-* headers.

    The Forwarded header itself is not consulted. X-Forwarded-For is
    split on commas, and any bare IPv6 literal is enclosed in square
    brackets to match the notation of RFC 7239; everything else is kept
    as-is. X-Forwarded-By and X-Forwarded-Proto are used verbatim for the
    "by" and "proto" parameters, respectively. The "host" parameter is
    never set.

    This function does not raise on malformed values; they are simply
    passed through.

    Args:
        headers: The header source.

    Keyword Arguments:
        options (ForwardedOptions): Options overriding the legacy header
            names (default ``None``, meaning the defaults are used).

    Returns:
        Forwarded: The extracted information, or ``None`` if none of the
        X-Forwarded-For, X-Forwarded-By and X-Forwarded-Proto headers are
        present.
    """
    options = options or _DEFAULT_OPTIONS
    source = _header_source(headers)

    forwarded_for = source.get_header(options.x_forwarded_for_header)
    by = source.get_header(options.x_forwarded_by_header)
    proto = source.get_header(options.x_forwarded_proto_header)

    if forwarded_for is None and by is None and proto is None:
        return None

    return Forwarded._from_slots(
        by=None if by is None else StringView(by),
        forwarded_for=(
            None
            if forwarded_for is None
            else [_bracket_ipv6(segment) for segment in split_views(forwarded_for)]
        ),
        proto=None if proto is None else StringView(proto),
    )


def parse_headers(
    headers: Any, options: Optional[ForwardedOptions] = None
) -> Optional[Forwarded]:
    """Extract forwarding information from a header source.

    The standardized Forwarded header is tried first. If it is absent,
    the X-Forwarded-For, X-Forwarded-By and X-Forwarded-Proto headers are
    tried instead (unless disabled via
    :attr:`ForwardedOptions.legacy_fallback`).

    Note:
        A malformed Forwarded header is never replaced by the
        X-Forwarded-* headers; the error is raised instead, so that the
        operator becomes aware that an upstream proxy is malfunctioning.

    Args:
        headers: The header source.

    Keyword Arguments:
        options (ForwardedOptions): Options controlling the fallback
            (default ``None``, meaning the defaults are used).

    Returns:
        Forwarded: The extracted information, or ``None`` if none of the
        headers are present.

    Raises:
        GrammarError: The Forwarded header is malformed.
    """
    options = options or _DEFAULT_OPTIONS
    source = _header_source(headers)

    result = parse_forwarded_header(source)
    if result is not None or not options.legacy_fallback:
        return result

    forwarded._logger.debug('Forwarded header not present, trying X-Forwarded-*')
    return parse_x_forwarded_headers(source, options)
