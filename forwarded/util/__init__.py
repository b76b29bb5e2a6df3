"""General utilities.

This package includes the value lexer and the data structures used by
the `forwarded` package. The structures are imported directly into the
front-door `forwarded` module for convenience::

    import forwarded

    headers = forwarded.CaseInsensitiveDict()

Conversely, the `lexer` module must be imported explicitly::

    from forwarded.util import lexer

    value = lexer.format_value('[2001:db8:cafe::17]')
"""

from forwarded.util.structures import CaseInsensitiveDict
from forwarded.util.structures import is_borrowed
from forwarded.util.structures import split_views
from forwarded.util.structures import StringView
from forwarded.util.structures import to_str

__all__ = (
    'CaseInsensitiveDict',
    'is_borrowed',
    'split_views',
    'StringView',
    'to_str',
)
