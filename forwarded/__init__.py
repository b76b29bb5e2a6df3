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

"""Primary package for forwarded, the RFC 7239 Forwarded header toolkit.

The `forwarded` package parses, normalizes and re-serializes the
Forwarded header, along with the historical X-Forwarded-For,
X-Forwarded-By and X-Forwarded-Proto headers. Most classes and functions
can be accessed directly from the package::

    import forwarded

    fwd = forwarded.parse_headers(req)
"""

import logging as _logging

__all__ = (
    # Model
    'Forwarded',
    'ForwardedOptions',
    # Errors
    'FormatError',
    'GrammarError',
    # Header names
    'FORWARDED',
    'X_FORWARDED_BY',
    'X_FORWARDED_FOR',
    'X_FORWARDED_PROTO',
    # Functions
    'parse',
    'parse_forwarded_header',
    'parse_headers',
    'parse_x_forwarded_headers',
    'serialize',
    'to_owned',
    # Utilities
    'CaseInsensitiveDict',
    'StringView',
)

from forwarded.constants import FORWARDED
from forwarded.constants import X_FORWARDED_BY
from forwarded.constants import X_FORWARDED_FOR
from forwarded.constants import X_FORWARDED_PROTO
from forwarded.errors import FormatError
from forwarded.errors import GrammarError
from forwarded.model import Forwarded
from forwarded.model import parse
from forwarded.model import serialize
from forwarded.model import to_owned
from forwarded.proxies import ForwardedOptions
from forwarded.proxies import parse_forwarded_header
from forwarded.proxies import parse_headers
from forwarded.proxies import parse_x_forwarded_headers
from forwarded.util import CaseInsensitiveDict
from forwarded.util import StringView

# Package version
from forwarded.version import __version__  # NOQA: F401

# NOTE: Only to be used internally on the rare occasion that we need to
#   log something that we can't communicate any other way.
_logger = _logging.getLogger('forwarded')
_logger.addHandler(_logging.NullHandler())
