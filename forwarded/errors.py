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

"""Error classes raised by the forwarded package.

Both classes are available directly from the `forwarded` package
namespace::

    import forwarded

    try:
        fwd = forwarded.parse(req.get_header('Forwarded'))
    except forwarded.GrammarError as ex:
        raise falcon.HTTPInvalidHeader(ex.reason, 'Forwarded')
"""

from __future__ import annotations

__all__ = (
    'FormatError',
    'GrammarError',
)


class GrammarError(ValueError):
    """The Forwarded header value does not follow the RFC 7239 grammar.

    Args:
        reason (str): A short description of the grammar violation, e.g.,
            ``'for= without valid value'``.

    Attributes:
        reason (str): The short description passed to the initializer.
    """

    def __init__(self, reason: str) -> None:
        super().__init__('unable to parse forwarded header: ' + reason)
        self.reason = reason


# NOTE: This inherits from IOError to be consistent with the type raised by
#   Python's built-in file-like objects.
class FormatError(IOError):
    """The serialized header value could not be written to the given sink."""
