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

__all__ = (
    'FORWARDED',
    'X_FORWARDED_BY',
    'X_FORWARDED_FOR',
    'X_FORWARDED_PROTO',
)

FORWARDED = 'Forwarded'
"""Name of the standardized header (RFC 7239)."""

# NOTE: The X-Forwarded-* headers were never standardized, but they are
#   still emitted by most proxies and load balancers in the wild.
X_FORWARDED_FOR = 'X-Forwarded-For'
X_FORWARDED_BY = 'X-Forwarded-By'
X_FORWARDED_PROTO = 'X-Forwarded-Proto'
