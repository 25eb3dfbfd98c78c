# Copyright 2026 Google LLC
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
#
# SPDX-License-Identifier: Apache-2.0

r"""Conventional Commit parsing and formatting.

The parser is strict: a message either yields a complete
:class:`ConventionalMessage` or raises a :class:`~commitkit.errors.ParseError`
pointing at the offending line.  :func:`format_message` is its inverse
for every message the parser produces.

Usage::

    from commitkit.commit_parsing import format_message, parse_message
    from commitkit.registry import DEFAULT_REGISTRY

    msg = parse_message(
        'feat(api)!: add endpoint\n\nadds a new endpoint\n\n'
        'BREAKING CHANGE: removes old endpoint\nCloses #12',
        DEFAULT_REGISTRY.valid_types,
    )
    assert msg.scope == 'api'
    assert msg.closed_issues == (12,)

    assert parse_message(format_message(msg), DEFAULT_REGISTRY.valid_types) == msg
"""

from commitkit.commit_parsing._formatter import format_header, format_message
from commitkit.commit_parsing._parser import (
    BREAKING_CHANGE_TOKEN,
    CLOSES_TOKEN,
    ConventionalMessageParser,
    parse_message,
)
from commitkit.commit_parsing._types import ConventionalMessage

__all__ = [
    'BREAKING_CHANGE_TOKEN',
    'CLOSES_TOKEN',
    'ConventionalMessage',
    'ConventionalMessageParser',
    'format_header',
    'format_message',
    'parse_message',
]
