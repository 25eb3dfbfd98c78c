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

"""Canonical rendering of a :class:`ConventionalMessage`.

Output layout::

    type(scope)!: subject

    body

    BREAKING CHANGE: text
    Closes #1
    Closes #2

Footers are always written breaking change first, then issues, so
``parse_message(format_message(msg), types) == msg`` for every parsed
message.
"""

from __future__ import annotations

from commitkit.commit_parsing._parser import BREAKING_CHANGE_TOKEN, CLOSES_TOKEN
from commitkit.commit_parsing._types import ConventionalMessage


def format_header(msg: ConventionalMessage) -> str:
    """Render the first line, e.g. ``feat(api)!: add endpoint``."""
    scope = f'({msg.scope})' if msg.scope else ''
    marker = '!' if msg.is_breaking else ''
    return f'{msg.type}{scope}{marker}: {msg.subject}'


def format_message(msg: ConventionalMessage) -> str:
    """Render ``msg`` as canonical commit message text.

    Args:
        msg: The message to render.

    Returns:
        The message text without a trailing newline.
    """
    parts = [format_header(msg)]
    if msg.body:
        parts.extend(['', msg.body])

    footers: list[str] = []
    if msg.breaking_change:
        footers.append(f'{BREAKING_CHANGE_TOKEN} {msg.breaking_change}')
    footers.extend(f'{CLOSES_TOKEN}{issue}' for issue in msg.closed_issues or ())
    if footers:
        parts.extend(['', *footers])

    return '\n'.join(parts)
