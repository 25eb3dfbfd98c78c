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

"""Commit message linting.

A thin, non-raising layer over the parser for ``commit-msg`` hooks and CI
jobs: every message yields a :class:`LintResult` instead of an exception.

Usage::

    from commitkit.lint import lint_message

    result = lint_message('Fix stuff', DEFAULT_REGISTRY)
    if not result.valid:
        print(result.error)   # [CK-PARSE-MISSING-SEPARATOR] Missing ":" ...
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from commitkit.commit_parsing import ConventionalMessage, parse_message
from commitkit.errors import E, ParseError
from commitkit.logging import get_logger
from commitkit.registry import CommitTypeRegistry

logger = get_logger(__name__)

__all__ = [
    'LintResult',
    'lint_message',
    'lint_messages',
    'strip_comments',
]


@dataclass(frozen=True)
class LintResult:
    """Outcome of linting one commit message.

    Attributes:
        valid: Whether the message parsed.
        message: The parsed message when valid.
        error: ``str(ParseError)`` when invalid, else empty.
        code: The error code when invalid.
        hint: How to fix the message, when known.
        line: 0-based index of the offending line, when known.
    """

    valid: bool
    message: ConventionalMessage | None = None
    error: str = ''
    code: E | None = None
    hint: str = ''
    line: int | None = None


def strip_comments(raw: str) -> str:
    """Drop ``#`` comment lines the way ``git commit`` does before storing."""
    return '\n'.join(line for line in raw.split('\n') if not line.startswith('#'))


def lint_message(raw: str, registry: CommitTypeRegistry, *, ignore_comments: bool = False) -> LintResult:
    """Lint a single commit message.

    Args:
        raw: The commit message.
        registry: Registry providing the valid types.
        ignore_comments: Remove ``#`` comment lines first, as found in
            the message file handed to a ``commit-msg`` hook.
    """
    text = strip_comments(raw) if ignore_comments else raw
    try:
        msg = parse_message(text, registry.valid_types)
    except ParseError as exc:
        return LintResult(valid=False, error=str(exc), code=exc.code, hint=exc.hint, line=exc.line)
    return LintResult(valid=True, message=msg)


def lint_messages(messages: Iterable[str], registry: CommitTypeRegistry) -> list[LintResult]:
    """Lint a batch of messages; one result per message, in order."""
    results = [lint_message(raw, registry) for raw in messages]
    invalid = sum(1 for r in results if not r.valid)
    if invalid:
        logger.warning('lint_failed', total=len(results), invalid=invalid)
    else:
        logger.info('lint_passed', total=len(results))
    return results
