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

"""Error taxonomy for commitkit.

Every error carries a stable :class:`E` code, a human-readable message
and an optional hint telling the user how to fix the problem::

    raise ParseError(
        code=E.UNKNOWN_TYPE,
        message="Unknown commit type 'feature'",
        hint='Use one of: feat, fix, docs',
        line=0,
    )

Single-message operations (:func:`~commitkit.commit_parsing.parse_message`)
raise.  Bulk operations (version derivation, changelog building, batch
lint) recover per item and only raise for conditions that make the whole
result meaningless, such as :attr:`E.NO_COMMITS`.
"""

from __future__ import annotations

import enum

__all__ = [
    'CommitKitError',
    'ConfigError',
    'DeriveError',
    'E',
    'ParseError',
]


class E(str, enum.Enum):
    """Stable error codes."""

    # Commit message grammar.
    MISSING_SEPARATOR = 'CK-PARSE-MISSING-SEPARATOR'
    INVALID_PREFIX = 'CK-PARSE-INVALID-PREFIX'
    UNKNOWN_TYPE = 'CK-PARSE-UNKNOWN-TYPE'
    INVALID_SCOPE_CASE = 'CK-PARSE-INVALID-SCOPE-CASE'
    EMPTY_SUBJECT = 'CK-PARSE-EMPTY-SUBJECT'
    INVALID_SUBJECT_CASE = 'CK-PARSE-INVALID-SUBJECT-CASE'
    MISSING_BODY_SEPARATOR = 'CK-PARSE-MISSING-BODY-SEPARATOR'
    MISSING_FOOTER_SEPARATOR = 'CK-PARSE-MISSING-FOOTER-SEPARATOR'
    DUPLICATE_BREAKING_CHANGE = 'CK-PARSE-DUPLICATE-BREAKING-CHANGE'
    INVALID_ISSUE_NUMBER = 'CK-PARSE-INVALID-ISSUE-NUMBER'
    UNEXPECTED_LINE = 'CK-PARSE-UNEXPECTED-LINE'

    # Version derivation.
    NO_COMMITS = 'CK-DERIVE-NO-COMMITS'

    # Configuration and collaborators.
    CONFIG_NOT_FOUND = 'CK-CONFIG-NOT-FOUND'
    CONFIG_INVALID = 'CK-CONFIG-INVALID'
    HOOK_INVALID = 'CK-HOOK-INVALID'
    TEMPLATE_NOT_FOUND = 'CK-TEMPLATE-NOT-FOUND'


class CommitKitError(Exception):
    """Base class for all commitkit errors.

    Attributes:
        code: Stable error code.
        message: Human-readable description.
        hint: Actionable fix instruction (may be empty).
    """

    def __init__(self, *, code: E, message: str, hint: str = '') -> None:
        """Initialize the error."""
        super().__init__(f'[{code.value}] {message}')
        self.code = code
        self.message = message
        self.hint = hint


class ParseError(CommitKitError):
    """A commit message violates the Conventional Commit grammar.

    Attributes:
        line: 0-based index of the offending line, when known.
    """

    def __init__(self, *, code: E, message: str, hint: str = '', line: int | None = None) -> None:
        """Initialize the error."""
        super().__init__(code=code, message=message, hint=hint)
        self.line = line


class DeriveError(CommitKitError):
    """The next version cannot be derived."""


class ConfigError(CommitKitError):
    """The configuration is missing or invalid."""
