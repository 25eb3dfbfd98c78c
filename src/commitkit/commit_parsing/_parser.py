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

r"""Strict Conventional Commit parser.

Grammar accepted::

    type(scope)!: subject            <- line 0, scope and "!" optional
                                     <- exactly one blank line
    body line                        <- optional body, any number of lines
    body line
                                     <- blank line before the footers
    BREAKING CHANGE: text            <- optional, at most once
    continuation of the text
    Closes #12                       <- optional, one per line
    Closes #13

Rules:

- ``type`` is a word token and must be a registered type.
- ``scope`` must start with a lowercase character; ``()`` means no scope.
- The subject must start with a lowercase character.
- ``!`` marks a breaking change even without a ``BREAKING CHANGE:`` footer;
  the breaking-change text is then the empty string.
- Footers never follow a body line directly: a blank line is required.
- After the first ``Closes #`` line only more ``Closes #`` lines (or the
  single ``BREAKING CHANGE:`` footer) are accepted.

The line loop is an explicit state machine: every state has its own
transition method returning the next state, so a footer line can never be
consumed while the subject separator is still pending.

Pure implementation: depends only on ``re`` and sibling modules.
No I/O, no logging, no side effects.
"""

from __future__ import annotations

import enum
import re
from collections.abc import Callable, Iterable

from commitkit.commit_parsing._types import ConventionalMessage
from commitkit.errors import E, ParseError
from commitkit.registry import CommitTypeRegistry

BREAKING_CHANGE_TOKEN = 'BREAKING CHANGE:'
CLOSES_TOKEN = 'Closes #'

# Prefix: type(scope)!  (the part before the first colon)
PREFIX_PATTERN: re.Pattern[str] = re.compile(
    r'^(?P<type>\w+)'  # type (e.g. feat, fix, chore)
    r'(?:\((?P<scope>[^()]*)\))?'  # optional scope in parens
    r'(?P<breaking>!)?$',  # optional breaking change marker
)

_ISSUE_PATTERN: re.Pattern[str] = re.compile(r'^Closes #(?P<number>[0-9]+)\s*$')


class _State(enum.Enum):
    """Section of the message the next line belongs to."""

    AFTER_SUBJECT = 'after_subject'
    BODY = 'body'
    FOOTER_BREAKING = 'footer_breaking'
    FOOTER_ISSUE = 'footer_issue'


def _is_blank(line: str) -> bool:
    return not line.strip()


def _trim_trailing_blanks(lines: list[str]) -> list[str]:
    end = len(lines)
    while end and _is_blank(lines[end - 1]):
        end -= 1
    return lines[:end]


class _MessageBuilder:
    """Accumulates the sections of one message while lines are fed in."""

    def __init__(self, *, marker_breaking: bool) -> None:
        self.state = _State.AFTER_SUBJECT
        self.body_lines: list[str] = []
        self.breaking_lines: list[str] = []
        self.has_breaking_footer = False
        self.marker_breaking = marker_breaking
        self.issues: list[int] = []
        self._transitions: dict[_State, Callable[[int, str], _State]] = {
            _State.AFTER_SUBJECT: self._after_subject,
            _State.BODY: self._body,
            _State.FOOTER_BREAKING: self._footer_breaking,
            _State.FOOTER_ISSUE: self._footer_issue,
        }

    def feed(self, index: int, line: str) -> None:
        self.state = self._transitions[self.state](index, line)

    # -- transitions ---------------------------------------------------

    def _after_subject(self, index: int, line: str) -> _State:
        if not _is_blank(line):
            raise ParseError(
                code=E.MISSING_BODY_SEPARATOR,
                message='The subject must be followed by a blank line',
                hint='Insert an empty line between the subject and the body.',
                line=index,
            )
        return _State.BODY

    def _body(self, index: int, line: str) -> _State:
        if line.startswith(BREAKING_CHANGE_TOKEN) or line.startswith(CLOSES_TOKEN):
            # The blank line right after the subject also separates footers.
            if self.body_lines and not _is_blank(self.body_lines[-1]):
                raise ParseError(
                    code=E.MISSING_FOOTER_SEPARATOR,
                    message='Footers must be separated from the body by a blank line',
                    hint=f'Insert an empty line before line {index + 1}.',
                    line=index,
                )
            self.body_lines = _trim_trailing_blanks(self.body_lines)
            if line.startswith(BREAKING_CHANGE_TOKEN):
                return self._start_breaking(index, line)
            return self._add_issue(index, line)
        self.body_lines.append(line)
        return _State.BODY

    def _footer_breaking(self, index: int, line: str) -> _State:
        if line.startswith(BREAKING_CHANGE_TOKEN):
            return self._start_breaking(index, line)
        if line.startswith(CLOSES_TOKEN):
            return self._add_issue(index, line)
        self.breaking_lines.append(line)
        return _State.FOOTER_BREAKING

    def _footer_issue(self, index: int, line: str) -> _State:
        if line.startswith(BREAKING_CHANGE_TOKEN):
            return self._start_breaking(index, line)
        if line.startswith(CLOSES_TOKEN):
            return self._add_issue(index, line)
        if _is_blank(line):
            return _State.FOOTER_ISSUE
        raise ParseError(
            code=E.UNEXPECTED_LINE,
            message=f'Unexpected line after the issue footers: {line!r}',
            hint='Only "Closes #<n>" lines may follow a "Closes #" footer.',
            line=index,
        )

    # -- footer helpers ------------------------------------------------

    def _start_breaking(self, index: int, line: str) -> _State:
        if self.has_breaking_footer:
            raise ParseError(
                code=E.DUPLICATE_BREAKING_CHANGE,
                message='Only one "BREAKING CHANGE:" footer is allowed',
                hint='Merge the breaking change notes into a single footer.',
                line=index,
            )
        self.has_breaking_footer = True
        self.breaking_lines = [line[len(BREAKING_CHANGE_TOKEN) :].strip()]
        return _State.FOOTER_BREAKING

    def _add_issue(self, index: int, line: str) -> _State:
        match = _ISSUE_PATTERN.match(line)
        if not match:
            raise ParseError(
                code=E.INVALID_ISSUE_NUMBER,
                message=f'Invalid issue reference: {line!r}',
                hint='Write one issue per line as "Closes #123".',
                line=index,
            )
        self.issues.append(int(match.group('number')))
        return _State.FOOTER_ISSUE

    # -- result --------------------------------------------------------

    def body(self) -> str | None:
        lines = _trim_trailing_blanks(self.body_lines)
        return '\n'.join(lines) if lines else None

    def breaking_change(self) -> str | None:
        if self.has_breaking_footer:
            return '\n'.join(_trim_trailing_blanks(self.breaking_lines))
        return '' if self.marker_breaking else None

    def closed_issues(self) -> tuple[int, ...] | None:
        return tuple(self.issues) if self.issues else None


def _parse_header(line: str, valid_types: frozenset[str]) -> tuple[str, str | None, bool, str]:
    """Split line 0 into ``(type, scope, marker_breaking, subject)``."""
    if ':' not in line:
        raise ParseError(
            code=E.MISSING_SEPARATOR,
            message=f'Missing ":" after the commit type: {line!r}',
            hint='Write the first line as "type(scope): subject".',
            line=0,
        )
    prefix, subject = line.split(':', 1)
    prefix = prefix.strip()
    subject = subject.strip()

    match = PREFIX_PATTERN.match(prefix)
    if not match:
        raise ParseError(
            code=E.INVALID_PREFIX,
            message=f'Invalid commit prefix {prefix!r}',
            hint='The prefix must look like "type", "type(scope)" or "type(scope)!".',
            line=0,
        )

    commit_type = match.group('type')
    if commit_type not in valid_types:
        raise ParseError(
            code=E.UNKNOWN_TYPE,
            message=f'Unknown commit type {commit_type!r}',
            hint=f'Use one of: {", ".join(sorted(valid_types))}',
            line=0,
        )

    scope = match.group('scope')
    if scope is not None:
        scope = scope.strip() or None
    if scope is not None and not scope[0].islower():
        raise ParseError(
            code=E.INVALID_SCOPE_CASE,
            message=f'Scope {scope!r} must start with a lowercase character',
            line=0,
        )

    if not subject:
        raise ParseError(
            code=E.EMPTY_SUBJECT,
            message='The subject is empty',
            hint='Describe the change after the colon.',
            line=0,
        )
    if not subject[0].islower():
        raise ParseError(
            code=E.INVALID_SUBJECT_CASE,
            message=f'Subject {subject!r} must start with a lowercase character',
            line=0,
        )

    return commit_type, scope, bool(match.group('breaking')), subject


def parse_message(raw: str, valid_types: Iterable[str]) -> ConventionalMessage:
    r"""Parse one commit message.

    Args:
        raw: The full commit message.
        valid_types: Accepted commit type keys.

    Returns:
        The parsed :class:`ConventionalMessage`.

    Raises:
        ParseError: On the first grammar violation.

    Example::

        msg = parse_message('fix(api)!: drop v1\n\nBREAKING CHANGE: gone', {'fix'})
        assert msg.scope == 'api'
        assert msg.breaking_change == 'gone'
    """
    lines = [line.rstrip('\r') for line in raw.split('\n')]
    commit_type, scope, marker_breaking, subject = _parse_header(lines[0], frozenset(valid_types))

    builder = _MessageBuilder(marker_breaking=marker_breaking)
    for index, line in enumerate(lines[1:], start=1):
        builder.feed(index, line)

    return ConventionalMessage(
        type=commit_type,
        scope=scope,
        subject=subject,
        body=builder.body(),
        breaking_change=builder.breaking_change(),
        closed_issues=builder.closed_issues(),
    )


class ConventionalMessageParser:
    """Parser bound to a :class:`CommitTypeRegistry`.

    Example::

        parser = ConventionalMessageParser(DEFAULT_REGISTRY)
        msg = parser.parse('feat(auth): add OAuth2')
        assert msg.type == 'feat'
    """

    def __init__(self, registry: CommitTypeRegistry) -> None:
        """Initialize the parser."""
        self._valid_types = registry.valid_types

    def parse(self, message: str) -> ConventionalMessage:
        """Parse ``message``, raising :class:`ParseError` on failure."""
        return parse_message(message, self._valid_types)
