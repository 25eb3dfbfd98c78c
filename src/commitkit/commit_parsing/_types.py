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

"""Pure types for commit message parsing.

This module has **zero** runtime dependencies beyond the standard library.
Everything here is a frozen dataclass: no I/O, no logging, no side effects.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ConventionalMessage:
    """A parsed Conventional Commit message.

    Constructed once by the parser and never mutated.

    Attributes:
        type: The commit type; always a key of the registry it was
            parsed against.
        subject: First-line summary, lowercase-first, never empty.
        scope: The scope from ``type(scope)``; ``None`` when absent or
            written as ``()``.
        body: Free text between the subject and the footers, lines joined
            with ``\\n``; ``None`` when there is no body.
        breaking_change: ``None`` when the commit is not breaking.  An
            empty string when only the ``!`` marker was used, otherwise
            the (possibly multi-line) ``BREAKING CHANGE:`` footer text.
        closed_issues: Issue numbers from ``Closes #N`` footers in order
            of appearance (duplicates kept); ``None`` when there are none.
    """

    type: str
    subject: str
    scope: str | None = None
    body: str | None = None
    breaking_change: str | None = None
    closed_issues: tuple[int, ...] | None = None

    @property
    def is_breaking(self) -> bool:
        """``True`` if the ``!`` marker or a breaking-change footer is present."""
        return self.breaking_change is not None
