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

"""Shared leaf-level types used across commitkit.

This module must have **zero** imports from other ``commitkit``
subpackages to avoid circular-import chains.  It is safe to import
from any module in the project.

Both records are produced by the host's git collaborators (``git log``
and ``git tag --list``) and are read-only to commitkit.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

__all__ = [
    'CommitRecord',
    'TagRecord',
]


@dataclass(frozen=True)
class CommitRecord:
    """One commit from the history source.

    Attributes:
        id: The full commit hash.
        timestamp: Author date of the commit.
        author: Author name.
        message: The full commit message, embedded newlines and footer
            layout preserved verbatim.
    """

    id: str
    timestamp: datetime
    author: str
    message: str

    @property
    def short_id(self) -> str:
        """First seven characters of the commit hash."""
        return self.id[:7]

    @property
    def first_line(self) -> str:
        """The first line of the raw message (empty for an empty message)."""
        lines = self.message.splitlines()
        return lines[0] if lines else ''


@dataclass(frozen=True)
class TagRecord:
    """One git tag from the tag source.

    Attributes:
        name: Tag name as listed by git (e.g. ``"v1.2.0"``).
        commit_hash: Hash of the commit the tag points to.  Annotated
            tags must already be dereferenced by the collaborator.
        date: Tag creation date.
    """

    name: str
    commit_hash: str
    date: datetime
