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

"""Semantic-version tag selection.

Tags are ordered by semantic-version precedence, never by creation date
or by name.  A backported ``v1.9.9`` created after ``v2.0.0`` is still
older than ``v2.0.0``.

Key Concepts (ELI5)::

    ┌─────────────────────┬────────────────────────────────────────────────┐
    │ Concept             │ Plain-English                                  │
    ├─────────────────────┼────────────────────────────────────────────────┤
    │ SemverTag           │ A git tag plus the version parsed from its     │
    │                     │ name (``v1.2.3`` → ``1.2.3``).                 │
    ├─────────────────────┼────────────────────────────────────────────────┤
    │ Precedence          │ semver ordering: ``1.0.0-rc.1 < 1.0.0 <        │
    │                     │ 1.0.1 < 1.1.0 < 2.0.0``.                       │
    ├─────────────────────┼────────────────────────────────────────────────┤
    │ Skipped tag         │ A tag whose name is not a version              │
    │                     │ (``nightly``, ``v1.2``).  Ignored, not fatal.  │
    ├─────────────────────┼────────────────────────────────────────────────┤
    │ Tag prefix          │ Text before the version in the tag name,       │
    │                     │ ``v`` by default, ``release-`` if configured.  │
    └─────────────────────┴────────────────────────────────────────────────┘
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

import semver

from commitkit._types import TagRecord
from commitkit.logging import get_logger

logger = get_logger(__name__)

__all__ = [
    'DEFAULT_TAG_PREFIX',
    'SemverTag',
    'latest_semver_tag',
    'parse_tag_version',
    'semver_tags',
]


DEFAULT_TAG_PREFIX = 'v'


@dataclass(frozen=True)
class SemverTag:
    """A tag whose name parsed as a semantic version.

    Attributes:
        tag: The underlying tag record.
        version: The parsed version.
    """

    tag: TagRecord
    version: semver.Version

    @property
    def name(self) -> str:
        """The tag name."""
        return self.tag.name

    @property
    def commit_hash(self) -> str:
        """Hash of the commit the tag points at."""
        return self.tag.commit_hash


def parse_tag_version(name: str, tag_prefix: str = DEFAULT_TAG_PREFIX) -> semver.Version | None:
    """Parse a tag name as a semantic version.

    One leading ``tag_prefix`` is accepted, so with the default prefix
    ``v1.2.3`` and ``1.2.3`` are both ``1.2.3``.

    Args:
        name: The tag name.
        tag_prefix: Prefix the release tags are created with
            (``[release] tag_prefix``).

    Returns:
        The version, or ``None`` if the name is not strict semver.
    """
    text = name[len(tag_prefix) :] if tag_prefix and name.startswith(tag_prefix) else name
    try:
        return semver.Version.parse(text)
    except ValueError:
        return None


def semver_tags(tags: Iterable[TagRecord], *, tag_prefix: str = DEFAULT_TAG_PREFIX) -> list[SemverTag]:
    """Return the version tags among ``tags``, oldest version first.

    Equal versions (``1.0.0+a`` and ``1.0.0+b``) are ordered by tag name
    so the result does not depend on input order.
    """
    parsed: list[SemverTag] = []
    for tag in tags:
        version = parse_tag_version(tag.name, tag_prefix)
        if version is None:
            logger.debug('tag_skipped', tag=tag.name, reason='not a semantic version')
            continue
        parsed.append(SemverTag(tag=tag, version=version))
    return sorted(parsed, key=lambda t: (t.version, t.name))


def latest_semver_tag(tags: Iterable[TagRecord], *, tag_prefix: str = DEFAULT_TAG_PREFIX) -> SemverTag | None:
    """Return the tag with the highest version, or ``None`` if there is none."""
    ordered = semver_tags(tags, tag_prefix=tag_prefix)
    return ordered[-1] if ordered else None
