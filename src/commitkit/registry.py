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

"""Ordered registry of commit types.

The registry is the single source of truth for which commit types are
valid, which ones trigger a minor version bump, which ones appear in the
changelog, and in which order changelog groups are listed.

Key Concepts (ELI5)::

    ┌─────────────────────┬────────────────────────────────────────────────┐
    │ Concept             │ Plain-English                                  │
    ├─────────────────────┼────────────────────────────────────────────────┤
    │ CommitType          │ One allowed prefix, e.g. ``feat``, with a      │
    │                     │ description and a changelog heading.           │
    ├─────────────────────┼────────────────────────────────────────────────┤
    │ Ordinal             │ Position in the declaration order.  Changelog  │
    │                     │ groups are sorted by it.                       │
    ├─────────────────────┼────────────────────────────────────────────────┤
    │ Minor types         │ Types that bump MINOR on a 1.x+ version.       │
    ├─────────────────────┼────────────────────────────────────────────────┤
    │ Changelog types     │ Types listed in the changelog.  Others are     │
    │                     │ still valid commits, just not shown.           │
    └─────────────────────┴────────────────────────────────────────────────┘
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass, field

from commitkit.errors import E, ConfigError

__all__ = [
    'DEFAULT_REGISTRY',
    'UNCATEGORIZED',
    'UNCATEGORIZED_TITLE',
    'CommitType',
    'CommitTypeRegistry',
]

# Synthetic group for commits that do not parse.
UNCATEGORIZED = 'uncategorized'
UNCATEGORIZED_TITLE = 'Uncategorized'

_KEY_PATTERN: re.Pattern[str] = re.compile(r'^\w+$')


@dataclass(frozen=True)
class CommitType:
    """A single registered commit type.

    Attributes:
        key: The prefix token (e.g. ``"feat"``).
        description: Short description shown when picking a type.
        changelog_title: Heading of the changelog group.
        ordinal: Declaration index; lower sorts first.
    """

    key: str
    description: str
    changelog_title: str
    ordinal: int = 0


@dataclass(frozen=True)
class CommitTypeRegistry:
    """Ordered, immutable set of commit types.

    Build it with :meth:`from_types`, which assigns ordinals and
    validates the minor/changelog subsets.

    Attributes:
        types: Registered types in declaration order.
        minor_types: Keys that trigger a minor version bump.
        changelog_types: Keys included in the changelog.
    """

    types: tuple[CommitType, ...]
    minor_types: frozenset[str] = frozenset()
    changelog_types: frozenset[str] = frozenset()
    _by_key: dict[str, CommitType] = field(default_factory=dict, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        """Index types by key and validate the registry."""
        if not self.types:
            raise ConfigError(
                code=E.CONFIG_INVALID,
                message='At least one commit type must be registered',
                hint='Declare types under [commits.types] in the config file.',
            )
        by_key: dict[str, CommitType] = {}
        for commit_type in self.types:
            if not _KEY_PATTERN.match(commit_type.key):
                raise ConfigError(
                    code=E.CONFIG_INVALID,
                    message=f'Invalid commit type key {commit_type.key!r}',
                    hint='Type keys are single words made of letters, digits or "_".',
                )
            if commit_type.key == UNCATEGORIZED:
                raise ConfigError(
                    code=E.CONFIG_INVALID,
                    message=f'{UNCATEGORIZED!r} is reserved for unconventional commits',
                )
            if commit_type.key in by_key:
                raise ConfigError(
                    code=E.CONFIG_INVALID,
                    message=f'Duplicate commit type {commit_type.key!r}',
                )
            by_key[commit_type.key] = commit_type
        for name, subset in (('minor_types', self.minor_types), ('changelog_types', self.changelog_types)):
            unknown = sorted(subset - by_key.keys())
            if unknown:
                raise ConfigError(
                    code=E.CONFIG_INVALID,
                    message=f'{name} references unknown commit types: {", ".join(unknown)}',
                    hint=f'Valid types are: {", ".join(by_key)}',
                )
        object.__setattr__(self, '_by_key', by_key)

    @classmethod
    def from_types(
        cls,
        types: Iterable[CommitType | tuple[str, str, str]],
        *,
        minor_types: Iterable[str] = ('feat',),
        changelog_types: Iterable[str] | None = None,
    ) -> CommitTypeRegistry:
        """Build a registry, assigning ordinals from declaration order.

        Args:
            types: :class:`CommitType` values or ``(key, description,
                changelog_title)`` tuples, in display order.
            minor_types: Keys that trigger a minor bump.
            changelog_types: Keys shown in the changelog.  ``None`` means
                every registered type.

        Returns:
            A validated :class:`CommitTypeRegistry`.

        Raises:
            ConfigError: If the declaration is invalid.
        """
        ordered: list[CommitType] = []
        for ordinal, item in enumerate(types):
            if isinstance(item, CommitType):
                key, description, title = item.key, item.description, item.changelog_title
            else:
                key, description, title = item
            ordered.append(CommitType(key=key, description=description, changelog_title=title, ordinal=ordinal))
        keys = frozenset(t.key for t in ordered)
        return cls(
            types=tuple(ordered),
            minor_types=frozenset(minor_types),
            changelog_types=keys if changelog_types is None else frozenset(changelog_types),
        )

    @property
    def keys(self) -> tuple[str, ...]:
        """Registered keys in declaration order."""
        return tuple(t.key for t in self.types)

    @property
    def valid_types(self) -> frozenset[str]:
        """Set of keys accepted by the parser."""
        return frozenset(self._by_key)

    def get(self, key: str) -> CommitType | None:
        """Return the registered type for ``key``, if any."""
        return self._by_key.get(key)

    def title(self, key: str) -> str:
        """Changelog heading for ``key``; unknown keys use the key itself."""
        if key == UNCATEGORIZED:
            return UNCATEGORIZED_TITLE
        commit_type = self._by_key.get(key)
        return commit_type.changelog_title if commit_type else key

    def ordinal(self, key: str) -> int:
        """Sort position for ``key``; unknown keys sort after all known ones."""
        commit_type = self._by_key.get(key)
        return commit_type.ordinal if commit_type else len(self.types)

    def triggers_minor(self, key: str) -> bool:
        """Whether a commit of this type bumps the minor version."""
        return key in self.minor_types

    def in_changelog(self, key: str) -> bool:
        """Whether commits of this type are listed in the changelog."""
        return key in self.changelog_types


DEFAULT_REGISTRY: CommitTypeRegistry = CommitTypeRegistry.from_types(
    [
        ('feat', 'A new feature', 'New features'),
        ('fix', 'Bug fixes', 'Bug fixes'),
        ('docs', 'Documentation', 'Documentation changes'),
        ('style', 'Code styling', 'Code styling changes'),
        ('refactor', 'Code refactoring', 'Code refactoring'),
        ('perf', 'Performance Improvements', 'Performance Improvements'),
        ('test', 'Tests', 'Tests'),
        ('build', 'Build system', 'Build system'),
        ('ci', 'Continuous Integration', 'Continuous Integration'),
        ('cd', 'Continuous Delivery', 'Continuous Delivery'),
        ('chore', 'Other changes', 'Other changes'),
    ],
    minor_types=('feat',),
)
