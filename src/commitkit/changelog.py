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

"""Release-partitioned changelog built from the full commit history.

The history is walked newest to oldest.  Every commit pointed at by a
version tag opens a new release, so a tagged commit and all older
commits up to the next tag belong to that tag's release.  Commits newer
than the latest tag form the pending release.

Key Concepts (ELI5)::

    ┌─────────────────────────┬─────────────────────────────────────────────┐
    │ Concept                 │ Plain-English                               │
    ├─────────────────────────┼─────────────────────────────────────────────┤
    │ ChangelogEntry          │ One commit as shown in the changelog:       │
    │                         │ subject, scope, short hash and link.        │
    ├─────────────────────────┼─────────────────────────────────────────────┤
    │ ReleaseGroup            │ The entries of one commit type inside one   │
    │                         │ release, e.g. "New features".               │
    ├─────────────────────────┼─────────────────────────────────────────────┤
    │ Release                 │ One version (or the pending release) with   │
    │                         │ its date, compare link and groups.          │
    ├─────────────────────────┼─────────────────────────────────────────────┤
    │ Uncategorized           │ Group for commits that do not parse.  Shown │
    │                         │ with their raw first line, always last.     │
    └─────────────────────────┴─────────────────────────────────────────────┘

Partitioning example (history newest first)::

    c5  feat: add export          ┐
    c4  fix: handle empty file    ┘ pending release ("Unreleased")
    c3  feat: add import          ┐ ← tag v1.1.0
    c2  oops                      ┘
    c1  feat: initial             ← tag v1.0.0

Usage::

    from commitkit.changelog import build_changelog

    releases = build_changelog(history, tags, registry, repository_url='https://github.com/acme/app')
    for release in releases:
        print(release.version, [g.title for g in release.groups])
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

import semver

from commitkit._types import CommitRecord, TagRecord
from commitkit.commit_parsing import parse_message
from commitkit.errors import ParseError
from commitkit.logging import get_logger
from commitkit.registry import UNCATEGORIZED, CommitTypeRegistry
from commitkit.tags import DEFAULT_TAG_PREFIX, SemverTag, semver_tags

logger = get_logger(__name__)

__all__ = [
    'UNRELEASED',
    'ChangelogEntry',
    'Release',
    'ReleaseGroup',
    'build_changelog',
]

UNRELEASED = 'Unreleased'


@dataclass(frozen=True)
class ChangelogEntry:
    """A single changelog line from one commit.

    Attributes:
        type: Commit type, or ``"uncategorized"``.
        subject: Display text.  The parsed subject with its first letter
            uppercased, or the raw first line of an unconventional commit.
        commit_id: Full commit hash.
        short_id: First seven characters of the hash.
        scope: Commit scope, if any.
        breaking: Whether the commit is a breaking change.
        closed_issues: Issues closed by the commit.
        author: Commit author name.
        commit_url: Link to the commit, empty without a repository URL.
    """

    type: str
    subject: str
    commit_id: str
    short_id: str = ''
    scope: str | None = None
    breaking: bool = False
    closed_issues: tuple[int, ...] = ()
    author: str = ''
    commit_url: str = ''


@dataclass
class ReleaseGroup:
    """Entries of one commit type within a release.

    Attributes:
        type_key: Commit type key (``"uncategorized"`` for the fallback group).
        title: Group heading.
        commits: Entries in history order, newest first.
    """

    type_key: str
    title: str
    commits: list[ChangelogEntry] = field(default_factory=list)


@dataclass
class Release:
    """One release in the changelog.

    Attributes:
        version: Version string, or the pending release label.
        date: Release date (``YYYY-MM-DD``); tag date for tagged releases.
        tag: Tag name; empty for the pending release.
        history_url: Compare link against the previous release.
        groups: Groups in registry order, uncategorized last.
    """

    version: str
    date: str = ''
    tag: str = ''
    history_url: str = ''
    groups: list[ReleaseGroup] = field(default_factory=list)

    @property
    def is_unreleased(self) -> bool:
        """Whether this is the pending release (not tagged yet)."""
        return not self.tag

    @property
    def entry_count(self) -> int:
        """Number of entries across all groups."""
        return sum(len(g.commits) for g in self.groups)

    def group(self, type_key: str) -> ReleaseGroup | None:
        """Return the group for ``type_key``, if present."""
        for group in self.groups:
            if group.type_key == type_key:
                return group
        return None


def _uppercase_first(text: str) -> str:
    return text[:1].upper() + text[1:]


def _normalize_url(url: str) -> str:
    url = url.strip().rstrip('/')
    return url[: -len('.git')] if url.endswith('.git') else url


def _tags_by_commit(tags: Sequence[TagRecord], tag_prefix: str) -> dict[str, SemverTag]:
    """Map commit hash to its version tag; the highest version wins."""
    by_commit: dict[str, SemverTag] = {}
    # Ascending order, so a later (higher) tag overwrites a lower one.
    for tag in semver_tags(tags, tag_prefix=tag_prefix):
        by_commit[tag.commit_hash] = tag
    return by_commit


def _to_entry(commit: CommitRecord, registry: CommitTypeRegistry, repository_url: str) -> ChangelogEntry:
    commit_url = f'{repository_url}/commit/{commit.id}' if repository_url else ''
    try:
        msg = parse_message(commit.message, registry.valid_types)
    except ParseError as exc:
        logger.warning(
            'unconventional_commit',
            commit=commit.short_id,
            subject=commit.first_line,
            error=exc.message,
        )
        return ChangelogEntry(
            type=UNCATEGORIZED,
            subject=commit.first_line,
            commit_id=commit.id,
            short_id=commit.short_id,
            author=commit.author,
            commit_url=commit_url,
        )
    return ChangelogEntry(
        type=msg.type,
        subject=_uppercase_first(msg.subject),
        commit_id=commit.id,
        short_id=commit.short_id,
        scope=msg.scope,
        breaking=msg.is_breaking,
        closed_issues=msg.closed_issues or (),
        author=commit.author,
        commit_url=commit_url,
    )


def _sorted_groups(buckets: dict[str, list[ChangelogEntry]], registry: CommitTypeRegistry) -> list[ReleaseGroup]:
    """Order buckets by registry ordinal; unknown keys (uncategorized) sort last."""
    return [
        ReleaseGroup(type_key=key, title=registry.title(key), commits=entries)
        for key, entries in sorted(buckets.items(), key=lambda item: (registry.ordinal(item[0]), item[0]))
    ]


def build_changelog(
    history: Sequence[CommitRecord],
    tags: Sequence[TagRecord],
    registry: CommitTypeRegistry,
    *,
    unreleased_version: str = UNRELEASED,
    date: str = '',
    repository_url: str = '',
    unreleased_ref: str = 'HEAD',
    tag_prefix: str = DEFAULT_TAG_PREFIX,
) -> list[Release]:
    """Partition ``history`` into releases and group each release by type.

    Args:
        history: All commits, newest first.
        tags: Tags in any order; tags that are not versions are ignored.
        registry: Commit types, changelog subset and group order.
        unreleased_version: Label of the pending release (e.g. the next
            version computed by :mod:`commitkit.versioning`).
        date: Date of the pending release.
        repository_url: Base URL for commit and compare links
            (e.g. ``https://github.com/acme/app``).
        unreleased_ref: Git ref the pending release is compared up to.
        tag_prefix: Prefix stripped from tag names before parsing them as
            versions.

    Returns:
        Releases, newest first.  The pending release is omitted when no
        commit lands in it; tagged releases are always kept.
    """
    repository_url = _normalize_url(repository_url)
    tag_for_commit = _tags_by_commit(tags, tag_prefix)

    releases: list[Release] = [Release(version=unreleased_version, date=date)]
    buckets: list[dict[str, list[ChangelogEntry]]] = [{}]
    excluded = 0

    for commit in history:
        tag = tag_for_commit.get(commit.id)
        if tag is not None:
            releases.append(
                Release(
                    version=str(tag.version),
                    date=tag.tag.date.strftime('%Y-%m-%d'),
                    tag=tag.name,
                )
            )
            buckets.append({})

        entry = _to_entry(commit, registry, repository_url)
        if entry.type != UNCATEGORIZED and not registry.in_changelog(entry.type):
            logger.debug('commit_excluded', commit=commit.short_id, type=entry.type)
            excluded += 1
            continue
        buckets[-1].setdefault(entry.type, []).append(entry)

    for release, release_buckets in zip(releases, buckets):
        release.groups = _sorted_groups(release_buckets, registry)

    if not releases[0].groups:
        releases.pop(0)

    if repository_url:
        _link_releases(releases, repository_url, unreleased_ref)

    logger.info(
        'changelog_built',
        releases=len(releases),
        commits=len(history),
        excluded=excluded,
    )
    return releases


def _link_releases(releases: list[Release], repository_url: str, unreleased_ref: str) -> None:
    """Set ``history_url`` on each release, comparing with the next lower version."""
    tagged = sorted(
        (r for r in releases if not r.is_unreleased),
        key=lambda r: (semver.Version.parse(r.version), r.tag),
    )
    previous_tag: dict[str, str] = {}
    for older, newer in zip(tagged, tagged[1:]):
        previous_tag[newer.tag] = older.tag

    for release in releases:
        if release.is_unreleased:
            start = tagged[-1].tag if tagged else ''
            end = unreleased_ref
        else:
            start = previous_tag.get(release.tag, '')
            end = release.tag
        if start:
            release.history_url = f'{repository_url}/compare/{start}...{end}'

