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

"""Release planning.

Combines version derivation, the changelog and the release metadata into
one immutable :class:`ReleasePlan`.  The host executes the plan: runs the
bump commands, writes ``CHANGELOG.md``, commits with
:attr:`ReleasePlan.commit_message` and tags with
:attr:`ReleasePlan.tag_name` / :attr:`ReleasePlan.tag_message`.

Release flow::

    history + tags
         │
         ▼
    latest_semver_tag ──► commits_since_tag ──► derive_version_bump
         │                                          │
         ▼                                          ▼
    build_changelog(unreleased_version=next) ──► render_release_notes
         │
         ▼
    ReleasePlan
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

import semver

from commitkit._types import CommitRecord, TagRecord
from commitkit.changelog import Release, build_changelog
from commitkit.config import CommitKitConfig
from commitkit.logging import get_logger
from commitkit.render import render_changelog, render_release_notes
from commitkit.tags import latest_semver_tag
from commitkit.versioning import BumpType, commits_since_tag, derive_version_bump, expand_bump_commands

logger = get_logger(__name__)

__all__ = [
    'ReleasePlan',
    'plan_release',
]


@dataclass(frozen=True)
class ReleasePlan:
    """Everything needed to cut a release.

    Attributes:
        next_version: The version being released.
        prior_version: The latest released version, if any.
        bump: Which part of the version was incremented.
        tag_name: Tag to create (``<tag_prefix><version>``).
        tag_message: Annotation of the tag.
        commit_message: Message of the release commit.
        releases: The full changelog, newest release first.
        release_notes: Markdown notes for the new release.
        bump_commands: Configured bump commands with placeholders expanded.
    """

    next_version: semver.Version
    prior_version: semver.Version | None
    bump: BumpType
    tag_name: str
    tag_message: str
    commit_message: str
    releases: list[Release] = field(default_factory=list)
    release_notes: str = ''
    bump_commands: tuple[str, ...] = ()

    @property
    def changelog(self) -> str:
        """The rendered changelog document."""
        return render_changelog(self.releases)


def plan_release(
    history: Sequence[CommitRecord],
    tags: Sequence[TagRecord],
    config: CommitKitConfig,
    *,
    date: str = '',
) -> ReleasePlan:
    """Plan the next release from the history and the existing tags.

    Args:
        history: All commits, newest first.
        tags: Existing tags, any order.
        config: Repository configuration.
        date: Release date (``YYYY-MM-DD``) for the new release.

    Returns:
        The :class:`ReleasePlan`.  Nothing is written or executed.

    Raises:
        DeriveError: If no commit follows the latest version tag.
        ConfigError: If the configuration or a bump command is invalid.
    """
    registry = config.registry
    tag_prefix = config.release.tag_prefix
    latest = latest_semver_tag(tags, tag_prefix=tag_prefix)
    prior = latest.version if latest is not None else None
    next_version, bump = derive_version_bump(prior, commits_since_tag(history, latest), registry)

    version = str(next_version)
    tag_name = f'{tag_prefix}{version}'

    releases = build_changelog(
        history,
        tags,
        registry,
        unreleased_version=version,
        date=date,
        repository_url=config.changelog.repository_url,
        unreleased_ref=tag_name,
        tag_prefix=tag_prefix,
    )
    pending = releases[0] if releases and releases[0].is_unreleased else Release(version=version, date=date)

    plan = ReleasePlan(
        next_version=next_version,
        prior_version=prior,
        bump=bump,
        tag_name=tag_name,
        tag_message=f'Release {version}',
        commit_message=f'chore(release): created release {version}',
        releases=releases,
        release_notes=render_release_notes(pending, title=tag_name),
        bump_commands=tuple(expand_bump_commands(config.release.bump_commands, next_version, prior)),
    )
    logger.info('release_planned', version=version, tag=tag_name, bump=bump.value)
    return plan
