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

"""Next-version derivation from the commits since the last release.

Key Concepts (ELI5)::

    ┌─────────────────────┬────────────────────────────────────────────────┐
    │ Concept             │ ELI5 Explanation                               │
    ├─────────────────────┼────────────────────────────────────────────────┤
    │ Classification      │ Two flags computed over the new commits:       │
    │                     │ "something is breaking" and "something is a    │
    │                     │ minor-type commit" (``feat`` by default).      │
    ├─────────────────────┼────────────────────────────────────────────────┤
    │ Unconventional      │ A commit whose message does not parse.  It is  │
    │                     │ logged and left out; it never blocks a release.│
    ├─────────────────────┼────────────────────────────────────────────────┤
    │ Pre-1.0 regime      │ While major is 0, a breaking change bumps      │
    │                     │ MINOR and everything else bumps PATCH.  A      │
    │                     │ ``feat`` alone does not bump MINOR on 0.x.     │
    └─────────────────────┴────────────────────────────────────────────────┘

    Increment table::

        prior       breaking    minor type    other
        ─────────   ─────────   ──────────    ─────
        none        0.0.1       0.0.1         0.0.1
        1.4.2       2.0.0       1.5.0         1.4.3
        0.3.0       0.4.0       0.3.1         0.3.1

Pre-release and build metadata on the prior version never survive into
the next version (``1.2.0-rc.1`` → ``1.2.1``).

Usage::

    from commitkit.versioning import derive_from_history

    next_version, prior = derive_from_history(history, tags, registry)
"""

from __future__ import annotations

import enum
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field

import semver

from commitkit._types import CommitRecord, TagRecord
from commitkit.commit_parsing import parse_message
from commitkit.errors import E, ConfigError, DeriveError, ParseError
from commitkit.logging import get_logger
from commitkit.registry import CommitTypeRegistry
from commitkit.tags import DEFAULT_TAG_PREFIX, SemverTag, latest_semver_tag

logger = get_logger(__name__)

__all__ = [
    'INITIAL_VERSION',
    'BumpType',
    'Classification',
    'classify',
    'commits_since_tag',
    'derive_from_history',
    'derive_next_version',
    'derive_version_bump',
    'expand_bump_commands',
    'increment_version',
]

# Version proposed for a repository without any version tag.
INITIAL_VERSION = semver.Version(0, 0, 1)


class BumpType(enum.Enum):
    """Which part of the version was incremented."""

    MAJOR = 'major'
    MINOR = 'minor'
    PATCH = 'patch'
    INITIAL = 'initial'


@dataclass(frozen=True)
class Classification:
    """Summary of the commits since the last release.

    Attributes:
        has_major: At least one parsed commit is breaking.
        has_minor: At least one parsed commit has a minor-triggering type.
        conventional: Ids of commits that parsed, in input order.
        unconventional: Ids of commits that did not parse, in input order.
    """

    has_major: bool = False
    has_minor: bool = False
    conventional: tuple[str, ...] = field(default_factory=tuple)
    unconventional: tuple[str, ...] = field(default_factory=tuple)


def classify(commits: Sequence[CommitRecord], registry: CommitTypeRegistry) -> Classification:
    """Parse every commit and compute the bump flags.

    Unparseable commits are logged as ``unconventional_commit`` and
    excluded from both flags.
    """
    has_major = False
    has_minor = False
    conventional: list[str] = []
    unconventional: list[str] = []
    for commit in commits:
        try:
            msg = parse_message(commit.message, registry.valid_types)
        except ParseError as exc:
            logger.warning(
                'unconventional_commit',
                commit=commit.short_id,
                subject=commit.first_line,
                error=exc.message,
            )
            unconventional.append(commit.id)
            continue
        conventional.append(commit.id)
        if msg.is_breaking:
            has_major = True
        if registry.triggers_minor(msg.type):
            has_minor = True
    return Classification(
        has_major=has_major,
        has_minor=has_minor,
        conventional=tuple(conventional),
        unconventional=tuple(unconventional),
    )


def increment_version(
    prior: semver.Version | None,
    classification: Classification,
) -> tuple[semver.Version, BumpType]:
    """Apply the increment policy to ``prior``.

    Args:
        prior: The current released version, or ``None`` if nothing has
            been released yet.
        classification: Flags from :func:`classify`.

    Returns:
        ``(next_version, bump)``; ``next_version`` never carries
        pre-release or build metadata.
    """
    if prior is None:
        return INITIAL_VERSION, BumpType.INITIAL

    if prior.major > 0:
        if classification.has_major:
            return prior.bump_major(), BumpType.MAJOR
        if classification.has_minor:
            return prior.bump_minor(), BumpType.MINOR
        return prior.bump_patch(), BumpType.PATCH

    # 0.x: breaking changes bump minor, everything else bumps patch.
    if classification.has_major:
        return prior.bump_minor(), BumpType.MINOR
    return prior.bump_patch(), BumpType.PATCH


def derive_version_bump(
    prior: semver.Version | None,
    commits_since_tag: Sequence[CommitRecord],
    registry: CommitTypeRegistry,
) -> tuple[semver.Version, BumpType]:
    """Like :func:`derive_next_version`, returning the applied bump instead of ``prior``.

    Raises:
        DeriveError: If ``commits_since_tag`` is empty.
    """
    if not commits_since_tag:
        raise DeriveError(
            code=E.NO_COMMITS,
            message='Cannot bump the version without new commits',
            hint='Commit something after the last release tag first.',
        )

    classification = classify(commits_since_tag, registry)
    next_version, bump = increment_version(prior, classification)
    logger.info(
        'version_derived',
        prior=str(prior) if prior is not None else None,
        next=str(next_version),
        bump=bump.value,
        commits=len(commits_since_tag),
        unconventional=len(classification.unconventional),
    )
    return next_version, bump


def derive_next_version(
    prior: semver.Version | None,
    commits_since_tag: Sequence[CommitRecord],
    registry: CommitTypeRegistry,
) -> tuple[semver.Version, semver.Version | None]:
    """Compute the next version from the commits since the last release.

    Args:
        prior: The current released version, or ``None``.
        commits_since_tag: Commits after the release tag, any order.
        registry: Commit type registry used for parsing and minor types.

    Returns:
        ``(next_version, prior)``.

    Raises:
        DeriveError: If ``commits_since_tag`` is empty.
    """
    next_version, _ = derive_version_bump(prior, commits_since_tag, registry)
    return next_version, prior


def commits_since_tag(history: Sequence[CommitRecord], tag: SemverTag | TagRecord | None) -> list[CommitRecord]:
    """Slice a newest-first ``history`` down to the commits after ``tag``.

    The tagged commit itself is excluded.  When ``tag`` is ``None`` the
    whole history is returned.  When the tagged commit is not part of
    ``history`` (shallow clone, tag on another branch) the whole history
    is returned and a warning is logged.
    """
    if tag is None:
        return list(history)
    for index, commit in enumerate(history):
        if commit.id == tag.commit_hash:
            return list(history[:index])
    logger.warning(
        'tag_commit_not_in_history',
        tag=tag.name,
        commit=tag.commit_hash[:7],
        hint='Using the whole history; fetch more history or check the tag.',
    )
    return list(history)


def derive_from_history(
    history: Sequence[CommitRecord],
    tags: Sequence[TagRecord],
    registry: CommitTypeRegistry,
    *,
    tag_prefix: str = DEFAULT_TAG_PREFIX,
) -> tuple[semver.Version, semver.Version | None]:
    """Pick the latest version tag, slice the history and derive.

    Only tags named ``<tag_prefix><version>`` (or a bare version) count.

    Raises:
        DeriveError: If no commit follows the latest version tag.
    """
    latest = latest_semver_tag(tags, tag_prefix=tag_prefix)
    prior = latest.version if latest is not None else None
    return derive_next_version(prior, commits_since_tag(history, latest), registry)


def expand_bump_commands(
    commands: Sequence[str],
    version: semver.Version | str,
    prior: semver.Version | str | None = None,
) -> list[str]:
    """Substitute version placeholders in release bump commands.

    Supported placeholders are ``{version}`` and ``{prev_version}`` (empty
    for a first release).  Literal braces are written ``{{`` and ``}}``.

    Raises:
        ConfigError: If a command uses an unknown placeholder or has
            unbalanced braces.
    """
    values: Mapping[str, str] = {
        'version': str(version),
        'prev_version': str(prior) if prior is not None else '',
    }
    expanded: list[str] = []
    for command in commands:
        try:
            expanded.append(command.format_map(values))
        except (KeyError, IndexError, ValueError) as exc:
            raise ConfigError(
                code=E.CONFIG_INVALID,
                message=f'Invalid bump command {command!r}: {exc}',
                hint='Only {version} and {prev_version} are substituted; write literal braces as {{ and }}.',
            ) from exc
    return expanded
