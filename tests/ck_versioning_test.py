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

"""Tests for commitkit.versioning module."""

from __future__ import annotations

import pytest
import semver
from conftest import make_commit, make_tag

from commitkit.errors import E, ConfigError, DeriveError
from commitkit.registry import DEFAULT_REGISTRY, CommitTypeRegistry
from commitkit.versioning import (
    INITIAL_VERSION,
    BumpType,
    classify,
    commits_since_tag,
    derive_from_history,
    derive_next_version,
    derive_version_bump,
    expand_bump_commands,
)

V = semver.Version.parse


def _next(prior: str | None, *messages: str) -> str:
    commits = [make_commit(f'c{i}', m) for i, m in enumerate(messages)]
    next_version, _ = derive_next_version(V(prior) if prior else None, commits, DEFAULT_REGISTRY)
    return str(next_version)


class TestDeriveNextVersion:
    """Tests for derive_next_version()."""

    @pytest.mark.parametrize(
        ('prior', 'messages', 'expected'),
        [
            ('1.4.2', ('feat!: drop v1 api',), '2.0.0'),
            ('1.4.2', ('fix: x\n\nBREAKING CHANGE: gone',), '2.0.0'),
            ('1.4.2', ('feat: add',), '1.5.0'),
            ('1.4.2', ('fix: patch', 'docs: readme'), '1.4.3'),
            ('1.4.2', ('feat: add', 'fix!: rename'), '2.0.0'),
            ('0.3.0', ('feat: add',), '0.3.1'),
            ('0.3.0', ('feat!: break',), '0.4.0'),
            ('0.3.0', ('fix: patch',), '0.3.1'),
            ('1.2.0-rc.1', ('fix: patch',), '1.2.1'),
            ('1.2.3+build.7', ('feat: add',), '1.3.0'),
        ],
    )
    def test_increment_table(self, prior: str, messages: tuple[str, ...], expected: str) -> None:
        """Breaking, minor and patch rules on 1.x and 0.x."""
        assert _next(prior, *messages) == expected

    def test_no_prior_is_initial(self) -> None:
        """The first release is always 0.0.1."""
        assert _next(None, 'feat!: everything') == '0.0.1'

    def test_returns_prior(self) -> None:
        """The prior version is passed through."""
        commits = [make_commit('a', 'fix: x')]
        assert derive_next_version(V('1.0.0'), commits, DEFAULT_REGISTRY) == (V('1.0.1'), V('1.0.0'))

    def test_unconventional_only_bumps_patch(self) -> None:
        """Unparseable commits still produce a patch release."""
        assert _next('1.0.0', 'wip', 'Merge branch main') == '1.0.1'

    def test_unconventional_breaking_text_ignored(self) -> None:
        """A commit that fails to parse never counts as breaking."""
        assert _next('1.0.0', 'Feat!: huge', 'fix: small') == '1.0.1'

    def test_no_commits(self) -> None:
        """An empty commit list is an error, even without a prior."""
        with pytest.raises(DeriveError) as exc_info:
            derive_next_version(None, [], DEFAULT_REGISTRY)
        assert exc_info.value.code == E.NO_COMMITS

    def test_custom_minor_types(self) -> None:
        """Minor types come from the registry."""
        registry = CommitTypeRegistry.from_types(
            [('feat', 'f', 'F'), ('perf', 'p', 'P')],
            minor_types=['feat', 'perf'],
        )
        next_version, _ = derive_next_version(V('2.0.0'), [make_commit('a', 'perf: faster')], registry)
        assert str(next_version) == '2.1.0'

    def test_result_is_never_prerelease(self) -> None:
        """Pre-release and build metadata are dropped."""
        next_version, _ = derive_next_version(
            V('3.0.0-beta.2+sha.1'),
            [make_commit('a', 'feat!: x')],
            DEFAULT_REGISTRY,
        )
        assert next_version.prerelease is None
        assert next_version.build is None


class TestDeriveVersionBump:
    """Tests for derive_version_bump()."""

    @pytest.mark.parametrize(
        ('prior', 'message', 'bump'),
        [
            (None, 'fix: x', BumpType.INITIAL),
            ('1.0.0', 'feat!: x', BumpType.MAJOR),
            ('1.0.0', 'feat: x', BumpType.MINOR),
            ('1.0.0', 'fix: x', BumpType.PATCH),
            ('0.1.0', 'fix!: x', BumpType.MINOR),
            ('0.1.0', 'feat: x', BumpType.PATCH),
        ],
    )
    def test_bump_type(self, prior: str | None, message: str, bump: BumpType) -> None:
        """The applied bump is reported."""
        _, actual = derive_version_bump(V(prior) if prior else None, [make_commit('a', message)], DEFAULT_REGISTRY)
        assert actual == bump

    def test_initial_version(self) -> None:
        """INITIAL_VERSION is 0.0.1."""
        assert str(INITIAL_VERSION) == '0.0.1'


class TestClassify:
    """Tests for classify()."""

    def test_partitions_commits(self) -> None:
        """Conventional and unconventional ids keep input order."""
        commits = [make_commit('a', 'feat: x'), make_commit('b', 'nope'), make_commit('c', 'fix!: y')]
        result = classify(commits, DEFAULT_REGISTRY)
        assert result.has_major
        assert result.has_minor
        assert result.conventional == (commits[0].id, commits[2].id)
        assert result.unconventional == (commits[1].id,)


class TestCommitsSinceTag:
    """Tests for commits_since_tag() and derive_from_history()."""

    def test_slices_before_tagged_commit(self) -> None:
        """Only commits newer than the tag are returned."""
        history = [make_commit('c3', 'feat: c'), make_commit('c2', 'fix: b'), make_commit('c1', 'feat: a')]
        tag = make_tag('v1.0.0', history[1])
        assert commits_since_tag(history, tag) == history[:1]

    def test_no_tag_returns_everything(self) -> None:
        """Without a tag the whole history is new."""
        history = [make_commit('c1', 'feat: a')]
        assert commits_since_tag(history, None) == history

    def test_tag_outside_history(self) -> None:
        """A tag on an unknown commit falls back to the whole history."""
        history = [make_commit('c2', 'fix: b'), make_commit('c1', 'feat: a')]
        stray = make_tag('v1.0.0', make_commit('ff', 'feat: elsewhere'))
        assert commits_since_tag(history, stray) == history

    def test_derive_from_history(self) -> None:
        """The highest version tag is the prior version."""
        history = [
            make_commit('c4', 'feat: new'),
            make_commit('c3', 'fix: backport'),
            make_commit('c2', 'feat!: big'),
            make_commit('c1', 'feat: a'),
        ]
        tags = [make_tag('v1.9.9', history[1]), make_tag('v2.0.0', history[2]), make_tag('nightly', history[0])]
        next_version, prior = derive_from_history(history, tags, DEFAULT_REGISTRY)
        assert prior == V('2.0.0')
        # c4 and c3 come after v2.0.0.
        assert next_version == V('2.1.0')

    def test_derive_from_history_tag_on_head(self) -> None:
        """Nothing after the latest tag raises NO_COMMITS."""
        history = [make_commit('c1', 'feat: a')]
        with pytest.raises(DeriveError):
            derive_from_history(history, [make_tag('v1.0.0', history[0])], DEFAULT_REGISTRY)

    def test_derive_from_history_custom_prefix(self) -> None:
        """Tags are read back with the configured prefix."""
        history = [make_commit('c2', 'fix: b'), make_commit('c1', 'feat: a')]
        tags = [make_tag('release-1.0.0', history[1])]
        next_version, prior = derive_from_history(history, tags, DEFAULT_REGISTRY, tag_prefix='release-')
        assert prior == V('1.0.0')
        assert next_version == V('1.0.1')


class TestExpandBumpCommands:
    """Tests for expand_bump_commands()."""

    def test_placeholders(self) -> None:
        """{version} and {prev_version} are substituted."""
        commands = ['bump --from {prev_version} --to {version}', 'echo done']
        assert expand_bump_commands(commands, V('1.1.0'), V('1.0.0')) == [
            'bump --from 1.0.0 --to 1.1.0',
            'echo done',
        ]

    def test_first_release_prev_version_empty(self) -> None:
        """No prior version expands to an empty string."""
        assert expand_bump_commands(['x {prev_version}|'], '0.0.1') == ['x |']

    def test_literal_braces(self) -> None:
        """Doubled braces are literal."""
        assert expand_bump_commands(["jq '{{v: \"{version}\"}}'"], '1.0.0') == ["jq '{v: \"1.0.0\"}'"]

    @pytest.mark.parametrize('command', ['echo {unknown}', 'echo {version', 'echo {0}'])
    def test_invalid(self, command: str) -> None:
        """Unknown placeholders and unbalanced braces are config errors."""
        with pytest.raises(ConfigError) as exc_info:
            expand_bump_commands([command], '1.0.0')
        assert exc_info.value.code == E.CONFIG_INVALID
