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

"""Tests for commitkit.release module."""

from __future__ import annotations

import pytest
import semver
from conftest import make_commit, make_tag

from commitkit._types import CommitRecord
from commitkit.config import ChangelogConfig, CommitKitConfig, ReleaseConfig
from commitkit.errors import E, DeriveError
from commitkit.release import plan_release
from commitkit.versioning import BumpType

URL = 'https://github.com/acme/app'

CONFIG = CommitKitConfig(
    changelog=ChangelogConfig(repository_url=URL),
    release=ReleaseConfig(bump_commands=('bump {prev_version} {version}',)),
)


def _history() -> list[CommitRecord]:
    return [
        make_commit('c3', 'feat: add export', day=3),
        make_commit('c2', 'fix: handle empty file', day=2),
        make_commit('c1', 'feat: initial', day=1),
    ]


class TestPlanRelease:
    """Tests for plan_release()."""

    def test_minor_release(self) -> None:
        """A feat after v1.0.0 plans v1.1.0."""
        history = _history()
        plan = plan_release(history, [make_tag('v1.0.0', history[2])], CONFIG, date='2024-03-01')
        assert plan.next_version == semver.Version(1, 1, 0)
        assert plan.prior_version == semver.Version(1, 0, 0)
        assert plan.bump == BumpType.MINOR
        assert plan.tag_name == 'v1.1.0'
        assert plan.tag_message == 'Release 1.1.0'
        assert plan.commit_message == 'chore(release): created release 1.1.0'
        assert plan.bump_commands == ('bump 1.0.0 1.1.0',)

    def test_pending_release_named_after_next_version(self) -> None:
        """The changelog lists the new version, linked up to the new tag."""
        history = _history()
        plan = plan_release(history, [make_tag('v1.0.0', history[2])], CONFIG, date='2024-03-01')
        assert [r.version for r in plan.releases] == ['1.1.0', '1.0.0']
        assert plan.releases[0].date == '2024-03-01'
        assert plan.releases[0].history_url == f'{URL}/compare/v1.0.0...v1.1.0'
        assert '\n## [1.1.0] - 2024-03-01\n' in plan.changelog

    def test_release_notes(self) -> None:
        """Notes cover only the new release."""
        history = _history()
        plan = plan_release(history, [make_tag('v1.0.0', history[2])], CONFIG)
        assert plan.release_notes.startswith('Release notes for `v1.1.0`\n')
        assert '### New features' in plan.release_notes
        assert '- Add export' in plan.release_notes
        assert 'Initial' not in plan.release_notes

    def test_first_release(self) -> None:
        """No version tag plans 0.0.1."""
        plan = plan_release(_history(), [], CONFIG)
        assert plan.next_version == semver.Version(0, 0, 1)
        assert plan.prior_version is None
        assert plan.bump == BumpType.INITIAL
        assert plan.bump_commands == ('bump  0.0.1',)

    def test_tag_prefix(self) -> None:
        """The tag name uses the configured prefix."""
        config = CommitKitConfig(release=ReleaseConfig(tag_prefix='release-'))
        plan = plan_release(_history(), [], config)
        assert plan.tag_name == 'release-0.0.1'

    def test_custom_prefix_tag_read_back(self) -> None:
        """A tag created with a custom prefix is the prior version of the next plan."""
        config = CommitKitConfig(
            changelog=ChangelogConfig(repository_url=URL),
            release=ReleaseConfig(tag_prefix='release-'),
        )
        c1 = make_commit('c1', 'feat: initial', day=1)
        first = plan_release([c1], [], config)
        assert first.tag_name == 'release-0.0.1'

        history = [make_commit('c2', 'feat: add export', day=2), c1]
        second = plan_release(history, [make_tag(first.tag_name, c1)], config)
        assert second.prior_version == semver.Version(0, 0, 1)
        assert second.next_version == semver.Version(0, 0, 2)
        assert second.tag_name == 'release-0.0.2'
        assert [r.version for r in second.releases] == ['0.0.2', '0.0.1']
        assert second.releases[0].history_url == f'{URL}/compare/release-0.0.1...release-0.0.2'

    def test_nothing_to_release(self) -> None:
        """A tag on the newest commit leaves nothing to release."""
        history = _history()
        with pytest.raises(DeriveError) as exc_info:
            plan_release(history, [make_tag('v1.0.0', history[0])], CONFIG)
        assert exc_info.value.code == E.NO_COMMITS

    def test_only_hidden_commits(self) -> None:
        """Commits hidden from the changelog still release, with empty notes."""
        history = [make_commit('c2', 'chore: tidy'), make_commit('c1', 'feat: initial')]
        config = CommitKitConfig(changelog=ChangelogConfig(types=('feat', 'fix')))
        plan = plan_release(history, [make_tag('v1.0.0', history[1])], config)
        assert plan.next_version == semver.Version(1, 0, 1)
        assert plan.release_notes == 'Release notes for `v1.0.1`\n'
        assert [r.version for r in plan.releases] == ['1.0.0']
