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

"""Tests for commitkit.lint and commitkit.hooks modules."""

from __future__ import annotations

import pytest

from commitkit.errors import E, CommitKitError
from commitkit.hooks import SUPPORTED_HOOKS, hook_scripts
from commitkit.lint import lint_message, lint_messages, strip_comments
from commitkit.registry import DEFAULT_REGISTRY


class TestLintMessage:
    """Tests for lint_message()."""

    @pytest.mark.parametrize(
        'raw',
        [
            'fix: description',
            'fix(scope): description',
            'fix(): description',
            'fix!: description',
            'feat(api)!: add\n\nbody\n\nBREAKING CHANGE: gone\nCloses #1',
        ],
    )
    def test_valid(self, raw: str) -> None:
        """Conventional messages pass."""
        result = lint_message(raw, DEFAULT_REGISTRY)
        assert result.valid
        assert result.message is not None
        assert result.error == ''

    def test_invalid_prefix(self) -> None:
        """Text between scope and colon fails."""
        result = lint_message('fix(myscope)err_here: description', DEFAULT_REGISTRY)
        assert not result.valid
        assert result.code == E.INVALID_PREFIX
        assert result.error.startswith('[CK-PARSE-INVALID-PREFIX]')
        assert result.line == 0

    def test_unknown_type_hint(self) -> None:
        """The hint lists the valid types."""
        result = lint_message('feature: add', DEFAULT_REGISTRY)
        assert result.code == E.UNKNOWN_TYPE
        assert 'chore' in result.hint

    def test_comments_rejected_by_default(self) -> None:
        """A comment line after the subject breaks the separator rule."""
        result = lint_message('fix: s\n# Please enter the commit message', DEFAULT_REGISTRY)
        assert result.code == E.MISSING_BODY_SEPARATOR

    def test_ignore_comments(self) -> None:
        """Comment lines can be dropped first."""
        raw = 'fix: s\n\nbody\n# Please enter the commit message\n# Lines starting with # are ignored'
        result = lint_message(raw, DEFAULT_REGISTRY, ignore_comments=True)
        assert result.valid
        assert result.message is not None
        assert result.message.body == 'body'

    def test_strip_comments(self) -> None:
        """Only lines starting with # are removed."""
        assert strip_comments('a\n# b\nc # d') == 'a\nc # d'


class TestLintMessages:
    """Tests for lint_messages()."""

    def test_one_result_per_message(self) -> None:
        """Failures do not stop the batch."""
        results = lint_messages(['fix: a', 'nope', 'feat: b'], DEFAULT_REGISTRY)
        assert [r.valid for r in results] == [True, False, True]

    def test_empty_batch(self) -> None:
        """No messages, no results."""
        assert lint_messages([], DEFAULT_REGISTRY) == []


class TestHookScripts:
    """Tests for hook_scripts()."""

    def test_script_layout(self) -> None:
        """Shebang, blank line, then one command per line."""
        scripts = hook_scripts({'pre-push': ['cargo test', 'cargo fmt --check']})
        assert scripts == {'pre-push': '#!/bin/sh\n\ncargo test\ncargo fmt --check\n'}

    def test_sorted_by_name(self) -> None:
        """Scripts are ordered by hook name."""
        scripts = hook_scripts({'pre-push': ['b'], 'commit-msg': ['a']})
        assert list(scripts) == ['commit-msg', 'pre-push']

    def test_empty_hook(self) -> None:
        """A hook without commands is just the shebang."""
        assert hook_scripts({'pre-commit': []}) == {'pre-commit': '#!/bin/sh\n\n'}

    def test_unknown_hook(self) -> None:
        """Unknown hook names are rejected."""
        with pytest.raises(CommitKitError) as exc_info:
            hook_scripts({'pre-comit': ['x']})
        assert exc_info.value.code == E.HOOK_INVALID

    def test_supported_hooks(self) -> None:
        """The common client-side hooks are supported."""
        assert {'pre-commit', 'commit-msg', 'pre-push'} <= SUPPORTED_HOOKS
