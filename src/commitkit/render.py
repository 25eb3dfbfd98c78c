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

"""Markdown rendering of changelog releases with Jinja2.

The built-in templates follow the `Keep a Changelog
<https://keepachangelog.com/en/1.0.0/>`_ layout::

    # Changelog

    All notable changes to this project will be documented in this file.

    ## [1.1.0] - 2024-03-01

    https://github.com/acme/app/compare/v1.0.0...v1.1.0

    ### New features

    - **api:** Add endpoint [#a1b2c3d](https://github.com/acme/app/commit/a1b2c3d...)

Custom templates receive ``releases`` (newest first) and ``latest`` (the
first release or ``None``), plus the ``entry_line`` filter used by the
built-in templates.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from pathlib import Path

from jinja2 import DictLoader, Environment, FileSystemLoader, select_autoescape

from commitkit.changelog import ChangelogEntry, Release
from commitkit.errors import E, CommitKitError
from commitkit.logging import get_logger

logger = get_logger(__name__)

__all__ = [
    'entry_line',
    'render_changelog',
    'render_changelog_template',
    'render_release_notes',
]

_GROUPS_TEMPLATE = """\
{% for group in release.groups %}

### {{ group.title }}

{% for entry in group.commits %}
{{ entry | entry_line }}
{% endfor %}
{% endfor %}
"""

_CHANGELOG_TEMPLATE = """\
# Changelog

All notable changes to this project will be documented in this file.
{% for release in releases %}

## [{{ release.version }}]{{ (' - ' ~ release.date) if release.date else '' }}
{% if release.history_url %}

{{ release.history_url }}
{% endif %}
{% include 'groups.md' %}
{% endfor %}
"""

_RELEASE_NOTES_TEMPLATE = """\
Release notes for `{{ title }}`
{% include 'groups.md' %}
"""


def entry_line(entry: ChangelogEntry) -> str:
    """Render one entry as a Markdown bullet.

    Format: ``- **scope:** Subject [#short](commit_url) (closes #1, #2)``
    """
    parts: list[str] = ['- ']
    if entry.scope:
        parts.append(f'**{entry.scope}:** ')
    parts.append(entry.subject)
    if entry.commit_url:
        parts.append(f' [#{entry.short_id}]({entry.commit_url})')
    if entry.closed_issues:
        parts.append(f' (closes {", ".join(f"#{n}" for n in entry.closed_issues)})')
    return ''.join(parts)


def _environment(
    loader: DictLoader | FileSystemLoader,
    *,
    autoescape: bool | Callable[[str | None], bool] = False,
) -> Environment:
    env = Environment(
        loader=loader,
        autoescape=autoescape,
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.filters['entry_line'] = entry_line
    return env


_BUILTIN_ENV = _environment(
    DictLoader({
        'groups.md': _GROUPS_TEMPLATE,
        'changelog.md': _CHANGELOG_TEMPLATE,
        'release_notes.md': _RELEASE_NOTES_TEMPLATE,
    })
)


def render_changelog(releases: Sequence[Release]) -> str:
    """Render the full changelog document.

    Args:
        releases: Releases, newest first (as built by
            :func:`~commitkit.changelog.build_changelog`).

    Returns:
        The Markdown document, ending with a newline.
    """
    return _BUILTIN_ENV.get_template('changelog.md').render(releases=releases)


def render_release_notes(release: Release, *, title: str = '') -> str:
    """Render the notes of a single release.

    Args:
        release: The release to describe.
        title: Heading label; defaults to the tag name, or the version
            for the pending release.
    """
    heading = title or release.tag or release.version
    return _BUILTIN_ENV.get_template('release_notes.md').render(release=release, title=heading)


def render_changelog_template(releases: Sequence[Release], template_path: Path) -> str:
    """Render releases with a user-supplied Jinja2 template.

    Autoescaping is enabled for ``.html`` and ``.xml`` templates only.

    Raises:
        CommitKitError: If the template file does not exist.
    """
    if not template_path.is_file():
        raise CommitKitError(
            code=E.TEMPLATE_NOT_FOUND,
            message=f'Changelog template not found: {template_path}',
            hint='Check the template path, relative paths resolve against the current directory.',
        )

    env = _environment(
        FileSystemLoader(str(template_path.parent)),
        autoescape=select_autoescape(['html', 'xml']),
    )
    logger.debug('changelog_template_loaded', path=str(template_path))
    return env.get_template(template_path.name).render(
        releases=releases,
        latest=releases[0] if releases else None,
    )
