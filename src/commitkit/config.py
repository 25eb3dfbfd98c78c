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

"""Repository configuration stored in ``.commitkit/config.toml``.

Reading uses ``tomllib`` (``tomli`` before Python 3.11); the default file
is written with ``tomlkit`` so users keep their comments when they edit
it later.

Key Concepts (ELI5)::

    ┌─────────────────────┬────────────────────────────────────────────────┐
    │ Concept             │ Plain-English                                  │
    ├─────────────────────┼────────────────────────────────────────────────┤
    │ [commits]           │ Allowed commit types, in changelog order, and  │
    │                     │ which of them bump MINOR.                      │
    ├─────────────────────┼────────────────────────────────────────────────┤
    │ [changelog]         │ Which types are listed, and the repository URL │
    │                     │ used for commit and compare links.             │
    ├─────────────────────┼────────────────────────────────────────────────┤
    │ [release]           │ Tag prefix and commands run on a version bump  │
    │                     │ (``{version}`` / ``{prev_version}`` expanded). │
    ├─────────────────────┼────────────────────────────────────────────────┤
    │ [hooks]             │ Git hook name to the commands it runs.         │
    └─────────────────────┴────────────────────────────────────────────────┘

Example::

    [commits]
    minor_types = ["feat"]

    [commits.types.feat]
    description = "A new feature"
    changelog_title = "New features"

    [commits.types.fix]
    description = "Bug fixes"
    changelog_title = "Bug fixes"

    [changelog]
    types = ["feat", "fix"]
    repository_url = "https://github.com/acme/app"

    [release]
    tag_prefix = "v"
    bump_commands = ["sed -i 's/^version = .*/version = \\"{version}\\"/' pyproject.toml"]

    [hooks]
    commit-msg = ["commitkit-lint --file \\"$1\\""]
"""

from __future__ import annotations

import sys
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import tomlkit

from commitkit.errors import E, ConfigError
from commitkit.logging import get_logger
from commitkit.registry import DEFAULT_REGISTRY, CommitType, CommitTypeRegistry
from commitkit.tags import DEFAULT_TAG_PREFIX

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

logger = get_logger(__name__)

__all__ = [
    'CONFIG_DIR',
    'CONFIG_FILE',
    'ChangelogConfig',
    'CommitKitConfig',
    'ReleaseConfig',
    'config_path',
    'default_config_document',
    'hooks_dir',
    'is_initialized',
    'load_config',
    'parse_config',
    'write_default_config',
]

CONFIG_DIR = '.commitkit'
CONFIG_FILE = 'config.toml'

_SECTIONS: frozenset[str] = frozenset({'commits', 'changelog', 'release', 'hooks'})


@dataclass(frozen=True)
class ChangelogConfig:
    """The ``[changelog]`` section.

    Attributes:
        types: Types listed in the changelog; ``None`` lists every type.
        repository_url: Base URL for commit and compare links.
    """

    types: tuple[str, ...] | None = None
    repository_url: str = ''


@dataclass(frozen=True)
class ReleaseConfig:
    """The ``[release]`` section.

    Attributes:
        tag_prefix: Prepended to the version to form the tag name.
        bump_commands: Shell commands run by the host after a bump.
    """

    tag_prefix: str = DEFAULT_TAG_PREFIX
    bump_commands: tuple[str, ...] = ()


@dataclass(frozen=True)
class CommitKitConfig:
    """Complete repository configuration.

    Attributes:
        types: Commit types in declaration order.
        minor_types: Keys that trigger a minor bump.
        changelog: The ``[changelog]`` section.
        release: The ``[release]`` section.
        hooks: Git hook name to commands.
    """

    types: tuple[CommitType, ...] = DEFAULT_REGISTRY.types
    minor_types: tuple[str, ...] = ('feat',)
    changelog: ChangelogConfig = field(default_factory=ChangelogConfig)
    release: ReleaseConfig = field(default_factory=ReleaseConfig)
    hooks: Mapping[str, tuple[str, ...]] = field(default_factory=dict)

    @property
    def registry(self) -> CommitTypeRegistry:
        """Registry with ordinals assigned from declaration order."""
        return CommitTypeRegistry.from_types(
            self.types,
            minor_types=self.minor_types,
            changelog_types=self.changelog.types,
        )


def config_path(repo_root: Path) -> Path:
    """Path of the config file for ``repo_root``."""
    return repo_root / CONFIG_DIR / CONFIG_FILE


def hooks_dir(repo_root: Path) -> Path:
    """Directory the host installs generated hook scripts into."""
    return repo_root / CONFIG_DIR / 'hooks'


def is_initialized(repo_root: Path) -> bool:
    """Whether ``repo_root`` already has a config file."""
    return config_path(repo_root).is_file()


# ── Validation helpers ───────────────────────────────────────────────


def _invalid(message: str, hint: str = '') -> ConfigError:
    return ConfigError(code=E.CONFIG_INVALID, message=message, hint=hint)


def _table(data: Mapping[str, Any], key: str, where: str) -> Mapping[str, Any]:
    value = data.get(key, {})
    if not isinstance(value, Mapping):
        raise _invalid(f'{where}.{key} must be a table, got {type(value).__name__}')
    return value


def _string(data: Mapping[str, Any], key: str, where: str, default: str) -> str:
    value = data.get(key, default)
    if not isinstance(value, str):
        raise _invalid(f'{where}.{key} must be a string, got {type(value).__name__}')
    return value


def _string_list(data: Mapping[str, Any], key: str, where: str) -> tuple[str, ...] | None:
    if key not in data:
        return None
    value = data[key]
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise _invalid(f'{where}.{key} must be a list of strings')
    return tuple(value)


def _parse_types(table: Mapping[str, Any]) -> tuple[CommitType, ...]:
    types: list[CommitType] = []
    for ordinal, (key, entry) in enumerate(table.items()):
        where = f'commits.types.{key}'
        if not isinstance(entry, Mapping):
            raise _invalid(f'{where} must be a table', hint='Use [commits.types.<key>] with a description.')
        description = _string(entry, 'description', where, '')
        title = _string(entry, 'changelog_title', where, description or key)
        types.append(CommitType(key=key, description=description, changelog_title=title, ordinal=ordinal))
    return tuple(types)


def _default_minor_types(types: tuple[CommitType, ...]) -> tuple[str, ...]:
    """``feat`` bumps MINOR when it is declared; custom type sets without it get no minor type."""
    keys = {t.key for t in types}
    return tuple(key for key in sorted(DEFAULT_REGISTRY.minor_types) if key in keys)


def parse_config(data: Mapping[str, Any]) -> CommitKitConfig:
    """Build a :class:`CommitKitConfig` from parsed TOML data.

    Missing sections and keys fall back to defaults.  A ``[commits.types]``
    table replaces the default type set entirely.

    Raises:
        ConfigError: On unknown sections, wrong value types, or type keys
            referenced but not declared.
    """
    unknown = sorted(set(data) - _SECTIONS)
    if unknown:
        raise _invalid(
            f'Unknown config section(s): {", ".join(unknown)}',
            hint=f'Valid sections: {", ".join(sorted(_SECTIONS))}',
        )

    commits = _table(data, 'commits', 'config')
    types = _parse_types(_table(commits, 'types', 'commits')) if 'types' in commits else DEFAULT_REGISTRY.types
    minor_types = _string_list(commits, 'minor_types', 'commits')
    if minor_types is None:
        minor_types = _default_minor_types(types)

    changelog = _table(data, 'changelog', 'config')
    release = _table(data, 'release', 'config')

    hooks_table = _table(data, 'hooks', 'config')
    hooks = {name: _string_list(hooks_table, name, 'hooks') or () for name in hooks_table}

    config = CommitKitConfig(
        types=types,
        minor_types=minor_types,
        changelog=ChangelogConfig(
            types=_string_list(changelog, 'types', 'changelog'),
            repository_url=_string(changelog, 'repository_url', 'changelog', ''),
        ),
        release=ReleaseConfig(
            tag_prefix=_string(release, 'tag_prefix', 'release', DEFAULT_TAG_PREFIX),
            bump_commands=_string_list(release, 'bump_commands', 'release') or (),
        ),
        hooks=hooks,
    )
    # Surface registry errors (unknown minor/changelog types) at load time.
    _ = config.registry
    return config


def load_config(repo_root: Path) -> CommitKitConfig:
    """Read and validate ``<repo_root>/.commitkit/config.toml``.

    Raises:
        ConfigError: If the file is missing, is not valid TOML, or does
            not describe a valid configuration.
    """
    path = config_path(repo_root)
    if not path.is_file():
        raise ConfigError(
            code=E.CONFIG_NOT_FOUND,
            message=f'Config file not found: {path}',
            hint='Create it with write_default_config().',
        )
    try:
        data = tomllib.loads(path.read_text(encoding='utf-8'))
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(
            code=E.CONFIG_INVALID,
            message=f'Cannot parse {path}: {exc}',
        ) from exc

    config = parse_config(data)
    logger.debug('config_loaded', path=str(path), types=len(config.types))
    return config


def default_config_document() -> tomlkit.TOMLDocument:
    """Return the default configuration as a commented TOML document."""
    doc = tomlkit.document()
    doc.add(tomlkit.comment('commitkit configuration'))
    doc.add(tomlkit.nl())

    commits = tomlkit.table()
    commits.add(tomlkit.comment('Types that bump MINOR on 1.x+ (0.x only bumps MINOR for breaking changes).'))
    commits.add('minor_types', sorted(DEFAULT_REGISTRY.minor_types))
    types = tomlkit.table()
    for commit_type in DEFAULT_REGISTRY.types:
        entry = tomlkit.table()
        entry.add('description', commit_type.description)
        entry.add('changelog_title', commit_type.changelog_title)
        types.add(commit_type.key, entry)
    commits.add('types', types)
    doc.add('commits', commits)

    changelog = tomlkit.table()
    changelog.add(tomlkit.comment('Types listed in the changelog, others are still valid commits.'))
    changelog.add('types', list(DEFAULT_REGISTRY.keys))
    changelog.add('repository_url', '')
    doc.add('changelog', changelog)

    release = tomlkit.table()
    release.add('tag_prefix', DEFAULT_TAG_PREFIX)
    release.add(tomlkit.comment('Placeholders: {version}, {prev_version}.'))
    release.add('bump_commands', tomlkit.array())
    doc.add('release', release)

    doc.add('hooks', tomlkit.table())
    return doc


def write_default_config(repo_root: Path, *, force: bool = False, dry_run: bool = False) -> bool:
    """Write the default config file.

    Args:
        repo_root: Repository root.
        force: Overwrite an existing config file.
        dry_run: Report what would happen without writing.

    Returns:
        ``True`` if the file was written (or would be, with ``dry_run``).
    """
    path = config_path(repo_root)
    if path.exists() and not force:
        logger.info('config_exists', path=str(path), hint='Pass force=True to overwrite.')
        return False

    if dry_run:
        logger.info('config_write_skipped', path=str(path), reason='dry run')
        return True

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(tomlkit.dumps(default_config_document()), encoding='utf-8')
    logger.info('config_written', path=str(path))
    return True
