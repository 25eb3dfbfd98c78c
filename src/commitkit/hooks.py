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

"""Git hook script generation.

Each configured hook becomes a POSIX shell script running its commands
in order::

    [hooks]
    commit-msg = ["commitkit-lint --file \\"$1\\""]

    →  commit-msg:

       #!/bin/sh

       commitkit-lint --file "$1"

Installing the scripts (writing files, ``chmod +x``, pointing
``core.hooksPath`` at them) is left to the host.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from commitkit.errors import E, CommitKitError

__all__ = [
    'SUPPORTED_HOOKS',
    'hook_scripts',
]

SUPPORTED_HOOKS: frozenset[str] = frozenset({
    'pre-commit',
    'prepare-commit-msg',
    'commit-msg',
    'post-commit',
    'pre-push',
})

_SHEBANG = '#!/bin/sh'


def hook_scripts(hooks: Mapping[str, Sequence[str]]) -> dict[str, str]:
    """Build one shell script per hook.

    Args:
        hooks: Hook name to the commands it runs, in order.

    Returns:
        Hook name to script text, sorted by hook name.

    Raises:
        CommitKitError: If a hook name is not a supported git hook.
    """
    scripts: dict[str, str] = {}
    for name in sorted(hooks):
        if name not in SUPPORTED_HOOKS:
            raise CommitKitError(
                code=E.HOOK_INVALID,
                message=f'Unsupported git hook {name!r}',
                hint=f'Supported hooks: {", ".join(sorted(SUPPORTED_HOOKS))}',
            )
        lines = [_SHEBANG, '', *hooks[name]]
        scripts[name] = '\n'.join(lines) + '\n'
    return scripts
