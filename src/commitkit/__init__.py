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

"""Conventional Commit parsing, semantic versioning and changelogs.

commitkit is a pure library: the host supplies the commit history, the
tags and the configuration, and gets back parsed messages, the next
version and the grouped changelog.  It never runs ``git`` itself.

Modules:

- :mod:`commitkit.commit_parsing`: strict parser and canonical formatter.
- :mod:`commitkit.versioning`: next-version derivation.
- :mod:`commitkit.changelog`: tag-partitioned release list.
- :mod:`commitkit.render`: Markdown rendering (Jinja2).
- :mod:`commitkit.release`: release plan combining all of the above.
- :mod:`commitkit.config`: ``.commitkit/config.toml`` loading and writing.
"""

__version__ = '0.1.0'
