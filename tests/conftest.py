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

"""Shared builders for commit and tag records."""

from __future__ import annotations

from datetime import datetime, timezone

from commitkit._types import CommitRecord, TagRecord

_BASE = datetime(2024, 1, 1, tzinfo=timezone.utc)


def make_commit(sha: str, message: str, *, author: str = 'Jane Doe', day: int = 1) -> CommitRecord:
    """Build a commit whose id is ``sha`` padded to 40 hex-like characters."""
    return CommitRecord(
        id=sha.ljust(40, '0'),
        timestamp=_BASE.replace(day=day),
        author=author,
        message=message,
    )


def make_tag(name: str, commit: CommitRecord, *, date: datetime | None = None) -> TagRecord:
    """Build a tag pointing at ``commit``."""
    return TagRecord(name=name, commit_hash=commit.id, date=date or commit.timestamp)
