# Copyright 2026 TIER IV, inc.
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

"""Structural locations inside a YAML document.

A :class:`Path` is an immutable sequence of segments, each either a field
name (``str``) or a sequence index (``int``). It renders as the dotted /
bracketed form used by every violation, e.g.
``components[1].layout.children[2].name``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, Iterator, Tuple, Union

Segment = Union[str, int]

_TOKEN_RE = re.compile(r"([^.\[\]]+)|\[(\d+)\]|(\.)")


def _check_segment(segment: Segment) -> Segment:
    # bool is an int subclass; YAML keys like `yes:` must stay field names.
    if isinstance(segment, bool):
        return str(segment).lower()
    if isinstance(segment, (str, int)):
        return segment
    return str(segment)


@dataclass(frozen=True)
class Path:
    """Persistent path value; every operation returns a new instance."""

    segments: Tuple[Segment, ...] = ()

    @classmethod
    def root(cls) -> "Path":
        return cls()

    @classmethod
    def of(cls, *segments: Segment) -> "Path":
        return cls(tuple(_check_segment(s) for s in segments))

    @classmethod
    def parse(cls, text: str) -> "Path":
        """Parse a rendered path back into segments.

        Field names containing ``.``, ``[`` or ``]`` cannot round-trip.
        """
        segments = []
        for field_name, index, _dot in _TOKEN_RE.findall(text or ""):
            if field_name:
                segments.append(field_name)
            elif index:
                segments.append(int(index))
        return cls(tuple(segments))

    def append(self, segment: Segment) -> "Path":
        return Path(self.segments + (_check_segment(segment),))

    def extend(self, segments: Iterable[Segment]) -> "Path":
        return Path(self.segments + tuple(_check_segment(s) for s in segments))

    def __truediv__(self, segment: Segment) -> "Path":
        return self.append(segment)

    def __iter__(self) -> Iterator[Segment]:
        return iter(self.segments)

    def __len__(self) -> int:
        return len(self.segments)

    @property
    def is_root(self) -> bool:
        return not self.segments

    def render(self) -> str:
        parts = []
        for segment in self.segments:
            if isinstance(segment, int):
                parts.append(f"[{segment}]")
            elif parts:
                parts.append(f".{segment}")
            else:
                parts.append(segment)
        return "".join(parts)

    def __str__(self) -> str:
        return self.render()
