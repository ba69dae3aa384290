from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional

from ..models.path import Path
from ..models.violation import ROOT_LOCATION, Violation


@dataclass(frozen=True)
class SourceLocation:
    location: Optional[str] = None
    line: Optional[int] = None  # 1-based
    column: Optional[int] = None  # 1-based


def lookup_source(source_map: Optional[Dict[str, Dict[str, int]]], location: Optional[str]) -> SourceLocation:
    """Find the YAML position of ``location``.

    Missing properties have no node of their own, so the closest enclosing
    node that does exist is reported instead.
    """
    if not source_map or location is None:
        return SourceLocation(location=location)

    path = Path.parse("" if location == ROOT_LOCATION else location)
    segments = list(path.segments)
    while True:
        entry = source_map.get(Path(tuple(segments)).render())
        if entry:
            return SourceLocation(
                location=location,
                line=entry.get("line"),
                column=entry.get("column"),
            )
        if not segments:
            return SourceLocation(location=location)
        segments.pop()


def attach_source(
    violations: List[Violation],
    source_map: Optional[Dict[str, Dict[str, int]]],
) -> List[Violation]:
    if not source_map:
        return list(violations)
    decorated = []
    for violation in violations:
        loc = lookup_source(source_map, violation.location)
        if loc.line is None:
            decorated.append(violation)
        else:
            decorated.append(violation.with_source(loc.line, loc.column))
    return decorated

