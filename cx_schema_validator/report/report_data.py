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

"""Aggregated statistics over a batch of validated files."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List

from ..validators import FileValidationResult


@dataclass
class ReportData:
    timestamp: str
    total_files: int
    passed_files: int
    failed_files: int
    total_errors: int
    total_warnings: int
    errors_by_kind: Dict[str, int] = field(default_factory=dict)
    errors_by_file: Dict[str, int] = field(default_factory=dict)
    files: List[FileValidationResult] = field(default_factory=list)

    @property
    def pass_rate(self) -> float:
        """Percentage of files without errors (0.0 for an empty batch)."""
        if self.total_files == 0:
            return 0.0
        return self.passed_files / self.total_files * 100

    @property
    def passed(self) -> List[FileValidationResult]:
        return [f for f in self.files if f.is_valid]

    @property
    def failed(self) -> List[FileValidationResult]:
        return [f for f in self.files if not f.is_valid]

    def sorted_errors_by_kind(self) -> List[tuple]:
        """``errors_by_kind`` items, most frequent first."""
        return sorted(self.errors_by_kind.items(), key=lambda item: item[1], reverse=True)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "timestamp": self.timestamp,
            "totalFiles": self.total_files,
            "passedFiles": self.passed_files,
            "failedFiles": self.failed_files,
            "totalErrors": self.total_errors,
            "totalWarnings": self.total_warnings,
            "errorsByKind": dict(self.errors_by_kind),
            "errorsByFile": dict(self.errors_by_file),
            "files": [
                {"file": f.file, "fileType": f.file_type, "result": f.result.to_dict()}
                for f in self.files
            ],
        }


def build_report_data(results: List[FileValidationResult]) -> ReportData:
    errors_by_kind: Dict[str, int] = {}
    errors_by_file: Dict[str, int] = {}
    total_errors = 0
    total_warnings = 0

    for file_result in results:
        error_count = len(file_result.result.errors)
        total_errors += error_count
        total_warnings += len(file_result.result.warnings)
        if error_count > 0:
            errors_by_file[file_result.file] = error_count
        for error in file_result.result.errors:
            kind = error.kind.value
            errors_by_kind[kind] = errors_by_kind.get(kind, 0) + 1

    passed = sum(1 for r in results if r.is_valid)
    return ReportData(
        timestamp=datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
        total_files=len(results),
        passed_files=passed,
        failed_files=len(results) - passed,
        total_errors=total_errors,
        total_warnings=total_warnings,
        errors_by_kind=errors_by_kind,
        errors_by_file=errors_by_file,
        files=list(results),
    )
