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

"""Batch validation reports."""

from .report_data import ReportData, build_report_data
from .report_generator import REPORT_FORMATS, detect_report_format, generate_report, write_report

__all__ = [
    "REPORT_FORMATS",
    "ReportData",
    "build_report_data",
    "detect_report_format",
    "generate_report",
    "write_report",
]
