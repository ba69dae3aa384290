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

import json
import logging
import os
from typing import Optional

from ..file_io.template_renderer import TemplateRenderer
from .report_data import ReportData

logger = logging.getLogger(__name__)

REPORT_FORMATS = ("html", "markdown", "json")

_TEMPLATES = {
    "html": "report.html.jinja2",
    "markdown": "report.md.jinja2",
}


def detect_report_format(file_path: str) -> str:
    ext = os.path.splitext(file_path)[1].lower()
    if ext in (".html", ".htm"):
        return "html"
    if ext in (".md", ".markdown"):
        return "markdown"
    return "json"


def pass_rate_color(data: ReportData) -> str:
    if data.failed_files == 0:
        return "#22c55e"
    if data.passed_files > data.failed_files:
        return "#eab308"
    return "#ef4444"


def generate_report(data: ReportData, fmt: str, renderer: Optional[TemplateRenderer] = None) -> str:
    """Render ``data`` as an html, markdown or json report."""
    if fmt not in REPORT_FORMATS:
        raise ValueError(f"Unknown report format: {fmt}")
    if fmt == "json":
        return json.dumps(data.to_dict(), indent=2)

    renderer = renderer or TemplateRenderer()
    return renderer.render_template(
        _TEMPLATES[fmt],
        data=data,
        pass_rate=f"{data.pass_rate:.1f}",
        pass_rate_color=pass_rate_color(data),
    )


def write_report(data: ReportData, output_path: str, fmt: Optional[str] = None) -> str:
    """Write a report file, guessing the format from the extension when not given."""
    fmt = fmt or detect_report_format(output_path)
    content = generate_report(data, fmt)
    parent = os.path.dirname(output_path)
    if parent:
        os.makedirs(parent, exist_ok=True)
    with open(output_path, "w", encoding="utf-8") as f:
        f.write(content)
    logger.info(f"Wrote {fmt} report to {output_path}")
    return fmt
