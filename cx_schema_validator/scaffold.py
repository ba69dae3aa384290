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

"""Project scaffolding for the ``init`` and ``create`` commands."""

import logging
import re
import uuid
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Union

from .exceptions import ScaffoldError
from .file_io.template_renderer import TemplateRenderer

logger = logging.getLogger(__name__)

PROGRAM_NAME = "cx-validate"

PROJECT_DIRS = ("modules", "workflows")
PROJECT_FILES = (
    ("app.yaml", "app.yaml.jinja2"),
    ("README.md", "README.md.jinja2"),
    ("AGENTS.md", "AGENTS.md.jinja2"),
)

# document kind -> (output directory, template)
CREATE_TARGETS = {
    "module": ("modules", "module.yaml.jinja2"),
    "workflow": ("workflows", "workflow.yaml.jinja2"),
}


@dataclass
class InitSummary:
    created_dirs: List[str] = field(default_factory=list)
    created_files: List[str] = field(default_factory=list)
    skipped_files: List[str] = field(default_factory=list)


def sanitize_name(name: str) -> str:
    return re.sub(r"[^a-z0-9-]", "-", name.lower())


def display_name_for(name: str) -> str:
    """``order-items`` -> ``Order Items``."""
    return " ".join(word[:1].upper() + word[1:] for word in name.split("-"))


def init_project(root: Union[str, Path], renderer: Optional[TemplateRenderer] = None) -> InitSummary:
    """Create the standard project layout under ``root``.

    Existing files are never overwritten; they are reported as skipped.
    """
    root = Path(root)
    renderer = renderer or TemplateRenderer()
    summary = InitSummary()

    for directory in PROJECT_DIRS:
        dir_path = root / directory
        if not dir_path.exists():
            dir_path.mkdir(parents=True)
            summary.created_dirs.append(directory)

    for file_name, template_name in PROJECT_FILES:
        file_path = root / file_name
        if file_path.exists():
            summary.skipped_files.append(file_name)
            continue
        renderer.render_template_to_file(template_name, str(file_path), program=PROGRAM_NAME)
        summary.created_files.append(file_name)

    logger.info(
        f"Initialized project in {root}: {len(summary.created_dirs)} dirs, "
        f"{len(summary.created_files)} files, {len(summary.skipped_files)} skipped"
    )
    return summary


def create_from_template(
    root: Union[str, Path],
    kind: str,
    name: str,
    renderer: Optional[TemplateRenderer] = None,
) -> Path:
    """Render a new module or workflow document.

    Returns:
        Path of the created file

    Raises:
        ScaffoldError: For an unknown kind, an empty name or an existing file
    """
    if kind not in CREATE_TARGETS:
        raise ScaffoldError(f"Invalid type '{kind}'. Use: module or workflow")
    if not name:
        raise ScaffoldError(f"Missing name for {kind}")

    safe_name = sanitize_name(name)
    directory, template_name = CREATE_TARGETS[kind]
    relative_file = Path(directory) / f"{safe_name}.yaml"
    file_path = Path(root) / relative_file
    if file_path.exists():
        raise ScaffoldError(f"File already exists: {file_path}")

    display_name = display_name_for(safe_name)
    renderer = renderer or TemplateRenderer()
    renderer.render_template_to_file(
        template_name,
        str(file_path),
        name=safe_name,
        display_name=display_name,
        display_name_no_spaces=re.sub(r"\s", "", display_name),
        uuid=str(uuid.uuid4()),
        file_name=relative_file.as_posix(),
    )
    logger.info(f"Created {kind}: {relative_file.as_posix()}")
    return file_path
