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

"""Configuration management for the schema validator."""

import os
import logging
from dataclasses import dataclass
from typing import Optional

from .utils.logging_utils import configure_split_stream_logging


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class ValidatorConfig:
    """Configuration for a validation run."""
    schemas_path: Optional[str] = None
    include_warnings: bool = True
    validate_task_schemas: bool = False
    log_level: str = "WARNING"
    print_level: str = "WARNING"

    @classmethod
    def from_env(cls) -> 'ValidatorConfig':
        """Create configuration from environment variables."""
        return cls(
            schemas_path=os.getenv('CX_SCHEMA_PATH') or None,
            include_warnings=_env_flag('CX_INCLUDE_WARNINGS', True),
            validate_task_schemas=_env_flag('CX_VALIDATE_TASK_SCHEMAS', False),
            log_level=os.getenv('CX_VALIDATOR_LOG_LEVEL', 'WARNING'),
            print_level=os.getenv('CX_VALIDATOR_PRINT_LEVEL', 'WARNING'),
        )

    def set_logging(self) -> logging.Logger:
        """Setup logging based on configuration."""
        level = getattr(logging, self.log_level.upper(), logging.WARNING)
        stderr_level = getattr(logging, self.print_level.upper(), logging.WARNING)

        formatter = logging.Formatter('%(name)s - %(levelname)s - %(message)s')
        return configure_split_stream_logging(
            level=level,
            stderr_level=stderr_level,
            formatter=formatter,
            logger_name='cx_schema_validator',
        )
