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

"""YAML document loader with source locations."""

import yaml
import logging
from pathlib import Path as FilePath
from typing import Any, Dict, Tuple, Union

from ..exceptions import DocumentNotFoundError, YamlSyntaxError
from .path import Path

logger = logging.getLogger(__name__)

SourceMap = Dict[str, Dict[str, int]]


class YamlParser:
    """Stateless YAML loader.

    Documents are never cached: each validation call owns the data it parsed.
    """

    @staticmethod
    def build_source_map(content: str) -> SourceMap:
        """Build a mapping from rendered document paths to 1-based line/column.

        This uses PyYAML's node tree (yaml.compose) so we can track locations without
        changing the parsed data shapes returned by safe_load.
        """
        source_map: SourceMap = {}

        try:
            root = yaml.compose(content, Loader=yaml.SafeLoader)
        except yaml.YAMLError:
            # Parsing errors are reported by safe_load.
            return source_map

        if root is None:
            return source_map

        def _record(path: Path, node) -> None:
            mark = getattr(node, "start_mark", None)
            if mark is None:
                return
            # PyYAML uses 0-based line/column
            source_map.setdefault(path.render(), {"line": int(mark.line) + 1, "column": int(mark.column) + 1})

        constructor = yaml.constructor.SafeConstructor()
        expanded = set()

        def _key_segment(key_node):
            # Keys are resolved like safe_load does, so `yes:` maps to the `true` segment.
            if not isinstance(key_node, yaml.nodes.ScalarNode):
                return getattr(key_node, "value", None)
            try:
                key = constructor.construct_object(key_node)
            except yaml.YAMLError:
                return key_node.value
            if key is None or isinstance(key, (str, int, float)):
                return key
            return str(key)

        def _walk(node, path: Path) -> None:
            _record(path, node)
            # Aliases share node objects: each node is expanded once, later
            # references only record their own position.
            if id(node) in expanded:
                return

            if isinstance(node, yaml.nodes.MappingNode):
                expanded.add(id(node))
                for key_node, value_node in node.value:
                    key = _key_segment(key_node)
                    if key is None:
                        continue
                    child = path.append(key if isinstance(key, (str, int)) else str(key))
                    _record(child, key_node)
                    _walk(value_node, child)
            elif isinstance(node, yaml.nodes.SequenceNode):
                expanded.add(id(node))
                for idx, item_node in enumerate(node.value):
                    _walk(item_node, path.append(idx))

        _walk(root, Path.root())
        return source_map

    def load_from_string(self, content: str) -> Tuple[Any, SourceMap]:
        """Parse YAML content and return (data, source_map).

        Raises:
            YamlSyntaxError: If content cannot be parsed
        """
        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as exc:
            raise YamlSyntaxError(str(exc)) from exc
        return data, self.build_source_map(content)

    def load_document(self, file_path: Union[str, FilePath]) -> Tuple[Any, SourceMap]:
        """Load a YAML file and return (data, source_map).

        Raises:
            DocumentNotFoundError: If the file does not exist
            YamlSyntaxError: If the file is not UTF-8 or cannot be parsed
        """
        path = FilePath(file_path)

        if not path.exists():
            raise DocumentNotFoundError(f"File not found: {path}")

        if not path.is_file():
            raise DocumentNotFoundError(f"Path is not a file: {path}")

        logger.debug(f"Loading document: {path}")
        try:
            content = path.read_text(encoding="utf-8")
        except UnicodeDecodeError as exc:
            raise YamlSyntaxError(f"File is not valid UTF-8: {exc}") from exc
        return self.load_from_string(content)


yaml_parser = YamlParser()
