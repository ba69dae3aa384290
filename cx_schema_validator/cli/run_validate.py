#!/usr/bin/env python3
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

"""CLI entry point for validating CX module and workflow YAML files."""

import argparse
import dataclasses
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

import yaml

from .. import __version__
from ..config import ValidatorConfig
from ..exceptions import CxSchemaValidatorError, SchemaNotFoundError
from ..models.schema_store import SchemaStore, default_schemas_path
from ..models.violation import ValidationResult, Violation, ViolationKind
from ..report import REPORT_FORMATS, build_report_data, write_report
from ..scaffold import PROGRAM_NAME, create_from_template, init_project
from ..schema_browser import generate_example_from_schema, list_schemas, load_schema_file
from ..validators import FILE_TYPES, FileValidationResult, find_yaml_files, validate_files

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_VALIDATION_FAILED = 1
EXIT_USAGE = 2

COMMANDS = ("validate", "report", "init", "create", "schema", "example", "list")
OUTPUT_FORMATS = ("pretty", "json", "compact", "github-actions")
DEFAULT_REPORT_PATH = "validation-report.json"

RULE = "─" * 70


def get_suggestion(violation: Violation) -> Optional[str]:
    if violation.kind == ViolationKind.MISSING_PROPERTY:
        prop = violation.location.rsplit(".", 1)[-1]
        if prop and prop != "/":
            return f"Add the required property '{prop}' to your YAML"
        return "Check required properties in the schema"

    if violation.kind == ViolationKind.SCHEMA_VIOLATION:
        keyword = (violation.schema_location or "").rsplit("/", 1)[-1]
        if keyword == "enum":
            return "The value must be one of the allowed values. Check the schema for valid options."
        if keyword == "type":
            return "Check that the value type matches the expected type (string, number, boolean, etc.)"
        if keyword == "additionalProperties":
            return f"Remove unrecognized properties. Use '{PROGRAM_NAME} schema <type>' to see allowed properties."
        return "Review the schema requirements for this property"

    if violation.kind == ViolationKind.YAML_SYNTAX_ERROR:
        return "Check YAML indentation and syntax."

    if violation.kind == ViolationKind.INVALID_ACTIVITY:
        return 'Each activity must have a "name" and "steps" array'

    return None


def _kind_title(kind: ViolationKind) -> str:
    return kind.value.upper().replace("_", " ")


def format_error_pretty(error: Violation, index: int, file_path: str, verbose: bool) -> str:
    lines = [f"\n┌─ Error #{index + 1}: {_kind_title(error.kind)}", "│"]
    lines.append(f"│  Path:    {error.location}")
    lines.append(f"│  Message: {error.message}")
    if error.line is not None:
        column = f":{error.column}" if error.column is not None else ""
        lines.append(f"│  Source:  {file_path}:{error.line}{column}")
    if verbose and error.schema_location:
        lines.append(f"│  Schema:  {error.schema_location}")
    if error.has_example:
        lines.append("│")
        lines.append("│  Example:")
        for example_line in json.dumps(error.example_value, indent=2).split("\n"):
            lines.append(f"│    {example_line}")
    suggestion = get_suggestion(error)
    if suggestion:
        lines.append("│")
        lines.append(f"│  Suggestion: {suggestion}")
    lines.append("│")
    lines.append("└" + "─" * 60)
    return "\n".join(lines)


def format_warning_pretty(warning: Violation, index: int) -> str:
    return "\n".join(
        [
            f"\n⚠ Warning #{index + 1}: {_kind_title(warning.kind)}",
            f"  Path: {warning.location}",
            f"  {warning.message}",
        ]
    )


def print_result_pretty(file_result: FileValidationResult, verbose: bool) -> None:
    result = file_result.result
    summary = result.summary

    print("\n" + "═" * 67)
    print("                  CX SCHEMA VALIDATION REPORT")
    print("═" * 67 + "\n")
    print(f"  File:    {summary.file}")
    print(f"  Type:    {file_result.file_type}")
    print(f"  Time:    {summary.timestamp}")
    print(f"  Status:  {'✓ PASSED' if result.is_valid else '✗ FAILED'}")
    print(f"  Errors:  {summary.error_count}")
    print(f"  Warnings: {summary.warning_count}")

    if summary.error_count > 0:
        print("\n  Errors by Kind:")
        for kind, count in summary.errors_by_kind.items():
            print(f"    {kind}: {count}")

    if result.errors:
        print("\n" + "═" * 67)
        print("                           ERRORS")
        print("═" * 67)
        for index, error in enumerate(result.errors):
            print(format_error_pretty(error, index, file_result.file, verbose))

    if result.warnings:
        print("\n" + "═" * 67)
        print("                          WARNINGS")
        print("═" * 67)
        for index, warning in enumerate(result.warnings):
            print(format_warning_pretty(warning, index))

    if result.errors:
        print("\n" + RULE)
        print("  Tips:")
        print(f"    • Use '{PROGRAM_NAME} schema <name>' to view schema requirements")
        print(f"    • Use '{PROGRAM_NAME} example <name>' to see example YAML")
        print(f"    • Use '{PROGRAM_NAME} list' to see all available schemas")
        print(RULE)


def print_result_compact(result: ValidationResult, file_path: str) -> None:
    status = "PASS" if result.is_valid else "FAIL"
    error_info = f" ({result.summary.error_count} errors)" if result.summary.error_count > 0 else ""
    print(f"{status} {file_path}{error_info}")


def print_result_github_actions(result: ValidationResult, file_path: str) -> None:
    for error in result.errors:
        print(f"::error file={file_path},line={error.line or 1}::[{error.kind.value}] {error.location}: {error.message}")
    for warning in result.warnings:
        print(
            f"::warning file={file_path},line={warning.line or 1}::"
            f"[{warning.kind.value}] {warning.location}: {warning.message}"
        )


def _build_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "-s", "--schemas",
        default=None,
        help="Schema library directory (default: $CX_SCHEMA_PATH, ./.cx-schema or bundled schemas)",
    )
    common.add_argument(
        "-t", "--type",
        choices=FILE_TYPES + ("auto",),
        default="auto",
        help="Document type (default: auto-detect)",
    )

    validate_options = argparse.ArgumentParser(add_help=False)
    validate_options.add_argument("paths", nargs="*", help="YAML files or directories to validate")
    validate_options.add_argument(
        "-f", "--format",
        choices=OUTPUT_FORMATS,
        default="pretty",
        help="Output format (default: pretty)",
    )
    validate_options.add_argument("--json", dest="format", action="store_const", const="json", help="Same as --format json")
    validate_options.add_argument("--verbose", action="store_true", help="Show schema locations in errors")
    validate_options.add_argument("-q", "--quiet", action="store_true", help="Only print failing files")
    validate_options.add_argument("-r", "--report", default=None, help="Write a batch report to this file")
    validate_options.add_argument(
        "--report-format",
        choices=REPORT_FORMATS,
        default=None,
        help="Report format (default: from the report file extension)",
    )
    validate_options.add_argument("--no-warnings", action="store_true", help="Drop warnings from the results")
    validate_options.add_argument(
        "--validate-task-schemas",
        action="store_true",
        help="Also check each workflow step against workflows/tasks/<task>.json",
    )

    parser = argparse.ArgumentParser(
        prog=PROGRAM_NAME,
        description="Validate CX module and workflow YAML files against JSON schemas",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command")

    subparsers.add_parser("validate", parents=[common, validate_options], help="Validate YAML files (default)")
    subparsers.add_parser("report", parents=[common, validate_options], help="Validate files and write a report")

    init_parser = subparsers.add_parser("init", help="Create a new project layout")
    init_parser.add_argument("directory", nargs="?", default=".", help="Project root (default: current directory)")

    create_parser = subparsers.add_parser("create", help="Create a module or workflow from a template")
    create_parser.add_argument("kind", choices=("module", "workflow"), help="Document kind")
    create_parser.add_argument("name", help="Name of the new document")
    create_parser.add_argument("--dir", default=".", help="Project root (default: current directory)")

    schema_parser = subparsers.add_parser("schema", parents=[common], help="Show a schema")
    schema_parser.add_argument("name", help="Schema name, e.g. form or foreach")

    example_parser = subparsers.add_parser("example", parents=[common], help="Show an example document for a schema")
    example_parser.add_argument("name", help="Schema name, e.g. form or foreach")

    subparsers.add_parser("list", parents=[common], help="List available schemas")
    return parser


def _normalize_argv(argv: List[str]) -> List[str]:
    # `cx-validate file.yaml` is shorthand for `cx-validate validate file.yaml`.
    if not argv or (argv[0] not in COMMANDS and argv[0] not in ("-h", "--help", "--version")):
        return ["validate"] + argv
    return argv


def _resolve_schemas_path(args: argparse.Namespace, config: ValidatorConfig) -> Path:
    schemas_path = args.schemas or config.schemas_path
    path = Path(schemas_path) if schemas_path else default_schemas_path()
    if not path.is_dir():
        raise CxSchemaValidatorError(f"Could not find schemas directory: {path}")
    return path


def run_validate(args: argparse.Namespace, config: ValidatorConfig) -> int:
    report_mode = args.command == "report" or args.report is not None
    if not args.paths:
        print("Error: No input file specified", file=sys.stderr)
        print(f"Use '{PROGRAM_NAME} --help' for usage information", file=sys.stderr)
        return EXIT_USAGE

    files = find_yaml_files(args.paths)
    if not files:
        print("Error: No YAML files found.", file=sys.stderr)
        return EXIT_USAGE

    schemas_path = _resolve_schemas_path(args, config)
    config = dataclasses.replace(
        config,
        schemas_path=str(schemas_path),
        include_warnings=config.include_warnings and not args.no_warnings,
        validate_task_schemas=config.validate_task_schemas or args.validate_task_schemas,
    )
    store = SchemaStore.from_directory(schemas_path)
    results = validate_files(files, config=config, file_type=args.type, store=store)

    if args.format == "json" and not report_mode:
        if len(results) == 1:
            payload = results[0].result.to_dict()
        else:
            payload = [{"file": r.file, "fileType": r.file_type, "result": r.result.to_dict()} for r in results]
        print(json.dumps(payload, indent=2))
    else:
        for file_result in results:
            if args.quiet and (report_mode or file_result.is_valid):
                continue
            if args.format == "github-actions":
                print_result_github_actions(file_result.result, file_result.file)
            elif args.format == "compact" or report_mode:
                print_result_compact(file_result.result, file_result.file)
            else:
                print_result_pretty(file_result, args.verbose)

    if report_mode:
        report_data = build_report_data(results)
        report_path = args.report or DEFAULT_REPORT_PATH
        report_format = write_report(report_data, report_path, args.report_format)
        print("")
        print("═" * 67)
        print("                     VALIDATION SUMMARY")
        print("═" * 67)
        print(f"  Total Files:  {report_data.total_files}")
        print(f"  Passed:       {report_data.passed_files}")
        print(f"  Failed:       {report_data.failed_files}")
        print(f"  Pass Rate:    {report_data.pass_rate:.1f}%")
        print(f"\n  Report ({report_format}) saved to: {report_path}")

    has_errors = any(not r.is_valid for r in results)
    return EXIT_VALIDATION_FAILED if has_errors else EXIT_OK


def run_schema(args: argparse.Namespace, config: ValidatorConfig) -> int:
    schemas_path = _resolve_schemas_path(args, config)
    key, schema = load_schema_file(schemas_path, args.name)
    print(f"\nSchema: {key}\n")
    print(RULE)
    print(json.dumps(schema, indent=2))
    print(RULE)
    return EXIT_OK


def run_example(args: argparse.Namespace, config: ValidatorConfig) -> int:
    schemas_path = _resolve_schemas_path(args, config)
    key, schema = load_schema_file(schemas_path, args.name)
    print(f"\nExample for: {key}\n")
    print(RULE)
    print(yaml.safe_dump(generate_example_from_schema(schema), sort_keys=False, allow_unicode=True, width=100), end="")
    print(RULE)
    return EXIT_OK


def run_list(args: argparse.Namespace, config: ValidatorConfig) -> int:
    schemas_path = _resolve_schemas_path(args, config)
    sections = list_schemas(schemas_path, args.type)
    for section, groups in sections.items():
        print(f"\n{section.upper()} SCHEMAS:")
        print("─" * 50)
        for title, names in groups.items():
            print(f"\n  {title}:")
            print("    " + ", ".join(names))
    print("\n" + "─" * 50)
    print(f"Use '{PROGRAM_NAME} schema <name>' to view a specific schema")
    print(f"Use '{PROGRAM_NAME} example <name>' to see an example")
    return EXIT_OK


def run_init(args: argparse.Namespace, config: ValidatorConfig) -> int:
    summary = init_project(args.directory)
    if summary.created_dirs:
        print("  Created directories:")
        for directory in summary.created_dirs:
            print(f"    ✓ {directory}/")
    if summary.created_files:
        print("  Created files:")
        for file_name in summary.created_files:
            print(f"    ✓ {file_name}")
    if summary.skipped_files:
        print("  Skipped (already exist):")
        for file_name in summary.skipped_files:
            print(f"    - {file_name}")
    print("\n  Next steps:")
    print("    1. Edit app.yaml to configure your project")
    print(f"    2. Create modules: {PROGRAM_NAME} create module <name>")
    print(f"    3. Create workflows: {PROGRAM_NAME} create workflow <name>")
    print(f"    4. Validate files: {PROGRAM_NAME} modules/")
    return EXIT_OK


def run_create(args: argparse.Namespace, config: ValidatorConfig) -> int:
    file_path = create_from_template(args.dir, args.kind, args.name)
    print(f"✓ Created {args.kind}: {file_path}")
    print("\n  Next steps:")
    print(f"    1. Edit {file_path} to customize")
    print(f"    2. Validate: {PROGRAM_NAME} {file_path}")
    return EXIT_OK


HANDLERS = {
    "validate": run_validate,
    "report": run_validate,
    "init": run_init,
    "create": run_create,
    "schema": run_schema,
    "example": run_example,
    "list": run_list,
}


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point for the validator CLI."""
    argv = list(sys.argv[1:] if argv is None else argv)
    parser = _build_parser()
    args = parser.parse_args(_normalize_argv(argv))

    config = ValidatorConfig.from_env()
    config.set_logging()

    try:
        exit_code = HANDLERS[args.command](args, config)
    except SchemaNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        print(f"Use '{PROGRAM_NAME} list' to see available schemas", file=sys.stderr)
        exit_code = EXIT_USAGE
    except CxSchemaValidatorError as e:
        print(f"Error: {e}", file=sys.stderr)
        exit_code = EXIT_USAGE
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
