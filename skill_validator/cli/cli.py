# Copyright 2026 Cisco Systems, Inc.
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

"""Command-line interface for the Skill Validator."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from ..config.config import Config
from ..core.exceptions import ConfigurationError
from ..core.models import ValidationMode, ValidationResult
from ..core.validator import SkillValidator

logger = logging.getLogger("skill_validator.cli")

EXIT_VALID = 0
EXIT_INVALID = 1
EXIT_USAGE = 2


# ---------------------------------------------------------------------------
# Shared helpers
# ---------------------------------------------------------------------------


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _load_config(args: argparse.Namespace) -> Config:
    """Build configuration from ``--env-file`` or the process environment."""
    env_file = getattr(args, "env_file", None)
    if env_file:
        return Config.from_file(Path(env_file))
    return Config.from_env()


def _format_output(args: argparse.Namespace, result: ValidationResult, package: str) -> str:
    """Generate the formatted output string for a validation result."""
    if getattr(args, "format", "summary") == "json":
        return json.dumps(result.to_dict(), indent=None if args.compact else 2, default=str)
    return _generate_summary(result, package)


def _write_output(args: argparse.Namespace, output: str) -> None:
    """Write *output* to a file or stdout."""
    if args.output:
        with open(args.output, "w", encoding="utf-8") as fh:
            fh.write(output)
        print(f"Report saved to: {args.output}", file=sys.stderr)
    else:
        print(output)


def _generate_summary(result: ValidationResult, package: str) -> str:
    lines = [
        "=" * 60,
        f"Package: {package}",
        "=" * 60,
        f"Status: {'[OK] VALID' if result.valid else '[FAIL] INVALID'}",
        f"Files: {result.stats.file_count} ({result.stats.total_size} bytes uncompressed)",
    ]

    if result.manifest is not None:
        lines.append(f"Skill: {result.manifest.name} {result.manifest.version}")

    features = [
        name
        for name, present in (
            ("scripts", result.stats.has_scripts),
            ("config", result.stats.has_config),
            ("assets", result.stats.has_assets),
            ("references", result.stats.has_references),
        )
        if present
    ]
    lines.append(f"Contains: {', '.join(features) if features else '-'}")
    lines.append("")

    for label, findings in (("Errors", result.errors), ("Warnings", result.warnings)):
        if not findings:
            continue
        lines.append(f"{label} ({len(findings)}):")
        for finding in findings:
            location = ""
            if finding.file_path:
                location = f" [{finding.file_path}"
                location += f":{finding.line_number}]" if finding.line_number else "]"
            lines.append(f"  {finding.code}{location}: {finding.message}")
    return "\n".join(lines)


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


def validate_command(args: argparse.Namespace) -> int:
    """Handle the ``validate`` command for a single package archive."""
    package = Path(args.package)
    if not package.is_file():
        print(f"Error: File does not exist: {package}", file=sys.stderr)
        return EXIT_USAGE

    try:
        config = _load_config(args)
        mode = ValidationMode.parse(args.mode) if args.mode else config.default_mode
    except ConfigurationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return EXIT_USAGE

    try:
        data = package.read_bytes()
    except OSError as e:
        print(f"Error reading {package}: {e}", file=sys.stderr)
        return EXIT_USAGE

    logger.debug("Read %d bytes from %s", len(data), package)
    result = SkillValidator(limits=config.to_limits()).validate(data, mode)

    try:
        _write_output(args, _format_output(args, result, package.name))
    except OSError as e:
        print(f"Error writing {args.output}: {e}", file=sys.stderr)
        return EXIT_USAGE

    return EXIT_VALID if result.valid else EXIT_INVALID


def serve_command(args: argparse.Namespace) -> int:
    """Handle the ``serve`` command."""
    try:
        config = _load_config(args)
    except ConfigurationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return EXIT_USAGE

    from ..api.api_server import run_server

    if args.reload and getattr(args, "env_file", None):
        logger.warning("--reload serves settings from the environment; %s is ignored", args.env_file)

    run_server(
        host=args.host,
        port=args.port,
        reload=args.reload,
        config=config,
        log_level="debug" if args.verbose else "info",
    )
    return EXIT_VALID


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Skill Validator - intake validation for agent skill packages",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  skill-validator validate my-skill.zip
  skill-validator validate my-skill.zip --mode automated
  skill-validator validate my-skill.zip --format json --compact
  skill-validator serve --host 0.0.0.0 --port 8080
        """,
    )
    parser.add_argument("--env-file", help="Load SKILL_VALIDATOR_* settings from a .env file")
    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    # -- validate ----------------------------------------------------------
    val_p = subparsers.add_parser("validate", help="Validate a skill package archive")
    val_p.add_argument("package", help="Path to the package .zip")
    val_p.add_argument(
        "--mode",
        choices=["interactive", "automated", "web", "agent"],
        default=None,
        help="Validation mode (default: interactive, or SKILL_VALIDATOR_DEFAULT_MODE)",
    )
    val_p.add_argument("--format", choices=["summary", "json"], default="summary", help="Output format")
    val_p.add_argument("--output", "-o", help="Output file path")
    val_p.add_argument("--compact", action="store_true", help="Compact JSON output")
    val_p.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    # -- serve -------------------------------------------------------------
    serve_p = subparsers.add_parser("serve", help="Run the validation API server")
    serve_p.add_argument("--host", default="localhost", help="Host to bind to")
    serve_p.add_argument("--port", type=int, default=8000, help="Port to bind to")
    serve_p.add_argument("--reload", action="store_true", help="Enable auto-reload for development")
    serve_p.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    # -- dispatch ----------------------------------------------------------
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return EXIT_USAGE

    _configure_logging(args.verbose)

    dispatch = {
        "validate": validate_command,
        "serve": serve_command,
    }
    handler = dispatch.get(args.command)
    if handler:
        return handler(args)

    parser.print_help()
    return EXIT_USAGE


if __name__ == "__main__":
    sys.exit(main())
