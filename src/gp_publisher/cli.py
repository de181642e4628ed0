"""Command-line interface router for gp-publisher."""

from __future__ import annotations

import argparse
import json
import sys
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from gp_publisher.config import (
    LOG_FORMATS,
    LOG_LEVELS,
    Settings,
    SettingsLoadError,
    SettingsValidationError,
    load_settings,
)
from gp_publisher.observability import configure_logging
from gp_publisher.task import (
    ActionParameters,
    ErrorCollection,
    PublishTaskConfigurator,
    TaskDefinition,
)
from gp_publisher.task.files import TaskFileError, load_task_file

CLI_PLUGIN_KEY = "gp-publisher:publish"


@dataclass(frozen=True, slots=True)
class CLIError(RuntimeError):
    """Typed CLI failure with an explicit process exit code."""

    message: str
    exit_code: int = 2

    def __str__(self) -> str:
        return self.message


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse command router."""

    parser = argparse.ArgumentParser(
        prog="gp-publisher",
        description=(
            "gp-publisher — Google Play publish task configuration.\n\n"
            "Common workflows:\n"
            "  gp-publisher defaults               Print the create-form context\n"
            "  gp-publisher validate params.toml   Validate submitted form values\n"
            "  gp-publisher config-map params.toml Print the map persisted on save\n"
            "  gp-publisher edit-context task.yaml Print the edit-form context\n"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--config",
        dest="config_path",
        default=None,
        help="Path to settings TOML (default: ./gp_publisher.toml if present).",
    )
    common.add_argument(
        "--strict",
        dest="strict_choices",
        action="store_true",
        default=None,
        help="Reject track and rollout fraction values outside the known choices.",
    )
    common.add_argument(
        "--log-level",
        default=None,
        type=str.upper,
        choices=LOG_LEVELS,
        help="Override logging.level.",
    )
    common.add_argument(
        "--log-format",
        default=None,
        choices=LOG_FORMATS,
        help="Override logging.format.",
    )

    subparsers = parser.add_subparsers(dest="command")

    defaults_cmd = subparsers.add_parser(
        "defaults", parents=[common], help="Print the create-form context."
    )
    defaults_cmd.set_defaults(handler=_cmd_defaults)

    validate_cmd = subparsers.add_parser(
        "validate", parents=[common], help="Validate task parameters."
    )
    validate_cmd.add_argument("params_path", help="TOML/YAML file with submitted form values.")
    validate_cmd.set_defaults(handler=_cmd_validate)

    config_map_cmd = subparsers.add_parser(
        "config-map", parents=[common], help="Print the persisted configuration map."
    )
    config_map_cmd.add_argument("params_path", help="TOML/YAML file with submitted form values.")
    config_map_cmd.add_argument(
        "--skip-validation",
        action="store_true",
        default=False,
        help="Generate the map even when validation fails.",
    )
    config_map_cmd.set_defaults(handler=_cmd_config_map)

    edit_cmd = subparsers.add_parser(
        "edit-context", parents=[common], help="Print the edit-form context for a saved task."
    )
    edit_cmd.add_argument("task_path", help="TOML/YAML file with a persisted configuration.")
    edit_cmd.add_argument("--task-id", type=int, default=1, help="Task id to report.")
    edit_cmd.set_defaults(handler=_cmd_edit_context)

    return parser


def run_cli(argv: Sequence[str] | None = None) -> int:
    """Parse argv, route to a command handler, and return process exit code."""

    parser = build_parser()
    namespace = parser.parse_args(list(argv) if argv is not None else None)
    handler = getattr(namespace, "handler", None)
    if not callable(handler):
        parser.print_help(sys.stderr)
        return 2

    try:
        result = handler(namespace)
    except CLIError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return exc.exit_code
    return int(result)


# ---------------------------------------------------------------------------
# Command handlers
# ---------------------------------------------------------------------------


def _cmd_defaults(args: argparse.Namespace) -> int:
    configurator = _build_configurator(args)
    context: dict[str, object] = {}
    configurator.populate_context_for_create(context)
    _emit_json(context)
    return 0


def _cmd_validate(args: argparse.Namespace) -> int:
    configurator = _build_configurator(args)
    params = ActionParameters(_read_task_file(args.params_path))
    errors = ErrorCollection()
    configurator.validate(params, errors)
    _emit_json({"valid": not errors.has_any_errors(), **errors.to_dict()})
    return 1 if errors.has_any_errors() else 0


def _cmd_config_map(args: argparse.Namespace) -> int:
    configurator = _build_configurator(args)
    params = ActionParameters(_read_task_file(args.params_path))
    if not args.skip_validation:
        errors = ErrorCollection()
        configurator.validate(params, errors)
        if errors.has_any_errors():
            _emit_json({"valid": False, **errors.to_dict()})
            return 1
    _emit_json(configurator.generate_task_config_map(params, None))
    return 0


def _cmd_edit_context(args: argparse.Namespace) -> int:
    configurator = _build_configurator(args)
    values = _read_task_file(args.task_path)
    source = ActionParameters(values)
    task_definition = TaskDefinition(
        task_id=args.task_id,
        plugin_key=CLI_PLUGIN_KEY,
        configuration={key: source.get_string(key) for key in values},
    )
    context: dict[str, object] = {}
    configurator.populate_context_for_edit(context, task_definition)
    _emit_json(context)
    return 0


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _load_cli_settings(args: argparse.Namespace) -> Settings:
    overrides: dict[str, object] = {
        "logging.level": args.log_level,
        "logging.format": args.log_format,
        "validation.strict_choices": args.strict_choices,
    }
    try:
        return load_settings(args.config_path, cli_overrides=overrides)
    except (SettingsLoadError, SettingsValidationError) as exc:
        raise CLIError(str(exc), exit_code=2) from exc


def _build_configurator(args: argparse.Namespace) -> PublishTaskConfigurator:
    settings = _load_cli_settings(args)
    configure_logging(settings.log_level, settings.log_format)
    return PublishTaskConfigurator(strict_choices=settings.strict_choices)


def _read_task_file(raw_path: str) -> dict[str, Any]:
    try:
        return load_task_file(Path(raw_path))
    except TaskFileError as exc:
        raise CLIError(str(exc), exit_code=2) from exc


def _emit_json(payload: Mapping[str, object]) -> None:
    print(json.dumps(payload, indent=2, sort_keys=True, ensure_ascii=False))


__all__ = ["CLIError", "build_parser", "run_cli"]
