"""Command-line driver for inspecting the error catalog and rendering messages."""

from __future__ import annotations

import argparse
import sys

from werror.cli.helpers import (
    build_mode_lines,
    catalog_rows,
    error_response,
    parse_template_data,
    render_output,
)
from werror.config.env import detect_build_mode, load_environment, log_level_from_env
from werror.core.catalog import CATALOG, ERR_BAD_REQUEST
from werror.enums import OutputFormat
from werror.i18n import LocaleMessage, TemplateError, new_localized_err
from werror.utilities.logger_manager import LoggerConfig, LoggerManager
from werror.utilities.version import get_runtime_version

EXIT_OK = 0
EXIT_TEMPLATE_FAILURE = 1
EXIT_USAGE = 2


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="werror",
        description="Inspect service error values and render localized errors.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument(
        "--version",
        "-V",
        action="version",
        version=get_runtime_version(),
        help="Show the runtime version and exit.",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Log level; defaults to $WERROR_LOG_LEVEL or INFO.",
    )
    parser.add_argument(
        "--structured-logs",
        action="store_true",
        help="Emit log records as JSON objects.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    catalog_parser = subparsers.add_parser(
        "catalog",
        help="List the predefined base errors.",
    )
    catalog_parser.add_argument(
        "--status",
        type=int,
        default=None,
        help="Only list base errors with this HTTP status.",
    )
    catalog_parser.add_argument(
        "--format",
        dest="output_format",
        choices=[fmt.value for fmt in OutputFormat],
        default=OutputFormat.JSON.value,
        help="Output format.",
    )

    render_parser = subparsers.add_parser(
        "render",
        help="Render a localized error from a message id and template text.",
    )
    render_parser.add_argument("message_id", help="Message id, used as error code.")
    render_parser.add_argument("template", help="Template text, e.g. 'User {{.Name}}'.")
    render_parser.add_argument(
        "--data",
        default=None,
        help="Template data as YAML or JSON, e.g. '{Name: Alice}'.",
    )
    render_parser.add_argument(
        "--base",
        default=ERR_BAD_REQUEST.code,
        help="Code of the catalog base error to render under.",
    )

    subparsers.add_parser(
        "check-env",
        help="Report the container build mode detected from the environment.",
    )
    return parser.parse_args(argv)


def _run_catalog(args: argparse.Namespace) -> int:
    rows = catalog_rows(CATALOG, args.status)
    print(render_output(rows, OutputFormat(args.output_format)))
    return EXIT_OK


def _run_render(args: argparse.Namespace, logger_manager: LoggerManager) -> int:
    logger = logger_manager.get_logger()
    base = CATALOG.get(args.base)
    if base is None:
        logger.error("Unknown base error code: %s", args.base)
        return EXIT_USAGE
    try:
        data = parse_template_data(args.data)
    except ValueError as exc:
        logger.error("%s", exc)
        return EXIT_USAGE

    message = LocaleMessage(id=args.message_id, other=args.template)
    with logger_manager.context(command="render", message_id=args.message_id):
        try:
            err = new_localized_err(base, message, data)
        except TemplateError as exc:
            logger.error("Failed to render %r: %s", args.message_id, exc)
            return EXIT_TEMPLATE_FAILURE
        logger.debug("Rendered %s", err)
    print(render_output(error_response(err), OutputFormat.JSON))
    return EXIT_OK


def _run_check_env() -> int:
    report = detect_build_mode()
    for line in build_mode_lines(report):
        print(line)
    return EXIT_OK


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the werror CLI."""
    load_environment()
    args = parse_args(argv)
    try:
        logger_config = LoggerConfig(
            log_level=args.log_level or log_level_from_env(),
            structured_logging=args.structured_logs,
        )
    except ValueError as exc:
        print(f"Invalid logging configuration: {exc}", file=sys.stderr)
        return EXIT_USAGE
    logger_manager = LoggerManager(logger_config)
    try:
        if args.command == "catalog":
            return _run_catalog(args)
        if args.command == "render":
            return _run_render(args, logger_manager)
        return _run_check_env()
    finally:
        logger_manager.flush()


if __name__ == "__main__":
    raise SystemExit(main())
