import argparse
import json
import logging
import sys
from typing import Dict, List, Optional

from di_core import (
    ConfigError,
    GraphUnavailableError,
    InheritConfig,
    Status,
    STATUS_ORDER,
    config_issues,
    configure_logging,
    inherit_desc,
    load_config,
    load_manifest,
    propagate_descriptions,
    render_report,
    report_issues,
    write_report,
)
from di_core.config import load_config_data
from di_core.issues import Issue, has_errors, to_lines
from di_core.report import InheritanceReport

DEFAULT_MANIFEST = "target/manifest.json"

DIRECTIVE_HELP = (
    "Print the encoded inheritance directive for a YAML description. "
    "Tools that read descriptions verbatim (dbt docs, the warehouse catalog) "
    "show this placeholder, not the resolved text."
)


def _print_issues(issues: List[Issue]) -> None:
    if not issues:
        print("No issues found.")
        return
    for line in to_lines(issues):
        print(line)


def _issues_as_json(issues: List[Issue]) -> List[Dict[str, str]]:
    return [
        {
            "severity": issue.severity,
            "code": issue.code,
            "message": issue.message,
            "path": issue.path,
        }
        for issue in issues
    ]


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {value!r}") from None
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


def _load_config_or_none(path: Optional[str]) -> Optional[InheritConfig]:
    try:
        return load_config(path)
    except ConfigError as exc:
        print(str(exc), file=sys.stderr)
        return None


def _run(args: argparse.Namespace, config: InheritConfig) -> Optional[InheritanceReport]:
    try:
        graph = load_manifest(args.manifest)
        return propagate_descriptions(graph, config)
    except GraphUnavailableError as exc:
        print(f"Graph unavailable: {exc}", file=sys.stderr)
        return None


def cmd_propagate(args: argparse.Namespace) -> int:
    config = _load_config_or_none(args.config)
    if config is None:
        return 1

    report = _run(args, config)
    if report is None:
        return 2

    preview_length = config.preview_length if args.preview_length is None else args.preview_length
    options = {"preview_length": preview_length, "placeholder": config.placeholder}

    if args.out:
        write_report(report, args.out, fmt=args.format, **options)
        print(f"Wrote inheritance report: {args.out}")
    else:
        print(render_report(report, args.format, **options))

    # Unresolved and ambiguous columns are advisory only.
    return 0


def cmd_check(args: argparse.Namespace) -> int:
    config = _load_config_or_none(args.config)
    if config is None:
        return 1

    report = _run(args, config)
    if report is None:
        return 2

    issues = report_issues(report)
    if args.output_json:
        print(json.dumps(_issues_as_json(issues), indent=2))
    else:
        _print_issues(issues)

    failing = [e for e in report.entries if e.status.value in set(args.fail_on)]
    if failing:
        print(f"Check failed: {len(failing)} column(s) with status {', '.join(args.fail_on)}.")
        return 1

    print("Check passed.")
    return 0


def cmd_directive(args: argparse.Namespace) -> int:
    config = _load_config_or_none(args.config)
    if config is None:
        return 1
    print(inherit_desc(args.target, args.column, prefix=config.directive_prefix))
    return 0


def cmd_validate_config(args: argparse.Namespace) -> int:
    try:
        data = load_config_data(args.config)
    except ConfigError as exc:
        print(str(exc), file=sys.stderr)
        return 1
    issues = config_issues(data)
    _print_issues(issues)
    return 1 if has_errors(issues) else 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="di", description="Column description inheritance for dbt projects")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level for engine progress messages (default: WARNING)",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    propagate_parser = sub.add_parser("propagate", help="Resolve inherited column descriptions and print the report")
    propagate_parser.add_argument("manifest", nargs="?", default=DEFAULT_MANIFEST, help="Path to dbt manifest.json")
    propagate_parser.add_argument("--config", help="Path to doc-inherit YAML config")
    propagate_parser.add_argument("--format", default="text", choices=["text", "markdown", "json"])
    propagate_parser.add_argument("--out", help="Write the report to this file instead of stdout")
    propagate_parser.add_argument(
        "--preview-length",
        type=_positive_int,
        help="Description preview length in the table (at least 1)",
    )
    propagate_parser.set_defaults(func=cmd_propagate)

    check_parser = sub.add_parser("check", help="Fail when columns end up with the given statuses")
    check_parser.add_argument("manifest", nargs="?", default=DEFAULT_MANIFEST, help="Path to dbt manifest.json")
    check_parser.add_argument("--config", help="Path to doc-inherit YAML config")
    check_parser.add_argument(
        "--fail-on",
        nargs="+",
        default=[Status.UNRESOLVED.value],
        choices=[s.value for s in STATUS_ORDER if s != Status.ALREADY_DOCUMENTED],
        help="Statuses that fail the check (default: unresolved)",
    )
    check_parser.add_argument("--output-json", action="store_true", help="Print issues as JSON")
    check_parser.set_defaults(func=cmd_check)

    directive_parser = sub.add_parser("directive", help=DIRECTIVE_HELP)
    directive_parser.add_argument("target", help="Upstream model name, or source table name")
    directive_parser.add_argument("column", help="Upstream column name")
    directive_parser.add_argument("--config", help="Path to doc-inherit YAML config")
    directive_parser.set_defaults(func=cmd_directive)

    validate_config_parser = sub.add_parser("validate-config", help="Validate a doc-inherit YAML config")
    validate_config_parser.add_argument("config", help="Path to doc-inherit YAML config")
    validate_config_parser.set_defaults(func=cmd_validate_config)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(getattr(logging, args.log_level), force=True)
    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())
