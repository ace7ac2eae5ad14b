from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable, List

from di_core.status import Status

if TYPE_CHECKING:
    from di_core.report import InheritanceReport


@dataclass(frozen=True)
class Issue:
    severity: str
    code: str
    message: str
    path: str = "/"


def has_errors(issues: Iterable[Issue]) -> bool:
    return any(issue.severity == "error" for issue in issues)


def to_lines(issues: List[Issue]) -> List[str]:
    lines = []
    for issue in issues:
        lines.append(
            f"[{issue.severity.upper()}] {issue.code} {issue.path}: {issue.message}"
        )
    return lines


def report_issues(report: "InheritanceReport") -> List[Issue]:
    """Turn the actionable report entries into issues for CI output."""
    issues: List[Issue] = []
    for entry in report.actionable:
        path = f"/{entry.entity_name}/{entry.column_name}"
        if entry.status == Status.UNRESOLVED:
            target = f"{entry.source_entity_name}.{entry.source_column_name}".strip(".")
            message = (
                f"Directive target '{target}' not found or has no description."
                if target
                else "Directive is malformed; expected '<model>.<column>'."
            )
            issues.append(Issue("warn", "DIRECTIVE_UNRESOLVED", message, path))
        elif entry.status == Status.AMBIGUOUS:
            issues.append(
                Issue(
                    "warn",
                    "AMBIGUOUS_PARENTS",
                    f"Column is documented in several parents ({', '.join(entry.candidates)}); "
                    f"add an inherit_desc directive to pick one.",
                    path,
                )
            )
        elif entry.status == Status.NO_SOURCE:
            issues.append(Issue("info", "NO_SOURCE", "No parent documents this column.", path))
    return issues
