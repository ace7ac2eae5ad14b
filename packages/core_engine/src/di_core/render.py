"""Renderers for the column inheritance report.

Generates:
- Console/log text report (summary line + aligned table of actionable columns)
- Markdown table for wikis and pull requests
- JSON-safe dict with full descriptions
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from di_core.config import DEFAULT_PLACEHOLDER, DEFAULT_PREVIEW_LENGTH
from di_core.report import InheritanceReport, ReportEntry
from di_core.status import STATUS_ORDER

REPORT_TITLE = "doc-inherit: Column Inheritance Report"
TABLE_HEADER = ["entity.column", "status", "inherited_description", "target_file", "source_file"]
NOTHING_TO_DO = "All columns are already documented. Nothing to propagate."
_RULE = "═" * 95


def preview(text: str, length: int = DEFAULT_PREVIEW_LENGTH, placeholder: str = DEFAULT_PLACEHOLDER) -> str:
    """Single-line preview of ``text``, cut to ``length`` characters."""
    if length < 1:
        raise ValueError(f"Preview length must be at least 1, got {length}.")
    flat = " ".join((text or "").split())
    if not flat:
        return placeholder
    return flat[:length]


def summary_line(report: InheritanceReport) -> str:
    parts = [f"{report.counts.get(status, 0)} {status.value}" for status in STATUS_ORDER]
    return "Summary: " + " | ".join(parts)


def _row(entry: ReportEntry, preview_length: int, placeholder: str) -> List[str]:
    return [
        entry.qualified_name,
        entry.status_label,
        preview(entry.resolved_description, preview_length, placeholder),
        entry.target_file_path or placeholder,
        entry.source_file_path or placeholder,
    ]


def format_report(
    report: InheritanceReport,
    preview_length: int = DEFAULT_PREVIEW_LENGTH,
    placeholder: str = DEFAULT_PLACEHOLDER,
) -> str:
    lines: List[str] = []
    lines.append(_RULE)
    lines.append(f"  {REPORT_TITLE}")
    lines.append(_RULE)
    lines.append("")
    lines.append(f"  {summary_line(report)}")
    lines.append("")

    rows = [_row(entry, preview_length, placeholder) for entry in report.actionable]
    if rows:
        widths = [len(h) for h in TABLE_HEADER]
        for row in rows:
            widths = [max(w, len(cell)) for w, cell in zip(widths, row)]

        def fmt(cells: List[str]) -> str:
            return ("  " + " | ".join(c.ljust(w) for c, w in zip(cells, widths))).rstrip()

        lines.append(fmt(TABLE_HEADER))
        lines.append("  " + "-|-".join("-" * w for w in widths))
        for row in rows:
            lines.append(fmt(row))
    else:
        lines.append(f"  {NOTHING_TO_DO}")

    lines.append("")
    lines.append(_RULE)
    lines.append(f"Complete. {report.total} columns processed.")
    return "\n".join(lines)


def _md_cell(text: str) -> str:
    return text.replace("|", "\\|")


def format_report_markdown(
    report: InheritanceReport,
    preview_length: int = DEFAULT_PREVIEW_LENGTH,
    placeholder: str = DEFAULT_PLACEHOLDER,
    title: Optional[str] = None,
) -> str:
    """Markdown version of the report, one table row per actionable column."""
    lines = [f"# {title or 'Column Inheritance Report'}", ""]
    lines.append("| " + " | ".join(status.value for status in STATUS_ORDER) + " |")
    lines.append("|" + "|".join("---" for _ in STATUS_ORDER) + "|")
    lines.append("| " + " | ".join(str(report.counts.get(s, 0)) for s in STATUS_ORDER) + " |")
    lines.append("")

    if not report.actionable:
        lines.append(NOTHING_TO_DO)
        return "\n".join(lines) + "\n"

    lines.append("| " + " | ".join(TABLE_HEADER) + " |")
    lines.append("|" + "|".join("---" for _ in TABLE_HEADER) + "|")
    for entry in report.actionable:
        name, *rest = _row(entry, preview_length, placeholder)
        cells = [f"`{name}`"] + [_md_cell(cell) for cell in rest]
        lines.append("| " + " | ".join(cells) + " |")
    return "\n".join(lines) + "\n"


def report_as_dict(report: InheritanceReport) -> Dict[str, Any]:
    """Serialise the report to a plain dict (JSON-safe, full descriptions)."""
    return {
        "summary": {status.value: report.counts.get(status, 0) for status in STATUS_ORDER},
        "total_columns": report.total,
        "entities": report.entity_count,
        "entries": [
            {
                "entity": e.entity_name,
                "column": e.column_name,
                "status": e.status.value,
                "description": e.resolved_description,
                "target_file": e.target_file_path,
                "source_entity": e.source_entity_name,
                "source_column": e.source_column_name,
                "source_file": e.source_file_path,
                "candidates": list(e.candidates),
            }
            for e in report.entries
        ],
    }


def log_report(
    report: InheritanceReport,
    logger: logging.Logger,
    preview_length: int = DEFAULT_PREVIEW_LENGTH,
    placeholder: str = DEFAULT_PLACEHOLDER,
) -> None:
    for line in format_report(report, preview_length, placeholder).splitlines():
        logger.info(line)


def render_report(
    report: InheritanceReport,
    fmt: str = "text",
    preview_length: int = DEFAULT_PREVIEW_LENGTH,
    placeholder: str = DEFAULT_PLACEHOLDER,
) -> str:
    if fmt == "text":
        return format_report(report, preview_length, placeholder)
    if fmt == "markdown":
        return format_report_markdown(report, preview_length, placeholder)
    if fmt == "json":
        return json.dumps(report_as_dict(report), indent=2)
    raise ValueError(f"Unknown report format: {fmt}")


def write_report(report: InheritanceReport, output_path: str, fmt: str = "text", **kwargs) -> str:
    """Render and write the report to a file. Returns the output path."""
    content = render_report(report, fmt, **kwargs)
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content.rstrip("\n") + "\n", encoding="utf-8")
    return str(path)
