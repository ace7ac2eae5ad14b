from di_core.catalog import Column, Entity, build_catalog, normalize_file_path
from di_core.classifier import auto_match, classify_column
from di_core.config import ConfigError, InheritConfig, load_config
from di_core.directive import (
    DEFAULT_DIRECTIVE_PREFIX,
    Directive,
    decode_directive,
    find_directive_source,
    inherit_desc,
    is_directive,
    resolve_directive,
)
from di_core.graph import GraphProvider, GraphUnavailableError, ManifestGraph
from di_core.issues import Issue, report_issues
from di_core.lineage import ParentMatch, build_parent_index
from di_core.loader import load_manifest
from di_core.logging_config import configure_logging
from di_core.render import (
    format_report,
    format_report_markdown,
    log_report,
    render_report,
    report_as_dict,
    write_report,
)
from di_core.report import InheritanceReport, ReportEntry, propagate_descriptions
from di_core.schema import config_issues
from di_core.status import STATUS_ORDER, Status

__all__ = [
    "auto_match",
    "build_catalog",
    "build_parent_index",
    "classify_column",
    "Column",
    "config_issues",
    "ConfigError",
    "configure_logging",
    "decode_directive",
    "DEFAULT_DIRECTIVE_PREFIX",
    "Directive",
    "Entity",
    "find_directive_source",
    "format_report",
    "format_report_markdown",
    "GraphProvider",
    "GraphUnavailableError",
    "inherit_desc",
    "InheritanceReport",
    "InheritConfig",
    "is_directive",
    "Issue",
    "load_config",
    "load_manifest",
    "log_report",
    "ManifestGraph",
    "normalize_file_path",
    "ParentMatch",
    "propagate_descriptions",
    "render_report",
    "report_as_dict",
    "report_issues",
    "ReportEntry",
    "resolve_directive",
    "Status",
    "STATUS_ORDER",
    "write_report",
]
