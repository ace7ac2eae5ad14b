"""Column inheritance report.

``propagate_descriptions`` is the engine entry point: it builds the catalog
from a graph provider, classifies every column of every derived entity and
returns an ``InheritanceReport``. Rendering is left to ``di_core.render``.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from di_core.catalog import build_catalog, derived_entities
from di_core.classifier import classify_column
from di_core.config import InheritConfig
from di_core.graph import GraphProvider, GraphUnavailableError
from di_core.lineage import build_parent_index
from di_core.status import STATUS_ORDER, Status

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReportEntry:
    entity_name: str
    column_name: str
    status: Status
    resolved_description: str = ""
    target_file_path: str = ""
    source_entity_name: str = ""
    source_column_name: str = ""
    source_file_path: str = ""
    candidates: Tuple[str, ...] = ()

    @property
    def status_label(self) -> str:
        if self.status == Status.AMBIGUOUS and self.candidates:
            return f"{self.status.value} ({', '.join(self.candidates)})"
        return self.status.value

    @property
    def qualified_name(self) -> str:
        return f"{self.entity_name}.{self.column_name}"


@dataclass
class InheritanceReport:
    entries: List[ReportEntry] = field(default_factory=list)
    counts: Dict[Status, int] = field(default_factory=dict)
    entity_count: int = 0

    @property
    def total(self) -> int:
        return len(self.entries)

    @property
    def actionable(self) -> List[ReportEntry]:
        return [e for e in self.entries if e.status != Status.ALREADY_DOCUMENTED]

    def by_status(self, status: Status) -> List[ReportEntry]:
        return [e for e in self.entries if e.status == status]


def tally(entries: List[ReportEntry]) -> Dict[Status, int]:
    counts: Dict[Status, int] = {status: 0 for status in STATUS_ORDER}
    for entry in entries:
        counts[entry.status] += 1
    return counts


def propagate_descriptions(
    graph: Optional[GraphProvider],
    config: Optional[InheritConfig] = None,
) -> InheritanceReport:
    if graph is None:
        raise GraphUnavailableError("No dependency graph supplied.")
    config = config or InheritConfig()
    prefix = config.directive_prefix

    catalog = build_catalog(
        graph,
        resource_types=config.resource_types,
        include_sources=config.include_sources,
    )

    entries: List[ReportEntry] = []
    entities = derived_entities(catalog)
    for entity in entities:
        parent_index = build_parent_index(entity, catalog, prefix)
        for column in entity.columns.values():
            outcome = classify_column(column, parent_index, catalog, prefix)
            entries.append(
                ReportEntry(
                    entity_name=entity.display_name,
                    column_name=column.name,
                    status=outcome.status,
                    resolved_description=outcome.description,
                    target_file_path=entity.file_path,
                    source_entity_name=outcome.source_entity_name,
                    source_column_name=outcome.source_column_name,
                    source_file_path=outcome.source_file_path,
                    candidates=outcome.candidates,
                )
            )

    entries.sort(key=lambda e: (e.entity_name, e.column_name))
    logger.info("Processed %d columns across %d entities.", len(entries), len(entities))
    return InheritanceReport(entries=entries, counts=tally(entries), entity_count=len(entities))
