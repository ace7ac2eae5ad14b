"""Flatten a dependency graph into a uniform entity/column catalog."""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from di_core.graph import GraphProvider, GraphUnavailableError

logger = logging.getLogger(__name__)

ROOT = "root"
DERIVED = "derived"

DEFAULT_RESOURCE_TYPES: Tuple[str, ...] = ("model", "seed")
SOURCE_RESOURCE_TYPE = "source"


@dataclass(frozen=True)
class Column:
    name: str
    description: str = ""


@dataclass(frozen=True)
class Entity:
    id: str
    display_name: str
    kind: str
    resource_type: str
    file_path: str
    parent_ids: Tuple[str, ...] = ()
    columns: Dict[str, Column] = field(default_factory=dict, hash=False)


def normalize_file_path(path: Optional[str]) -> str:
    """Strip a ``<scheme>://`` prefix, e.g. ``project://models/a.yml`` -> ``models/a.yml``."""
    if not path:
        return ""
    text = str(path)
    if "://" in text:
        text = text.split("://", 1)[1]
    return text


def _columns(node: Mapping[str, Any]) -> Dict[str, Column]:
    ident = node.get("unique_id")
    raw_columns = node.get("columns") or {}
    if not isinstance(raw_columns, dict):
        raise GraphUnavailableError(f"Graph node {ident} 'columns' must be a map.")
    columns: Dict[str, Column] = {}
    for key, col in raw_columns.items():
        col = col or {}
        if not isinstance(col, dict):
            raise GraphUnavailableError(f"Graph node {ident} column {key} must be a map.")
        name = str(col.get("name") or key)
        if name in columns:
            raise GraphUnavailableError(f"Graph node {ident} declares column {name} twice.")
        description = col.get("description")
        columns[name] = Column(name=name, description="" if description is None else str(description))
    return columns


def _unique_parents(parent_ids: Iterable[str]) -> Tuple[str, ...]:
    seen: List[str] = []
    for parent_id in parent_ids:
        if parent_id not in seen:
            seen.append(parent_id)
    return tuple(seen)


def _require(node: Mapping[str, Any], key: str) -> str:
    value = node.get(key)
    if not value:
        ident = node.get("unique_id") or node.get("name") or "<unknown>"
        raise GraphUnavailableError(f"Graph node {ident} is missing '{key}'.")
    return str(value)


def build_catalog(
    graph: GraphProvider,
    resource_types: Iterable[str] = DEFAULT_RESOURCE_TYPES,
    include_sources: bool = True,
) -> Dict[str, Entity]:
    """Return ``unique_id -> Entity`` for every documentable node in ``graph``.

    Derived entities (models, seeds, optionally snapshots) come first in graph
    order, followed by root entities (sources). Any other node type is left
    out of the catalog.
    """
    wanted = set(resource_types)
    derived: Dict[str, Entity] = {}
    roots: Dict[str, Entity] = {}

    for node in graph.nodes():
        resource_type = str(node.get("resource_type", ""))

        if resource_type == SOURCE_RESOURCE_TYPE:
            if not include_sources:
                continue
            unique_id = _require(node, "unique_id")
            name = _require(node, "name")
            source_name = node.get("source_name")
            display_name = f"{source_name}.{name}" if source_name else name
            roots[unique_id] = Entity(
                id=unique_id,
                display_name=display_name,
                kind=ROOT,
                resource_type=resource_type,
                file_path=normalize_file_path(node.get("original_file_path")),
                columns=_columns(node),
            )
        elif resource_type in wanted:
            unique_id = _require(node, "unique_id")
            derived[unique_id] = Entity(
                id=unique_id,
                display_name=_require(node, "name"),
                kind=DERIVED,
                resource_type=resource_type,
                file_path=normalize_file_path(node.get("patch_path") or node.get("original_file_path")),
                parent_ids=_unique_parents(graph.parent_ids(unique_id)),
                columns=_columns(node),
            )

    catalog: Dict[str, Entity] = {}
    catalog.update(derived)
    catalog.update(roots)
    logger.info("Built catalog with %d entities.", len(catalog))
    return catalog


def derived_entities(catalog: Mapping[str, Entity]) -> List[Entity]:
    return [entity for entity in catalog.values() if entity.kind == DERIVED]
