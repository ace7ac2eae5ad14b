import logging
from dataclasses import dataclass
from typing import Dict, List, Mapping

from di_core.catalog import Entity
from di_core.directive import DEFAULT_DIRECTIVE_PREFIX, has_real_description

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ParentMatch:
    parent_name: str
    description: str
    file_path: str
    column_name: str


def build_parent_index(
    entity: Entity,
    catalog: Mapping[str, Entity],
    prefix: str = DEFAULT_DIRECTIVE_PREFIX,
) -> Dict[str, List[ParentMatch]]:
    """Index the direct parents' documented columns of ``entity`` by column name.

    Parents are visited in ``entity.parent_ids`` order, so each list is in
    parent order. Only real descriptions count; blank values and unresolved
    directives are not inheritable. Parents absent from the catalog
    (tests, ephemeral nodes, excluded resource types) contribute nothing.
    """
    index: Dict[str, List[ParentMatch]] = {}
    for parent_id in entity.parent_ids:
        parent = catalog.get(parent_id)
        if parent is None:
            logger.debug("%s: parent %s not in catalog, skipped.", entity.display_name, parent_id)
            continue
        for column in parent.columns.values():
            if not has_real_description(column, prefix):
                continue
            index.setdefault(column.name, []).append(
                ParentMatch(
                    parent_name=parent.display_name,
                    description=column.description,
                    file_path=parent.file_path,
                    column_name=column.name,
                )
            )
    return index
