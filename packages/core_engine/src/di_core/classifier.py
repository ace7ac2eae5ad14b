from typing import List, Mapping

from di_core.catalog import Column, Entity
from di_core.directive import DEFAULT_DIRECTIVE_PREFIX, is_directive, resolve_directive
from di_core.lineage import ParentMatch
from di_core.status import Classification, Status


def auto_match(column_name: str, parent_index: Mapping[str, List[ParentMatch]]) -> Classification:
    matches = parent_index.get(column_name, [])
    if not matches:
        return Classification(status=Status.NO_SOURCE)

    if len(matches) == 1:
        match = matches[0]
        return Classification(
            status=Status.INHERITED,
            description=match.description,
            source_entity_name=match.parent_name,
            source_column_name=match.column_name,
            source_file_path=match.file_path,
        )

    # Several parents qualify; never pick one silently.
    candidates: List[str] = []
    for match in matches:
        if match.parent_name not in candidates:
            candidates.append(match.parent_name)
    return Classification(status=Status.AMBIGUOUS, candidates=tuple(candidates))


def classify_column(
    column: Column,
    parent_index: Mapping[str, List[ParentMatch]],
    catalog: Mapping[str, Entity],
    prefix: str = DEFAULT_DIRECTIVE_PREFIX,
) -> Classification:
    """Assign exactly one status to ``column``.

    Precedence: a directive is resolved explicitly, a blank description is
    auto-matched against the parents, anything else is already documented.
    """
    if is_directive(column.description, prefix):
        return resolve_directive(column.description, catalog, prefix)

    if not column.description.strip():
        return auto_match(column.name, parent_index)

    return Classification(status=Status.ALREADY_DOCUMENTED, description=column.description)
