"""Explicit inheritance directives.

A directive is a plain description string of the form::

    Inherited: <target>.<column>

YAML authors produce it with ``inherit_desc`` (or ``di directive``) for
renamed columns, or to pick one parent when several share a column name.
The string is decoded into a ``Directive`` as soon as it is read, so the
parsing rules live only in ``decode_directive``.

Known limitation: the payload is split at the first ``.``. A compound
target such as a source ``raw.customers`` cannot be written out in full
(``raw.customers.id`` decodes to target ``raw`` and column ``customers.id``)
and resolves as unresolved. Reference sources by their table name instead
(``customers.id``); the resolver matches it against ``raw.customers``.
"""

import logging
from dataclasses import dataclass
from typing import Mapping, Optional, Tuple

from di_core.catalog import Column, Entity
from di_core.status import Classification, Status

logger = logging.getLogger(__name__)

DEFAULT_DIRECTIVE_PREFIX = "Inherited: "
SEPARATOR = "."


@dataclass(frozen=True)
class Directive:
    target_name: str
    target_column: str


def inherit_desc(target_name: str, target_column: str, prefix: str = DEFAULT_DIRECTIVE_PREFIX) -> str:
    """Encode a directive pointing at ``target_name.target_column``.

    Anything that reads descriptions verbatim (``dbt docs generate``, BI
    tools, the warehouse catalog) sees this placeholder, not the resolved
    text. Use the inheritance report to see resolved descriptions.
    """
    return f"{prefix}{target_name}{SEPARATOR}{target_column}"


def is_directive(description: Optional[str], prefix: str = DEFAULT_DIRECTIVE_PREFIX) -> bool:
    if not description:
        return False
    return description.strip().startswith(prefix)


def has_real_description(column: Optional[Column], prefix: str = DEFAULT_DIRECTIVE_PREFIX) -> bool:
    """True when the column carries inheritable text (not blank, not a directive)."""
    if column is None or not column.description.strip():
        return False
    return not is_directive(column.description, prefix)


def decode_directive(description: str, prefix: str = DEFAULT_DIRECTIVE_PREFIX) -> Optional[Directive]:
    """Return the decoded directive, or ``None`` when the payload is malformed."""
    if not is_directive(description, prefix):
        return None

    payload = description.strip()[len(prefix):].strip()
    target_name, sep, target_column = payload.partition(SEPARATOR)
    if not sep or not target_name or not target_column:
        return None

    if SEPARATOR in target_column:
        logger.warning(
            "Directive payload '%s' has more than one '%s'; it is read as target '%s', column '%s'. "
            "Compound targets cannot be referenced in full, use the table name alone.",
            payload,
            SEPARATOR,
            target_name,
            target_column,
        )
    return Directive(target_name=target_name, target_column=target_column)


def _candidates(target_name: str, catalog: Mapping[str, Entity]) -> Tuple[Entity, ...]:
    exact = [e for e in catalog.values() if e.display_name == target_name]
    suffixed = [
        e for e in catalog.values()
        if e.display_name != target_name and e.display_name.endswith(SEPARATOR + target_name)
    ]
    return tuple(exact + suffixed)


def find_directive_source(
    directive: Directive,
    catalog: Mapping[str, Entity],
    prefix: str = DEFAULT_DIRECTIVE_PREFIX,
) -> Optional[Tuple[Entity, Column]]:
    """Locate the entity/column a directive points at.

    Exact ``display_name`` matches are tried before suffix matches
    (``customers`` also matches ``raw.customers``), each in catalog order.
    The first candidate whose column carries a real description wins.
    """
    for entity in _candidates(directive.target_name, catalog):
        column = entity.columns.get(directive.target_column)
        if has_real_description(column, prefix):
            return entity, column
    return None


def resolve_directive(
    description: str,
    catalog: Mapping[str, Entity],
    prefix: str = DEFAULT_DIRECTIVE_PREFIX,
) -> Classification:
    """Classify a directive description as resolved or unresolved. Never raises."""
    directive = decode_directive(description, prefix)
    if directive is None:
        logger.debug("Malformed directive: %r", description)
        return Classification(status=Status.UNRESOLVED)

    found = find_directive_source(directive, catalog, prefix)
    if found is None:
        return Classification(
            status=Status.UNRESOLVED,
            source_entity_name=directive.target_name,
            source_column_name=directive.target_column,
        )

    entity, column = found
    return Classification(
        status=Status.RESOLVED,
        description=column.description,
        source_entity_name=entity.display_name,
        source_column_name=column.name,
        source_file_path=entity.file_path,
    )
