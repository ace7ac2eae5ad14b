from dataclasses import dataclass
from enum import Enum
from typing import Tuple


class Status(str, Enum):
    """Inheritance outcome of a single column. Declaration order is report order."""

    INHERITED = "inherited"
    RESOLVED = "resolved"
    AMBIGUOUS = "ambiguous"
    NO_SOURCE = "no_source"
    UNRESOLVED = "unresolved"
    ALREADY_DOCUMENTED = "already_documented"

    def __str__(self) -> str:
        return self.value


STATUS_ORDER: Tuple[Status, ...] = tuple(Status)


@dataclass(frozen=True)
class Classification:
    """Outcome for one column before it is attached to its entity."""

    status: Status
    description: str = ""
    source_entity_name: str = ""
    source_column_name: str = ""
    source_file_path: str = ""
    candidates: Tuple[str, ...] = ()
