"""Read-only graph providers for the inheritance engine.

The engine never builds the dependency graph itself. It consumes an object
exposing two operations:

  - ``nodes()``: every node in the graph, sources included
  - ``parent_ids(unique_id)``: the node's direct parents, in stored order

``ManifestGraph`` adapts a dbt ``manifest.json`` document (or any mapping with
the same ``nodes`` / ``sources`` layout) to that contract.
"""

from typing import Any, Dict, Iterator, List, Mapping


class GraphUnavailableError(RuntimeError):
    """The dependency graph could not be read; no report can be produced."""


class GraphProvider:
    """Interface for host-supplied dependency graphs."""

    def nodes(self) -> Iterator[Dict[str, Any]]:
        raise NotImplementedError

    def parent_ids(self, unique_id: str) -> List[str]:
        raise NotImplementedError


class ManifestGraph(GraphProvider):
    """Graph provider backed by a dbt manifest mapping."""

    def __init__(self, manifest: Mapping[str, Any]) -> None:
        self._nodes: Dict[str, Dict[str, Any]] = dict(manifest.get("nodes") or {})
        self._sources: Dict[str, Dict[str, Any]] = dict(manifest.get("sources") or {})
        self._parent_map: Dict[str, List[str]] = dict(manifest.get("parent_map") or {})

    def nodes(self) -> Iterator[Dict[str, Any]]:
        for key, node in self._nodes.items():
            yield _with_defaults(key, node)
        for key, source in self._sources.items():
            yield _with_defaults(key, source, resource_type="source")

    def parent_ids(self, unique_id: str) -> List[str]:
        node = self._nodes.get(unique_id)
        if node is None:
            # Sources are roots.
            return []
        depends_on = node.get("depends_on") or {}
        if not isinstance(depends_on, dict):
            raise GraphUnavailableError(f"Graph node {unique_id} 'depends_on' must be a map.")
        parents = depends_on.get("nodes")
        if parents is None:
            parents = self._parent_map.get(unique_id, [])
        if not isinstance(parents, list):
            raise GraphUnavailableError(f"Graph node {unique_id} parents must be a list.")
        return [str(parent) for parent in parents]

    def __len__(self) -> int:
        return len(self._nodes) + len(self._sources)


def _with_defaults(key: str, node: Any, resource_type: str = "") -> Dict[str, Any]:
    if not isinstance(node, dict):
        raise GraphUnavailableError(f"Graph node {key} must be a map.")
    merged = dict(node)
    merged.setdefault("unique_id", key)
    if resource_type:
        merged.setdefault("resource_type", resource_type)
    return merged
