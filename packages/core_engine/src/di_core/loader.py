import json
import logging
from pathlib import Path
from typing import Any, Dict

import yaml

from di_core.graph import GraphUnavailableError, ManifestGraph

logger = logging.getLogger(__name__)


def load_manifest_data(path: str) -> Dict[str, Any]:
    manifest_path = Path(path)
    if not manifest_path.exists():
        raise GraphUnavailableError(f"Manifest file not found: {path}")

    try:
        with manifest_path.open("r", encoding="utf-8") as handle:
            if manifest_path.suffix.lower() == ".json":
                data = json.load(handle)
            else:
                data = yaml.safe_load(handle)
    except (OSError, json.JSONDecodeError, yaml.YAMLError) as exc:
        raise GraphUnavailableError(f"Could not read manifest {path}: {exc}") from exc

    if not isinstance(data, dict):
        raise GraphUnavailableError("Manifest must parse to an object/map at root.")

    if "nodes" not in data and "sources" not in data:
        raise GraphUnavailableError(
            f"Manifest {path} has neither 'nodes' nor 'sources'; is this a dbt manifest?"
        )

    for section in ("nodes", "sources"):
        if data.get(section) is not None and not isinstance(data[section], dict):
            raise GraphUnavailableError(f"Manifest '{section}' must be a map keyed by unique_id.")

    return data


def load_manifest(path: str) -> ManifestGraph:
    data = load_manifest_data(path)
    graph = ManifestGraph(data)
    logger.info("Loaded manifest %s with %d graph nodes.", path, len(graph))
    return graph
