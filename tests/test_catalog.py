"""Tests for manifest loading and catalog construction."""

import json
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT / "packages" / "core_engine" / "src"))

from di_core.catalog import DERIVED, ROOT as ROOT_KIND, build_catalog, normalize_file_path
from di_core.graph import ManifestGraph
from di_core.loader import GraphUnavailableError, load_manifest, load_manifest_data

SHOP_MANIFEST = str(ROOT / "tests" / "fixtures" / "shop_manifest.json")


def _shop_catalog(**kwargs):
    return build_catalog(load_manifest(SHOP_MANIFEST), **kwargs)


# ---------------------------------------------------------------------------
# Path normalization
# ---------------------------------------------------------------------------

class TestNormalizeFilePath:
    def test_strips_project_scheme(self):
        assert normalize_file_path("shop://models/marts/schema.yml") == "models/marts/schema.yml"

    def test_plain_path_unchanged(self):
        assert normalize_file_path("seeds/country_codes.csv") == "seeds/country_codes.csv"

    def test_none_and_empty(self):
        assert normalize_file_path(None) == ""
        assert normalize_file_path("") == ""


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------

class TestBuildCatalog:
    def test_includes_models_seeds_and_sources(self):
        catalog = _shop_catalog()
        assert set(catalog) == {
            "model.shop.stg_customers",
            "model.shop.dim_customers",
            "model.shop.orders",
            "model.shop.delivery",
            "model.shop.fct_orders",
            "seed.shop.country_codes",
            "source.shop.raw.customers",
        }

    def test_tests_are_excluded(self):
        assert "test.shop.not_null_orders_order_id" not in _shop_catalog()

    def test_derived_entities_precede_roots(self):
        ids = list(_shop_catalog())
        assert ids[-1] == "source.shop.raw.customers"
        assert ids[0] == "model.shop.stg_customers"

    def test_source_display_name_is_compound(self):
        source = _shop_catalog()["source.shop.raw.customers"]
        assert source.display_name == "raw.customers"
        assert source.kind == ROOT_KIND
        assert source.parent_ids == ()

    def test_model_uses_patch_path_without_scheme(self):
        model = _shop_catalog()["model.shop.dim_customers"]
        assert model.kind == DERIVED
        assert model.file_path == "models/marts/schema.yml"

    def test_seed_falls_back_to_original_file_path(self):
        seed = _shop_catalog()["seed.shop.country_codes"]
        assert seed.file_path == "seeds/country_codes.csv"

    def test_null_description_becomes_empty_string(self):
        model = _shop_catalog()["model.shop.stg_customers"]
        assert model.columns["first_name"].description == ""
        assert model.columns["user_id"].description == "Unique customer identifier"

    def test_parent_ids_keep_graph_order(self):
        model = _shop_catalog()["model.shop.fct_orders"]
        assert model.parent_ids == (
            "model.shop.orders",
            "model.shop.delivery",
            "model.shop.not_in_manifest",
        )

    def test_duplicate_parent_ids_collapsed(self):
        graph = ManifestGraph({
            "nodes": {
                "model.p.a": {"name": "a", "resource_type": "model", "columns": {}},
                "model.p.b": {
                    "name": "b",
                    "resource_type": "model",
                    "depends_on": {"nodes": ["model.p.a", "model.p.a"]},
                    "columns": {},
                },
            }
        })
        assert build_catalog(graph)["model.p.b"].parent_ids == ("model.p.a",)

    def test_sources_can_be_excluded(self):
        catalog = _shop_catalog(include_sources=False)
        assert "source.shop.raw.customers" not in catalog

    def test_resource_types_filter(self):
        catalog = _shop_catalog(resource_types=("model",))
        assert "seed.shop.country_codes" not in catalog
        assert "model.shop.orders" in catalog

    def test_snapshot_opt_in(self):
        graph = ManifestGraph({
            "nodes": {
                "snapshot.p.s": {"name": "s", "resource_type": "snapshot", "columns": {}},
            }
        })
        assert build_catalog(graph) == {}
        assert "snapshot.p.s" in build_catalog(graph, resource_types=("model", "snapshot"))

    def test_parent_map_used_without_depends_on(self):
        graph = ManifestGraph({
            "nodes": {"model.p.b": {"name": "b", "resource_type": "model", "columns": {}}},
            "parent_map": {"model.p.b": ["model.p.a"]},
        })
        assert build_catalog(graph)["model.p.b"].parent_ids == ("model.p.a",)

    def test_node_without_name_is_rejected(self):
        graph = ManifestGraph({"nodes": {"model.p.x": {"resource_type": "model", "columns": {}}}})
        with pytest.raises(GraphUnavailableError, match="model.p.x"):
            build_catalog(graph)


# ---------------------------------------------------------------------------
# Loader
# ---------------------------------------------------------------------------

class TestLoadManifest:
    def test_missing_file(self, tmp_path):
        with pytest.raises(GraphUnavailableError, match="not found"):
            load_manifest(str(tmp_path / "manifest.json"))

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "manifest.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(GraphUnavailableError):
            load_manifest(str(path))

    def test_root_must_be_mapping(self, tmp_path):
        path = tmp_path / "manifest.json"
        path.write_text(json.dumps([1, 2]), encoding="utf-8")
        with pytest.raises(GraphUnavailableError, match="object/map"):
            load_manifest(str(path))

    def test_requires_nodes_or_sources(self, tmp_path):
        path = tmp_path / "manifest.json"
        path.write_text(json.dumps({"metadata": {}}), encoding="utf-8")
        with pytest.raises(GraphUnavailableError, match="nodes"):
            load_manifest(str(path))

    def test_yaml_manifest(self, tmp_path):
        path = tmp_path / "graph.yml"
        path.write_text(
            "nodes:\n"
            "  model.p.a:\n"
            "    name: a\n"
            "    resource_type: model\n"
            "    columns:\n"
            "      id: {description: Identifier}\n",
            encoding="utf-8",
        )
        data = load_manifest_data(str(path))
        catalog = build_catalog(ManifestGraph(data))
        assert catalog["model.p.a"].columns["id"].description == "Identifier"

    def _write_manifest(self, tmp_path, nodes):
        path = tmp_path / "manifest.json"
        path.write_text(json.dumps({"nodes": nodes}), encoding="utf-8")
        return str(path)

    def test_null_node_rejected(self, tmp_path):
        graph = load_manifest(self._write_manifest(tmp_path, {"model.a.x": None}))
        with pytest.raises(GraphUnavailableError, match="model.a.x must be a map"):
            build_catalog(graph)

    def test_columns_list_rejected(self, tmp_path):
        nodes = {"model.a.x": {"name": "x", "resource_type": "model", "columns": [{"name": "c"}]}}
        graph = load_manifest(self._write_manifest(tmp_path, nodes))
        with pytest.raises(GraphUnavailableError, match="'columns' must be a map"):
            build_catalog(graph)

    def test_column_entry_must_be_map(self, tmp_path):
        nodes = {"model.a.x": {"name": "x", "resource_type": "model", "columns": {"c": "text"}}}
        graph = load_manifest(self._write_manifest(tmp_path, nodes))
        with pytest.raises(GraphUnavailableError, match="column c must be a map"):
            build_catalog(graph)

    def test_depends_on_must_be_map(self, tmp_path):
        nodes = {"model.a.x": {"name": "x", "resource_type": "model", "depends_on": ["model.a.y"]}}
        graph = load_manifest(self._write_manifest(tmp_path, nodes))
        with pytest.raises(GraphUnavailableError, match="'depends_on' must be a map"):
            build_catalog(graph)

    def test_duplicate_column_name_rejected(self, tmp_path):
        nodes = {
            "model.a.x": {
                "name": "x",
                "resource_type": "model",
                "columns": {"id": {"name": "id"}, "ID": {"name": "id"}},
            }
        }
        graph = load_manifest(self._write_manifest(tmp_path, nodes))
        with pytest.raises(GraphUnavailableError, match="declares column id twice"):
            build_catalog(graph)


def test_entities_are_hashable():
    entity = _shop_catalog()["model.shop.fct_orders"]
    assert entity in {entity}
