"""Tests for loading datasets and preparing them for the viewer."""

import json

import httpx
import pytest

from genregraph.collect.genres import generate_demo_document
from genregraph.exceptions import FetchError
from genregraph.model import GraphDataset, GraphEdge, GraphNode, RelationshipType
from genregraph.render import fetch_document, load_dataset, renderable_document

URL = "https://example.org/data.json"


def _client(handler):
    return httpx.Client(transport=httpx.MockTransport(handler))


class TestFetchDocument:
    def test_file(self, tmp_path):
        path = tmp_path / "data.json"
        path.write_text(json.dumps({"nodes": []}), encoding="utf-8")
        assert fetch_document(path) == {"nodes": []}

    def test_missing_file(self, tmp_path):
        with pytest.raises(FetchError):
            fetch_document(tmp_path / "nope.json")

    def test_invalid_json_file(self, tmp_path):
        path = tmp_path / "data.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(FetchError) as exc:
            fetch_document(path)
        assert "invalid JSON" in str(exc.value)

    def test_url(self):
        with _client(lambda request: httpx.Response(200, json={"ok": True})) as client:
            assert fetch_document(URL, client=client) == {"ok": True}

    def test_url_http_error(self):
        with _client(lambda request: httpx.Response(404)) as client:
            with pytest.raises(FetchError):
                fetch_document(URL, client=client)

    def test_url_invalid_json(self):
        with _client(lambda request: httpx.Response(200, text="<html>")) as client:
            with pytest.raises(FetchError):
                fetch_document(URL, client=client)


class TestLoadDataset:
    def test_loads_demo(self, tmp_path):
        path = tmp_path / "data.json"
        path.write_text(json.dumps(generate_demo_document()), encoding="utf-8")
        result = load_dataset(str(path))
        assert result.ok
        assert len(result.dataset.nodes) == 6

    def test_fetch_failure_falls_back_to_empty(self, tmp_path):
        result = load_dataset(tmp_path / "nope.json")
        assert not result.ok
        assert result.dataset == GraphDataset.empty()
        assert "nope.json" in result.error

    def test_malformed_document_falls_back_to_empty(self):
        with _client(lambda request: httpx.Response(200, json={"nodes": []})) as client:
            result = load_dataset(URL, client=client)
        assert not result.ok
        assert result.dataset.nodes == {}
        assert "links" in result.error


class TestRenderableDocument:
    def test_encodes_elements(self):
        ds = GraphDataset(
            nodes={
                "a": GraphNode("a", "A", 0),
                "b": GraphNode("b", "B", 2),
            },
            edges=(GraphEdge("a", "b", RelationshipType.SUBGENRE),),
            max_degree=2,
        )
        doc = renderable_document(ds, base_size=4.0)
        assert doc["nodes"] == [
            {"id": "a", "label": "A", "degree": 0, "color": "hsl(97, 70%, 60%)", "size": 1.0},
            {"id": "b", "label": "B", "degree": 2, "color": "hsl(98, 70%, 60%)", "size": 4.0},
        ]
        assert doc["links"] == [
            {"source": "a", "target": "b", "ty": "Subgenre", "color": "hsl(120, 70%, 60%)"}
        ]
        assert doc["max_degree"] == 2
        assert [entry["label"] for entry in doc["legend"]] == ["Derivative", "Subgenre", "Fusion Genre"]
        assert "error" not in doc

    def test_empty_with_error(self):
        doc = renderable_document(GraphDataset.empty(), error="boom")
        assert doc["nodes"] == []
        assert doc["links"] == []
        assert doc["error"] == "boom"

    def test_zero_max_degree_sizes_are_finite(self):
        ds = GraphDataset(nodes={"a": GraphNode("a", "A", 0)}, max_degree=0)
        assert renderable_document(ds)["nodes"][0]["size"] == 1.0
