"""Load a genre graph dataset and prepare it for the browser viewer."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import httpx

from .encoding import color_of, edge_color, legend, size_of
from .exceptions import DatasetError, FetchError
from .model import GraphDataset, dataset_from_document

logger = logging.getLogger(__name__)

FETCH_TIMEOUT = 15.0


@dataclass(frozen=True)
class LoadResult:
    dataset: GraphDataset
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _is_url(source: str) -> bool:
    return source.startswith(("http://", "https://"))


def fetch_document(source: Union[str, Path], client: Optional[httpx.Client] = None) -> Any:
    """Read the dataset document once from a file path or an http(s) URL."""
    source = str(source)
    if _is_url(source):
        try:
            if client is None:
                with httpx.Client(timeout=FETCH_TIMEOUT, follow_redirects=True) as own:
                    resp = own.get(source)
            else:
                resp = client.get(source)
            resp.raise_for_status()
            return resp.json()
        except httpx.HTTPError as ex:
            raise FetchError(source, str(ex)) from ex
        except ValueError as ex:
            raise FetchError(source, f"invalid JSON: {ex}") from ex

    try:
        with open(source, "r", encoding="utf-8") as f:
            return json.load(f)
    except OSError as ex:
        raise FetchError(source, ex.strerror or str(ex)) from ex
    except ValueError as ex:
        raise FetchError(source, f"invalid JSON: {ex}") from ex


def load_dataset(source: Union[str, Path], client: Optional[httpx.Client] = None) -> LoadResult:
    """Fetch and parse the dataset, falling back to an empty graph on failure."""
    try:
        dataset = dataset_from_document(fetch_document(source, client=client))
    except (FetchError, DatasetError) as ex:
        logger.warning("Could not load dataset from %s: %s", source, ex)
        return LoadResult(dataset=GraphDataset.empty(), error=str(ex))
    logger.info("Loaded %d nodes and %d links from %s", len(dataset.nodes), len(dataset.edges), source)
    return LoadResult(dataset=dataset)


def renderable_document(
    dataset: GraphDataset, base_size: float = 4.0, error: Optional[str] = None
) -> Dict[str, Any]:
    """Attach per-element colors and sizes so the viewer does no encoding of its own.

    ``error`` is shown by the viewer as a banner over the (empty) graph.
    """
    nodes: List[Dict[str, Any]] = [
        {
            "id": node.id,
            "label": node.label,
            "degree": node.degree,
            "color": color_of(node.id),
            "size": size_of(node.degree, dataset.max_degree, base_size),
        }
        for node in dataset.nodes.values()
    ]
    links: List[Dict[str, Any]] = [
        {
            "source": edge.source,
            "target": edge.target,
            "ty": edge.relationship.value,
            "color": edge_color(edge.relationship),
        }
        for edge in dataset.edges
    ]
    doc: Dict[str, Any] = {
        "nodes": nodes,
        "links": links,
        "max_degree": dataset.max_degree,
        "legend": [{"label": label, "color": color} for label, color in legend()],
    }
    if error:
        doc["error"] = error
    return doc
