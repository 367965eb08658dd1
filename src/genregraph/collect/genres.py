from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Set, Tuple, TypedDict

from ..model import Document, LinkData, NodeData, RelationshipType

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

logger = logging.getLogger(__name__)

_TY_ORDER = {ty.value: i for i, ty in enumerate(RelationshipType)}


class GenreRecord(TypedDict, total=False):
    name: str
    description: str
    stylistic_origins: List[str]
    derivatives: List[str]
    subgenres: List[str]
    fusion_genres: List[str]


def _unsanitize_page_name(stem: str) -> str:
    return stem.replace("⧸", "/")


def load_genre_records(directory: Path) -> Dict[str, GenreRecord]:
    """Read one ``<page>.toml`` record per genre page from ``directory``.

    Page names containing ``/`` are stored with BIG SOLIDUS (U+29F8) in their file name.
    """
    records: Dict[str, GenreRecord] = {}
    for path in sorted(directory.glob("*.toml")):
        with path.open("rb") as f:
            data = tomllib.load(f)
        # processed records written by older tooling use wikitext_description
        if "description" not in data and "wikitext_description" in data:
            data["description"] = data.pop("wikitext_description")
        records[_unsanitize_page_name(path.stem)] = data  # type: ignore[assignment]
    logger.info("Loaded %d genre records from %s", len(records), directory)
    return records


def _link_key(link: LinkData) -> Tuple[int, int, int]:
    return (int(link["source"]), int(link["target"]), _TY_ORDER[link["ty"]])


def build_document(genres: Mapping[str, GenreRecord], dump_date: Optional[str] = None) -> Document:
    """Build the ``{nodes, links, max_degree}`` document from genre records.

    Pages are ordered by name and numbered from 0. References to pages that
    have no record are dropped with a warning.
    """
    order = sorted(genres)
    page_to_id = {page: str(i) for i, page in enumerate(order)}

    def resolve(page: str, referrer: str, field: str) -> Optional[str]:
        target = page_to_id.get(page)
        if target is None:
            logger.warning("Genre %r lists unknown page %r in %s", referrer, page, field)
        return target

    seen: Set[Tuple[str, str, str]] = set()
    links: List[LinkData] = []

    def add(source: Optional[str], target: Optional[str], ty: RelationshipType) -> None:
        if source is None or target is None:
            return
        key = (source, target, ty.value)
        if key in seen:
            return
        seen.add(key)
        links.append({"source": source, "target": target, "ty": ty.value})

    for page in order:
        record = genres[page]
        genre_id = page_to_id[page]
        for origin in record.get("stylistic_origins", []):
            add(resolve(origin, page, "stylistic_origins"), genre_id, RelationshipType.DERIVATIVE)
        for derivative in record.get("derivatives", []):
            add(genre_id, resolve(derivative, page, "derivatives"), RelationshipType.DERIVATIVE)
        for subgenre in record.get("subgenres", []):
            add(genre_id, resolve(subgenre, page, "subgenres"), RelationshipType.SUBGENRE)
        for fusion in record.get("fusion_genres", []):
            add(resolve(fusion, page, "fusion_genres"), genre_id, RelationshipType.FUSION_GENRE)

    links.sort(key=_link_key)

    incident: Dict[str, Set[int]] = {genre_id: set() for genre_id in page_to_id.values()}
    for i, link in enumerate(links):
        incident[link["source"]].add(i)
        incident[link["target"]].add(i)

    nodes: List[NodeData] = []
    for page in order:
        record = genres[page]
        genre_id = page_to_id[page]
        node: NodeData = {
            "id": genre_id,
            "label": record.get("name") or page,
            "degree": len(incident[genre_id]),
        }
        description = (record.get("description") or "").strip()
        if description:
            node["description"] = description
        nodes.append(node)

    doc: Document = {
        "nodes": nodes,
        "links": links,
        "max_degree": max((n["degree"] for n in nodes), default=0),
    }
    if dump_date:
        doc["dump_date"] = dump_date
    return doc


def generate_demo_document() -> Document:
    genres: Dict[str, GenreRecord] = {
        "Blues": {
            "name": "Blues",
            "description": "'''Blues''' is a [[music genre]] and [[musical form]].\n\nIt originated in the [[Deep South]] around the 1860s.",
            "derivatives": ["Rock and roll", "Jazz"],
        },
        "Jazz": {
            "name": "Jazz",
            "description": "'''Jazz''' is a music genre that originated in [[New Orleans]].",
            "stylistic_origins": ["Blues", "Ragtime"],
            "fusion_genres": ["Jazz fusion"],
        },
        "Ragtime": {
            "name": "Ragtime",
            "description": "'''Ragtime''' is a musical style with a syncopated rhythm.\nIt peaked between 1895 and 1919.",
            "derivatives": ["Jazz"],
        },
        "Rock and roll": {
            "name": "Rock and roll",
            "description": "'''Rock and roll''' is a genre of [[popular music]] from the [[United States]].",
            "stylistic_origins": ["Blues"],
            "subgenres": ["Rockabilly"],
            "fusion_genres": ["Jazz fusion"],
        },
        "Rockabilly": {
            "name": "Rockabilly",
            "stylistic_origins": ["Rock and roll"],
        },
        "Jazz fusion": {
            "name": "Jazz fusion",
            "description": "'''Jazz fusion''' ({{lang|fr|fusion jazz}}) combines jazz with [[rock music|rock]].",
        },
    }
    return build_document(genres, dump_date="2024-01-01")
