"""Deterministic color and size encoding for graph elements.

Nothing here depends on a stored palette or on session state: a node id always
maps to the same hue, and a relationship type always maps to the same color.
"""

from __future__ import annotations

import colorsys
from typing import List, Tuple

from .model import RelationshipType

SATURATION = 70
LIGHTNESS = 60

_HASH_MULTIPLIER = 31
_HASH_MODULUS = 2**32


def hsl(hue: int) -> str:
    return f"hsl({hue}, {SATURATION}%, {LIGHTNESS}%)"


def hsl_to_hex(hue: int) -> str:
    """The same color as ``hsl(hue)`` in #rrggbb form, for terminals."""
    r, g, b = colorsys.hls_to_rgb(hue / 360, LIGHTNESS / 100, SATURATION / 100)
    return "#{:02x}{:02x}{:02x}".format(round(r * 255), round(g * 255), round(b * 255))


def _utf16_units(value: str) -> List[int]:
    data = value.encode("utf-16-le")
    return [int.from_bytes(data[i : i + 2], "little") for i in range(0, len(data), 2)]


def hue_of(node_id: str) -> int:
    """Hash ``node_id`` onto [0, 360) with a 32-bit multiply-add.

    Characters outside the BMP count as two UTF-16 code units so browser and
    Python renderings of the same id agree.
    """
    acc = 0
    for unit in _utf16_units(node_id):
        acc = (acc * _HASH_MULTIPLIER + unit) % _HASH_MODULUS
    return acc % 360


def color_of(node_id: str) -> str:
    return hsl(hue_of(node_id))


def size_of(degree: int, max_degree: int, base: float = 4.0) -> float:
    """Scale ``base`` linearly from 25% at degree 0 to 100% at ``max_degree``.

    A ``max_degree`` of 0 gives every node 25% of ``base``. Degrees above
    ``max_degree`` are not clamped.
    """
    ratio = degree / max_degree if max_degree else 0.0
    return base * (0.25 + ratio * 0.75)


EDGE_HUES = {
    RelationshipType.DERIVATIVE: 0,
    RelationshipType.SUBGENRE: 120,
    RelationshipType.FUSION_GENRE: 240,
}

LEGEND_LABELS = {
    RelationshipType.DERIVATIVE: "Derivative",
    RelationshipType.SUBGENRE: "Subgenre",
    RelationshipType.FUSION_GENRE: "Fusion Genre",
}


def edge_color(relationship: RelationshipType) -> str:
    return hsl(EDGE_HUES[relationship])


def legend() -> List[Tuple[str, str]]:
    return [(LEGEND_LABELS[ty], edge_color(ty)) for ty in RelationshipType]


def edge_hex(relationship: RelationshipType) -> str:
    return hsl_to_hex(EDGE_HUES[relationship])
