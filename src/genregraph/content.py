"""Simplified content nodes produced from description markup.

A parsed description is a ``NodeSequence``: a tuple of ``ContentNode`` in
source order. Only the top level of the sequence matters for truncation;
children belong to their parent node and are never scanned for boundaries.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

PARAGRAPH_BREAK = "paragraph-break"
NEWLINE = "newline"

BOUNDARY_KINDS = frozenset({PARAGRAPH_BREAK, NEWLINE})


@dataclass(frozen=True)
class ContentNode:
    kind: str
    text: Optional[str] = None
    target: Optional[str] = None
    children: Tuple["ContentNode", ...] = ()
    params: Tuple[Tuple[Optional[str], Tuple["ContentNode", ...]], ...] = ()


NodeSequence = Tuple[ContentNode, ...]


def text(value: str) -> ContentNode:
    return ContentNode("text", text=value)


def paragraph_break() -> ContentNode:
    return ContentNode(PARAGRAPH_BREAK)


def newline(from_br: bool = False) -> ContentNode:
    # target marks a <br> tag so inner_text can stop at it
    return ContentNode(NEWLINE, target="br" if from_br else None)


def is_boundary(node: ContentNode) -> bool:
    """Whether this node can end a short description."""
    return node.kind in BOUNDARY_KINDS
