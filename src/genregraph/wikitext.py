"""Turn wikitext descriptions into simplified content nodes.

Parsing is done by mwparserfromhell; this module only flattens its node tree
into ``ContentNode`` kinds and splits text runs at line breaks so truncation can
find them.
"""

from __future__ import annotations

import re
from typing import Iterable, List, Optional

import mwparserfromhell
from mwparserfromhell.nodes import (
    Argument,
    Comment,
    ExternalLink,
    Heading,
    HTMLEntity,
    Tag,
    Template,
    Text,
    Wikilink,
)
from mwparserfromhell.wikicode import Wikicode

from .content import NEWLINE, PARAGRAPH_BREAK, ContentNode, NodeSequence, newline, paragraph_break

# A blank line (possibly holding only spaces) ends a paragraph; a lone line break is a newline.
_BREAK_RE = re.compile(r"\r?\n(?:[ \t]*\r?\n)+|\r?\n")

_WIKI_MARKUP_KINDS = {"'''": "bold", "''": "italic"}

_LANG_TEMPLATES = {"lang"}
_TRANSLITERATION_TEMPLATES = {"transliteration", "tlit", "transl"}


def _split_text(value: str) -> List[ContentNode]:
    out: List[ContentNode] = []
    pos = 0
    for m in _BREAK_RE.finditer(value):
        if m.start() > pos:
            out.append(ContentNode("text", text=value[pos : m.start()]))
        out.append(newline() if m.group(0) in ("\n", "\r\n") else paragraph_break())
        pos = m.end()
    if pos < len(value):
        out.append(ContentNode("text", text=value[pos:]))
    return out


def _simplify(code: Optional[Wikicode]) -> NodeSequence:
    if code is None:
        return ()
    out: List[ContentNode] = []
    for node in code.nodes:
        out.extend(_simplify_node(node))
    return tuple(out)


def _simplify_node(node) -> List[ContentNode]:
    if isinstance(node, Text):
        return _split_text(node.value)
    if isinstance(node, Wikilink):
        title = str(node.title).strip()
        shown = _simplify(node.text) if node.text is not None else (ContentNode("text", text=title),)
        return [ContentNode("link", target=title, children=shown)]
    if isinstance(node, ExternalLink):
        url = str(node.url).strip()
        return [ContentNode("ext-link", target=url, children=_simplify(node.title))]
    if isinstance(node, Tag):
        name = str(node.tag).strip().lower()
        if name == "br":
            return [newline(from_br=True)]
        kind = _WIKI_MARKUP_KINDS.get(node.wiki_markup or "", "tag")
        return [ContentNode(kind, target=name, children=_simplify(node.contents))]
    if isinstance(node, Template):
        params = tuple(
            (str(p.name).strip() if p.showkey else None, _simplify(p.value)) for p in node.params
        )
        return [ContentNode("template", target=str(node.name).strip(), params=params)]
    if isinstance(node, Heading):
        return [ContentNode("heading", text=str(node.level), children=_simplify(node.title))]
    if isinstance(node, Comment):
        return [ContentNode("comment", text=str(node.contents))]
    if isinstance(node, HTMLEntity):
        return [ContentNode("entity", text=node.normalize())]
    if isinstance(node, Argument):
        return [ContentNode("parameter", target=str(node.name).strip())]
    return [ContentNode("unknown", text=str(node))]


def parse_and_simplify(wikitext: str) -> NodeSequence:
    """Parse ``wikitext`` into a flat, source-ordered sequence of content nodes."""
    return _simplify(mwparserfromhell.parse(wikitext))


def _template_text(node: ContentNode, stop_after_br: bool) -> str:
    name = (node.target or "").lower()
    named = [(k, v) for k, v in node.params if k is not None]
    positional = [v for k, v in node.params if k is None]

    if name in _LANG_TEMPLATES:
        # the text is `|text=` or the second positional argument
        for key, value in named:
            if key == "text":
                return inner_text(value, stop_after_br)
        if len(positional) >= 2:
            return inner_text(positional[1], stop_after_br)
        return ""
    if name in _TRANSLITERATION_TEMPLATES:
        # with three positional arguments the second one is the scheme
        if len(positional) >= 3:
            return inner_text(positional[2], stop_after_br)
        if len(positional) >= 2:
            return inner_text(positional[1], stop_after_br)
        return ""
    return ""


def _node_text(node: ContentNode, stop_after_br: bool) -> str:
    if node.kind in ("text", "entity"):
        return node.text or ""
    if node.kind == NEWLINE:
        return "\n"
    if node.kind == PARAGRAPH_BREAK:
        return "\n\n"
    if node.kind in ("link", "bold", "italic", "heading"):
        return inner_text(node.children, stop_after_br)
    if node.kind == "tag" and node.target not in ("ref", "references"):
        return inner_text(node.children, stop_after_br)
    if node.kind == "template":
        return _template_text(node, stop_after_br)
    return ""


def inner_text(nodes: Iterable[ContentNode], stop_after_br: bool = False) -> str:
    """Plain text of ``nodes`` with formatting dropped, trimmed.

    Templates yield nothing except the language and transliteration ones, whose
    displayed text is picked out of their arguments.
    """
    parts: List[str] = []
    for node in nodes:
        if stop_after_br and node.kind == NEWLINE and node.target == "br":
            break
        parts.append(_node_text(node, stop_after_br))
    return "".join(parts).strip()
