"""Show-more/show-less truncation of parsed descriptions.

A description is cut at its first top-level paragraph break or newline. The
collapsed/expanded choice lives in a ``TruncationState`` owned by one display
slot, and is dropped whenever that slot is bound to a different document.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Dict, Hashable, Optional, Sequence

from .content import NodeSequence, is_boundary

SHOW_MORE = "Show more"
SHOW_LESS = "Show less"


@dataclass(frozen=True)
class TruncationState:
    expanded: bool = False


@dataclass(frozen=True)
class TruncatedView:
    visible: NodeSequence
    has_boundary: bool


def first_boundary(sequence: Sequence) -> Optional[int]:
    for i, node in enumerate(sequence):
        if is_boundary(node):
            return i
    return None


def compute_view(sequence: NodeSequence, state: TruncationState) -> TruncatedView:
    """Return the visible part of ``sequence`` for ``state``.

    Without a boundary the whole sequence is visible whatever the state says.
    """
    sequence = tuple(sequence)
    index = first_boundary(sequence)
    if index is None:
        return TruncatedView(visible=sequence, has_boundary=False)
    if state.expanded:
        return TruncatedView(visible=sequence, has_boundary=True)
    return TruncatedView(visible=sequence[:index], has_boundary=True)


def toggle(state: TruncationState) -> TruncationState:
    return replace(state, expanded=not state.expanded)


def can_toggle(view: TruncatedView, expandable: bool) -> bool:
    return view.has_boundary and expandable


def toggle_label(state: TruncationState) -> str:
    return SHOW_LESS if state.expanded else SHOW_MORE


def should_reset(old_identity: Hashable, new_identity: Hashable) -> bool:
    """A slot resets when it is bound to a different document, even one with equal text."""
    return old_identity != new_identity


class TruncationSlot:
    """One display of a description: the bound document and its toggle state.

    ``identity`` names the document (a node id, a request id, ...). Rebinding to
    a different identity replaces the state with a fresh collapsed one.
    """

    def __init__(self, expandable: bool = True) -> None:
        self.expandable = expandable
        self.identity: Optional[Hashable] = None
        self.sequence: NodeSequence = ()
        self.state = TruncationState()

    def bind(self, identity: Hashable, sequence: NodeSequence) -> TruncatedView:
        if self.identity is None or should_reset(self.identity, identity):
            self.state = TruncationState()
        self.identity = identity
        self.sequence = tuple(sequence)
        return self.view()

    def view(self) -> TruncatedView:
        return compute_view(self.sequence, self.state)

    @property
    def toggle_available(self) -> bool:
        return can_toggle(self.view(), self.expandable)

    @property
    def label(self) -> Optional[str]:
        """Label of the toggle control, or None when no control is shown."""
        if not self.toggle_available:
            return None
        return toggle_label(self.state)

    def toggle(self) -> TruncatedView:
        if self.toggle_available:
            self.state = toggle(self.state)
        return self.view()


@dataclass
class DisplayArena:
    """Slots keyed by display id, for callers rendering many descriptions."""

    expandable: bool = True
    slots: Dict[Hashable, TruncationSlot] = field(default_factory=dict)

    def slot(self, display_id: Hashable) -> TruncationSlot:
        if display_id not in self.slots:
            self.slots[display_id] = TruncationSlot(expandable=self.expandable)
        return self.slots[display_id]

    def bind(self, display_id: Hashable, identity: Hashable, sequence: NodeSequence) -> TruncatedView:
        return self.slot(display_id).bind(identity, sequence)

    def toggle(self, display_id: Hashable) -> TruncatedView:
        return self.slot(display_id).toggle()

    def drop(self, display_id: Hashable) -> None:
        self.slots.pop(display_id, None)
