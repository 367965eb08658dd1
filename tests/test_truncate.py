"""Tests for show-more/show-less truncation."""

from genregraph.content import ContentNode, newline, paragraph_break, text
from genregraph.truncate import (
    SHOW_LESS,
    SHOW_MORE,
    DisplayArena,
    TruncationSlot,
    TruncationState,
    compute_view,
    should_reset,
    toggle,
)

INTRO = (text("Intro."), paragraph_break(), text("More."))


class TestComputeView:
    def test_empty_sequence(self):
        view = compute_view((), TruncationState())
        assert view.visible == ()
        assert view.has_boundary is False

    def test_no_boundary_ignores_state(self):
        seq = (text("Hello"), ContentNode("bold", children=(text("world"),)))
        for expanded in (False, True):
            view = compute_view(seq, TruncationState(expanded=expanded))
            assert view.has_boundary is False
            assert view.visible == seq

    def test_collapsed_cuts_before_first_boundary(self):
        seq = (text("a"), text("b"), newline(), text("c"), paragraph_break(), text("d"))
        view = compute_view(seq, TruncationState())
        assert view.has_boundary is True
        assert view.visible == (text("a"), text("b"))

    def test_paragraph_break_before_newline(self):
        seq = (text("a"), paragraph_break(), text("b"), newline())
        assert compute_view(seq, TruncationState()).visible == (text("a"),)

    def test_expanded_shows_everything(self):
        view = compute_view(INTRO, TruncationState(expanded=True))
        assert view.has_boundary is True
        assert view.visible == INTRO

    def test_boundary_first_gives_empty_prefix(self):
        seq = (newline(), text("after"))
        assert compute_view(seq, TruncationState()).visible == ()

    def test_nested_boundaries_are_not_scanned(self):
        seq = (
            ContentNode("link", target="x", children=(text("a"), newline(), text("b"))),
            text("tail"),
        )
        view = compute_view(seq, TruncationState())
        assert view.has_boundary is False
        assert view.visible == seq

    def test_accepts_list(self):
        view = compute_view(list(INTRO), TruncationState())
        assert view.visible == (text("Intro."),)


class TestToggle:
    def test_flip(self):
        assert toggle(TruncationState()).expanded is True
        assert toggle(TruncationState(expanded=True)).expanded is False

    def test_double_toggle_is_identity(self):
        for state in (TruncationState(), TruncationState(expanded=True)):
            assert toggle(toggle(state)) == state

    def test_does_not_mutate(self):
        state = TruncationState()
        toggle(state)
        assert state.expanded is False


class TestShouldReset:
    def test_same_identity(self):
        assert should_reset("genre-1", "genre-1") is False

    def test_different_identity(self):
        assert should_reset("genre-1", "genre-2") is True


class TestTruncationSlot:
    def test_scenario_without_boundary(self):
        slot = TruncationSlot()
        view = slot.bind("doc", (text("Hello world"),))
        assert view.visible == (text("Hello world"),)
        assert slot.toggle_available is False
        assert slot.label is None

    def test_scenario_with_paragraph_break(self):
        slot = TruncationSlot()
        view = slot.bind("doc", INTRO)
        assert view.visible == (text("Intro."),)
        assert slot.label == SHOW_MORE

        view = slot.toggle()
        assert view.visible == INTRO
        assert slot.label == SHOW_LESS

        view = slot.toggle()
        assert view.visible == (text("Intro."),)
        assert slot.label == SHOW_MORE

    def test_toggle_without_boundary_is_noop(self):
        slot = TruncationSlot()
        slot.bind("doc", (text("only"),))
        slot.toggle()
        assert slot.state.expanded is False

    def test_not_expandable_never_expands(self):
        slot = TruncationSlot(expandable=False)
        view = slot.bind("doc", INTRO)
        assert slot.toggle_available is False
        assert slot.label is None
        view = slot.toggle()
        assert slot.state.expanded is False
        assert view.visible == (text("Intro."),)

    def test_new_identity_resets_state(self):
        slot = TruncationSlot()
        slot.bind("first", INTRO)
        slot.toggle()
        assert slot.state.expanded is True

        view = slot.bind("second", INTRO)
        assert slot.state.expanded is False
        assert view.visible == (text("Intro."),)

    def test_rebinding_same_identity_keeps_state(self):
        slot = TruncationSlot()
        slot.bind("first", INTRO)
        slot.toggle()
        view = slot.bind("first", INTRO)
        assert slot.state.expanded is True
        assert view.visible == INTRO


class TestDisplayArena:
    def test_slots_are_independent(self):
        arena = DisplayArena()
        arena.bind("sidebar", "blues", INTRO)
        arena.bind("tooltip", "blues", INTRO)
        arena.toggle("sidebar")
        assert arena.slot("sidebar").state.expanded is True
        assert arena.slot("tooltip").state.expanded is False

    def test_rebind_resets_only_that_slot(self):
        arena = DisplayArena()
        arena.bind("sidebar", "blues", INTRO)
        arena.toggle("sidebar")
        view = arena.bind("sidebar", "jazz", INTRO)
        assert view.visible == (text("Intro."),)

    def test_drop(self):
        arena = DisplayArena()
        arena.bind("sidebar", "blues", INTRO)
        arena.toggle("sidebar")
        arena.drop("sidebar")
        assert arena.slot("sidebar").state.expanded is False
        arena.drop("missing")

    def test_not_expandable_arena(self):
        arena = DisplayArena(expandable=False)
        arena.bind("list", "blues", INTRO)
        view = arena.toggle("list")
        assert view.visible == (text("Intro."),)
