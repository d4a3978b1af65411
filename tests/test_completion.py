"""Tests for pi.cmdedit.completion -- candidate cycling and common prefix."""

from __future__ import annotations

from pi.cmdedit.completion import CompletionState, longest_common_prefix


class TestLongestCommonPrefix:
    def test_empty_list(self) -> None:
        assert longest_common_prefix([]) == ""

    def test_single_item(self) -> None:
        assert longest_common_prefix(["abc"]) == "abc"

    def test_diverging_items(self) -> None:
        assert longest_common_prefix(["abc", "abd", "abx"]) == "ab"

    def test_shorter_item_limits_prefix(self) -> None:
        assert longest_common_prefix(["abc", "ab"]) == "ab"
        assert longest_common_prefix(["ab", "abc"]) == "ab"

    def test_nothing_in_common(self) -> None:
        assert longest_common_prefix(["abc", "xyz"]) == ""


class TestCompletionLoad:
    """Loading candidates, with and without common prefix acceptance."""

    def test_without_request_keeps_candidates(self) -> None:
        state = CompletionState()
        assert state.load(["oo", "op"], accept_common_prefix=True) == ""
        assert state.candidates == ["oo", "op"]

    def test_strips_common_prefix_when_requested(self) -> None:
        state = CompletionState()
        state.begin_request()
        assert state.load(["oo", "op"], accept_common_prefix=True) == "o"
        assert state.candidates == ["o", "p"]
        assert state.requested

    def test_fully_consumed_candidates_reset(self) -> None:
        state = CompletionState()
        state.begin_request()
        assert state.load(["x"], accept_common_prefix=True) == "x"
        assert state.candidates == []
        assert not state.requested
        assert state.index is None

    def test_accept_disabled(self) -> None:
        state = CompletionState()
        state.begin_request()
        assert state.load(["oo", "op"], accept_common_prefix=False) == ""
        assert state.candidates == ["oo", "op"]

    def test_caller_order_is_kept(self) -> None:
        state = CompletionState()
        state.load(["b", "a", "c"], accept_common_prefix=False)
        assert state.candidates == ["b", "a", "c"]


class TestCompletionCycle:
    """Cycling moves through candidates without wrapping."""

    def test_first_cycle_selects_first_candidate(self) -> None:
        state = CompletionState()
        state.load(["a", "b"], accept_common_prefix=False)
        assert state.cycle(1) == "a"
        assert state.index == 0
        assert state.current == "a"

    def test_cycle_past_last_is_noop(self) -> None:
        state = CompletionState()
        state.load(["a", "b"], accept_common_prefix=False)
        state.cycle(1)
        state.cycle(1)
        assert state.cycle(1) is None
        assert state.index == 1

    def test_cycle_back_before_first_is_noop(self) -> None:
        state = CompletionState()
        state.load(["a", "b"], accept_common_prefix=False)
        assert state.cycle(-1) is None
        assert state.index is None

    def test_cycle_backward(self) -> None:
        state = CompletionState()
        state.load(["a", "b"], accept_common_prefix=False)
        state.cycle(1)
        state.cycle(1)
        assert state.cycle(-1) == "a"

    def test_cycle_empty(self) -> None:
        state = CompletionState()
        assert state.cycle(1) is None


class TestCompletionReset:
    def test_reset_clears_everything_but_request_counter(self) -> None:
        state = CompletionState()
        first = state.begin_request()
        state.load(["a"], accept_common_prefix=False)
        state.cycle(1)
        state.reset()
        assert state.candidates == []
        assert not state.requested
        assert state.index is None
        assert state.begin_request() == first + 1
