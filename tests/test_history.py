"""Tests for pi.cmdedit.history.CommandHistory -- browsing and prefix recall."""

from __future__ import annotations

from pi.cmdedit.history import CommandHistory


class TestHistoryNavigateUnfiltered:
    """Navigation with an empty prefix filter walks every entry."""

    def test_back_from_edit_buffer_lands_on_last_entry(self) -> None:
        h = CommandHistory(["a", "b", "c"])
        assert h.navigate(-1) == "c"
        assert h.index == 2

    def test_back_stops_at_first_entry(self) -> None:
        h = CommandHistory(["a", "b", "c"])
        h.navigate(-1)
        h.navigate(-1)
        assert h.navigate(-1) == "a"
        assert h.navigate(-1) is None
        assert h.index == 0

    def test_forward_past_last_returns_to_edit_buffer(self) -> None:
        h = CommandHistory(["a", "b"])
        h.navigate(-1)
        assert h.navigate(1) == ""
        assert h.index is None
        assert not h.browsing

    def test_forward_when_not_browsing_is_noop(self) -> None:
        h = CommandHistory(["a"])
        assert h.navigate(1) is None
        assert h.index is None

    def test_zero_delta_is_noop(self) -> None:
        h = CommandHistory(["a"])
        assert h.navigate(0) is None

    def test_large_delta_is_clipped(self) -> None:
        h = CommandHistory(["a", "b", "c"])
        assert h.navigate(-5) == "c"

    def test_empty_history(self) -> None:
        h = CommandHistory()
        assert h.navigate(-1) is None
        assert h.index is None


class TestHistoryNavigateFiltered:
    """A non-empty prefix filter restricts recall to matching entries."""

    def test_skips_non_matching_entries(self) -> None:
        h = CommandHistory(["foo", "bar", "faz"])
        h.prefix_filter = "f"
        assert h.navigate(-1) == "faz"
        assert h.navigate(-1) == "foo"
        assert h.index == 0

    def test_running_off_the_start_restores_typed_text(self) -> None:
        h = CommandHistory(["foo", "bar", "faz"])
        h.prefix_filter = "f"
        h.navigate(-1)
        h.navigate(-1)
        assert h.navigate(-1) == "f"
        assert h.index is None
        assert h.prefix_filter == "f"

    def test_running_off_the_end_restores_typed_text(self) -> None:
        h = CommandHistory(["foo", "bar", "faz"])
        h.prefix_filter = "f"
        h.navigate(-1)
        h.navigate(-1)
        assert h.navigate(1) == "faz"
        assert h.navigate(1) == "f"
        assert h.index is None
        assert h.prefix_filter == "f"

    def test_no_match_when_not_browsing_is_noop(self) -> None:
        h = CommandHistory(["foo", "bar"])
        h.prefix_filter = "x"
        assert h.navigate(-1) is None
        assert h.index is None
        assert h.prefix_filter == "x"


class TestHistorySetIndex:
    """Explicit selection with permissive bounds handling."""

    def test_select_entry(self) -> None:
        h = CommandHistory(["a", "b"])
        assert h.set_index(0) == "a"
        assert h.current == "a"

    def test_out_of_range_is_ignored(self) -> None:
        h = CommandHistory(["a", "b"])
        h.set_index(1)
        assert h.set_index(-1) is None
        assert h.set_index(3) is None
        assert h.index == 1

    def test_past_end_exits_browsing_and_clears_filter(self) -> None:
        h = CommandHistory(["abc"])
        h.prefix_filter = "ab"
        h.set_index(0)
        assert h.set_index(1) == "ab"
        assert h.index is None
        assert h.prefix_filter == ""


class TestHistoryReplaceAndAppend:
    """Wholesale replacement and incremental growth."""

    def test_replace_resets_browsing(self) -> None:
        h = CommandHistory(["a"])
        h.prefix_filter = "a"
        h.navigate(-1)
        h.replace(["x", "y"])
        assert h.entries == ["x", "y"]
        assert h.index is None
        assert h.prefix_filter == ""

    def test_replace_copies_input(self) -> None:
        entries = ["a"]
        h = CommandHistory()
        h.replace(entries)
        entries.append("b")
        assert len(h) == 1

    def test_append_skips_blank_and_duplicates(self) -> None:
        h = CommandHistory()
        h.append("ls")
        h.append("ls")
        h.append("   ")
        h.append("pwd")
        assert h.entries == ["ls", "pwd"]

    def test_find_latest_match_prefers_newest(self) -> None:
        h = CommandHistory(["foo bar", "foo baz", "qux"])
        assert h.find_latest_match("foo") == "foo baz"
        assert h.find_latest_match("z") is None
