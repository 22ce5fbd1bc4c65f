"""Tests for input assembly (single-line and braced multiline queries)."""

import pytest

from quarry.repl.assembler import (
    Accumulating,
    InputAssembler,
    Single,
    feed,
)


def assemble(lines: list[str]) -> tuple[list[str], InputAssembler]:
    """Feed lines until exit, returning emitted queries and the assembler."""
    assembler = InputAssembler()
    queries = []
    for line in lines:
        step = assembler.feed(line)
        if step.exit:
            break
        if step.query is not None:
            queries.append(step.query)
    return queries, assembler


class TestSingleState:
    """Lines fed while no block is open."""

    @pytest.mark.parametrize("line", ["select 1", "", "  exit", "exit ", "a}", "SELECT '{x}'"])
    def test_plain_line_is_a_query(self, line):
        """Any line that is not "exit" and does not start with "{" is emitted as-is."""
        step = feed(Single(), line)
        assert step.query == line
        assert step.state == Single()
        assert not step.exit

    def test_exit_command(self):
        """Exact "exit" signals termination and emits nothing."""
        step = feed(Single(), "exit")
        assert step.exit
        assert step.query is None

    def test_open_brace_starts_block(self):
        """Leading "{" is stripped and the rest becomes the buffer."""
        step = feed(Single(), "{select *")
        assert step.query is None
        assert step.state == Accumulating("select *")

    def test_lone_open_brace(self):
        step = feed(Single(), "{")
        assert step.state == Accumulating("")

    def test_closing_brace_on_opening_line_is_not_checked(self):
        """A one-line "{x}" only opens a block."""
        step = feed(Single(), "{select 1}")
        assert step.query is None
        assert step.state == Accumulating("select 1}")


class TestAccumulatingState:
    """Lines fed while a braced block is open."""

    def test_line_without_close_is_appended(self):
        step = feed(Accumulating("a"), "b")
        assert step.query is None
        assert step.state == Accumulating("a\nb")

    def test_closing_line_emits_query(self):
        step = feed(Accumulating("a"), "b}")
        assert step.query == "a\nb"
        assert step.state == Single()

    def test_lone_close_brace_keeps_trailing_newline(self):
        step = feed(Accumulating("a"), "}")
        assert step.query == "a\n"

    def test_exit_inside_block_is_content(self):
        step = feed(Accumulating("a"), "exit")
        assert not step.exit
        assert step.state == Accumulating("a\nexit")

    def test_state_values_are_not_mutated(self):
        """Transitions return new states; the old one is untouched."""
        before = Accumulating("a")
        feed(before, "b")
        assert before.buffer == "a"


class TestInputAssembler:
    """End-to-end sequences through the stateful wrapper."""

    def test_well_formed_block(self):
        queries, assembler = assemble(["{L1", "L2", "L3", "L4}"])
        assert queries == ["L1\nL2\nL3\nL4"]
        assert not assembler.pending

    def test_block_not_emitted_before_close(self):
        assembler = InputAssembler()
        for line in ["{L1", "L2", "L3"]:
            assert assembler.feed(line).query is None
        assert assembler.pending

    def test_mixed_single_and_block(self):
        queries, _ = assemble(["select 1", "{select", "2}", "select 3"])
        assert queries == ["select 1", "select\n2", "select 3"]

    def test_exit_stops_after_block(self):
        queries, _ = assemble(["{a", "b}", "exit", "select 99"])
        assert queries == ["a\nb"]

    def test_unterminated_block_is_dropped_on_reset(self):
        queries, assembler = assemble(["{a", "b"])
        assert queries == []
        assert assembler.reset() == "a\nb"
        assert assembler.state == Single()

    def test_reset_in_single_state(self):
        assembler = InputAssembler()
        assert assembler.reset() is None
