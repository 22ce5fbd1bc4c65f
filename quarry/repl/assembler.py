# Copyright (c) 2025 Kenneth Stott
#
# This source code is licensed under the Business Source License 1.1
# found in the LICENSE file in the root directory of this source tree.
#
# NOTICE: Use of this software for training artificial intelligence or
# machine learning models is strictly prohibited without explicit written
# permission from the copyright holder.

"""Input assembly: turns raw input lines into complete queries.

Two states:

    Single        every line is a complete query, except
                  "exit"  -> stop the session
                  "{..."  -> open a block with the rest of the line
    Accumulating  lines are collected (newline-joined) until one ends
                  with "}", which closes the block and emits the query

Braces are never escaped. A line ending in "}" inside a block always
closes it, and a block still open at end of input is dropped.
"""

from dataclasses import dataclass
from typing import Optional, Union

EXIT_COMMAND = "exit"
BLOCK_OPEN = "{"
BLOCK_CLOSE = "}"


@dataclass(frozen=True)
class Single:
    """No buffered text."""


@dataclass(frozen=True)
class Accumulating:
    """Inside a braced block; ``buffer`` holds the text collected so far."""
    buffer: str


AssemblerState = Union[Single, Accumulating]


@dataclass(frozen=True)
class Step:
    """Result of feeding one line to the assembler."""
    state: AssemblerState
    query: Optional[str] = None
    exit: bool = False


def feed(state: AssemblerState, line: str) -> Step:
    """Apply one input line (newline already stripped) to ``state``."""
    if isinstance(state, Accumulating):
        collected = state.buffer + "\n"
        if not line.endswith(BLOCK_CLOSE):
            return Step(state=Accumulating(collected + line))
        return Step(state=Single(), query=collected + line[:-len(BLOCK_CLOSE)])

    if line == EXIT_COMMAND:
        return Step(state=state, exit=True)
    if line.startswith(BLOCK_OPEN):
        return Step(state=Accumulating(line[len(BLOCK_OPEN):]))
    return Step(state=state, query=line)


class InputAssembler:
    """Holds the live assembler state and replaces it on every line."""

    def __init__(self):
        self.state: AssemblerState = Single()

    @property
    def pending(self) -> bool:
        """True while a braced block is open."""
        return isinstance(self.state, Accumulating)

    def feed(self, line: str) -> Step:
        step = feed(self.state, line)
        self.state = step.state
        return step

    def reset(self) -> Optional[str]:
        """Drop any open block, returning its discarded text."""
        discarded = self.state.buffer if isinstance(self.state, Accumulating) else None
        self.state = Single()
        return discarded
