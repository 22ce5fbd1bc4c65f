# Copyright (c) 2025 Kenneth Stott
#
# This source code is licensed under the Business Source License 1.1
# found in the LICENSE file in the root directory of this source tree.
#
# NOTICE: Use of this software for training artificial intelligence or
# machine learning models is strictly prohibited without explicit written
# permission from the copyright holder.

"""Sources of input lines for the session loop."""

import os
import sys
from typing import Iterator, Optional, TextIO

from prompt_toolkit import PromptSession
from prompt_toolkit.auto_suggest import AutoSuggestFromHistory
from prompt_toolkit.history import InMemoryHistory

from quarry.repl.prompt import PromptBuffer


def is_compatible_terminal(stream: Optional[TextIO] = None) -> bool:
    """Check if terminal is compatible with prompt_toolkit."""
    stream = stream or sys.stdin
    # IntelliJ/PyCharm terminal sets TERMINAL_EMULATOR
    if "TERMINAL_EMULATOR" in os.environ:
        return False
    if os.environ.get("TERM_PROGRAM") == "JetBrains-JediTerm":
        return False
    return stream.isatty()


def strip_line_ending(line: str) -> str:
    """Remove one trailing "\\n" and then one trailing "\\r"."""
    if line.endswith("\n"):
        line = line[:-1]
    if line.endswith("\r"):
        line = line[:-1]
    return line


class StreamLineSource:
    """Yields lines from a text stream (piped stdin, files, StringIO)."""

    def __init__(self, stream: TextIO):
        self._stream = stream

    def __iter__(self) -> Iterator[str]:
        for line in self._stream:
            yield strip_line_ending(line)


class TerminalLineSource:
    """Reads lines with prompt_toolkit, using whatever the counter rendered as the prompt.

    Ends on EOF (Ctrl+D). KeyboardInterrupt propagates to the caller.
    """

    def __init__(self, prompt_buffer: PromptBuffer, session: Optional[PromptSession] = None):
        self._buffer = prompt_buffer
        self._session = session or PromptSession(
            history=InMemoryHistory(),
            auto_suggest=AutoSuggestFromHistory(),
        )

    def __iter__(self) -> Iterator[str]:
        while True:
            try:
                yield self._session.prompt(self._buffer.take())
            except EOFError:
                return
