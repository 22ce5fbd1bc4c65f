# Copyright (c) 2025 Kenneth Stott
#
# This source code is licensed under the Business Source License 1.1
# found in the LICENSE file in the root directory of this source tree.
#
# NOTICE: Use of this software for training artificial intelligence or
# machine learning models is strictly prohibited without explicit written
# permission from the copyright holder.

"""Prompt rendering with a monotonically increasing index."""

from typing import TextIO

PRIMARY_MARKER = "> "
CONTINUATION_PROMPT = "    |  "
LABEL_WIDTH = 4


class PromptCounter:
    """Renders primary (indexed) and continuation prompts.

    Only primary prompts advance the index. Flush failures are not caught:
    a terminal that cannot be written to cannot be interacted with.
    """

    def __init__(self, out: TextIO):
        self._out = out
        self._index = 0

    @property
    def index(self) -> int:
        """Index of the most recently rendered primary prompt (0 before the first)."""
        return self._index

    def render_primary(self) -> int:
        self._index += 1
        self._out.write(f"{self._index:{LABEL_WIDTH}}{PRIMARY_MARKER}")
        self._out.flush()
        return self._index

    def render_continuation(self) -> None:
        self._out.write(CONTINUATION_PROMPT)
        self._out.flush()


class PromptBuffer:
    """Write target that holds rendered prompt text until the reader takes it.

    Used when prompt_toolkit owns the terminal: the counter renders into this
    buffer and the line source hands the text to ``PromptSession.prompt``.
    """

    def __init__(self):
        self._parts: list[str] = []

    def write(self, text: str) -> int:
        self._parts.append(text)
        return len(text)

    def flush(self) -> None:
        pass

    def take(self) -> str:
        """Return and clear the pending prompt text."""
        text = "".join(self._parts)
        self._parts.clear()
        return text
