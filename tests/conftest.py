# Copyright (c) 2025 Kenneth Stott
#
# This source code is licensed under the Business Source License 1.1
# found in the LICENSE file in the root directory of this source tree.
#
# NOTICE: Use of this software for training artificial intelligence or
# machine learning models is strictly prohibited without explicit written
# permission from the copyright holder.


"""Shared pytest fixtures."""

from io import StringIO

import pytest
from rich.console import Console

from quarry.repl.display import ResultDisplay
from quarry.repl.prompt import PromptCounter
from quarry.storage.journal import HistoryJournal


@pytest.fixture
def journal_stream() -> StringIO:
    """In-memory stream backing a HistoryJournal."""
    return StringIO()


@pytest.fixture
def journal(journal_stream) -> HistoryJournal:
    """HistoryJournal writing to memory (no fsync)."""
    return HistoryJournal(journal_stream)


@pytest.fixture
def prompt_out() -> StringIO:
    """Captures rendered prompt text."""
    return StringIO()


@pytest.fixture
def prompt(prompt_out) -> PromptCounter:
    return PromptCounter(prompt_out)


@pytest.fixture
def console_out() -> StringIO:
    """Captures everything printed through the Rich console."""
    return StringIO()


@pytest.fixture
def display(console_out) -> ResultDisplay:
    console = Console(file=console_out, force_terminal=False, color_system=None, width=120)
    return ResultDisplay(console)
