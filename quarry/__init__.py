# Copyright (c) 2025 Kenneth Stott
#
# This source code is licensed under the Business Source License 1.1
# found in the LICENSE file in the root directory of this source tree.
#
# NOTICE: Use of this software for training artificial intelligence or
# machine learning models is strictly prohibited without explicit written
# permission from the copyright holder.


"""Quarry - interactive query shell with a durable prompt journal.

Submodules:
- core: Configuration
- storage: Append-only prompt journal
- execution: DuckDB query engine and session bootstrap
- repl: Input assembly, prompts and the session loop

Main classes:
- SessionLoop: Runs one interactive session
- HistoryJournal: Records session and prompt events
- Config: Configuration loading from YAML
"""

from quarry.core.config import Config
from quarry.errors import (
    BootstrapError,
    InitializationError,
    QuarryError,
    QuerySubmissionError,
    StatementError,
    format_error_chain,
)
from quarry.execution.engine import QueryEngine, QueryResponse
from quarry.repl.assembler import InputAssembler
from quarry.repl.prompt import PromptCounter
from quarry.repl.session import SessionLoop
from quarry.storage.journal import HistoryJournal, PromptEntry, SessionStart

__version__ = "0.1.0"

__all__ = [
    "BootstrapError",
    "Config",
    "HistoryJournal",
    "InitializationError",
    "InputAssembler",
    "PromptCounter",
    "PromptEntry",
    "QuarryError",
    "QueryEngine",
    "QueryResponse",
    "QuerySubmissionError",
    "SessionLoop",
    "SessionStart",
    "StatementError",
    "format_error_chain",
]
