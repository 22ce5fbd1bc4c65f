# Copyright (c) 2025 Kenneth Stott
#
# This source code is licensed under the Business Source License 1.1
# found in the LICENSE file in the root directory of this source tree.
#
# NOTICE: Use of this software for training artificial intelligence or
# machine learning models is strictly prohibited without explicit written
# permission from the copyright holder.

"""Append-only prompt journal.

Every line of the journal is one self-contained JSON record:

    {"kind":"session_start"}
    {"kind":"prompt","idx":1,"msg":"select 1","successful":true}

The file is opened once per process in append mode and never truncated,
rewritten, or read back by the running session. Each record is flushed (and
by default fsync'd) before ``record`` returns, so a crash can at most lose
the record being written, never corrupt earlier ones.
"""

import logging
import os
from pathlib import Path
from typing import Annotated, Iterator, Literal, Optional, TextIO, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

logger = logging.getLogger(__name__)


class SessionStart(BaseModel):
    """Marks the start of a process run."""
    model_config = ConfigDict(frozen=True, extra="ignore")

    kind: Literal["session_start"] = "session_start"


class PromptEntry(BaseModel):
    """One completed query submission and its outcome."""
    model_config = ConfigDict(frozen=True, extra="ignore")

    kind: Literal["prompt"] = "prompt"
    idx: int = Field(ge=1)
    msg: str
    successful: bool


HistoryEntry = Annotated[Union[SessionStart, PromptEntry], Field(discriminator="kind")]

_entry_adapter: TypeAdapter[HistoryEntry] = TypeAdapter(HistoryEntry)


def serialize_entry(entry: SessionStart | PromptEntry) -> str:
    """Serialize an entry to a single compact JSON line (no trailing newline)."""
    return entry.model_dump_json()


def parse_entry(line: str) -> SessionStart | PromptEntry:
    """Parse one journal line. Unknown fields are ignored."""
    return _entry_adapter.validate_json(line)


class HistoryJournal:
    """Writes history entries to an append-only stream.

    Usage:
        journal = HistoryJournal.open(Path("data/prompt_history.jsonl"))
        journal.record(SessionStart())
        journal.record(PromptEntry(idx=1, msg="select 1", successful=True))
        journal.close()
    """

    def __init__(self, stream: TextIO, fsync: bool = False):
        """
        Args:
            stream: Text stream positioned for appending
            fsync: Whether to fsync the underlying descriptor after each record
        """
        self._stream = stream
        self._fsync = fsync

    @classmethod
    def open(cls, path: Path, fsync: bool = True) -> "HistoryJournal":
        """Open (creating if needed) the journal file in append mode."""
        path.parent.mkdir(parents=True, exist_ok=True)
        stream = open(path, "a", encoding="utf-8")
        logger.debug(f"Opened prompt journal at {path}")
        return cls(stream, fsync=fsync)

    def record(self, entry: SessionStart | PromptEntry) -> None:
        """Append one entry. OSError propagates to the caller."""
        self._stream.write(serialize_entry(entry) + "\n")
        self._stream.flush()
        if self._fsync:
            os.fsync(self._stream.fileno())

    def close(self) -> None:
        self._stream.close()

    def __enter__(self) -> "HistoryJournal":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


def read_journal(path: Path) -> Iterator[SessionStart | PromptEntry]:
    """Iterate over the entries of a journal file.

    Blank lines are skipped. A line that does not parse (e.g. a record torn
    by a crash mid-write) is logged and skipped.
    """
    if not path.exists():
        return
    with open(path, encoding="utf-8") as f:
        for lineno, line in enumerate(f, start=1):
            if not line.strip():
                continue
            try:
                yield parse_entry(line)
            except ValidationError as e:
                logger.warning(f"Skipping unreadable journal line {lineno} in {path}: {e.error_count()} error(s)")


def recent_prompts(
    path: Path,
    limit: Optional[int] = None,
    failed_only: bool = False,
) -> list[PromptEntry]:
    """Return the most recent prompt entries from a journal file.

    Args:
        path: Journal file
        limit: Keep only the last N matching prompts. None for all.
        failed_only: Only include unsuccessful prompts

    Returns:
        Prompt entries in journal order
    """
    prompts = [
        e for e in read_journal(path)
        if isinstance(e, PromptEntry) and (not failed_only or not e.successful)
    ]
    if limit is not None:
        prompts = prompts[-limit:]
    return prompts
