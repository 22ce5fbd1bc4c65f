"""Persistence layer (prompt journal)."""

from quarry.storage.journal import (
    HistoryEntry,
    HistoryJournal,
    PromptEntry,
    SessionStart,
    parse_entry,
    read_journal,
    recent_prompts,
    serialize_entry,
)

__all__ = [
    "HistoryEntry",
    "HistoryJournal",
    "PromptEntry",
    "SessionStart",
    "parse_entry",
    "read_journal",
    "recent_prompts",
    "serialize_entry",
]
