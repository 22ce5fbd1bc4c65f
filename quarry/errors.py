# Copyright (c) 2025 Kenneth Stott
#
# This source code is licensed under the Business Source License 1.1
# found in the LICENSE file in the root directory of this source tree.
#
# NOTICE: Use of this software for training artificial intelligence or
# machine learning models is strictly prohibited without explicit written
# permission from the copyright holder.

"""Exception hierarchy and causal-chain flattening."""

from typing import Any, Iterator, Optional


class QuarryError(Exception):
    """Base class for all quarry errors."""


class QuerySubmissionError(QuarryError):
    """The query text could not be submitted to the engine at all."""


class StatementError(QuarryError):
    """A submitted statement was rejected by the engine."""

    def __init__(self, message: str, statement_index: int = 0, statement: str = ""):
        super().__init__(message)
        self.statement_index = statement_index
        self.statement = statement


class BootstrapError(QuarryError):
    """Session bootstrap (attach / use) failed."""


class InitializationError(QuarryError):
    """The initialization script failed."""


def _cause_of(error: Any) -> Optional[Any]:
    """Return the next link in an error's causal chain, if any.

    Python exceptions expose ``__cause__`` (explicit ``raise ... from``) and
    ``__context__`` (implicit chaining). Other objects may expose ``cause``.
    """
    cause = getattr(error, "__cause__", None)
    if cause is not None:
        return cause
    if not getattr(error, "__suppress_context__", False):
        context = getattr(error, "__context__", None)
        if context is not None:
            return context
    return getattr(error, "cause", None)


def iter_error_chain(error: Any) -> Iterator[Any]:
    """Yield ``error`` followed by each successive cause."""
    seen: set[int] = set()
    current = error
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        yield current
        current = _cause_of(current)


def describe_error(error: Any) -> str:
    """Render one error as ``TypeName: message``."""
    message = str(error)
    name = type(error).__name__
    return f"{name}: {message}" if message else name


def format_error_chain(error: Any) -> list[str]:
    """Flatten an error and its causes into display strings, leaf first."""
    return [describe_error(e) for e in iter_error_chain(error)]
