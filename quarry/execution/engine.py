# Copyright (c) 2025 Kenneth Stott
#
# This source code is licensed under the Business Source License 1.1
# found in the LICENSE file in the root directory of this source tree.
#
# NOTICE: Use of this software for training artificial intelligence or
# machine learning models is strictly prohibited without explicit written
# permission from the copyright holder.

"""Query execution against an embedded DuckDB database.

Two failure levels are kept apart:

- submission: the text could not be split into statements (parse error,
  closed connection). ``QueryEngine.query`` raises ``QuerySubmissionError``.
- statement: a statement was rejected while running. The response is still
  returned and ``QueryResponse.check`` raises ``StatementError``.
"""

import logging
import threading
from dataclasses import dataclass, field
from typing import Any, Optional, Protocol

import duckdb

from quarry.errors import QuerySubmissionError, StatementError

logger = logging.getLogger(__name__)


@dataclass
class StatementResult:
    """Output of one executed statement."""
    statement: str
    columns: list[str] = field(default_factory=list)
    rows: list[tuple[Any, ...]] = field(default_factory=list)


@dataclass
class QueryResponse:
    """Results of every statement that ran, plus the first rejection if any."""
    results: list[StatementResult] = field(default_factory=list)
    error: Optional[StatementError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def check(self) -> "QueryResponse":
        """Return self, or raise the captured statement error."""
        if self.error is not None:
            raise self.error
        return self


class QueryExecutor(Protocol):
    """Anything that can run query text for the session loop."""

    def query(self, text: str) -> QueryResponse:
        ...


class QueryEngine:
    """Runs query text on a DuckDB connection, one statement at a time.

    Each statement gets ``query_timeout`` seconds. When it runs longer the
    connection is interrupted and the statement is rejected. ``None``
    disables the limit.
    """

    def __init__(self, conn: duckdb.DuckDBPyConnection, query_timeout: Optional[float] = None):
        self._conn = conn
        self.query_timeout = query_timeout

    @property
    def connection(self) -> duckdb.DuckDBPyConnection:
        return self._conn

    @classmethod
    def connect(
        cls,
        database: str = ":memory:",
        read_only: bool = False,
        settings: Optional[dict[str, Any]] = None,
        query_timeout: Optional[float] = None,
    ) -> "QueryEngine":
        """Open a DuckDB database and wrap it."""
        conn = duckdb.connect(database, read_only=read_only, config=settings or {})
        logger.debug(f"Connected to DuckDB database {database} (read_only={read_only})")
        return cls(conn, query_timeout=query_timeout)

    def query(self, text: str) -> QueryResponse:
        """Submit query text.

        Raises:
            QuerySubmissionError: If the text cannot be parsed or submitted
        """
        try:
            statements = self._conn.extract_statements(text)
        except duckdb.Error as e:
            raise QuerySubmissionError(str(e)) from e

        response = QueryResponse()
        for i, statement in enumerate(statements, start=1):
            sql = statement.query
            try:
                result = self._run_statement(sql)
            except StatementError as e:
                logger.debug(f"Statement {i} rejected: {e}")
                e.statement_index = i
                e.statement = sql
                response.error = e
                break
            response.results.append(result)

        logger.debug(f"Executed {len(response.results)} of {len(statements)} statement(s)")
        return response

    def _run_statement(self, sql: str) -> StatementResult:
        timer = None
        if self.query_timeout is not None:
            timer = threading.Timer(self.query_timeout, self._conn.interrupt)
            timer.daemon = True
            timer.start()
        try:
            cursor = self._conn.execute(sql)
            if cursor.description is None:
                return StatementResult(statement=sql)
            columns = [d[0] for d in cursor.description]
            try:
                rows = cursor.fetchall()
            except (OverflowError, ValueError) as e:
                # DuckDB produced the value but it has no Python equivalent
                raise StatementError(f"Conversion Error: {e}") from e
            return StatementResult(statement=sql, columns=columns, rows=rows)
        except duckdb.InterruptException as e:
            if timer is not None and timer.finished.is_set():
                raise StatementError(f"query timed out after {self.query_timeout:g}s") from e
            raise StatementError(str(e)) from e
        except duckdb.Error as e:
            raise StatementError(str(e)) from e
        finally:
            if timer is not None:
                timer.cancel()

    def execute_script(self, text: str) -> QueryResponse:
        """Run a whole script, raising on either failure level."""
        return self.query(text).check()

    def close(self) -> None:
        self._conn.close()
