"""Query execution and session bootstrap."""

from quarry.execution.bootstrap import bootstrap_session, run_init_script
from quarry.execution.engine import QueryEngine, QueryExecutor, QueryResponse, StatementResult

__all__ = [
    "QueryEngine",
    "QueryExecutor",
    "QueryResponse",
    "StatementResult",
    "bootstrap_session",
    "run_init_script",
]
