# Copyright (c) 2025 Kenneth Stott
#
# This source code is licensed under the Business Source License 1.1
# found in the LICENSE file in the root directory of this source tree.
#
# NOTICE: Use of this software for training artificial intelligence or
# machine learning models is strictly prohibited without explicit written
# permission from the copyright holder.

"""Console output for query outcomes."""

from typing import Any

from rich.console import Console
from rich.table import Table

from quarry.errors import format_error_chain
from quarry.execution.engine import QueryResponse, StatementResult


def _cell(value: Any) -> str:
    return "NULL" if value is None else str(value)


class ResultDisplay:
    """Prints query results and diagnostics to a Rich console.

    Error text comes from the engine and may contain square brackets, so it
    is always printed with markup disabled.
    """

    def __init__(self, console: Console):
        self.console = console

    def show_ok(self, response: QueryResponse) -> None:
        self.console.print("[green]Ok:[/green]")
        for result in response.results:
            self._show_result(result)

    def _show_result(self, result: StatementResult) -> None:
        if not result.columns:
            self.console.print("[dim](no result set)[/dim]")
            return
        table = Table(show_header=True, header_style="bold cyan")
        for column in result.columns:
            table.add_column(column)
        for row in result.rows:
            table.add_row(*(_cell(v) for v in row))
        self.console.print(table)

    def show_query_error(self, error: Exception) -> None:
        self.console.print("[red]Query Error:[/red]")
        self.console.print(str(error), markup=False, highlight=False)

    def show_statement_error(self, error: Exception) -> None:
        self.console.print("[red]Statement Error:[/red]")
        self.console.print(str(error), markup=False, highlight=False)

    def show_error_chain(self, error: BaseException) -> None:
        self.console.print("[yellow]errors:[/yellow]")
        self.console.print("\n".join(format_error_chain(error)), markup=False, highlight=False)
