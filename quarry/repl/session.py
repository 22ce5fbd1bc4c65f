# Copyright (c) 2025 Kenneth Stott
#
# This source code is licensed under the Business Source License 1.1
# found in the LICENSE file in the root directory of this source tree.
#
# NOTICE: Use of this software for training artificial intelligence or
# machine learning models is strictly prohibited without explicit written
# permission from the copyright holder.

"""The read-assemble-execute-journal loop."""

import logging
from typing import Callable, Iterable, Optional

from quarry.errors import QuarryError, QuerySubmissionError, StatementError
from quarry.execution.engine import QueryExecutor
from quarry.repl.assembler import InputAssembler
from quarry.repl.display import ResultDisplay
from quarry.repl.prompt import PromptCounter
from quarry.storage.journal import HistoryJournal, PromptEntry, SessionStart

logger = logging.getLogger(__name__)


class SessionLoop:
    """Drives one interactive session from first prompt to termination.

    The loop owns the assembler state and the prompt counter; the journal,
    executor and line source are injected. Journal and input I/O errors
    propagate, execution failures are reported and journaled as unsuccessful.
    """

    def __init__(
        self,
        lines: Iterable[str],
        executor: QueryExecutor,
        journal: HistoryJournal,
        prompt: PromptCounter,
        display: ResultDisplay,
        bootstrap: Optional[Callable[[], None]] = None,
    ):
        self.lines = lines
        self.executor = executor
        self.journal = journal
        self.prompt = prompt
        self.display = display
        self.bootstrap = bootstrap
        self.assembler = InputAssembler()
        self.submitted = 0

    def run(self) -> None:
        """Run until "exit" or end of input."""
        self.journal.record(SessionStart())
        self._bootstrap()

        self.prompt.render_primary()
        for line in self.lines:
            step = self.assembler.feed(line)

            if step.exit:
                logger.debug("Exit command received")
                break

            if step.query is None:
                self.prompt.render_continuation()
                continue

            successful = self._process(step.query)
            self.journal.record(PromptEntry(idx=self.prompt.index, msg=step.query, successful=successful))
            self.submitted += 1
            self.prompt.render_primary()
        else:
            discarded = self.assembler.reset()
            if discarded is not None:
                logger.debug(f"End of input inside a block; discarded {len(discarded)} chars")

        logger.debug(f"Session ended after {self.submitted} submitted queries")
        self.display.console.print()

    def _bootstrap(self) -> None:
        if self.bootstrap is None:
            return
        try:
            self.bootstrap()
        except QuarryError as e:
            # Fail open: the session stays usable in a degraded state
            logger.warning(f"Session bootstrap failed: {e}")
            self.display.show_error_chain(e)

    def _process(self, query: str) -> bool:
        """Execute one query and print the outcome. Returns success."""
        logger.debug(f"Submitting query under prompt {self.prompt.index}")
        try:
            response = self.executor.query(query)
        except QuerySubmissionError as e:
            self.display.show_query_error(e)
            return False

        try:
            response.check()
        except StatementError as e:
            self.display.show_statement_error(e)
            return False

        self.display.show_ok(response)
        return True
