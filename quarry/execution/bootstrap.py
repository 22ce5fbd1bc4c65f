# Copyright (c) 2025 Kenneth Stott
#
# This source code is licensed under the Business Source License 1.1
# found in the LICENSE file in the root directory of this source tree.
#
# NOTICE: Use of this software for training artificial intelligence or
# machine learning models is strictly prohibited without explicit written
# permission from the copyright holder.

"""Session bootstrap and one-time initialization."""

import logging
from pathlib import Path

import duckdb

from quarry.core.config import AttachConfig, Config
from quarry.errors import BootstrapError, InitializationError, QuarryError
from quarry.execution.engine import QueryEngine

logger = logging.getLogger(__name__)


def _quote_identifier(name: str) -> str:
    return '"' + name.replace('"', '""') + '"'


def _quote_literal(value: str) -> str:
    return "'" + value.replace("'", "''") + "'"


def _resolve(path: str, data_dir: Path) -> str:
    candidate = Path(path)
    if candidate.is_absolute() or path == ":memory:":
        return path
    return str(data_dir / candidate)


def _attach(engine: QueryEngine, attach: AttachConfig, data_dir: Path) -> None:
    mode = " (READ_ONLY)" if attach.read_only else ""
    sql = (
        f"ATTACH {_quote_literal(_resolve(attach.path, data_dir))} "
        f"AS {_quote_identifier(attach.name)}{mode}"
    )
    try:
        engine.connection.execute(sql)
    except duckdb.Error as e:
        raise BootstrapError(f"could not attach database '{attach.name}'") from e
    logger.debug(f"Attached {attach.path} as {attach.name}")


def _use(engine: QueryEngine, target: str) -> None:
    try:
        engine.connection.execute(f"USE {target}")
    except duckdb.Error as e:
        raise BootstrapError(f"could not use '{target}'") from e


def bootstrap_session(engine: QueryEngine, config: Config) -> None:
    """Attach configured databases and select the default catalog.

    Every attach is attempted; the first failure is raised once all have
    been tried, chained to the underlying DuckDB error.

    Raises:
        BootstrapError: If any attach or the USE statement fails
    """
    failures: list[BootstrapError] = []
    for attach in config.attach:
        try:
            _attach(engine, attach, config.data_dir)
        except BootstrapError as e:
            logger.warning(str(e))
            failures.append(e)

    if config.use:
        try:
            _use(engine, config.use)
        except BootstrapError as e:
            logger.warning(str(e))
            failures.append(e)

    if failures:
        raise failures[0]


def run_init_script(engine: QueryEngine, path: Path) -> None:
    """Run the initialization script at ``path``.

    Raises:
        OSError: If the script cannot be read
        InitializationError: If submission or any statement fails
    """
    script = path.read_text()
    logger.debug(f"Running initialization script {path}")
    try:
        engine.execute_script(script)
    except QuarryError as e:
        raise InitializationError(str(e)) from e
