# Copyright (c) 2025 Kenneth Stott
#
# This source code is licensed under the Business Source License 1.1
# found in the LICENSE file in the root directory of this source tree.
#
# NOTICE: Use of this software for training artificial intelligence or
# machine learning models is strictly prohibited without explicit written
# permission from the copyright holder.

"""Command-line interface for Quarry."""

import functools
import logging
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from quarry import __version__
from quarry.core.config import Config
from quarry.errors import InitializationError
from quarry.execution.bootstrap import bootstrap_session, run_init_script
from quarry.execution.engine import QueryEngine
from quarry.repl.display import ResultDisplay
from quarry.repl.line_source import StreamLineSource, TerminalLineSource, is_compatible_terminal
from quarry.repl.prompt import PromptBuffer, PromptCounter
from quarry.repl.session import SessionLoop
from quarry.storage.journal import HistoryJournal, recent_prompts

console = Console()


def _load_config(config: Optional[str], data_dir: Optional[Path]) -> Config:
    """Load config (or defaults) and apply the --data-dir override. Exits on error."""
    try:
        cfg = Config.from_yaml(config) if config else Config()
    except Exception as e:
        console.print(f"[red]Config error:[/red] {e}")
        sys.exit(1)
    if data_dir is not None:
        cfg.data_dir = data_dir
    return cfg


def _enable_debug_log(data_dir: Path) -> Path:
    """Write debug logs to a file (keeps the console clean)."""
    log_file = data_dir / "debug.log"
    file_handler = logging.FileHandler(log_file, mode='w')
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    ))
    logging.getLogger('quarry').addHandler(file_handler)
    logging.getLogger('quarry').setLevel(logging.DEBUG)
    return log_file


def _build_session(engine: QueryEngine, journal: HistoryJournal, cfg: Config) -> SessionLoop:
    """Wire the session loop to the terminal, or to plain stdin when piped."""
    if is_compatible_terminal(sys.stdin):
        prompt_buffer = PromptBuffer()
        prompt = PromptCounter(prompt_buffer)
        lines = TerminalLineSource(prompt_buffer)
    else:
        prompt = PromptCounter(sys.stdout)
        lines = StreamLineSource(sys.stdin)

    return SessionLoop(
        lines=lines,
        executor=engine,
        journal=journal,
        prompt=prompt,
        display=ResultDisplay(console),
        bootstrap=functools.partial(bootstrap_session, engine, cfg),
    )


@click.group()
@click.version_option(version=__version__, prog_name="quarry")
def cli():
    """Quarry - interactive query shell with a durable prompt journal.

    \b
    Quick start:
        quarry repl
        quarry repl --init --config quarry.yaml
        quarry history -n 20
    """
    pass


@cli.command()
@click.option(
    "--config", "-c",
    type=click.Path(exists=True),
    help="Path to config YAML file.",
)
@click.option(
    "--data-dir", "-d",
    type=click.Path(file_okay=False, path_type=Path),
    help="Directory holding the database and prompt journal (default: ./data).",
)
@click.option(
    "--init", "run_init",
    is_flag=True,
    help="Run the initialization script before starting.",
)
@click.option(
    "--debug",
    is_flag=True,
    help="Enable debug logging to <data-dir>/debug.log.",
)
def repl(config: Optional[str], data_dir: Optional[Path], run_init: bool, debug: bool):
    """Start an interactive query session.

    Each line is a query. Wrap multi-line queries in braces: start the
    first line with "{" and end the last line with "}". Type "exit" or
    press Ctrl+D to leave. Every query is recorded in the prompt journal.

    \b
    Examples:
        quarry repl
        quarry repl -c quarry.yaml --init
        echo "select 42" | quarry repl
    """
    cfg = _load_config(config, data_dir)
    cfg.data_dir.mkdir(parents=True, exist_ok=True)

    if debug:
        log_file = _enable_debug_log(cfg.data_dir)
        console.print(f"[dim]Debug logs: {log_file}[/dim]")

    try:
        engine = QueryEngine.connect(
            cfg.database_path,
            read_only=cfg.database.read_only,
            settings=cfg.database.settings,
            query_timeout=cfg.database.query_timeout,
        )
    except Exception as e:
        console.print(f"[red]Database error:[/red] {e}")
        sys.exit(1)

    try:
        if run_init:
            try:
                run_init_script(engine, cfg.init_script)
            except InitializationError as e:
                console.print(f"failed running initialization: {e}", markup=False, highlight=False)
                sys.exit(1)

        with HistoryJournal.open(cfg.journal_path, fsync=cfg.journal.fsync) as journal:
            _build_session(engine, journal, cfg).run()
    except KeyboardInterrupt:
        pass
    except Exception as e:
        console.print(f"\n[red]Error:[/red] {e}")
        if debug:
            console.print_exception()
        sys.exit(1)
    finally:
        engine.close()


@cli.command()
@click.option(
    "--config", "-c",
    type=click.Path(exists=True),
    help="Path to config YAML file.",
)
@click.option(
    "--data-dir", "-d",
    type=click.Path(file_okay=False, path_type=Path),
    help="Directory holding the prompt journal (default: ./data).",
)
@click.option(
    "--limit", "-n",
    default=20,
    type=click.IntRange(min=1),
    help="Number of prompts to show.",
)
@click.option(
    "--failed",
    is_flag=True,
    help="Only show prompts that failed.",
)
def history(config: Optional[str], data_dir: Optional[Path], limit: int, failed: bool):
    """List recent prompts from the journal."""
    cfg = _load_config(config, data_dir)
    prompts = recent_prompts(cfg.journal_path, limit=limit, failed_only=failed)

    if not prompts:
        console.print("[dim]No prompts recorded.[/dim]")
        return

    table = Table(title="Recent Prompts", show_header=True)
    table.add_column("#", justify="right", style="cyan")
    table.add_column("Status")
    table.add_column("Query")

    for p in prompts:
        status = "[green]ok[/green]" if p.successful else "[red]failed[/red]"
        table.add_row(str(p.idx), status, escape(p.msg))

    console.print(table)


@cli.command()
def init():
    """Create a sample config file.

    Generates quarry.yaml in the current directory with example settings.
    """
    sample_config = '''# Quarry Configuration

# Directory for the database file, prompt journal and debug log
data_dir: data

# Prompt journal (one JSON record per line, append-only)
journal:
  filename: prompt_history.jsonl
  fsync: true

# Primary DuckDB database (relative to data_dir, or :memory:)
database:
  path: quarry.duckdb
  read_only: false
  query_timeout: 5  # seconds per statement; null disables
  # settings:
  #   threads: 4
  #   memory_limit: 2GB

# Optional: databases attached at session start
# attach:
#   - name: warehouse
#     path: warehouse.duckdb
#     read_only: true

# Optional: catalog (or catalog.schema) selected after attaching
# use: warehouse

# Script run by "quarry repl --init"
init_script: initialization.sql
'''

    config_path = Path("quarry.yaml")

    if config_path.exists():
        if not click.confirm("quarry.yaml already exists. Overwrite?"):
            console.print("[dim]Aborted.[/dim]")
            return

    config_path.write_text(sample_config)
    console.print(f"[green]Created:[/green] {config_path}")
    console.print("\n[dim]Edit the file to configure your databases.[/dim]")


def main():
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
