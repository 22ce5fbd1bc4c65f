"""Tests for session bootstrap and the initialization script."""

import duckdb
import pytest

from quarry.core.config import Config
from quarry.errors import BootstrapError, InitializationError, format_error_chain
from quarry.execution.bootstrap import bootstrap_session, run_init_script
from quarry.execution.engine import QueryEngine


@pytest.fixture
def engine():
    engine = QueryEngine.connect(":memory:")
    yield engine
    engine.close()


@pytest.fixture
def warehouse(tmp_path):
    """A DuckDB file with one table."""
    path = tmp_path / "warehouse.duckdb"
    conn = duckdb.connect(str(path))
    conn.execute("create table orders as select 1 as id, 'ring' as item")
    conn.close()
    return path


def _config(tmp_path, **data) -> Config:
    return Config.model_validate({"data_dir": str(tmp_path), **data})


class TestBootstrapSession:
    """Tests for bootstrap_session."""

    def test_no_attachments_is_a_no_op(self, engine, tmp_path):
        bootstrap_session(engine, _config(tmp_path))

    def test_attach_and_query(self, engine, tmp_path, warehouse):
        cfg = _config(tmp_path, attach=[{"name": "wh", "path": str(warehouse)}])
        bootstrap_session(engine, cfg)
        assert engine.query("select item from wh.orders").results[0].rows == [("ring",)]

    def test_attach_path_relative_to_data_dir(self, engine, tmp_path, warehouse):
        cfg = _config(tmp_path, attach=[{"name": "wh", "path": warehouse.name}])
        bootstrap_session(engine, cfg)
        assert engine.query("select count(*) from wh.orders").results[0].rows == [(1,)]

    def test_use_selects_catalog(self, engine, tmp_path, warehouse):
        cfg = _config(tmp_path, attach=[{"name": "wh", "path": str(warehouse)}], use="wh")
        bootstrap_session(engine, cfg)
        assert engine.query("select id from orders").results[0].rows == [(1,)]

    def test_attached_read_only_by_default(self, engine, tmp_path, warehouse):
        cfg = _config(tmp_path, attach=[{"name": "wh", "path": str(warehouse)}])
        bootstrap_session(engine, cfg)
        assert not engine.query("insert into wh.orders values (2, 'watch')").ok

    def test_failed_attach_is_chained(self, engine, tmp_path):
        cfg = _config(tmp_path, attach=[{"name": "gone", "path": str(tmp_path / "missing" / "x.duckdb")}])
        with pytest.raises(BootstrapError) as exc_info:
            bootstrap_session(engine, cfg)

        chain = format_error_chain(exc_info.value)
        assert len(chain) == 2
        assert chain[0] == "BootstrapError: could not attach database 'gone'"
        assert isinstance(exc_info.value.__cause__, duckdb.Error)

    def test_remaining_attachments_still_tried(self, engine, tmp_path, warehouse):
        cfg = _config(tmp_path, attach=[
            {"name": "gone", "path": str(tmp_path / "missing" / "x.duckdb")},
            {"name": "wh", "path": str(warehouse)},
        ])
        with pytest.raises(BootstrapError):
            bootstrap_session(engine, cfg)
        assert engine.query("select count(*) from wh.orders").ok

    def test_failed_use(self, engine, tmp_path):
        with pytest.raises(BootstrapError, match="could not use 'nowhere'"):
            bootstrap_session(engine, _config(tmp_path, use="nowhere"))


class TestRunInitScript:
    """Tests for run_init_script."""

    def test_success(self, engine, tmp_path):
        script = tmp_path / "initialization.sql"
        script.write_text("create table gems(name varchar);\ninsert into gems values ('opal');\n")
        run_init_script(engine, script)
        assert engine.query("select name from gems").results[0].rows == [("opal",)]

    def test_statement_failure(self, engine, tmp_path):
        script = tmp_path / "initialization.sql"
        script.write_text("select * from nope;")
        with pytest.raises(InitializationError):
            run_init_script(engine, script)

    def test_parse_failure(self, engine, tmp_path):
        script = tmp_path / "initialization.sql"
        script.write_text("create tabel x;")
        with pytest.raises(InitializationError):
            run_init_script(engine, script)

    def test_missing_script(self, engine, tmp_path):
        with pytest.raises(FileNotFoundError):
            run_init_script(engine, tmp_path / "initialization.sql")
