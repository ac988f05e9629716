from sqlalchemy import text

from room_booking.database import build_engine, check_db_connection, engine


def test_app_engine_is_reachable():
    assert check_db_connection() is True


def test_file_sqlite_engine(tmp_path):
    file_engine = build_engine(f"sqlite:///{tmp_path / 'app.db'}")
    try:
        assert check_db_connection(file_engine) is True
        with file_engine.begin() as conn:
            conn.execute(text("CREATE TABLE t (x INTEGER)"))
            conn.execute(text("INSERT INTO t VALUES (1)"))
        with file_engine.connect() as conn:
            assert conn.execute(text("SELECT x FROM t")).scalar() == 1
    finally:
        file_engine.dispose()


def test_unreachable_database_reports_false(tmp_path):
    missing = build_engine(f"sqlite:///{tmp_path / 'no-such-dir' / 'app.db'}")
    assert check_db_connection(missing) is False


def test_in_memory_engine_shares_one_connection():
    assert engine.pool.__class__.__name__ == "StaticPool"
