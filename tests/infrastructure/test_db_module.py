"""Tests for the infrastructure.db module."""

from commission_desk.infrastructure import db as db_module
from commission_desk.infrastructure.settings import AppSettings


def test_create_engine_configures_server_pool(monkeypatch):
    """Server URLs should use a bounded QueuePool with health checks."""
    captured = {}

    def fake_create_engine(db_url, **kwargs):
        captured["db_url"] = db_url
        captured["kwargs"] = kwargs
        return "engine"

    monkeypatch.setattr(db_module, "create_engine", fake_create_engine)

    engine = db_module._create_engine("postgresql://user@host/ledger", 7.5)

    assert engine == "engine"
    assert captured["kwargs"]["poolclass"] is db_module.QueuePool
    assert captured["kwargs"]["pool_size"] == 5
    assert captured["kwargs"]["pool_timeout"] == 7.5
    assert captured["kwargs"]["pool_pre_ping"] is True


def test_create_engine_sqlite_creates_parent_dir_and_enforces_fks(tmp_path):
    """SQLite engines create the file directory and turn foreign keys on."""
    db_path = tmp_path / "nested" / "ledger.db"

    engine = db_module._create_engine(f"sqlite:///{db_path}", 2.0)
    try:
        with engine.connect() as conn:
            enabled = conn.exec_driver_sql("PRAGMA foreign_keys").scalar()
    finally:
        engine.dispose()

    assert db_path.parent.is_dir()
    assert enabled == 1


def test_get_engine_caches_engine(monkeypatch):
    """get_engine should build the engine once."""
    monkeypatch.setattr(db_module, "_engine", None)
    created = []

    def fake_create_engine(url, timeout):
        created.append((url, timeout))
        return f"engine:{url}"

    monkeypatch.setattr(db_module, "_create_engine", fake_create_engine)
    settings = AppSettings(db_url="sqlite:///ledger.db", db_timeout=3.0)

    engine_one = db_module.get_engine(settings)
    engine_two = db_module.get_engine(settings)

    assert engine_one is engine_two
    assert created == [("sqlite:///ledger.db", 3.0)]


def test_dispose_engine_resets_cache(monkeypatch):
    class FakeEngine:
        disposed = False

        def dispose(self):
            self.disposed = True

    fake = FakeEngine()
    monkeypatch.setattr(db_module, "_engine", fake)

    db_module.dispose_engine()

    assert fake.disposed is True
    assert db_module._engine is None


def test_adapter_proxies_get_engine(monkeypatch):
    """SqlAlchemyDatabaseEngineAdapter should delegate to get_engine."""
    settings = AppSettings()
    monkeypatch.setattr(
        db_module,
        "get_engine",
        lambda received: ("engine", received),
    )

    adapter = db_module.SqlAlchemyDatabaseEngineAdapter(settings)

    assert adapter.get_engine() == ("engine", settings)
