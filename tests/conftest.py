# pylint: disable=redefined-outer-name
import pytest
import fakeredis
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, clear_mappers
from sqlalchemy.pool import StaticPool

from imis.adapters import orm, redis_eventpublisher


@pytest.fixture(autouse=True)
def fake_redis(monkeypatch):
    """Route event publication to an in-process fake Redis."""
    client = fakeredis.FakeRedis()
    monkeypatch.setattr(redis_eventpublisher, "r", client)
    return client


@pytest.fixture
def sqlite_engine():
    """SQLite in-memory database shared across threads (TestClient runs handlers in a threadpool)."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    orm.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def sqlite_session_factory(sqlite_engine):
    """Create SQLite in-memory database for fast testing."""
    orm.start_mappers()

    yield sessionmaker(bind=sqlite_engine)

    clear_mappers()


@pytest.fixture
def session(sqlite_session_factory):
    session = sqlite_session_factory()
    yield session
    session.close()


@pytest.fixture
def uow(sqlite_session_factory):
    from imis.service_layer.unit_of_work import SqlAlchemyUnitOfWork

    return SqlAlchemyUnitOfWork(sqlite_session_factory)


@pytest.fixture
def client(sqlite_session_factory):
    """TestClient wired to the SQLite database; startup hooks are not run."""
    from fastapi.testclient import TestClient
    from imis.entrypoints import api, dependencies
    from imis.service_layer.unit_of_work import SqlAlchemyUnitOfWork

    api.app.dependency_overrides[dependencies.get_unit_of_work] = (
        lambda: SqlAlchemyUnitOfWork(sqlite_session_factory)
    )
    yield TestClient(api.app)
    api.app.dependency_overrides.clear()
