import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from app.db import enable_sqlite_foreign_keys, get_db
from app.main import app
from app.models import Base, Customer
from app.services.page_cache import RenderedPageCache, get_page_cache


@pytest.fixture()
def engine(tmp_path):
    db_path = tmp_path / "test.db"
    engine = create_engine(
        f"sqlite+pysqlite:///{db_path}", connect_args={"check_same_thread": False}
    )
    enable_sqlite_foreign_keys(engine)
    Base.metadata.create_all(engine)
    return engine


@pytest.fixture()
def SessionLocal(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture()
def db_session(SessionLocal):
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def page_cache():
    return RenderedPageCache()


@pytest.fixture()
def customer(db_session):
    customer = Customer(name="Evil Rabbit", email="evil@rabbit.com")
    db_session.add(customer)
    db_session.commit()
    return customer


@pytest.fixture()
def client(SessionLocal, page_cache):
    def override_get_db():
        db = SessionLocal()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_page_cache] = lambda: page_cache
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
