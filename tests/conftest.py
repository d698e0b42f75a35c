import pytest
from datetime import date
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from fastapi.testclient import TestClient

import app.models  # noqa: F401
from app.db.base import Base
from app.db.session import get_db
from app.main import app
from app.schemas.travel import GeoPoint, HomeLocation, TripSnapshot, TripStatus
from app.seed.seed_data import seed_db
from app.services.travel_map import clear_travel_map_cache


# Use SQLite database for testing
SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL, connect_args={"check_same_thread": False}
)


@event.listens_for(engine, "connect")
def set_sqlite_pragma(dbapi_conn, connection_record):
    """Enable foreign keys so trip rows follow their user."""
    dbapi_conn.execute("PRAGMA foreign_keys=ON")


TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db_session():
    """Create a fresh database for each test."""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db_session):
    """Create a test client with database dependency override."""
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def seeded_db(db_session):
    """Create a database session with seeded data."""
    seed_db(db_session)
    return db_session


@pytest.fixture(scope="function")
def seeded_client(seeded_db):
    """Create a test client with seeded database."""
    def override_get_db():
        try:
            yield seeded_db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()


@pytest.fixture(autouse=True)
def _clear_travel_map_cache():
    """Memoized travel maps must not leak between tests."""
    clear_travel_map_cache()
    yield
    clear_travel_map_cache()


# Shared places
HOME = HomeLocation(point=GeoPoint(latitude=40.0, longitude=-74.0), label="Home")
PARIS = GeoPoint(latitude=48.85, longitude=2.35)
ROME = GeoPoint(latitude=41.9, longitude=12.5)
LONDON = GeoPoint(latitude=51.5074, longitude=-0.1278)
JFK = GeoPoint(latitude=40.6413, longitude=-73.7781)
CDG = GeoPoint(latitude=49.0097, longitude=2.5479)


def make_trip(
    trip_id: str,
    point: GeoPoint | None,
    start: date | None = None,
    end: date | None = None,
    status: TripStatus = TripStatus.PLANNED,
    **kwargs,
) -> TripSnapshot:
    """TripSnapshot with sensible defaults for tests."""
    return TripSnapshot(
        id=trip_id,
        title=kwargs.pop("title", f"Trip {trip_id}"),
        destination=kwargs.pop("destination", f"Place {trip_id}"),
        destination_point=point,
        start_date=start,
        end_date=end,
        status=status,
        **kwargs,
    )
