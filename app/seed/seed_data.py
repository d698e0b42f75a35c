import uuid
from datetime import date
from sqlalchemy.orm import Session

from app.models.user import User
from app.models.trip import Trip


def seed_db(db: Session) -> None:
    """Seed the database with a demo traveler: New York home, a mix of past and planned trips."""

    # Clear existing data (optional - comment out if you want to preserve data)
    db.query(Trip).delete()
    db.query(User).delete()
    db.commit()

    traveler = User(
        id=uuid.uuid4(),
        email="traveler@example.com",
        home_city="New York, New York",
        home_latitude=40.7128,
        home_longitude=-74.0060,
    )
    db.add(traveler)
    db.commit()
    db.refresh(traveler)

    trips = [
        # Completed flight with both airports known: JFK -> CDG
        Trip(
            user_id=traveler.id,
            title="Paris Spring Break",
            destination="Paris, France",
            latitude=48.8566,
            longitude=2.3522,
            start_date=date(2026, 3, 14),
            end_date=date(2026, 3, 21),
            status="COMPLETED",
            transport_mode="FLIGHT",
            departure_airport_code="JFK",
            departure_airport_lat=40.6413,
            departure_airport_lng=-73.7781,
            arrival_airport_code="CDG",
            arrival_airport_lat=49.0097,
            arrival_airport_lng=2.5479,
        ),
        # Road trip
        Trip(
            user_id=traveler.id,
            title="Boston Weekend",
            destination="Boston, Massachusetts",
            latitude=42.3601,
            longitude=-71.0589,
            start_date=date(2026, 5, 2),
            end_date=date(2026, 5, 4),
            status="COMPLETED",
            transport_mode="CAR",
        ),
        # Back-to-back pair: Rome ends the day Florence starts
        Trip(
            user_id=traveler.id,
            title="Rome",
            destination="Rome, Italy",
            latitude=41.9028,
            longitude=12.4964,
            start_date=date(2026, 9, 1),
            end_date=date(2026, 9, 6),
            status="PLANNED",
            transport_mode="FLIGHT",
        ),
        Trip(
            user_id=traveler.id,
            title="Florence",
            destination="Florence, Italy",
            latitude=43.7696,
            longitude=11.2558,
            start_date=date(2026, 9, 6),
            end_date=date(2026, 9, 10),
            status="PLANNED",
        ),
        # Not geocoded yet; excluded from routing
        Trip(
            user_id=traveler.id,
            title="Someday: Kyoto",
            destination="Kyoto, Japan",
            status="DRAFT",
        ),
    ]
    db.add_all(trips)
    db.commit()
