import time
import uuid
from threading import Lock

from sqlalchemy import BigInteger, Column, String, Float, Date, DateTime, ForeignKey, Uuid, func
from sqlalchemy.orm import relationship

from app.db.base import Base
from app.schemas.travel import GeoPoint, TransportMode, TripSnapshot, TripStatus

_seq_lock = Lock()
_last_seq = 0


def next_insertion_seq() -> int:
    """Strictly increasing insertion key; rows flushed together still get distinct values."""
    global _last_seq
    with _seq_lock:
        _last_seq = max(time.time_ns(), _last_seq + 1)
        return _last_seq


def _point(lat: float | None, lng: float | None) -> GeoPoint | None:
    if lat is None or lng is None:
        return None
    return GeoPoint(latitude=lat, longitude=lng)


class Trip(Base):
    __tablename__ = "trips"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String, nullable=False)
    destination = Column(String, nullable=True)
    # Geocoded destination (set by POST /trips/{id}/geocode)
    latitude = Column(Float, nullable=True)
    longitude = Column(Float, nullable=True)
    start_date = Column(Date, nullable=True)
    end_date = Column(Date, nullable=True)
    status = Column(String, nullable=False, default=TripStatus.PLANNED.value)
    transport_mode = Column(String, nullable=True)  # FLIGHT | CAR
    departure_airport_code = Column(String, nullable=True)
    departure_airport_lat = Column(Float, nullable=True)
    departure_airport_lng = Column(Float, nullable=True)
    arrival_airport_code = Column(String, nullable=True)
    arrival_airport_lat = Column(Float, nullable=True)
    arrival_airport_lng = Column(Float, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    # Tie-breaker for created_at, which has one-second resolution on SQLite
    seq = Column(BigInteger, nullable=False, default=next_insertion_seq, index=True)

    # Relationships
    user = relationship("User", back_populates="trips")

    def to_snapshot(self) -> TripSnapshot:
        """Read-only snapshot for the route engine."""
        return TripSnapshot(
            id=str(self.id),
            title=self.title,
            destination=self.destination,
            destination_point=_point(self.latitude, self.longitude),
            start_date=self.start_date,
            end_date=self.end_date,
            status=TripStatus(self.status),
            transport_mode=TransportMode(self.transport_mode) if self.transport_mode else None,
            departure_airport=_point(self.departure_airport_lat, self.departure_airport_lng),
            arrival_airport=_point(self.arrival_airport_lat, self.arrival_airport_lng),
        )
