"""Trip feed for the route engine: create/list trips and geocode their destinations."""

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from uuid import UUID

from app.db.session import get_db
from app.models.trip import Trip
from app.routers.users import get_user_or_404
from app.schemas.trip import TripCreate, TripRead, TripGeocodeResult
from app.services.geocoding_client import geocode_destination

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users/{user_id}/trips", tags=["trips"])


@router.post("", response_model=TripRead, status_code=201)
def create_trip(user_id: UUID, trip: TripCreate, db: Session = Depends(get_db)):
    """Add a trip for a user."""
    get_user_or_404(db, user_id)
    data = trip.model_dump()
    data["status"] = trip.status.value
    data["transport_mode"] = trip.transport_mode.value if trip.transport_mode else None
    db_trip = Trip(user_id=user_id, **data)
    db.add(db_trip)
    db.commit()
    db.refresh(db_trip)
    return db_trip


@router.get("", response_model=list[TripRead])
def list_trips(user_id: UUID, db: Session = Depends(get_db)):
    """List a user's trips in insertion order."""
    get_user_or_404(db, user_id)
    return db.query(Trip).filter(Trip.user_id == user_id).order_by(Trip.created_at, Trip.seq).all()


@router.post("/{trip_id}/geocode", response_model=TripGeocodeResult)
async def geocode_trip(user_id: UUID, trip_id: UUID, db: Session = Depends(get_db)):
    """Resolve the trip's destination text and store the top candidate's coordinates."""
    trip = db.query(Trip).filter(Trip.id == trip_id, Trip.user_id == user_id).first()
    if not trip:
        raise HTTPException(status_code=404, detail="Trip not found")
    if not trip.destination:
        raise HTTPException(status_code=400, detail="No destination set")

    point = await geocode_destination(trip.destination)
    if point is None:
        raise HTTPException(status_code=404, detail="Could not geocode destination")

    trip.latitude = point.latitude
    trip.longitude = point.longitude
    db.commit()
    db.refresh(trip)
    logger.info("Trip geocoded: trip_id=%s destination=%r -> (%s, %s)", trip_id, trip.destination, trip.latitude, trip.longitude)
    return TripGeocodeResult(latitude=trip.latitude, longitude=trip.longitude)
