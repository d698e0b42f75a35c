"""Travel map endpoints: routes, mileage summary and map descriptors."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from uuid import UUID

from app.db.session import get_db
from app.models.trip import Trip
from app.routers.users import get_user_or_404
from app.schemas.travel import TravelMapRequest, TravelMapResponse
from app.schemas.user import home_location_for
from app.services.travel_map import compute_travel_map

router = APIRouter(tags=["travel-map"])


@router.post("/travel-map/compute", response_model=TravelMapResponse)
def compute_map(payload: TravelMapRequest) -> TravelMapResponse:
    """Compute routes, mileage and map view for a caller-supplied trip snapshot."""
    return compute_travel_map(payload.trips, payload.home)


@router.get("/users/{user_id}/travel-map", response_model=TravelMapResponse)
def get_user_travel_map(user_id: UUID, db: Session = Depends(get_db)) -> TravelMapResponse:
    """Travel map for a user's stored trips and home location."""
    user = get_user_or_404(db, user_id)
    trips = db.query(Trip).filter(Trip.user_id == user_id).order_by(Trip.created_at, Trip.seq).all()
    return compute_travel_map([t.to_snapshot() for t in trips], home_location_for(user))
