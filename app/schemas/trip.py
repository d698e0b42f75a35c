from pydantic import BaseModel, ConfigDict, Field, model_validator
from uuid import UUID
from datetime import date, datetime
from typing import Optional

from app.schemas.travel import TransportMode, TripStatus


class TripBase(BaseModel):
    title: str = Field(min_length=1, max_length=200)
    destination: Optional[str] = None
    latitude: Optional[float] = Field(default=None, ge=-90, le=90)
    longitude: Optional[float] = Field(default=None, ge=-180, le=180)
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    status: TripStatus = TripStatus.PLANNED
    transport_mode: Optional[TransportMode] = None
    departure_airport_code: Optional[str] = None
    departure_airport_lat: Optional[float] = Field(default=None, ge=-90, le=90)
    departure_airport_lng: Optional[float] = Field(default=None, ge=-180, le=180)
    arrival_airport_code: Optional[str] = None
    arrival_airport_lat: Optional[float] = Field(default=None, ge=-90, le=90)
    arrival_airport_lng: Optional[float] = Field(default=None, ge=-180, le=180)


class TripCreate(TripBase):
    @model_validator(mode="after")
    def validate_dates(self) -> "TripCreate":
        """end_date may not precede start_date."""
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValueError("end_date must be on or after start_date")
        return self


class TripRead(TripBase):
    id: UUID
    user_id: UUID
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class TripGeocodeResult(BaseModel):
    """Response for POST /users/{user_id}/trips/{trip_id}/geocode."""
    latitude: float
    longitude: float
