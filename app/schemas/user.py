from pydantic import BaseModel, ConfigDict, Field, model_validator
from uuid import UUID
from datetime import datetime
from typing import Optional

from app.schemas.travel import GeoPoint, HomeLocation


class UserBase(BaseModel):
    email: Optional[str] = None


class UserCreate(UserBase):
    pass


class UserRead(UserBase):
    id: UUID
    home_city: Optional[str] = None
    home_latitude: Optional[float] = None
    home_longitude: Optional[float] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class HomeLocationUpdate(BaseModel):
    """
    Request model for PATCH /users/{id}/home (written when the user picks a geocode result).

    Every key is optional; an explicit null clears the stored value. Only keys present
    in the payload are written (use model_fields_set).

    Example:
    ```json
    {"home_city": "Brooklyn, New York", "home_latitude": 40.65, "home_longitude": -73.95}
    ```
    """
    home_city: Optional[str] = Field(default=None, max_length=200)
    home_latitude: Optional[float] = Field(default=None, ge=-90, le=90)
    home_longitude: Optional[float] = Field(default=None, ge=-180, le=180)

    @model_validator(mode="before")
    @classmethod
    def strip_city(cls, data):
        """Trim whitespace on home_city; blank becomes null."""
        if isinstance(data, dict) and isinstance(data.get("home_city"), str):
            data = dict(data)
            data["home_city"] = data["home_city"].strip() or None
        return data


def home_location_for(user) -> Optional[HomeLocation]:
    """HomeLocation from a user row, or None unless both coordinates are set."""
    if user is None or user.home_latitude is None or user.home_longitude is None:
        return None
    return HomeLocation(
        point=GeoPoint(latitude=user.home_latitude, longitude=user.home_longitude),
        label=user.home_city,
    )
