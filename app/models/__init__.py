from app.models.user import User
from app.models.trip import Trip

__all__ = [
    "User",
    "Trip",
]
