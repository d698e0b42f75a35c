from fastapi import FastAPI

from app.core.config import settings
from app.routers import users, trips, travel_map, geocode


app = FastAPI(
    title=settings.project_name,
    version="1.0.0",
)

# Include routers
app.include_router(users.router, prefix=settings.api_v1_prefix)
app.include_router(trips.router, prefix=settings.api_v1_prefix)
app.include_router(travel_map.router, prefix=settings.api_v1_prefix)
app.include_router(geocode.router, prefix=settings.api_v1_prefix)


@app.get("/")
def root():
    """Root endpoint."""
    return {
        "message": "Welcome to Travel Route API",
        "version": "1.0.0",
        "docs": "/docs"
    }


@app.get("/health")
def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}
