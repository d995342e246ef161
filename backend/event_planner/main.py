"""FastAPI application entry point."""
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from event_planner.config import settings
from event_planner.database import Base, engine
from event_planner.errors import http_error_from_service
from event_planner.services.error_codes import ErrorCode
from event_planner.services.exceptions import ServiceError

# Import routers
from event_planner.routers import users, events, attendees, invitations

# Import all models so Base.metadata knows about them
from event_planner.models.user import User                 # noqa: F401
from event_planner.models.event import Event               # noqa: F401
from event_planner.models.attendee import EventAttendee    # noqa: F401
from event_planner.models.invitation import Invitation     # noqa: F401

logging.basicConfig(level=settings.LOG_LEVEL.upper())
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Event Planner",
    description="Events, attendee membership and email invitations",
    version="0.1.0",
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS.split(","),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register routers
app.include_router(users.router, prefix="/api/users", tags=["Users"])
app.include_router(events.router, prefix="/api/events", tags=["Events"])
app.include_router(attendees.router, prefix="/api/events", tags=["Attendees"])
app.include_router(invitations.router, prefix="/api/invitations", tags=["Invitations"])


@app.exception_handler(ServiceError)
async def handle_service_error(request: Request, exc: ServiceError):
    err = http_error_from_service(exc)
    return JSONResponse(status_code=err.status_code, content={"detail": err.detail}, headers=err.headers)


@app.exception_handler(SQLAlchemyError)
async def handle_store_error(request: Request, exc: SQLAlchemyError):
    logger.error("Store failure on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=500,
        content={"detail": {"code": ErrorCode.INTERNAL.value, "message": "internal store error"}},
    )


@app.on_event("startup")
def on_startup():
    """Create database tables on startup (for SQLite dev mode)."""
    if settings.DATABASE_URL.startswith("sqlite"):
        Base.metadata.create_all(bind=engine)


@app.get("/api/health")
def health_check():
    return {"status": "ok"}
