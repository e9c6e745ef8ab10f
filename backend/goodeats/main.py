"""FastAPI application entry point."""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import OperationalError

from goodeats.config import settings
from goodeats.database import Base, engine
from goodeats.errors import BackendUnavailable

# Import routers
from goodeats.routers import auth, users, events, posts, friends

# Import all models so Base.metadata knows about them
from goodeats.models.user import User                    # noqa: F401
from goodeats.models.auth_session import AuthSession     # noqa: F401
from goodeats.models.event import Event                  # noqa: F401
from goodeats.models.rsvp import RSVP                    # noqa: F401
from goodeats.models.post import Post, Comment, PostLike  # noqa: F401
from goodeats.models.friendship import Friendship        # noqa: F401

logging.basicConfig(level=settings.LOG_LEVEL.upper())
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create database tables on startup (for SQLite dev mode)."""
    if settings.DATABASE_URL.startswith("sqlite"):
        Base.metadata.create_all(bind=engine)
        logger.info("Database tables created")
    yield


app = FastAPI(
    title="GoodEats!",
    description="Discover, host, and RSVP to food-centered gatherings",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS.split(","),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(OperationalError)
async def backend_unavailable_handler(request: Request, exc: OperationalError):
    """Database connectivity failures surface as a retryable 503."""
    logger.error("Database unavailable during %s %s: %s", request.method, request.url.path, exc.orig)
    error = BackendUnavailable()
    return JSONResponse(status_code=error.status_code, content={"detail": error.detail})


# Register routers
app.include_router(auth.router, prefix="/api/auth", tags=["Auth"])
app.include_router(users.router, prefix="/api/users", tags=["Users"])
app.include_router(events.router, prefix="/api/events", tags=["Events"])
app.include_router(posts.router, prefix="/api/posts", tags=["Feed"])
app.include_router(friends.router, prefix="/api/friends", tags=["Friends"])


@app.get("/api/health")
def health_check():
    return {"status": "ok"}
