"""ARENA-COMMANDER - opponent posture service.

Main FastAPI application.  Hosts one mode controller per match behind the
/api/ai router so an external match loop (or a debugging client) can feed
tick snapshots and read the opponent's mode.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from arena import __version__
from arena.comms.event_bus import EventBus

from app.config import settings
from app.matches import MatchRegistry
from app.routers.ai import router as ai_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    logger.info("=" * 60)
    logger.info(f"  {settings.app_name} v{__version__} - INITIALIZING")
    logger.info("=" * 60)

    bus = EventBus()
    app.state.event_bus = bus
    app.state.matches = MatchRegistry(settings, bus=bus)

    cfg = settings.controller_config()
    logger.info(
        f"Mode controller: defend>={cfg.defend_threat_threshold:g} "
        f"push cooldown={cfg.push_cooldown:g}s "
        f"push archetypes={sorted(cfg.push_archetypes)}"
    )

    yield

    logger.info(f"{settings.app_name} shutting down ({len(app.state.matches)} live matches)")


# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    description="Lane-defense opponent mode controller",
    version=__version__,
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(ai_router)


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {
        "status": "operational",
        "version": __version__,
        "system": settings.app_name,
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host=settings.host, port=settings.port, reload=settings.debug)
