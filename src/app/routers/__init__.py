"""API routers."""
from .ai import router as ai_router

__all__ = ["ai_router"]
