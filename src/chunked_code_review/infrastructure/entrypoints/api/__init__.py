from .app_factory import create_app
from .health_router import router as health_router
from .review_router import router as review_router

__all__ = ["create_app", "health_router", "review_router"]
