"""
API Routers Package

Contains FastAPI routers grouped by functionality.

Architecture Notes:
    - Part of API Layer (Presentation)
    - Routers are thin wrappers around Application Layer services
    - All routers follow dependency injection pattern

Available Routers:
    - reports_router: /excel report generation, download and deletion
"""

from .reports import router as reports_router

__all__ = ["reports_router"]
