"""
API layer for PrepPilot

Contains FastAPI routers for:
- Interview management
- Results
- Reference metadata
"""

from src.api.router import api_router

__all__ = ["api_router"]
