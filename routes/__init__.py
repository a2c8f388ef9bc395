"""
API route modules.
"""

from routes.packing_lists import router as packing_lists_router

__all__ = [
    "packing_lists_router",
]
