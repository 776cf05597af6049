"""
API routes for the Government Scheme Finder
"""

from .schemes import router as schemes_router
from .eligibility import router as eligibility_router
from .users import router as users_router

__all__ = [
    "schemes_router",
    "eligibility_router",
    "users_router"
]
