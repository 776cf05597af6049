"""
Services package for the Government Scheme Finder
"""

from .mongo_service import MongoService, mongo_service
from .history_service import HistoryRecorder
from .eligibility_service import (
    EligibilityService,
    SchemeNotFoundError,
    ProfileNotFoundError,
    MissingProfileError
)

__all__ = [
    "MongoService",
    "mongo_service",
    "HistoryRecorder",
    "EligibilityService",
    "SchemeNotFoundError",
    "ProfileNotFoundError",
    "MissingProfileError"
]
