"""
History recorder for single-scheme eligibility checks
"""
import logging
from datetime import datetime
from typing import Optional

from ..models.eligibility import EligibilityResult
from ..models.user import HistoryEntry
from ..models.base import get_current_utc_time

logger = logging.getLogger(__name__)


class HistoryRecorder:
    """Appends eligibility outcomes to an identity's log, best-effort"""

    def __init__(self, store):
        # store: anything with `append_eligibility_check(user_id, entry) -> bool`
        self.store = store

    async def record(
        self,
        user_id: str,
        scheme_id: str,
        result: EligibilityResult,
        checked_at: Optional[datetime] = None
    ) -> bool:
        """
        Append one history entry

        Failures are logged and reported as False, never raised, so a
        computed eligibility result is never lost to a storage problem.
        """
        entry = HistoryEntry(
            scheme_id=scheme_id,
            checked_at=checked_at or get_current_utc_time(),
            is_eligible=result.is_eligible,
            reasons=list(result.reasons)
        )
        try:
            appended = await self.store.append_eligibility_check(user_id, entry)
        except Exception as e:
            logger.error(f"Failed to record eligibility check for user {user_id}, scheme {scheme_id}: {e}")
            return False

        if not appended:
            logger.warning(f"Eligibility check for user {user_id}, scheme {scheme_id} was not recorded")
        return bool(appended)
