"""
Eligibility service: fetch the inputs, evaluate, record history
"""
import logging
from datetime import date
from typing import Callable, List, Optional

from ..models.eligibility import SchemeEligibility
from ..models.scheme import SchemeSummary
from ..models.user import UserProfile
from ..models.base import get_current_utc_time
from ..rules_evaluator import RulesEvaluator
from .history_service import HistoryRecorder

logger = logging.getLogger(__name__)


class SchemeNotFoundError(LookupError):
    """Referenced scheme does not exist"""


class ProfileNotFoundError(LookupError):
    """Identity has no stored profile"""


class MissingProfileError(ValueError):
    """Neither an explicit profile nor an identity was supplied"""


class EligibilityService:
    """Runs eligibility checks against stored schemes and profiles"""

    def __init__(self, store, recorder: Optional[HistoryRecorder] = None):
        self.store = store
        self.recorder = recorder or HistoryRecorder(store)

    async def resolve_profile(
        self,
        user_id: Optional[str],
        profile: Optional[UserProfile]
    ) -> UserProfile:
        """Use the explicit profile, otherwise the identity's stored one"""
        if profile is not None:
            return profile
        if not user_id:
            raise MissingProfileError("Provide userData or authenticate to use your stored profile")
        stored = await self.store.get_user_profile(user_id)
        if stored is None:
            raise ProfileNotFoundError(f"Profile not found for user: {user_id}")
        return stored

    async def check_scheme(
        self,
        scheme_id: str,
        user_id: Optional[str] = None,
        profile: Optional[UserProfile] = None,
        schedule: Optional[Callable] = None,
        today: Optional[date] = None
    ) -> SchemeEligibility:
        """
        Check one scheme

        Args:
            scheme_id: Scheme to evaluate
            user_id: Authenticated identity, if any; enables history recording
            profile: Explicit profile, takes precedence over the stored one
            schedule: Runs the history append out of band, e.g.
                ``BackgroundTasks.add_task``; awaited inline when omitted

        Returns:
            SchemeEligibility for the scheme
        """
        scheme = await self.store.get_scheme(scheme_id)
        if scheme is None:
            raise SchemeNotFoundError(f"Scheme not found: {scheme_id}")

        applicant = await self.resolve_profile(user_id, profile)
        result = RulesEvaluator.evaluate(applicant, scheme.eligibility_criteria, today)

        if user_id:
            checked_at = get_current_utc_time()
            if schedule is not None:
                schedule(self.recorder.record, user_id, scheme.id, result, checked_at)
            else:
                await self.recorder.record(user_id, scheme.id, result, checked_at)

        return SchemeEligibility(scheme=SchemeSummary.from_scheme(scheme), eligibility=result)

    async def check_catalog(
        self,
        user_id: Optional[str] = None,
        profile: Optional[UserProfile] = None,
        category: Optional[str] = None,
        limit: int = 20,
        today: Optional[date] = None
    ) -> List[SchemeEligibility]:
        """Check every active scheme, optionally within one category, eligible first"""
        applicant = await self.resolve_profile(user_id, profile)
        schemes = await self.store.find_schemes(
            status="Active", category=category, limit=limit, newest_first=False
        )
        results = RulesEvaluator.evaluate_all(applicant, schemes, today)

        eligible_count = sum(1 for r in results if r.eligibility.is_eligible)
        logger.info(f"Eligibility check completed: {eligible_count}/{len(results)} schemes eligible")
        return results
