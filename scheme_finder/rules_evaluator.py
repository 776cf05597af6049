import logging
from datetime import date, datetime, timezone
from typing import Iterable, List, Optional, Union

from scheme_finder.models import (
    ELIGIBLE_MESSAGE,
    EligibilityCriteria,
    EligibilityResult,
    Scheme,
    SchemeEligibility,
    SchemeSummary,
    UserProfile
)

logger = logging.getLogger(__name__)

CURRENCY_SYMBOL = "₹"


def _today() -> date:
    return datetime.now(timezone.utc).date()


def _format_amount(value: Union[int, float]) -> str:
    """Render whole-number amounts without a trailing .0"""
    if float(value).is_integer():
        return str(int(value))
    return str(value)


class RulesEvaluator:
    """Evaluates applicant profiles against scheme eligibility criteria"""

    @staticmethod
    def calculate_age(date_of_birth: date, today: Optional[date] = None) -> int:
        """Full years elapsed; a birthday not yet reached this year does not count"""
        today = today or _today()
        age = today.year - date_of_birth.year
        if (today.month, today.day) < (date_of_birth.month, date_of_birth.day):
            age -= 1
        return age

    @staticmethod
    def _profile_age(profile: UserProfile, today: Optional[date]) -> Optional[int]:
        if profile.date_of_birth is not None:
            return RulesEvaluator.calculate_age(profile.date_of_birth, today)
        return profile.age

    @staticmethod
    def evaluate(
        profile: UserProfile,
        criteria: EligibilityCriteria,
        today: Optional[date] = None
    ) -> EligibilityResult:
        """
        Evaluate a profile against one criteria set

        Every check runs; a failing check appends its reason without stopping
        the others. Checks whose inputs are absent are skipped, except the
        category check, which fails when the profile has no category.

        Returns: EligibilityResult with reasons in evaluation order
        """
        reasons: List[str] = []

        # Age
        age = RulesEvaluator._profile_age(profile, today)
        if age is not None:
            if criteria.min_age is not None and age < criteria.min_age:
                reasons.append(f"Age requirement not met. Minimum age: {criteria.min_age} years")
            if criteria.max_age is not None and age > criteria.max_age:
                reasons.append(f"Age requirement not met. Maximum age: {criteria.max_age} years")

        # Income
        if profile.income is not None:
            if criteria.min_income is not None and profile.income < criteria.min_income:
                reasons.append(
                    f"Income requirement not met. Minimum income: {CURRENCY_SYMBOL}{_format_amount(criteria.min_income)}"
                )
            if criteria.max_income is not None and profile.income > criteria.max_income:
                reasons.append(
                    f"Income requirement not met. Maximum income: {CURRENCY_SYMBOL}{_format_amount(criteria.max_income)}"
                )

        # Gender
        if criteria.gender and criteria.gender != "Any" and profile.gender != criteria.gender:
            reasons.append(f"Gender requirement not met. Required: {criteria.gender}")

        # Category: an absent profile category is a failure
        if criteria.categories and profile.category not in criteria.categories:
            reasons.append(
                f"Category requirement not met. Required categories: {', '.join(criteria.categories)}"
            )

        # State: an absent profile state skips the check
        state = profile.state
        if criteria.states and state and state not in criteria.states:
            reasons.append(f"State requirement not met. Available in: {', '.join(criteria.states)}")

        # Family size
        if criteria.family_size is not None and profile.family_size:
            if profile.family_size > criteria.family_size:
                reasons.append(
                    f"Family size requirement not met. Maximum family size: {criteria.family_size}"
                )

        # Occupation
        if criteria.occupations and profile.occupation and profile.occupation not in criteria.occupations:
            reasons.append(
                f"Occupation requirement not met. Required occupations: {', '.join(criteria.occupations)}"
            )

        if reasons:
            return EligibilityResult(is_eligible=False, reasons=reasons)
        return EligibilityResult(is_eligible=True, reasons=[ELIGIBLE_MESSAGE])

    @staticmethod
    def evaluate_all(
        profile: UserProfile,
        schemes: Iterable[Scheme],
        today: Optional[date] = None
    ) -> List[SchemeEligibility]:
        """
        Evaluate a profile against every given scheme

        Returns: results with eligible schemes first, input order kept within
        the eligible and the ineligible groups
        """
        today = today or _today()
        results = [
            SchemeEligibility(
                scheme=SchemeSummary.from_scheme(scheme, with_description=True),
                eligibility=RulesEvaluator.evaluate(profile, scheme.eligibility_criteria, today)
            )
            for scheme in schemes
        ]

        # sorted() is stable, so this is a partition rather than a reorder
        results = sorted(results, key=lambda r: not r.eligibility.is_eligible)

        eligible_count = sum(1 for r in results if r.eligibility.is_eligible)
        logger.debug(f"Batch evaluation: {eligible_count}/{len(results)} schemes eligible")
        return results
