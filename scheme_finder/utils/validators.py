"""
Utility functions for validating and normalizing scheme data
"""
import re
from typing import Iterable, List

from ..models.scheme import SOCIAL_CATEGORIES

# States lists that mean "available everywhere"
NATIONWIDE_STATE_TOKENS = {"all", "all states", "india", "pan india"}


def validate_scheme_name(scheme_name: str) -> bool:
    """
    Validate scheme name
    
    Args:
        scheme_name: Name to validate
    
    Returns:
        True if valid, False otherwise
    """
    if not scheme_name or not scheme_name.strip():
        return False
    
    # Check length
    if len(scheme_name.strip()) < 3 or len(scheme_name.strip()) > 200:
        return False
    
    # Letters in any script, digits, spaces and common punctuation
    if not re.match(r"^[\w\s\-\(\)\.,&'/:]+$", scheme_name):
        return False
    
    return True


def normalize_categories(values: Iterable[str]) -> List[str]:
    """
    Map free-form social category labels onto the known set
    
    Matching is case-insensitive; BPL maps to EWS and anything else
    unrecognised falls back to General. Duplicates are dropped, first
    occurrence wins.
    """
    normalized = []
    for value in values or []:
        if not isinstance(value, str) or not value.strip():
            continue
        label = value.strip()
        match = next((c for c in SOCIAL_CATEGORIES if c.lower() == label.lower()), None)
        if match is None:
            match = "EWS" if label.lower() == "bpl" else "General"
        if match not in normalized:
            normalized.append(match)
    return normalized


def normalize_states(values: Iterable[str]) -> List[str]:
    """
    Clean a states list; a nationwide marker such as "All" empties it
    
    An empty list leaves the scheme unconstrained by state.
    """
    states = []
    for value in values or []:
        if not isinstance(value, str) or not value.strip():
            continue
        state = value.strip()
        if state.lower() in NATIONWIDE_STATE_TOKENS:
            return []
        if state not in states:
            states.append(state)
    return states


