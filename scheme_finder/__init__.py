"""
Government Scheme Finder

Discover government welfare schemes and check eligibility against
a citizen's profile.
"""

__version__ = "1.0.0"
__author__ = "Scheme Finder Team"
__description__ = "Rule-based government scheme eligibility service"
