"""
Tests for catalog seeding and scheme data normalization
"""
import asyncio
import json

from scheme_finder.models import UserProfile
from scheme_finder.rules_evaluator import RulesEvaluator
from scheme_finder.seed import load_schemes, normalize_scheme_record, seed_schemes
from scheme_finder.utils import normalize_categories, normalize_states, validate_scheme_name

from conftest import make_scheme


def test_normalize_categories():
    assert normalize_categories(["sc", "OBC", "BPL", "Tribal", "General", "obc", "", None]) == [
        "SC", "OBC", "EWS", "General"
    ]
    assert normalize_categories([]) == []
    assert normalize_categories(None) == []


def test_normalize_states():
    assert normalize_states(["All"]) == []
    assert normalize_states(["Punjab", "All States"]) == []
    assert normalize_states([" Punjab ", "Haryana", "Punjab", ""]) == ["Punjab", "Haryana"]
    assert normalize_states(None) == []


def test_validate_scheme_name():
    assert validate_scheme_name("Pradhan Mantri Kisan Samman Nidhi (PM-KISAN)")
    assert validate_scheme_name("Ministry of Consumer Affairs, Food & Public Distribution")
    assert validate_scheme_name("Pradhan Mantri Street Vendor's AtmaNirbhar Nidhi")
    assert not validate_scheme_name("")
    assert not validate_scheme_name("   ")
    assert not validate_scheme_name("ab")
    assert not validate_scheme_name("x" * 201)
    assert not validate_scheme_name("Free <money>")


def test_normalize_scheme_record_defaults_gender():
    record = normalize_scheme_record({"name": "X", "eligibilityCriteria": {"states": ["All"], "categories": ["bpl"]}})
    assert record["eligibilityCriteria"] == {"states": [], "categories": ["EWS"], "gender": "Any"}

    record = normalize_scheme_record({"name": "Y"})
    assert record["eligibilityCriteria"] == {"categories": [], "states": [], "gender": "Any"}


def test_bundled_sample_loads():
    schemes = load_schemes()

    assert len(schemes) >= 5
    names = [s.name for s in schemes]
    assert len(names) == len(set(names))
    for scheme in schemes:
        assert "All" not in scheme.eligibility_criteria.states
        assert scheme.eligibility_criteria.gender is not None


def test_nationwide_scheme_open_to_every_state():
    pmay = next(s for s in load_schemes() if s.name.startswith("Pradhan Mantri Awas Yojana"))
    profile = UserProfile(
        age=30,
        income=200000,
        category="EWS",
        address={"state": "Punjab"},
        family_size=4
    )

    assert RulesEvaluator.evaluate(profile, pmay.eligibility_criteria).is_eligible is True


def test_load_schemes_from_file(tmp_path):
    path = tmp_path / "schemes.json"
    path.write_text(json.dumps([{
        "name": "State Pension",
        "description": "Monthly pension",
        "category": "Senior Citizens",
        "ministry": "State Government",
        "eligibilityCriteria": {"minAge": 60, "categories": ["sc", "st"]}
    }]), encoding="utf-8")

    [scheme] = load_schemes(path)

    assert scheme.eligibility_criteria.min_age == 60
    assert scheme.eligibility_criteria.categories == ["SC", "ST"]
    assert scheme.status == "Active"


def test_seed_skips_existing_unless_replacing(store):
    existing = asyncio.run(store.create_scheme(make_scheme("Kept", min_age=10)))
    schemes = [make_scheme("Kept", min_age=21), make_scheme("New One")]

    counts = asyncio.run(seed_schemes(store, schemes))
    assert counts == {"inserted": 1, "updated": 0, "skipped": 1}
    assert store.schemes[existing.id].eligibility_criteria.min_age == 10

    counts = asyncio.run(seed_schemes(store, schemes, replace=True))
    assert counts == {"inserted": 0, "updated": 2, "skipped": 0}
    assert store.schemes[existing.id].eligibility_criteria.min_age == 21
    assert len(store.schemes) == 2
