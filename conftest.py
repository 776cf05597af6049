"""
Shared fixtures: an in-memory stand-in for MongoService and an API client
"""
from datetime import date

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient
from pymongo.errors import DuplicateKeyError

from scheme_finder.main import app
from scheme_finder.models.scheme import EligibilityCriteria, Scheme, SchemeCreate
from scheme_finder.routes.deps import get_store


class InMemoryStore:
    """Implements the MongoService methods the app uses; keeps insertion order"""

    def __init__(self):
        self.schemes = {}
        self.profiles = {}
        self.history = {}
        self.fail_appends = False
        self.append_calls = 0

    async def create_scheme(self, scheme_in):
        if any(s.name == scheme_in.name for s in self.schemes.values()):
            raise DuplicateKeyError(f"duplicate name: {scheme_in.name}")
        scheme = Scheme(**scheme_in.model_dump(by_alias=False))
        scheme.id = str(ObjectId())
        self.schemes[scheme.id] = scheme
        return scheme

    async def get_scheme(self, scheme_id):
        return self.schemes.get(scheme_id)

    async def get_scheme_by_name(self, name):
        return next((s for s in self.schemes.values() if s.name == name), None)

    async def get_schemes_by_ids(self, scheme_ids):
        return {sid: self.schemes[sid] for sid in set(scheme_ids) if sid in self.schemes}

    def _matching(self, status=None, category=None, search=None):
        schemes = list(self.schemes.values())
        if status:
            schemes = [s for s in schemes if s.status == status]
        if category:
            schemes = [s for s in schemes if s.category == category]
        if search:
            needle = search.lower()
            schemes = [
                s for s in schemes
                if needle in s.name.lower() or needle in s.description.lower() or needle in s.category.lower()
            ]
        return schemes

    async def find_schemes(self, status=None, category=None, search=None, skip=0, limit=0, newest_first=True):
        schemes = self._matching(status, category, search)[skip:]
        return schemes[:limit] if limit else schemes

    async def count_schemes(self, status=None, category=None, search=None):
        return len(self._matching(status, category, search))

    async def update_scheme(self, scheme_id, update):
        scheme = self.schemes.get(scheme_id)
        if scheme is None:
            return None
        data = {**scheme.model_dump(by_alias=False), **update.model_dump(by_alias=False, exclude_unset=True)}
        updated = Scheme(**data)
        self.schemes[scheme_id] = updated
        return updated

    async def delete_scheme(self, scheme_id):
        return self.schemes.pop(scheme_id, None) is not None

    async def get_scheme_categories(self):
        return sorted({s.category for s in self.schemes.values()})

    async def get_user_profile(self, user_id):
        return self.profiles.get(user_id)

    async def save_user_profile(self, user_id, profile):
        self.profiles[user_id] = profile
        return profile

    async def append_eligibility_check(self, user_id, entry):
        self.append_calls += 1
        if self.fail_appends:
            raise RuntimeError("history store unavailable")
        self.history.setdefault(user_id, []).append(entry)
        return True

    async def get_eligibility_history(self, user_id):
        return list(self.history.get(user_id, []))


def make_scheme(name, category="Housing", status="Active", **criteria):
    return SchemeCreate(
        name=name,
        description=f"{name} description",
        category=category,
        ministry="Ministry of Testing",
        eligibility_criteria=EligibilityCriteria(**criteria),
        status=status
    )


def years_ago(years, today=None):
    today = today or date.today()
    try:
        return today.replace(year=today.year - years)
    except ValueError:
        # 29 February in a non-leap target year
        return today.replace(year=today.year - years, day=28)


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def client(store):
    app.dependency_overrides[get_store] = lambda: store
    yield TestClient(app)
    app.dependency_overrides.clear()
