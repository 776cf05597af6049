"""
MongoDB service for database operations
"""
from datetime import date, datetime, time, timezone
from typing import Any, Dict, Iterable, List, Optional
from pydantic import ValidationError
from bson import ObjectId
from pymongo import ASCENDING, DESCENDING, TEXT, ReturnDocument
import logging

from ..database import connect_to_mongo, close_mongo_connection, get_database
from ..models.scheme import Scheme, SchemeCreate, SchemeUpdate
from ..models.user import UserProfile, HistoryEntry

logger = logging.getLogger(__name__)


def _scheme_query(
    status: Optional[str] = None,
    category: Optional[str] = None,
    search: Optional[str] = None
) -> Dict[str, Any]:
    query: Dict[str, Any] = {}
    if status:
        query["status"] = status
    if category:
        query["category"] = category
    if search:
        query["$text"] = {"$search": search}
    return query


def _load_scheme(doc: Dict[str, Any]) -> Optional[Scheme]:
    """Parse a stored scheme; documents that no longer fit the model are skipped"""
    try:
        return Scheme(**doc)
    except ValidationError as e:
        logger.warning(f"Skipping malformed scheme {doc.get('_id')}: {e.error_count()} invalid field(s)")
        return None


def _encode_profile(profile: UserProfile) -> Dict[str, Any]:
    """BSON has no date type, store date of birth as midnight UTC"""
    data = profile.model_dump(by_alias=False)
    dob = data.get("date_of_birth")
    if isinstance(dob, date) and not isinstance(dob, datetime):
        data["date_of_birth"] = datetime.combine(dob, time.min, tzinfo=timezone.utc)
    return data


class MongoService:
    """Service for MongoDB operations"""

    def __init__(self):
        self.db = None

    async def connect(self):
        """Connect to MongoDB and make sure indexes exist"""
        try:
            await connect_to_mongo()
            self.db = get_database()

            # Test connection
            await self.db.client.admin.command('ping')

            await self.db.schemes.create_index([("name", ASCENDING)], unique=True)
            await self.db.schemes.create_index(
                [("name", TEXT), ("description", TEXT), ("category", TEXT)]
            )
            await self.db.users.create_index([("user_id", ASCENDING)], unique=True)
            logger.info("Connected to MongoDB successfully")

        except Exception as e:
            logger.error(f"Failed to connect to MongoDB: {e}")
            raise

    async def close(self):
        """Close MongoDB connection"""
        await close_mongo_connection()
        self.db = None
        logger.info("MongoDB connection closed")

    async def health_check(self) -> bool:
        """Check MongoDB connection health"""
        try:
            await self.db.client.admin.command('ping')
            return True
        except Exception:
            return False

    # Scheme operations
    async def create_scheme(self, scheme_in: SchemeCreate) -> Scheme:
        """Create a new scheme; raises DuplicateKeyError on a taken name"""
        try:
            scheme = Scheme(**scheme_in.model_dump(by_alias=False))
            scheme_dict = scheme.model_dump(by_alias=False, exclude={"id"})
            result = await self.db.schemes.insert_one(scheme_dict)
            scheme.id = str(result.inserted_id)
            logger.info(f"Scheme created: {scheme.name} ({scheme.id})")
            return scheme
        except Exception as e:
            logger.error(f"Failed to create scheme: {e}")
            raise

    async def get_scheme(self, scheme_id: str) -> Optional[Scheme]:
        """Get scheme by ID; malformed IDs are reported as missing"""
        if not ObjectId.is_valid(scheme_id):
            return None
        try:
            doc = await self.db.schemes.find_one({"_id": ObjectId(scheme_id)})
            if doc:
                return _load_scheme(doc)
            return None
        except Exception as e:
            logger.error(f"Failed to get scheme: {e}")
            raise

    async def get_scheme_by_name(self, name: str) -> Optional[Scheme]:
        try:
            doc = await self.db.schemes.find_one({"name": name})
            if doc:
                return Scheme(**doc)
            return None
        except Exception as e:
            logger.error(f"Failed to get scheme by name: {e}")
            raise

    async def get_schemes_by_ids(self, scheme_ids: Iterable[str]) -> Dict[str, Scheme]:
        """Fetch several schemes at once, keyed by ID"""
        object_ids = [ObjectId(sid) for sid in set(scheme_ids) if ObjectId.is_valid(sid)]
        if not object_ids:
            return {}
        try:
            cursor = self.db.schemes.find({"_id": {"$in": object_ids}})
            schemes = {}
            async for doc in cursor:
                scheme = _load_scheme(doc)
                if scheme is not None:
                    schemes[scheme.id] = scheme
            return schemes
        except Exception as e:
            logger.error(f"Failed to get schemes by id: {e}")
            raise

    async def find_schemes(
        self,
        status: Optional[str] = None,
        category: Optional[str] = None,
        search: Optional[str] = None,
        skip: int = 0,
        limit: int = 0,
        newest_first: bool = True
    ) -> List[Scheme]:
        """
        Get schemes matching the filters; a limit of 0 means no limit

        With newest_first=False documents come back in natural (insertion) order.
        Documents that fail validation are logged and left out.
        """
        try:
            cursor = self.db.schemes.find(_scheme_query(status, category, search))
            if newest_first:
                cursor = cursor.sort("created_at", DESCENDING)
            cursor = cursor.skip(skip).limit(limit)
            schemes = []
            async for doc in cursor:
                scheme = _load_scheme(doc)
                if scheme is not None:
                    schemes.append(scheme)
            return schemes
        except Exception as e:
            logger.error(f"Failed to get schemes: {e}")
            raise

    async def count_schemes(
        self,
        status: Optional[str] = None,
        category: Optional[str] = None,
        search: Optional[str] = None
    ) -> int:
        try:
            return await self.db.schemes.count_documents(_scheme_query(status, category, search))
        except Exception as e:
            logger.error(f"Failed to count schemes: {e}")
            raise

    async def update_scheme(self, scheme_id: str, update: SchemeUpdate) -> Optional[Scheme]:
        """Apply the provided fields; criteria are replaced as a whole document"""
        if not ObjectId.is_valid(scheme_id):
            return None
        try:
            update_data = update.model_dump(by_alias=False, exclude_unset=True)
            # Sub-documents are stored whole, including defaults the caller left out
            for field in ("eligibility_criteria", "contact_info"):
                value = getattr(update, field)
                if value is not None:
                    update_data[field] = value.model_dump(by_alias=False)
            update_data["updated_at"] = datetime.now(timezone.utc)
            doc = await self.db.schemes.find_one_and_update(
                {"_id": ObjectId(scheme_id)},
                {"$set": update_data},
                return_document=ReturnDocument.AFTER
            )
            if doc:
                logger.info(f"Scheme updated: {scheme_id}")
                return Scheme(**doc)
            return None
        except Exception as e:
            logger.error(f"Failed to update scheme: {e}")
            raise

    async def delete_scheme(self, scheme_id: str) -> bool:
        if not ObjectId.is_valid(scheme_id):
            return False
        try:
            result = await self.db.schemes.delete_one({"_id": ObjectId(scheme_id)})
            if result.deleted_count:
                logger.info(f"Scheme deleted: {scheme_id}")
            return result.deleted_count > 0
        except Exception as e:
            logger.error(f"Failed to delete scheme: {e}")
            raise

    async def get_scheme_categories(self) -> List[str]:
        """Distinct scheme categories present in the catalog"""
        try:
            return sorted(await self.db.schemes.distinct("category"))
        except Exception as e:
            logger.error(f"Failed to get scheme categories: {e}")
            raise

    # User operations
    async def get_user_profile(self, user_id: str) -> Optional[UserProfile]:
        """Get the stored profile for an identity"""
        try:
            doc = await self.db.users.find_one({"user_id": user_id}, {"profile": 1})
            if doc and doc.get("profile") is not None:
                return UserProfile(**doc["profile"])
            return None
        except Exception as e:
            logger.error(f"Failed to get user profile: {e}")
            raise

    async def save_user_profile(self, user_id: str, profile: UserProfile) -> UserProfile:
        """Create or replace the stored profile for an identity"""
        try:
            now = datetime.now(timezone.utc)
            await self.db.users.update_one(
                {"user_id": user_id},
                {
                    "$set": {"profile": _encode_profile(profile), "updated_at": now},
                    "$setOnInsert": {"created_at": now}
                },
                upsert=True
            )
            logger.info(f"User profile created/updated: {user_id}")
            return profile
        except Exception as e:
            logger.error(f"Failed to save user profile: {e}")
            raise

    # Eligibility history operations
    async def append_eligibility_check(self, user_id: str, entry: HistoryEntry) -> bool:
        """Append one entry to the identity's eligibility log"""
        try:
            now = datetime.now(timezone.utc)
            result = await self.db.users.update_one(
                {"user_id": user_id},
                {
                    "$push": {"eligibility_checks": entry.model_dump(by_alias=False)},
                    "$setOnInsert": {"created_at": now}
                },
                upsert=True
            )
            return result.acknowledged
        except Exception as e:
            logger.error(f"Failed to store eligibility check: {e}")
            return False

    async def get_eligibility_history(self, user_id: str) -> List[HistoryEntry]:
        """Get the identity's eligibility log in append order"""
        try:
            doc = await self.db.users.find_one({"user_id": user_id}, {"eligibility_checks": 1})
            if not doc:
                return []
            return [HistoryEntry(**item) for item in doc.get("eligibility_checks", [])]
        except Exception as e:
            logger.error(f"Failed to get eligibility history: {e}")
            raise


# Global MongoDB service instance
mongo_service = MongoService()
