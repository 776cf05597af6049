"""
Shared FastAPI dependencies: stores, services, identity and admin access
"""
import hmac
import logging
from typing import Optional

from fastapi import Depends, HTTPException, Request, Security
from fastapi.security import APIKeyHeader

from ..config import settings
from ..services.mongo_service import mongo_service
from ..services.eligibility_service import EligibilityService

logger = logging.getLogger(__name__)

# Identities are authenticated upstream; the gateway forwards the user id
_user_id_header = APIKeyHeader(name="X-User-Id", auto_error=False)
_admin_key_header = APIKeyHeader(name="X-Admin-API-Key", auto_error=False)


def get_store():
    return mongo_service


def get_eligibility_service(store=Depends(get_store)) -> EligibilityService:
    return EligibilityService(store)


async def get_current_identity(user_id: Optional[str] = Security(_user_id_header)) -> Optional[str]:
    """The caller's identity, or None for anonymous requests"""
    if user_id and user_id.strip():
        return user_id.strip()
    return None


async def require_identity(identity: Optional[str] = Depends(get_current_identity)) -> str:
    if not identity:
        raise HTTPException(
            status_code=401,
            detail="Authentication required",
            headers={"WWW-Authenticate": "ApiKey"}
        )
    return identity


async def require_admin_api_key(
    request: Request,
    api_key: Optional[str] = Security(_admin_key_header)
) -> str:
    """Guard scheme writes with the configured admin key"""
    configured_key = settings.admin_api_key

    if not configured_key:
        if settings.debug:
            logger.warning("Admin API key not configured; allowing request in debug mode")
            return ""
        logger.error("Admin API key not configured")
        raise HTTPException(status_code=503, detail="Admin authentication is not configured")

    if not api_key:
        logger.warning(f"Missing admin API key for {request.url.path}")
        raise HTTPException(
            status_code=401,
            detail="Missing X-Admin-API-Key header",
            headers={"WWW-Authenticate": "ApiKey"}
        )

    if not hmac.compare_digest(api_key.encode(), configured_key.encode()):
        logger.warning(f"Invalid admin API key for {request.url.path}")
        raise HTTPException(status_code=403, detail="Invalid API key")

    return api_key
