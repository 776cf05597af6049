"""
API routes for eligibility checking
"""
import logging
from typing import Optional
from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Query

from ..config import settings
from ..models.eligibility import (
    BatchCheckRequest,
    BatchEligibilityResponse,
    CheckRequest,
    SchemeEligibility
)
from ..models.scheme import SchemeSummary
from ..models.user import HistoryItem, HistoryResponse
from ..services.eligibility_service import (
    EligibilityService,
    MissingProfileError,
    ProfileNotFoundError,
    SchemeNotFoundError
)
from .deps import get_current_identity, get_eligibility_service, get_store, require_identity

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/eligibility", tags=["eligibility"])


@router.post("/check", response_model=SchemeEligibility, response_model_exclude_none=True)
async def check_eligibility(
    request: CheckRequest,
    background_tasks: BackgroundTasks,
    identity: Optional[str] = Depends(get_current_identity),
    service: EligibilityService = Depends(get_eligibility_service)
):
    """
    Check eligibility for one scheme

    Uses userData when supplied, otherwise the caller's stored profile.
    Authenticated checks are appended to the caller's history.
    """
    try:
        return await service.check_scheme(
            scheme_id=request.scheme_id,
            user_id=identity,
            profile=request.user_data,
            schedule=background_tasks.add_task
        )

    except (SchemeNotFoundError, ProfileNotFoundError) as e:
        raise HTTPException(status_code=404, detail=str(e))
    except MissingProfileError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Error checking eligibility: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to check eligibility: {str(e)}")


@router.post("/check-multiple", response_model=BatchEligibilityResponse)
async def check_eligibility_multiple(
    request: Optional[BatchCheckRequest] = None,
    category: Optional[str] = Query(None, description="Only schemes in this category"),
    limit: int = Query(settings.batch_default_limit, ge=1, le=settings.batch_max_limit, description="Maximum number of schemes to check"),
    identity: Optional[str] = Depends(get_current_identity),
    service: EligibilityService = Depends(get_eligibility_service)
):
    """
    Check eligibility across active schemes, eligible schemes first
    """
    try:
        results = await service.check_catalog(
            user_id=identity,
            profile=request.user_data if request else None,
            category=category,
            limit=limit
        )
        return BatchEligibilityResponse(results=results)

    except ProfileNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except MissingProfileError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Error checking eligibility across schemes: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to check eligibility: {str(e)}")


@router.get("/history", response_model=HistoryResponse)
async def get_eligibility_history(
    limit: Optional[int] = Query(None, ge=1, description="Only the most recent N checks"),
    identity: str = Depends(require_identity),
    store=Depends(get_store)
):
    """
    Get the caller's eligibility check history, newest first
    """
    try:
        entries = await store.get_eligibility_history(identity)
        entries = list(reversed(entries))
        if limit:
            entries = entries[:limit]

        schemes = await store.get_schemes_by_ids(entry.scheme_id for entry in entries)

        history = []
        for entry in entries:
            scheme = schemes.get(entry.scheme_id)
            history.append(HistoryItem(
                **entry.model_dump(by_alias=False),
                scheme=SchemeSummary.from_scheme(scheme, with_description=True) if scheme else None
            ))

        return HistoryResponse(history=history)

    except Exception as e:
        logger.error(f"Error fetching eligibility history: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to retrieve eligibility history: {str(e)}")
