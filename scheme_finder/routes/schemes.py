"""
API routes for scheme management
"""
import logging
import math
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query
from pymongo.errors import DuplicateKeyError

from ..config import settings
from ..models.scheme import Scheme, SchemeCreate, SchemeUpdate, SchemeListResponse
from ..utils.validators import validate_scheme_name
from .deps import get_store, require_admin_api_key

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/schemes", tags=["schemes"])


@router.get("", response_model=SchemeListResponse)
async def get_schemes(
    category: Optional[str] = Query(None, description="Filter by scheme category"),
    search: Optional[str] = Query(None, description="Full-text search over name, description and category"),
    status: Optional[str] = Query(None, description="Filter by status"),
    page: int = Query(1, ge=1, description="Page number"),
    limit: int = Query(settings.schemes_page_size, ge=1, le=100, description="Schemes per page"),
    store=Depends(get_store)
):
    """
    Get schemes, newest first, with optional filtering and pagination
    """
    try:
        schemes = await store.find_schemes(
            status=status,
            category=category,
            search=search,
            skip=(page - 1) * limit,
            limit=limit
        )
        total = await store.count_schemes(status=status, category=category, search=search)

        return SchemeListResponse(
            schemes=schemes,
            total_pages=math.ceil(total / limit),
            current_page=page,
            total=total
        )

    except Exception as e:
        logger.error(f"Error fetching schemes: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to retrieve schemes: {str(e)}")


@router.get("/categories/list", response_model=List[str])
async def get_scheme_categories(store=Depends(get_store)):
    """
    Get the distinct categories present in the catalog
    """
    try:
        return await store.get_scheme_categories()
    except Exception as e:
        logger.error(f"Error fetching categories: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to retrieve categories: {str(e)}")


@router.get("/{scheme_id}", response_model=Scheme)
async def get_scheme(scheme_id: str, store=Depends(get_store)):
    """
    Get a specific scheme by ID
    """
    try:
        scheme = await store.get_scheme(scheme_id)

        if not scheme:
            raise HTTPException(status_code=404, detail=f"Scheme not found: {scheme_id}")

        return scheme

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error fetching scheme {scheme_id}: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to retrieve scheme: {str(e)}")


@router.post("", response_model=Scheme, status_code=201, dependencies=[Depends(require_admin_api_key)])
async def create_scheme(scheme_in: SchemeCreate, store=Depends(get_store)):
    """
    Create a new scheme
    """
    try:
        if not validate_scheme_name(scheme_in.name):
            raise HTTPException(status_code=400, detail=f"Invalid scheme name: {scheme_in.name}")

        return await store.create_scheme(scheme_in)

    except HTTPException:
        raise
    except DuplicateKeyError:
        raise HTTPException(status_code=409, detail=f"Scheme already exists: {scheme_in.name}")
    except Exception as e:
        logger.error(f"Error creating scheme: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to create scheme: {str(e)}")


@router.put("/{scheme_id}", response_model=Scheme, dependencies=[Depends(require_admin_api_key)])
async def update_scheme(scheme_id: str, update: SchemeUpdate, store=Depends(get_store)):
    """
    Update a scheme; eligibility criteria, when given, replace the old ones entirely
    """
    try:
        if update.name is not None and not validate_scheme_name(update.name):
            raise HTTPException(status_code=400, detail=f"Invalid scheme name: {update.name}")

        scheme = await store.update_scheme(scheme_id, update)

        if not scheme:
            raise HTTPException(status_code=404, detail=f"Scheme not found: {scheme_id}")

        return scheme

    except HTTPException:
        raise
    except DuplicateKeyError:
        raise HTTPException(status_code=409, detail=f"Scheme already exists: {update.name}")
    except Exception as e:
        logger.error(f"Error updating scheme {scheme_id}: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to update scheme: {str(e)}")


@router.delete("/{scheme_id}", dependencies=[Depends(require_admin_api_key)])
async def delete_scheme(scheme_id: str, store=Depends(get_store)):
    """
    Delete a scheme
    """
    try:
        deleted = await store.delete_scheme(scheme_id)

        if not deleted:
            raise HTTPException(status_code=404, detail=f"Scheme not found: {scheme_id}")

        return {"message": "Scheme deleted successfully"}

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error deleting scheme {scheme_id}: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to delete scheme: {str(e)}")
