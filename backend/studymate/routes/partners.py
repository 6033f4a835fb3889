"""
StudyMate Backend — Partner Route Handlers
============================================

What:  Handles the /partners resource: list/filter/sort, detail, create, and
       the two partnerCount adjustments.
How:   Extracts path/query/body values, delegates one call to PartnerRepository,
       returns JSON. Errors propagate to the global exception handlers.
Who:   Called by the frontend's "Find Partners" and partner profile pages.
"""

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends, Query

from studymate.dependencies import get_partner_repository
from studymate.repositories import PartnerRepository
from studymate.schemas.common import ErrorResponse, InsertResponse, SuccessResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/partners", tags=["Partners"])


@router.get(
    "",
    response_model=List[Dict[str, Any]],
    responses={
        400: {"description": "Invalid sort value", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="List partners",
    description=(
        "Returns every partner, optionally filtered by a case-insensitive subject "
        "substring and sorted by experience."
    ),
)
async def list_partners(
    subject: Optional[str] = Query(
        default=None,
        description="Case-insensitive substring of the partner's subject (e.g. 'math')",
    ),
    sort: Optional[str] = Query(
        default=None,
        description="Sort by experience: 'asc' or 'desc'. Omit for storage order.",
    ),
    repository: PartnerRepository = Depends(get_partner_repository),
) -> List[Dict[str, Any]]:
    return await repository.list_partners(subject=subject, sort=sort)


@router.get(
    "/{partner_id}",
    response_model=Dict[str, Any],
    responses={
        400: {"description": "Malformed partner ID", "model": ErrorResponse},
        404: {"description": "Partner not found", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Get a single partner by ID",
)
async def get_partner(
    partner_id: str,
    repository: PartnerRepository = Depends(get_partner_repository),
) -> Dict[str, Any]:
    return await repository.get_partner(partner_id)


@router.post(
    "",
    response_model=InsertResponse,
    responses={
        400: {"description": "Body is not a JSON object", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Create a partner profile",
    description="Stores the submitted JSON object as-is and returns its new ID.",
)
async def create_partner(
    payload: Dict[str, Any] = Body(...),
    repository: PartnerRepository = Depends(get_partner_repository),
) -> InsertResponse:
    inserted_id = await repository.create_partner(payload)
    return InsertResponse(inserted_id=inserted_id)


@router.patch(
    "/{partner_id}/increase-count",
    response_model=SuccessResponse,
    responses={
        400: {"description": "Malformed partner ID", "model": ErrorResponse},
        404: {"description": "Partner not found", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Increment partnerCount by one",
)
async def increase_partner_count(
    partner_id: str,
    repository: PartnerRepository = Depends(get_partner_repository),
) -> SuccessResponse:
    await repository.adjust_partner_count(partner_id, 1)
    return SuccessResponse()


@router.patch(
    "/{partner_id}/decrease-count",
    response_model=SuccessResponse,
    responses={
        400: {"description": "Malformed partner ID", "model": ErrorResponse},
        404: {"description": "Partner not found or count already zero", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Decrement partnerCount by one (never below zero)",
)
async def decrease_partner_count(
    partner_id: str,
    repository: PartnerRepository = Depends(get_partner_repository),
) -> SuccessResponse:
    """
    Decrement partnerCount.

    A 404 means either the partner does not exist or its count is already 0;
    the single conditional update cannot tell the two apart.
    """
    await repository.adjust_partner_count(partner_id, -1)
    return SuccessResponse()
