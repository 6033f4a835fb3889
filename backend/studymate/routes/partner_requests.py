"""
StudyMate Backend — Partner Request Route Handlers
====================================================

What:  Handles /partner-requests: create, list by requester email, partial
       update, delete.
Who:   Called by the frontend's "My Connections" page.

Privacy:
    GET without ?email= returns an empty array rather than every request,
    so a missing query parameter never exposes other users' requests.
"""

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends, Query

from studymate.dependencies import get_partner_request_repository
from studymate.repositories import PartnerRequestRepository
from studymate.schemas.common import ErrorResponse, InsertResponse, SuccessResponse
from studymate.schemas.partner_request import (
    PartnerRequestUpdate,
    PartnerRequestUpdateResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/partner-requests", tags=["Partner Requests"])


@router.post(
    "",
    response_model=InsertResponse,
    responses={
        400: {"description": "Body is not a JSON object", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Create a partner request",
    description="Stores the request with a server-assigned `requestedAt` timestamp.",
)
async def create_partner_request(
    payload: Dict[str, Any] = Body(...),
    repository: PartnerRequestRepository = Depends(get_partner_request_repository),
) -> InsertResponse:
    inserted_id = await repository.create_request(payload)
    return InsertResponse(inserted_id=inserted_id)


@router.get(
    "",
    response_model=List[Dict[str, Any]],
    responses={500: {"description": "Server error", "model": ErrorResponse}},
    summary="List a requester's partner requests",
)
async def list_partner_requests(
    email: Optional[str] = Query(
        default=None,
        description="Exact `requestedBy` email. Omitted → empty list.",
    ),
    repository: PartnerRequestRepository = Depends(get_partner_request_repository),
) -> List[Dict[str, Any]]:
    return await repository.list_requests_by_requester(email)


@router.patch(
    "/{request_id}",
    response_model=PartnerRequestUpdateResponse,
    responses={
        400: {"description": "Malformed request ID or body", "model": ErrorResponse},
        404: {"description": "Request not found", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Update partnerName, subject and/or studyMode",
    description="Only non-empty fields in the body are written; the rest are left unchanged.",
)
async def update_partner_request(
    request_id: str,
    update: PartnerRequestUpdate = Body(...),
    repository: PartnerRequestRepository = Depends(get_partner_request_repository),
) -> PartnerRequestUpdateResponse:
    updated = await repository.update_request(
        request_id, update.model_dump(by_alias=True, exclude_none=True)
    )
    return PartnerRequestUpdateResponse(updated_fields=updated)


@router.delete(
    "/{request_id}",
    response_model=SuccessResponse,
    responses={
        400: {"description": "Malformed request ID", "model": ErrorResponse},
        404: {"description": "Request not found", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Delete a partner request",
)
async def delete_partner_request(
    request_id: str,
    repository: PartnerRequestRepository = Depends(get_partner_request_repository),
) -> SuccessResponse:
    await repository.delete_request(request_id)
    return SuccessResponse()
